# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Tree rendering for context-scoped stores.

Nodes live in a flat list and are addressed by integer handles. A memoizing
index maps each distinct context path to its handle, and a node's parent is
found by dropping the last path segment, so shared path prefixes collapse
into a single node and no parent/child reference cycles exist.

Rendered layout::

    /
    ├─fem: great
    ├─foo: bar1
    └─foo
      ├─foo: bar2
      └─bar
        └─foo: bar3
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar

from omnibase_secrets.models.model_context_path import ContextPath

T = TypeVar("T")

TEE: str = "├─"
CORNER: str = "└─"
PIPE: str = "│ "
BLANK: str = "  "


@dataclass
class ContextTreeNode:
    path: ContextPath
    parent: int | None = None
    children: list[int] = field(default_factory=list)


class ContextTreeIndex:
    """Arena of tree nodes keyed by context path."""

    def __init__(self) -> None:
        self.nodes: list[ContextTreeNode] = []
        self._handles: dict[ContextPath, int] = {}

    def node_for(self, path: ContextPath) -> int:
        """Return the handle for ``path``, creating it and its ancestors once."""
        handle = self._handles.get(path)
        if handle is not None:
            return handle

        parent = None if path.is_root else self.node_for(path.parent)
        handle = len(self.nodes)
        self.nodes.append(ContextTreeNode(path=path, parent=parent))
        self._handles[path] = handle
        if parent is not None:
            self.nodes[parent].children.append(handle)
        return handle

    def sort_children(self) -> None:
        for node in self.nodes:
            node.children.sort(key=lambda h: self.nodes[h].path.name)

    def __len__(self) -> int:
        return len(self.nodes)


def render_context_tree(
    data: Mapping[ContextPath, Mapping[str, T]],
    describe: Callable[[T], str] = str,
) -> str:
    """Render every context holding data (plus its ancestors) as ASCII tree art.

    Returns an empty string when ``data`` holds no entries.
    """
    index = ContextTreeIndex()
    for path, entries in data.items():
        if entries:
            index.node_for(path)
    if not len(index):
        return ""
    index.sort_children()

    root = index.node_for(ContextPath.root())
    lines: list[str] = []
    _render_node(index, root, "", data, describe, lines)
    return "\n".join(lines) + "\n"


def _render_node(
    index: ContextTreeIndex,
    handle: int,
    prefix: str,
    data: Mapping[ContextPath, Mapping[str, T]],
    describe: Callable[[T], str],
    lines: list[str],
) -> None:
    node = index.nodes[handle]
    if node.parent is None:
        lines.append(str(node.path))
        child_prefix = prefix
    else:
        is_last = index.nodes[node.parent].children[-1] == handle
        lines.append(f"{prefix}{CORNER if is_last else TEE}{node.path.name}")
        child_prefix = prefix + (BLANK if is_last else PIPE)

    entries = data.get(node.path) or {}
    keys = sorted(entries)
    for position, key in enumerate(keys):
        is_last_line = position == len(keys) - 1 and not node.children
        glyph = CORNER if is_last_line else TEE
        lines.append(f"{child_prefix}{glyph}{key}: {describe(entries[key])}")

    for child in node.children:
        _render_node(index, child, child_prefix, data, describe, lines)


__all__ = ["ContextTreeIndex", "ContextTreeNode", "render_context_tree"]
