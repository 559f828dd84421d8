# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Context-scoped key/value store with ancestor-override resolution.

ContextStore maps a context path to its own ``key -> value`` mapping. Keys
are unique within one context; the same key may be defined again in a
descendant context, where it shadows the ancestor's value.

Resolution Rules:
    - Writes and removals touch the exact context only.
    - ``get_value`` walks from the given context towards the root and returns
      the first defined value.
    - ``get_all_for_path`` folds every context from the root down to the given
      context, more specific entries overwriting less specific ones.

Example:
    >>> store: ContextStore[str] = ContextStore()
    >>> store.set_value("/", "x", "1")
    >>> store.set_value("/a", "x", "2")
    >>> store.get_value("/a/b", "x")
    '2'
    >>> store.get_value("/c", "x")
    '1'
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Generic, TypeVar

from omnibase_secrets.errors import ConfigDescriptorError
from omnibase_secrets.models.model_context_path import ContextPath
from omnibase_secrets.models.model_key_reference import KeyReference
from omnibase_secrets.store.util_context_tree import render_context_tree

T = TypeVar("T")

PathLike = ContextPath | str


class ContextStore(Generic[T]):
    """Mapping of context path to ``key -> T`` with hierarchical lookup."""

    def __init__(self) -> None:
        self._data: dict[ContextPath, dict[str, T]] = {}

    # === Exact-context mutation ===

    def set_value(self, path: PathLike, key: str, value: T) -> T | None:
        """Write ``value`` at the exact ``path``; return the value it replaced."""
        entries = self._data.setdefault(ContextPath.parse(path), {})
        previous = entries.get(key)
        entries[key] = value
        return previous

    def remove_value(self, path: PathLike, key: str) -> T | None:
        """Remove ``key`` from the exact ``path``; ancestors are never touched."""
        context = ContextPath.parse(path)
        entries = self._data.get(context)
        if entries is None:
            return None
        removed = entries.pop(key, None)
        if not entries:
            del self._data[context]
        return removed

    # === Hierarchical lookup ===

    def get_value(self, path: PathLike, key: str) -> T | None:
        """Return the value defined at ``path`` or its nearest ancestor."""
        for context in ContextPath.parse(path).ancestors():
            entries = self._data.get(context)
            if entries is not None and key in entries:
                return entries[key]
        return None

    def get_exact(self, path: PathLike, key: str) -> T | None:
        entries = self._data.get(ContextPath.parse(path))
        return None if entries is None else entries.get(key)

    def get_all_for_path(self, path: PathLike) -> dict[str, T]:
        """Fold contexts from the root down to ``path`` into one mapping."""
        folded: dict[str, T] = {}
        for context in reversed(list(ContextPath.parse(path).ancestors())):
            folded.update(self._data.get(context, {}))
        return folded

    def keys_under(self, prefix: PathLike) -> Iterator[KeyReference]:
        """Lazily yield every entry at ``prefix`` or in a descendant context.

        Matching is segment-wise: entries under ``/foobar`` are never
        yielded for the prefix ``/foo``.
        """
        base = ContextPath.parse(prefix)
        for context in sorted(self._data):
            if not context.is_relative_to(base):
                continue
            for key in sorted(self._data[context]):
                yield KeyReference(path=context, key=key)

    # === KeyReference convenience ===

    def set(self, key_ref: KeyReference, value: T) -> T | None:
        return self.set_value(key_ref.path, key_ref.key, value)

    def get(self, key_ref: KeyReference) -> T | None:
        return self.get_value(key_ref.path, key_ref.key)

    def remove(self, key_ref: KeyReference) -> T | None:
        return self.remove_value(key_ref.path, key_ref.key)

    def contexts(self) -> list[ContextPath]:
        """Context paths that currently hold at least one entry."""
        return sorted(self._data)

    def __contains__(self, key_ref: object) -> bool:
        if not isinstance(key_ref, KeyReference):
            return False
        return key_ref.key in self._data.get(key_ref.path, {})

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._data.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContextStore):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"ContextStore(contexts={len(self._data)}, entries={len(self)})"

    # === Rendering ===

    def render_tree(self, describe: Callable[[T], str] = str) -> str:
        return render_context_tree(self._data, describe)

    # === Serialization ===

    def to_mapping(
        self,
        encode: Callable[[T], object] | None = None,
    ) -> dict[str, dict[str, object]]:
        """Serialize to ``{"/path": {key: encoded}}`` with sorted contexts."""
        return {
            str(context): {
                key: encode(value) if encode is not None else value
                for key, value in self._data[context].items()
            }
            for context in sorted(self._data)
        }

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Mapping[str, object]],
        decode: Callable[[object], T],
    ) -> ContextStore[T]:
        """Build a store from its serialized mapping.

        Raises:
            ConfigDescriptorError: If a context entry is not a mapping.
        """
        store: ContextStore[T] = cls()
        for raw_path, entries in raw.items():
            if not isinstance(entries, Mapping):
                raise ConfigDescriptorError(
                    "Context entries must be an object",
                    context_path=str(raw_path),
                )
            for key, raw_value in entries.items():
                store.set_value(raw_path, key, decode(raw_value))
        return store


__all__ = ["ContextStore"]
