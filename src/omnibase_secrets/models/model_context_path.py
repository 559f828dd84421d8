# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Context path value type.

A context path is a normalized, absolute, slash-delimited namespace that
scopes a set of keys, analogous to a directory. The root path renders as
``/``. Equality, ordering and hashing are structural on the segment tuple,
so ``ContextPath.parse("/a//b/") == ContextPath.parse("a/b")``.

Example:
    >>> path = ContextPath.parse("/prod/db")
    >>> [str(p) for p in path.ancestors()]
    ['/prod/db', '/prod', '/']
    >>> path.is_relative_to(ContextPath.parse("/pro"))
    False
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import total_ordering

PATH_SEPARATOR: str = "/"


def _split_segments(parts: Iterable[str]) -> tuple[str, ...]:
    segments: list[str] = []
    for part in parts:
        segments.extend(s for s in part.split(PATH_SEPARATOR) if s)
    return tuple(segments)


@total_ordering
class ContextPath:
    """Immutable absolute path made of non-empty segments."""

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[str] = ()) -> None:
        self._segments: tuple[str, ...] = _split_segments(segments)

    @classmethod
    def parse(cls, raw: str | ContextPath) -> ContextPath:
        """Build a path from its slash-delimited form (leading slash optional)."""
        if isinstance(raw, ContextPath):
            return raw
        return cls((raw,))

    @classmethod
    def root(cls) -> ContextPath:
        return cls()

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def is_root(self) -> bool:
        return not self._segments

    @property
    def name(self) -> str:
        """Final segment, empty for the root."""
        return self._segments[-1] if self._segments else ""

    @property
    def parent(self) -> ContextPath:
        """Path with the last segment dropped; the root is its own parent."""
        return ContextPath(self._segments[:-1])

    def ancestors(self) -> Iterator[ContextPath]:
        """Yield this path, then each ancestor up to and including the root."""
        for depth in range(len(self._segments), -1, -1):
            yield ContextPath(self._segments[:depth])

    def joinpath(self, *parts: str) -> ContextPath:
        return ContextPath(self._segments + _split_segments(parts))

    def is_relative_to(self, prefix: ContextPath) -> bool:
        """True when ``prefix`` is this path or one of its segment-wise ancestors."""
        depth = len(prefix._segments)
        return self._segments[:depth] == prefix._segments

    def __truediv__(self, other: str) -> ContextPath:
        return self.joinpath(other)

    def __str__(self) -> str:
        return PATH_SEPARATOR + PATH_SEPARATOR.join(self._segments)

    def __repr__(self) -> str:
        return f"ContextPath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContextPath):
            return NotImplemented
        return self._segments == other._segments

    def __lt__(self, other: ContextPath) -> bool:
        if not isinstance(other, ContextPath):
            return NotImplemented
        return self._segments < other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __len__(self) -> int:
        return len(self._segments)


ROOT_PATH: ContextPath = ContextPath.root()

__all__ = ["ContextPath", "PATH_SEPARATOR", "ROOT_PATH"]
