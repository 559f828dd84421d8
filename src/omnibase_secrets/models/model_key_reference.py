# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Key reference model.

A KeyReference is the identity of one stored entry: a context path plus a
leaf key. Its textual form is dot-delimited; every segment except the last
forms the context path (rooted at ``/``) and the last segment is the key.

Grammar:
    ``db.password``        -> path ``/db``, key ``password``
    ``prod.db.password``   -> path ``/prod/db``, key ``password``
    ``.db.password``       -> same as ``db.password`` (leading dot ignored)
    ``token``              -> path ``/``, key ``token``
    ``""`` / ``"."`` / ``"db."`` -> KeyParseError("key cannot be empty")

When a base context is supplied the parsed path is nested under it, so a
bare key entered by a user is scoped to the current working context rather
than to the global root.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from omnibase_secrets.errors import KeyParseError
from omnibase_secrets.models.model_context_path import PATH_SEPARATOR, ContextPath

KEY_SEPARATOR: str = "."


class KeyReference(BaseModel):
    """Identity of one entry: (context path, leaf key).

    Serializes as ``{"path": "/db", "key": "password"}``.

    Example:
        >>> ref = KeyReference.parse("db.password", base="/my-app")
        >>> str(ref.path), ref.key
        ('/my-app/db', 'password')
        >>> str(ref)
        'my-app.db.password'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    path: ContextPath = Field(
        default_factory=ContextPath.root,
        description="Context path the key lives in",
    )
    key: str = Field(
        min_length=1,
        description="Leaf key name",
    )

    @field_validator("path", mode="before")
    @classmethod
    def _coerce_path(cls, value: object) -> object:
        if isinstance(value, str):
            return ContextPath.parse(value)
        return value

    @field_validator("key")
    @classmethod
    def _reject_separator_in_key(cls, value: str) -> str:
        if PATH_SEPARATOR in value:
            raise ValueError(f"key cannot contain '{PATH_SEPARATOR}'")
        return value

    @field_serializer("path")
    def _serialize_path(self, path: ContextPath) -> str:
        return str(path)

    @classmethod
    def parse(
        cls,
        text: str,
        base: ContextPath | str | None = None,
    ) -> KeyReference:
        """Parse a dotted key reference.

        Args:
            text: Dotted reference, e.g. ``prod.db.password``
            base: Optional working context the parsed path is nested under

        Returns:
            The parsed KeyReference

        Raises:
            KeyParseError: If the input or its trailing key segment is empty,
                or the key contains a path separator
        """
        if not text:
            raise KeyParseError("key cannot be empty", raw_key=text)
        *path_parts, key = text.split(KEY_SEPARATOR)
        if not key:
            raise KeyParseError("key cannot be empty", raw_key=text)
        if PATH_SEPARATOR in key:
            raise KeyParseError(
                f"key cannot contain '{PATH_SEPARATOR}'", raw_key=text
            )

        path = ContextPath(p for p in path_parts if p)
        if base is not None:
            path = ContextPath.parse(base).joinpath(*path.segments)
        return cls(path=path, key=key)

    def as_path(self) -> ContextPath:
        """Context path obtained by treating the key as a final path segment."""
        return self.path.joinpath(self.key)

    def relative_to(self, base: ContextPath | str) -> KeyReference:
        """Nest this reference under ``base``."""
        return KeyReference(
            path=ContextPath.parse(base).joinpath(*self.path.segments),
            key=self.key,
        )

    def __str__(self) -> str:
        return KEY_SEPARATOR.join((*self.path.segments, self.key))


__all__ = ["KeyReference", "KEY_SEPARATOR"]
