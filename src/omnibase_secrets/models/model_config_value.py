# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Config value models and their descriptor encoding.

A config entry holds either a literal string or a secret reference that
names a vault and a key inside that vault's own store. The descriptor file
stores the two shapes as an untagged union:

    literal      ->  "plain value"
    secret ref   ->  {"team-vault": {"path": "/db", "key": "password"}}

Decoding tries the literal (string) form first and the secret (single-key
object) form second.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from omnibase_secrets.errors import ConfigDescriptorError
from omnibase_secrets.models.model_key_reference import KeyReference

if TYPE_CHECKING:
    from omnibase_secrets.vaults.protocol_vault import ProtocolVault

EncodedConfigValue: TypeAlias = str | dict[str, dict[str, str]]


class ModelLiteralValue(BaseModel):
    """A concrete string value; resolves to itself."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: str

    def __str__(self) -> str:
        return self.value


class ModelSecretRef(BaseModel):
    """Indirection to ``key`` inside the vault registered as ``vault_name``.

    Example:
        >>> ref = ModelSecretRef.from_dotted("team-vault", "db.password")
        >>> str(ref)
        'secret [team-vault::db.password]'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    vault_name: str = Field(min_length=1, description="Registered vault name")
    key: KeyReference = Field(description="Key inside the vault's own store")

    @classmethod
    def from_dotted(cls, vault_name: str, dotted_key: str) -> ModelSecretRef:
        """Build a secret ref from a dotted key (vault keys are root-relative)."""
        return cls(vault_name=vault_name, key=KeyReference.parse(dotted_key))

    def __str__(self) -> str:
        return f"secret [{self.vault_name}::{self.key}]"


ConfigValue: TypeAlias = ModelLiteralValue | ModelSecretRef


def describe_config_value(value: ConfigValue) -> str:
    """Display form: the literal itself or the ``secret [...]`` placeholder."""
    return str(value)


def resolve_config_value(
    value: ConfigValue,
    vaults: Mapping[str, ProtocolVault],
) -> str | None:
    """Resolve a config value to a concrete string.

    A secret ref is looked up with ancestor-override resolution inside the
    named vault's store. Returns None when the vault is not registered or
    the key is not defined at the referenced path or any ancestor.
    """
    if isinstance(value, ModelLiteralValue):
        return value.value
    vault = vaults.get(value.vault_name)
    if vault is None:
        return None
    return vault.store.get(value.key)


def encode_config_value(value: ConfigValue) -> EncodedConfigValue:
    if isinstance(value, ModelLiteralValue):
        return value.value
    return {value.vault_name: value.key.model_dump(mode="json")}


def decode_config_value(raw: object) -> ConfigValue:
    """Decode the untagged descriptor form of a config value.

    Raises:
        ConfigDescriptorError: If ``raw`` is neither a string nor a single-key
            object mapping a vault name to ``{path, key}``.
    """
    if isinstance(raw, str):
        return ModelLiteralValue(value=raw)
    if isinstance(raw, Mapping) and len(raw) == 1:
        ((vault_name, key_data),) = raw.items()
        try:
            return ModelSecretRef(
                vault_name=vault_name,
                key=KeyReference.model_validate(key_data),
            )
        except ValidationError as e:
            raise ConfigDescriptorError(
                "Invalid secret reference in descriptor",
                vault_name=str(vault_name),
            ) from e
    raise ConfigDescriptorError(
        "Config value must be a string or a single-key secret reference",
        value_type=type(raw).__name__,
    )


__all__ = [
    "ConfigValue",
    "EncodedConfigValue",
    "ModelLiteralValue",
    "ModelSecretRef",
    "decode_config_value",
    "describe_config_value",
    "encode_config_value",
    "resolve_config_value",
]
