# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Portable vault descriptor models.

A vault descriptor is the serializable identity of a vault: enough to
reconstruct it on the next invocation without interactive
re-authentication. Descriptors form a closed union tagged by ``provider``;
every EnumVaultProvider member has exactly one descriptor variant.

Credentials are never part of a descriptor. Backends that need them read
them from the environment at load time.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field

from omnibase_secrets.enums import EnumVaultProvider


class ModelLocalFileVaultDescriptor(BaseModel):
    """Descriptor for a vault whose payload lives in a local JSON file.

    Attributes:
        provider: Always ``local_file``
        id: Absolute path of the payload file
        name: Backing store name (file stem)
        version: Content digest of the last written payload
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider: Literal["local_file"] = EnumVaultProvider.LOCAL_FILE.value
    id: str = Field(min_length=1, description="Absolute path of the payload file")
    name: str = Field(min_length=1, description="Backing store name")
    version: str = Field(default="", description="Digest of the last payload")


class ModelHashiCorpVaultDescriptor(BaseModel):
    """Descriptor for a vault stored as one HashiCorp Vault KV v2 secret.

    Attributes:
        provider: Always ``hashicorp_vault``
        id: Secret path inside the KV mount
        name: Backing store name
        version: KV v2 version number of the last read or write
        url: Vault server URL
        mount_point: KV v2 mount point
        namespace: Vault Enterprise namespace
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider: Literal["hashicorp_vault"] = EnumVaultProvider.HASHICORP_VAULT.value
    id: str = Field(min_length=1, description="Secret path inside the KV mount")
    name: str = Field(min_length=1, description="Backing store name")
    version: str = Field(default="", description="KV v2 version number")
    url: str = Field(min_length=1, description="Vault server URL")
    mount_point: str = Field(default="secret", description="KV v2 mount point")
    namespace: Optional[str] = Field(
        default=None,
        description="Vault Enterprise namespace",
    )


ModelVaultDescriptor: TypeAlias = Annotated[
    Union[ModelLocalFileVaultDescriptor, ModelHashiCorpVaultDescriptor],
    Field(discriminator="provider"),
]


__all__ = [
    "ModelHashiCorpVaultDescriptor",
    "ModelLocalFileVaultDescriptor",
    "ModelVaultDescriptor",
]
