# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Construction and descriptor-based loading of vault backends.

Dispatch is exhaustive over the closed provider union: adding an
EnumVaultProvider member without a branch here is a type error at the
``assert_never`` calls.
"""

from __future__ import annotations

import logging
from typing import assert_never

from omnibase_secrets.enums import EnumVaultProvider
from omnibase_secrets.errors import ModelSecretsErrorContext, VaultBackendError
from omnibase_secrets.models.model_vault_descriptor import (
    ModelHashiCorpVaultDescriptor,
    ModelLocalFileVaultDescriptor,
    ModelVaultDescriptor,
)
from omnibase_secrets.vaults.vault_base import BaseVault
from omnibase_secrets.vaults.vault_hashicorp import HashiCorpVault
from omnibase_secrets.vaults.vault_local_file import LocalFileVault

logger = logging.getLogger(__name__)


def _coerce_provider(provider: EnumVaultProvider | str) -> EnumVaultProvider:
    try:
        return EnumVaultProvider(provider)
    except ValueError as e:
        raise VaultBackendError(
            f"Unsupported vault provider: {provider}",
            context=ModelSecretsErrorContext(operation="construct"),
            supported=[p.value for p in EnumVaultProvider],
        ) from e


async def construct_vault(
    name: str,
    provider: EnumVaultProvider | str,
    **options: object,
) -> BaseVault:
    """Allocate a new backing store for ``name`` with the given provider.

    Args:
        name: Backing store name
        provider: Backend to allocate the store in
        **options: Backend-specific options (``directory`` for local files;
            ``secret_path``, ``settings``, ``client`` for HashiCorp Vault)

    Raises:
        VaultBackendError: For unknown providers or backend failures.
    """
    kind = _coerce_provider(provider)
    logger.info(
        "Constructing vault",
        extra={"vault": name, "provider": kind.value},
    )
    if kind is EnumVaultProvider.LOCAL_FILE:
        return await LocalFileVault.create(name, **options)  # type: ignore[arg-type]
    if kind is EnumVaultProvider.HASHICORP_VAULT:
        return await HashiCorpVault.create(name, **options)  # type: ignore[arg-type]
    assert_never(kind)


async def load_vault_from_descriptor(
    descriptor: ModelVaultDescriptor,
    **options: object,
) -> BaseVault:
    """Reconstruct a vault from its portable descriptor.

    Args:
        descriptor: Descriptor previously produced by ``to_descriptor()``
        **options: Backend-specific options (``client`` for HashiCorp Vault)

    Raises:
        VaultBackendError: If the backing store cannot be fetched or decoded.
    """
    if isinstance(descriptor, ModelLocalFileVaultDescriptor):
        return await LocalFileVault.from_descriptor(descriptor)
    if isinstance(descriptor, ModelHashiCorpVaultDescriptor):
        return await HashiCorpVault.from_descriptor(
            descriptor, **options  # type: ignore[arg-type]
        )
    assert_never(descriptor)


__all__ = ["construct_vault", "load_vault_from_descriptor"]
