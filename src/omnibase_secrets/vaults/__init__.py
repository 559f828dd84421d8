# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault capability and backends.

Exports:
    ProtocolVault: Capability contract every backend implements
    BaseVault: Shared lifecycle state machine
    LocalFileVault: JSON file backend
    HashiCorpVault: HashiCorp Vault KV v2 backend (hvac)
    ModelHashiCorpVaultSettings: Connection settings for HashiCorpVault
    construct_vault: Allocate a new vault for a provider
    load_vault_from_descriptor: Reload a vault from its portable descriptor
"""

from omnibase_secrets.vaults.model_hashicorp_vault_settings import (
    ModelHashiCorpVaultSettings,
)
from omnibase_secrets.vaults.protocol_vault import ProtocolVault
from omnibase_secrets.vaults.vault_base import BaseVault
from omnibase_secrets.vaults.vault_factory import (
    construct_vault,
    load_vault_from_descriptor,
)
from omnibase_secrets.vaults.vault_hashicorp import HashiCorpVault
from omnibase_secrets.vaults.vault_local_file import LocalFileVault

__all__: list[str] = [
    "BaseVault",
    "HashiCorpVault",
    "LocalFileVault",
    "ModelHashiCorpVaultSettings",
    "ProtocolVault",
    "construct_vault",
    "load_vault_from_descriptor",
]
