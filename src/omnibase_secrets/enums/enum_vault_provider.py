# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Provider Enumeration.

Defines the closed set of secret store backends a vault can be bound to.
The value doubles as the ``provider`` tag of a serialized vault descriptor,
so renaming a member is a breaking change to the descriptor file format.
"""

from enum import Enum


class EnumVaultProvider(str, Enum):
    """Backing secret store providers.

    Attributes:
        LOCAL_FILE: JSON payload kept in a file on the local filesystem
        HASHICORP_VAULT: HashiCorp Vault KV v2 secrets engine
    """

    LOCAL_FILE = "local_file"
    HASHICORP_VAULT = "hashicorp_vault"


__all__ = ["EnumVaultProvider"]
