# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enumerations for omnibase_secrets.

Exports:
    EnumSecretsErrorCode: Classification codes carried by every error
    EnumVaultLifecycleState: Created/Loaded/Dirty/Persisted vault states
    EnumVaultProvider: Closed set of vault backends (descriptor tag)
"""

from omnibase_secrets.enums.enum_secrets_error_code import EnumSecretsErrorCode
from omnibase_secrets.enums.enum_vault_lifecycle_state import (
    EnumVaultLifecycleState,
)
from omnibase_secrets.enums.enum_vault_provider import EnumVaultProvider

__all__: list[str] = [
    "EnumSecretsErrorCode",
    "EnumVaultLifecycleState",
    "EnumVaultProvider",
]
