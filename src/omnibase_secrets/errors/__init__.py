# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secrets Configuration Errors Module.

Exports:
    ModelSecretsErrorContext: Configuration model for bundled error context
    SecretsConfigError: Base error class
    KeyParseError: Malformed dotted key reference
    VaultNotFoundError: Unknown vault name
    SecretNotFoundError: Secret reference does not resolve in its vault
    VaultNotSpecifiedError: No vault name and no default vault
    VaultAlreadyExistsError: Vault name collision on registration
    ConfigDescriptorError: Descriptor encoding or IO failure
    ConfigConsumedError: Config used after save
    VaultBackendError: Opaque failure from a vault backend

Error Sanitization Guidelines:
    NEVER include secret values in error messages or context.

    SAFE to include:
        - Vault names and providers
        - Dotted key paths (``db.password``)
        - Descriptor file paths
        - Operation names and correlation IDs

    Example - BAD (exposes the secret)::

        raise SecretNotFoundError(vault_name, f"{key_ref}={value}")

    Example - GOOD::

        raise SecretNotFoundError(vault_name, str(key_ref))
"""

from omnibase_secrets.errors.model_secrets_error_context import (
    ModelSecretsErrorContext,
)
from omnibase_secrets.errors.secrets_errors import (
    ConfigConsumedError,
    ConfigDescriptorError,
    KeyParseError,
    SecretNotFoundError,
    SecretsConfigError,
    VaultAlreadyExistsError,
    VaultBackendError,
    VaultNotFoundError,
    VaultNotSpecifiedError,
)

__all__: list[str] = [
    # Configuration model
    "ModelSecretsErrorContext",
    # Error classes
    "SecretsConfigError",
    "KeyParseError",
    "VaultNotFoundError",
    "SecretNotFoundError",
    "VaultNotSpecifiedError",
    "VaultAlreadyExistsError",
    "ConfigDescriptorError",
    "ConfigConsumedError",
    "VaultBackendError",
]
