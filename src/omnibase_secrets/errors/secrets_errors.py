# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secrets Configuration Error Classes.

Error Hierarchy:
    SecretsConfigError (base error)
    ├── KeyParseError
    ├── VaultNotFoundError
    ├── SecretNotFoundError
    ├── VaultNotSpecifiedError
    ├── VaultAlreadyExistsError
    ├── ConfigDescriptorError
    ├── ConfigConsumedError
    └── VaultBackendError

All errors:
    - Carry an EnumSecretsErrorCode for classification
    - Support proper error chaining with ``raise ... from e``
    - Expose structured context via the ``context`` attribute
    - Accept ModelSecretsErrorContext for bundled context parameters

Secret values are never part of an error message or its context. Key paths,
vault names and descriptor paths are safe to include.
"""

from typing import Optional
from uuid import UUID

from omnibase_secrets.enums import EnumSecretsErrorCode
from omnibase_secrets.errors.model_secrets_error_context import (
    ModelSecretsErrorContext,
)


class SecretsConfigError(Exception):
    """Base error class for secrets configuration errors.

    Structured Fields (via ModelSecretsErrorContext):
        operation: Operation being performed
        target_name: Target vault or descriptor
        correlation_id: Correlation ID for tracing

    Example:
        >>> context = ModelSecretsErrorContext(operation="load")
        >>> raise SecretsConfigError("Operation failed", context=context)
    """

    default_error_code: EnumSecretsErrorCode = EnumSecretsErrorCode.OPERATION_FAILED

    def __init__(
        self,
        message: str,
        error_code: Optional[EnumSecretsErrorCode] = None,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize SecretsConfigError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to the class default)
            context: Bundled error context (operation, target_name, ...)
            **extra_context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code

        structured_context: dict[str, object] = dict(extra_context)
        self.correlation_id: UUID | None = None
        if context is not None:
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            self.correlation_id = context.correlation_id
        self.context = structured_context

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.message!r}, "
            f"error_code={self.error_code.value!r})"
        )


class KeyParseError(SecretsConfigError):
    """Raised when a dotted key reference cannot be parsed.

    Example:
        >>> raise KeyParseError("key cannot be empty", raw_key="db.")
    """

    default_error_code = EnumSecretsErrorCode.INVALID_KEY

    def __init__(
        self,
        reason: str,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        self.reason = reason
        super().__init__(message=reason, context=context, **extra_context)


class VaultNotFoundError(SecretsConfigError):
    """Raised when an operation names a vault that is not registered."""

    default_error_code = EnumSecretsErrorCode.VAULT_NOT_FOUND

    def __init__(
        self,
        vault_name: str,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        self.vault_name = vault_name
        super().__init__(
            message=f"Vault {vault_name} not found",
            context=context,
            vault_name=vault_name,
            **extra_context,
        )


class SecretNotFoundError(SecretsConfigError):
    """Raised when a secret reference does not resolve inside its vault.

    Example:
        >>> raise SecretNotFoundError("team-vault", "db.password")
    """

    default_error_code = EnumSecretsErrorCode.SECRET_NOT_FOUND

    def __init__(
        self,
        vault_name: str,
        key_path: str,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        self.vault_name = vault_name
        self.key_path = key_path
        super().__init__(
            message=f"Secret {key_path} not found for vault {vault_name}",
            context=context,
            vault_name=vault_name,
            key_path=key_path,
            **extra_context,
        )


class VaultNotSpecifiedError(SecretsConfigError):
    """Raised when no vault name was given and no default vault is set."""

    default_error_code = EnumSecretsErrorCode.VAULT_NOT_SPECIFIED

    def __init__(
        self,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=(
                "vault name not specified, either pass a vault name "
                "or set a default vault"
            ),
            context=context,
            **extra_context,
        )


class VaultAlreadyExistsError(SecretsConfigError):
    """Raised when registering a vault under a name that is already taken."""

    default_error_code = EnumSecretsErrorCode.VAULT_ALREADY_EXISTS

    def __init__(
        self,
        vault_name: str,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        self.vault_name = vault_name
        super().__init__(
            message=f"Vault {vault_name} already exists",
            context=context,
            vault_name=vault_name,
            **extra_context,
        )


class ConfigDescriptorError(SecretsConfigError):
    """Raised when the descriptor file cannot be read, decoded or written.

    A malformed descriptor on load is fatal for the invocation; there is no
    partial recovery.
    """

    default_error_code = EnumSecretsErrorCode.DESCRIPTOR_ERROR

    def __init__(
        self,
        message: str,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(message=message, context=context, **extra_context)


class ConfigConsumedError(SecretsConfigError):
    """Raised when a SecretsConfig is used after it has been saved."""

    default_error_code = EnumSecretsErrorCode.CONFIG_CONSUMED

    def __init__(
        self,
        message: str = "Config was already saved and cannot be reused",
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(message=message, context=context, **extra_context)


class VaultBackendError(SecretsConfigError):
    """Opaque wrapper for failures raised by a vault backend.

    The original backend exception is always chained as ``__cause__``.

    Example:
        >>> context = ModelSecretsErrorContext(
        ...     operation="vault.read_secret",
        ...     target_name="team-vault",
        ... )
        >>> raise VaultBackendError(
        ...     "Failed to read secret from Vault",
        ...     context=context,
        ...     provider="hashicorp_vault",
        ... ) from e
    """

    default_error_code = EnumSecretsErrorCode.BACKEND_ERROR

    def __init__(
        self,
        message: str,
        context: Optional[ModelSecretsErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(message=message, context=context, **extra_context)


__all__ = [
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
