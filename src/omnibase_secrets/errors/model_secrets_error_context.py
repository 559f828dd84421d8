# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secrets Error Context Model.

Bundles the structured fields shared by every secrets configuration error
so error constructors keep a short, strongly typed signature.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ModelSecretsErrorContext(BaseModel):
    """Structured context attached to a SecretsConfigError.

    Attributes:
        operation: Operation being performed (load, save, set, persist, ...)
        target_name: Vault name, descriptor path or other target identifier
        correlation_id: Correlation ID for tracing one invocation

    Example:
        >>> context = ModelSecretsErrorContext(
        ...     operation="persist",
        ...     target_name="team-vault",
        ... )
        >>> raise VaultBackendError("Vault write failed", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    operation: Optional[str] = Field(
        default=None,
        description="Operation being performed (load, save, set, persist, ...)",
    )
    target_name: Optional[str] = Field(
        default=None,
        description="Vault name, descriptor path or other target identifier",
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Correlation ID for tracing one invocation",
    )


__all__ = ["ModelSecretsErrorContext"]
