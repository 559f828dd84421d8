# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Vault connection settings.

Security Note:
    The token field uses SecretStr to prevent accidental logging of
    sensitive credentials. Tokens come from the environment, never from the
    descriptor file.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

ENV_VAULT_ADDR: str = "VAULT_ADDR"
ENV_VAULT_TOKEN: str = "VAULT_TOKEN"
ENV_VAULT_NAMESPACE: str = "VAULT_NAMESPACE"
ENV_VAULT_MOUNT_POINT: str = "VAULT_MOUNT_POINT"
ENV_VAULT_SKIP_VERIFY: str = "VAULT_SKIP_VERIFY"

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})


class ModelHashiCorpVaultSettings(BaseModel):
    """Connection settings for the HashiCorp Vault backend.

    Attributes:
        url: Vault server URL (e.g. "https://vault.example.com:8200")
        token: Vault token (SecretStr, optional when the client is injected)
        namespace: Vault Enterprise namespace
        mount_point: KV v2 mount point (default "secret")
        verify_ssl: Whether to verify SSL certificates (default True)
        timeout_seconds: Per-operation timeout in seconds (1.0-300.0)

    Example:
        >>> settings = ModelHashiCorpVaultSettings(
        ...     url="https://vault.example.com:8200",
        ...     token=SecretStr("s.1234567890"),
        ... )
        >>> print(settings.token)
        **********
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    url: str = Field(
        min_length=1,
        description="Vault server URL (e.g., 'https://vault.example.com:8200')",
    )
    token: SecretStr | None = Field(
        default=None,
        description="Vault authentication token",
    )
    namespace: Optional[str] = Field(
        default=None,
        description="Vault namespace for Vault Enterprise",
    )
    mount_point: str = Field(
        default="secret",
        min_length=1,
        description="KV v2 secrets engine mount point",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify SSL certificates",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Operation timeout in seconds",
    )

    @classmethod
    def from_env(cls, **overrides: object) -> ModelHashiCorpVaultSettings:
        """Build settings from the standard Vault environment variables.

        Explicit keyword overrides win over the environment; ``None``
        overrides are ignored.

        Raises:
            pydantic.ValidationError: If no URL is available.
        """
        values: dict[str, object] = {}
        if url := os.environ.get(ENV_VAULT_ADDR):
            values["url"] = url
        if token := os.environ.get(ENV_VAULT_TOKEN):
            values["token"] = SecretStr(token)
        if namespace := os.environ.get(ENV_VAULT_NAMESPACE):
            values["namespace"] = namespace
        if mount_point := os.environ.get(ENV_VAULT_MOUNT_POINT):
            values["mount_point"] = mount_point
        if skip_verify := os.environ.get(ENV_VAULT_SKIP_VERIFY):
            values["verify_ssl"] = skip_verify.strip().lower() not in _TRUTHY
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


__all__: list[str] = ["ModelHashiCorpVaultSettings"]
