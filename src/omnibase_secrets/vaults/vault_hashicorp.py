# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Vault backend using the hvac client (KV v2 secrets engine).

The whole vault payload is stored as the data of a single KV v2 secret:
each context path is a top-level field holding that context's
``key -> value`` object. The KV v2 version number is the version token.

Security Features:
    - Token held as SecretStr and only read from the environment
    - Error messages name the operation and secret path, never values
    - SSL verification enabled by default

Blocking hvac calls run in the default executor under ``asyncio.wait_for``
with the configured timeout. There is no retry loop: a failed call fails the
whole operation and surfaces as VaultBackendError.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

import hvac
from pydantic import ValidationError

from omnibase_secrets.enums import EnumVaultLifecycleState, EnumVaultProvider
from omnibase_secrets.errors import ModelSecretsErrorContext, VaultBackendError
from omnibase_secrets.models.model_vault_descriptor import (
    ModelHashiCorpVaultDescriptor,
)
from omnibase_secrets.store.context_store import ContextStore
from omnibase_secrets.vaults.model_hashicorp_vault_settings import (
    ModelHashiCorpVaultSettings,
)
from omnibase_secrets.vaults.vault_base import (
    BaseVault,
    VaultPayload,
    store_from_payload,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def load_settings(**overrides: object) -> ModelHashiCorpVaultSettings:
    """Settings from the environment, wrapping validation failures.

    Raises:
        VaultBackendError: If the settings are incomplete or invalid.
    """
    try:
        return ModelHashiCorpVaultSettings.from_env(**overrides)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise VaultBackendError(
            "Invalid HashiCorp Vault configuration",
            context=ModelSecretsErrorContext(operation="configure"),
            invalid_fields=fields,
        ) from e


def create_hvac_client(settings: ModelHashiCorpVaultSettings) -> hvac.Client:
    return hvac.Client(
        url=settings.url,
        token=settings.token.get_secret_value() if settings.token else None,
        namespace=settings.namespace,
        verify=settings.verify_ssl,
        timeout=settings.timeout_seconds,
    )


async def _run_vault_call(
    operation: str,
    func: Callable[[], T],
    settings: ModelHashiCorpVaultSettings,
    secret_path: str,
) -> T:
    context = ModelSecretsErrorContext(operation=operation, target_name=secret_path)
    loop = asyncio.get_running_loop()
    try:
        return await asyncio.wait_for(
            loop.run_in_executor(None, func),
            timeout=settings.timeout_seconds,
        )
    except TimeoutError as e:
        raise VaultBackendError(
            f"Vault operation timed out after {settings.timeout_seconds}s",
            context=context,
        ) from e
    except hvac.exceptions.Forbidden as e:
        raise VaultBackendError(
            "Vault permission denied - check token policies",
            context=context,
        ) from e
    except hvac.exceptions.VaultError as e:
        raise VaultBackendError(
            f"Vault operation failed: {type(e).__name__}",
            context=context,
        ) from e
    except Exception as e:
        raise VaultBackendError(
            f"Vault operation failed: {type(e).__name__}",
            context=context,
        ) from e


async def _read_secret(
    client: hvac.Client,
    settings: ModelHashiCorpVaultSettings,
    secret_path: str,
) -> tuple[dict[str, object], str] | None:
    """Fetch the KV v2 secret data and version; None if the path does not exist."""

    def read_func() -> dict[str, object] | None:
        try:
            result: dict[str, object] = client.secrets.kv.v2.read_secret_version(
                path=secret_path,
                mount_point=settings.mount_point,
                raise_on_deleted_version=True,
            )
        except hvac.exceptions.InvalidPath:
            return None
        return result

    result = await _run_vault_call(
        "vault.read_secret", read_func, settings, secret_path
    )
    if result is None:
        return None

    data_obj = result.get("data", {})
    data_dict = data_obj if isinstance(data_obj, dict) else {}
    secret_data = data_dict.get("data") or {}
    metadata = data_dict.get("metadata") or {}
    version = metadata.get("version", "") if isinstance(metadata, dict) else ""
    return (secret_data if isinstance(secret_data, dict) else {}), str(version)


async def _write_secret(
    client: hvac.Client,
    settings: ModelHashiCorpVaultSettings,
    secret_path: str,
    payload: VaultPayload,
) -> str:
    def write_func() -> dict[str, object]:
        result: dict[str, object] = client.secrets.kv.v2.create_or_update_secret(
            path=secret_path,
            secret=payload,
            mount_point=settings.mount_point,
        )
        return result

    result = await _run_vault_call(
        "vault.write_secret", write_func, settings, secret_path
    )
    data_obj = result.get("data", {}) if isinstance(result, dict) else {}
    version = data_obj.get("version", "") if isinstance(data_obj, dict) else ""
    return str(version)


class HashiCorpVault(BaseVault):
    """Vault stored as one HashiCorp Vault KV v2 secret."""

    provider = EnumVaultProvider.HASHICORP_VAULT

    def __init__(
        self,
        client: hvac.Client,
        settings: ModelHashiCorpVaultSettings,
        secret_path: str,
        name: str,
        version: str = "",
        store: ContextStore[str] | None = None,
        state: EnumVaultLifecycleState = EnumVaultLifecycleState.LOADED,
    ) -> None:
        super().__init__(name=name, version=version, store=store, state=state)
        self._client = client
        self._settings = settings
        self._secret_path = secret_path

    @property
    def secret_path(self) -> str:
        return self._secret_path

    @property
    def settings(self) -> ModelHashiCorpVaultSettings:
        return self._settings

    @classmethod
    async def create(
        cls,
        name: str,
        secret_path: str | None = None,
        settings: ModelHashiCorpVaultSettings | None = None,
        client: hvac.Client | None = None,
    ) -> HashiCorpVault:
        """Allocate a KV v2 secret for this vault, adopting an existing one.

        Args:
            name: Backing store name
            secret_path: Secret path inside the mount (defaults to ``name``)
            settings: Connection settings (defaults to the environment)
            client: Pre-built hvac client (defaults to one built from settings)

        Raises:
            VaultBackendError: If Vault rejects the read or the write.
        """
        settings = settings or load_settings()
        client = client or create_hvac_client(settings)
        path = secret_path or name

        existing = await _read_secret(client, settings, path)
        if existing is not None:
            data, version = existing
            logger.info(
                "Adopting existing Vault secret",
                extra={"vault": name, "secret_path": path, "version": version},
            )
            return cls(
                client=client,
                settings=settings,
                secret_path=path,
                name=name,
                version=version,
                store=store_from_payload(data, name),
                state=EnumVaultLifecycleState.LOADED,
            )

        version = await _write_secret(client, settings, path, {})
        logger.info(
            "Created Vault secret",
            extra={"vault": name, "secret_path": path, "version": version},
        )
        return cls(
            client=client,
            settings=settings,
            secret_path=path,
            name=name,
            version=version,
            state=EnumVaultLifecycleState.CREATED,
        )

    @classmethod
    async def from_descriptor(
        cls,
        descriptor: ModelHashiCorpVaultDescriptor,
        client: hvac.Client | None = None,
    ) -> HashiCorpVault:
        """Reload a vault; the token still comes from the environment.

        Raises:
            VaultBackendError: If the secret no longer exists or cannot be read.
        """
        settings = load_settings(
            url=descriptor.url,
            namespace=descriptor.namespace,
            mount_point=descriptor.mount_point,
        )
        client = client or create_hvac_client(settings)

        existing = await _read_secret(client, settings, descriptor.id)
        if existing is None:
            raise VaultBackendError(
                "Vault secret backing this vault no longer exists",
                context=ModelSecretsErrorContext(
                    operation="load", target_name=descriptor.name
                ),
                secret_path=descriptor.id,
            )
        data, version = existing
        return cls(
            client=client,
            settings=settings,
            secret_path=descriptor.id,
            name=descriptor.name,
            version=version,
            store=store_from_payload(data, descriptor.name),
            state=EnumVaultLifecycleState.LOADED,
        )

    async def _write_payload(self, payload: VaultPayload) -> str:
        return await _write_secret(
            self._client, self._settings, self._secret_path, payload
        )

    def to_descriptor(self) -> ModelHashiCorpVaultDescriptor:
        return ModelHashiCorpVaultDescriptor(
            id=self._secret_path,
            name=self.name,
            version=self.version,
            url=self._settings.url,
            mount_point=self._settings.mount_point,
            namespace=self._settings.namespace,
        )


__all__ = ["HashiCorpVault", "create_hvac_client", "load_settings"]
