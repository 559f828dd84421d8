# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Base class implementing the vault lifecycle once for every backend.

Backends provide ``_write_payload`` (the remote write, returning the new
version token) and ``to_descriptor``. Payloads are the vault store's
serialized mapping: ``{"/context/path": {"key": "secret value"}}``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import ClassVar

from omnibase_secrets.enums import EnumVaultLifecycleState, EnumVaultProvider
from omnibase_secrets.errors import (
    ConfigDescriptorError,
    ModelSecretsErrorContext,
    VaultBackendError,
)
from omnibase_secrets.models.model_vault_descriptor import ModelVaultDescriptor
from omnibase_secrets.store.context_store import ContextStore

logger = logging.getLogger(__name__)

VaultPayload = dict[str, dict[str, str]]


def _decode_secret_value(raw: object) -> str:
    if not isinstance(raw, str):
        raise ConfigDescriptorError(
            "Vault payload values must be strings",
            value_type=type(raw).__name__,
        )
    return raw


def store_from_payload(
    payload: Mapping[str, Mapping[str, object]] | None,
    vault_name: str,
) -> ContextStore[str]:
    """Decode a backend payload; an empty payload yields an empty store.

    Raises:
        VaultBackendError: If the payload is not a context -> key -> string map.
    """
    if not payload:
        return ContextStore()
    if not isinstance(payload, Mapping):
        raise VaultBackendError(
            "Vault payload must be an object",
            context=ModelSecretsErrorContext(
                operation="decode_payload", target_name=vault_name
            ),
        )
    try:
        return ContextStore.from_mapping(payload, _decode_secret_value)
    except ConfigDescriptorError as e:
        raise VaultBackendError(
            f"Malformed vault payload: {e.message}",
            context=ModelSecretsErrorContext(
                operation="decode_payload", target_name=vault_name
            ),
        ) from e


def payload_from_store(store: ContextStore[str]) -> VaultPayload:
    return {
        path: {key: str(value) for key, value in entries.items()}
        for path, entries in store.to_mapping().items()
    }


class BaseVault(ABC):
    """Shared state machine for vault backends."""

    provider: ClassVar[EnumVaultProvider]

    def __init__(
        self,
        name: str,
        version: str = "",
        store: ContextStore[str] | None = None,
        state: EnumVaultLifecycleState = EnumVaultLifecycleState.LOADED,
    ) -> None:
        self._name = name
        self._version = version
        self._store: ContextStore[str] = store if store is not None else ContextStore()
        self._state = state

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return self._version

    @property
    def state(self) -> EnumVaultLifecycleState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state is EnumVaultLifecycleState.DIRTY

    @property
    def store(self) -> ContextStore[str]:
        return self._store

    def mutable_store(self) -> ContextStore[str]:
        self._state = EnumVaultLifecycleState.DIRTY
        return self._store

    async def persist(self) -> str:
        """Write pending changes and refresh the version token.

        Returns:
            The version token after the call (unchanged when nothing was pending)

        Raises:
            VaultBackendError: If the backend write fails; the vault stays DIRTY.
        """
        if not self.is_dirty:
            logger.debug(
                "Vault persist skipped, no pending changes",
                extra={
                    "vault": self._name,
                    "provider": self.provider.value,
                    "state": self._state.value,
                },
            )
            return self._version

        self._version = await self._write_payload(payload_from_store(self._store))
        self._state = EnumVaultLifecycleState.PERSISTED
        logger.debug(
            "Vault persisted",
            extra={
                "vault": self._name,
                "provider": self.provider.value,
                "version": self._version,
                "entries": len(self._store),
            },
        )
        return self._version

    @abstractmethod
    async def _write_payload(self, payload: VaultPayload) -> str:
        """Write the full payload to the backing store; return the new version."""

    @abstractmethod
    def to_descriptor(self) -> ModelVaultDescriptor:
        ...

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self._name!r}, "
            f"version={self._version!r}, state={self._state.value})"
        )


__all__ = ["BaseVault", "VaultPayload", "payload_from_store", "store_from_payload"]
