# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol interface for vault backends.

A vault is a named, independently persisted secret store. Every backend owns
a ``ContextStore[str]`` holding its secrets and tracks identity and version
metadata for its backing store.

Lifecycle:
    CREATED    new backing store allocated
    LOADED     existing payload fetched (empty store if the payload is empty)
    DIRTY      local mutation pending, entered through ``mutable_store()``
    PERSISTED  pending mutation written, version token refreshed

Only DIRTY vaults perform a remote write on ``persist()``; calling it in any
other state is a no-op that returns the unchanged version token.

Example Usage:
    ```python
    vault = await construct_vault("team", EnumVaultProvider.LOCAL_FILE)
    vault.mutable_store().set(KeyReference.parse("db.password"), "hunter2")
    assert vault.is_dirty
    version = await vault.persist()
    descriptor = vault.to_descriptor()
    ```

See Also:
    - BaseVault: shared state machine and payload handling
    - vault_factory: construction and descriptor-based loading
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from omnibase_secrets.enums import EnumVaultLifecycleState, EnumVaultProvider
    from omnibase_secrets.models.model_vault_descriptor import ModelVaultDescriptor
    from omnibase_secrets.store.context_store import ContextStore


@runtime_checkable
class ProtocolVault(Protocol):
    """Capability contract every vault backend implements."""

    @property
    def name(self) -> str:
        """Backing store name."""
        ...

    @property
    def provider(self) -> EnumVaultProvider:
        """Backend tag used in the portable descriptor."""
        ...

    @property
    def version(self) -> str:
        """Version token of the backing store; observational only."""
        ...

    @property
    def state(self) -> EnumVaultLifecycleState:
        ...

    @property
    def is_dirty(self) -> bool:
        ...

    @property
    def store(self) -> ContextStore[str]:
        """The vault's secrets. Callers must not mutate it; see mutable_store()."""
        ...

    def mutable_store(self) -> ContextStore[str]:
        """Return the store for mutation and mark the vault DIRTY."""
        ...

    async def persist(self) -> str:
        """Write pending changes to the backing store and return the version.

        Raises:
            VaultBackendError: If the backing store rejects the write.
        """
        ...

    def to_descriptor(self) -> ModelVaultDescriptor:
        """Serializable identity sufficient to reload this vault."""
        ...


__all__ = ["ProtocolVault"]
