# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""SecretsConfig - aggregate root for context-scoped config and vaults.

A SecretsConfig owns the config store (``ContextStore[ConfigValue]``), the
registry of vaults, the default vault name, the current working context and
the set of vaults with pending changes. It is created once per invocation
from the descriptor file, mutated in memory and then either saved or
discarded.

Invocation State Machine:
    load() -> Loaded -> (set/remove/add_vault/set_default_vault/...)*
           -> save()  (terminal, the instance is consumed)
           or discard (process exits without saving, read-only commands)

Resolution:
    ``get`` looks the key up with ancestor-override resolution in the config
    store. A literal resolves to itself; a secret reference resolves through
    its vault's own store, again with ancestor-override resolution.

Example Usage:
    ```python
    config = await SecretsConfig.load(default_descriptor_path())
    await config.create_vault("team", EnumVaultProvider.LOCAL_FILE, set_default=True)
    config.set_secret(KeyReference.parse("db.password"), "hunter2")

    key = config.parse_key("db_password")
    config.set(key, ModelSecretRef.from_dotted("team", "db.password"))
    assert config.get(key) == "hunter2"

    await config.save()
    ```
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from omnibase_secrets.enums import EnumVaultProvider
from omnibase_secrets.errors import (
    ConfigConsumedError,
    ConfigDescriptorError,
    ModelSecretsErrorContext,
    SecretNotFoundError,
    VaultAlreadyExistsError,
    VaultNotFoundError,
    VaultNotSpecifiedError,
)
from omnibase_secrets.models.model_config_descriptor import ModelConfigDescriptor
from omnibase_secrets.models.model_config_value import (
    ConfigValue,
    ModelSecretRef,
    decode_config_value,
    describe_config_value,
    encode_config_value,
    resolve_config_value,
)
from omnibase_secrets.models.model_context_path import ContextPath
from omnibase_secrets.models.model_key_reference import KeyReference
from omnibase_secrets.store.context_store import ContextStore
from omnibase_secrets.utils.util_config_paths import working_context
from omnibase_secrets.vaults.protocol_vault import ProtocolVault
from omnibase_secrets.vaults.vault_factory import (
    construct_vault,
    load_vault_from_descriptor,
)

logger = logging.getLogger(__name__)


class SecretsConfig:
    """Context-scoped configuration with secret indirection through vaults."""

    def __init__(
        self,
        descriptor_path: Path,
        store: ContextStore[ConfigValue] | None = None,
        vaults: Mapping[str, ProtocolVault] | None = None,
        default_vault: str | None = None,
        context: ContextPath | str = "/",
    ) -> None:
        self._descriptor_path = Path(descriptor_path)
        self._store: ContextStore[ConfigValue] = (
            store if store is not None else ContextStore()
        )
        self._vaults: dict[str, ProtocolVault] = dict(vaults or {})
        self._default_vault = default_vault
        self._context = ContextPath.parse(context)
        self._dirty_vaults: set[str] = set()
        self._saved = False

    # === Loading and saving ===

    @classmethod
    async def load(cls, descriptor_path: Path | str) -> SecretsConfig:
        """Read the descriptor and instantiate every listed vault.

        An absent descriptor file yields an empty config.

        Raises:
            ConfigDescriptorError: If the file cannot be read or is malformed.
            VaultBackendError: If a listed vault cannot be loaded.
        """
        path = Path(descriptor_path)
        descriptor = _read_descriptor(path)
        store = ContextStore.from_mapping(descriptor.config, decode_config_value)

        vaults: dict[str, ProtocolVault] = {}
        for name, vault_descriptor in descriptor.secrets.items():
            vaults[name] = await load_vault_from_descriptor(vault_descriptor)

        logger.info(
            "Loaded secrets config",
            extra={
                "descriptor_path": str(path),
                "entries": len(store),
                "vaults": list(vaults),
                "context": descriptor.context or "/",
            },
        )
        return cls(
            descriptor_path=path,
            store=store,
            vaults=vaults,
            default_vault=descriptor.default_secret,
            context=descriptor.context or "/",
        )

    async def save(self) -> None:
        """Persist every dirty vault, then write the descriptor file.

        The instance is consumed afterwards. Vaults are persisted in registry
        order; a vault counts as dirty when it was changed through this config
        or reports ``is_dirty`` itself (for example after
        ``get_vault().mutable_store()``). Unmodified vaults are skipped. A
        failure part way through is fatal for the invocation.

        Raises:
            ConfigConsumedError: If the config was already saved.
            VaultBackendError: If a vault write fails.
            ConfigDescriptorError: If the descriptor cannot be written.
        """
        self._ensure_active("save")
        for name, vault in self._vaults.items():
            if name in self._dirty_vaults or vault.is_dirty:
                self._dirty_vaults.add(name)
                await vault.persist()

        descriptor = self.to_descriptor()
        try:
            self._descriptor_path.parent.mkdir(parents=True, exist_ok=True)
            self._descriptor_path.write_text(
                descriptor.model_dump_json(indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise ConfigDescriptorError(
                f"Failed to write descriptor: {type(e).__name__}",
                context=ModelSecretsErrorContext(
                    operation="save", target_name=str(self._descriptor_path)
                ),
            ) from e

        self._saved = True
        logger.info(
            "Saved secrets config",
            extra={
                "descriptor_path": str(self._descriptor_path),
                "entries": len(self._store),
                "persisted_vaults": sorted(self._dirty_vaults),
            },
        )

    def to_descriptor(self) -> ModelConfigDescriptor:
        return ModelConfigDescriptor(
            config=self._store.to_mapping(encode_config_value),
            context=str(self._context),
            default_secret=self._default_vault,
            secrets={
                name: vault.to_descriptor() for name, vault in self._vaults.items()
            },
        )

    # === Config entries ===

    def get(self, key_ref: KeyReference) -> str | None:
        """Resolve ``key_ref`` to a concrete string, or None if it does not resolve."""
        value = self._store.get(key_ref)
        if value is None:
            return None
        return resolve_config_value(value, self._vaults)

    def get_value(self, key_ref: KeyReference) -> ConfigValue | None:
        return self._store.get(key_ref)

    def get_all(self, path: ContextPath | str) -> dict[str, str]:
        """Folded view of every key visible at ``path``, for display.

        Secret references that do not resolve render as their
        ``secret [vault::key]`` placeholder.
        """
        resolved: dict[str, str] = {}
        for key, value in self._store.get_all_for_path(path).items():
            concrete = resolve_config_value(value, self._vaults)
            resolved[key] = (
                concrete if concrete is not None else describe_config_value(value)
            )
        return resolved

    def set(self, key_ref: KeyReference, value: ConfigValue) -> ConfigValue | None:
        """Write ``value`` at the exact context of ``key_ref``.

        A secret reference is accepted only if it currently resolves in its
        vault. On failure the store is left unchanged and the instance stays
        usable.

        Returns:
            The value previously stored at that exact context, if any

        Raises:
            VaultNotFoundError: If the referenced vault is not registered.
            SecretNotFoundError: If the key does not resolve in that vault.
        """
        self._ensure_active("set")
        if isinstance(value, ModelSecretRef):
            vault = self._get_vault(value.vault_name)
            if vault.store.get(value.key) is None:
                raise SecretNotFoundError(
                    value.vault_name,
                    str(value.key),
                    context=ModelSecretsErrorContext(
                        operation="set", target_name=value.vault_name
                    ),
                )
        return self._store.set(key_ref, value)

    def remove(self, key_ref: KeyReference) -> ConfigValue | None:
        """Remove ``key_ref`` from its exact context; ancestors are untouched."""
        self._ensure_active("remove")
        return self._store.remove(key_ref)

    def keys_under(self, prefix: ContextPath | str) -> list[KeyReference]:
        return list(self._store.keys_under(prefix))

    def display(self) -> str:
        """Tree of all config contexts; secret refs show as placeholders."""
        return self._store.render_tree(describe_config_value)

    # === Working context ===

    @property
    def descriptor_path(self) -> Path:
        return self._descriptor_path

    @property
    def current_context(self) -> ContextPath:
        return self._context

    def set_current_context(self, context: ContextPath | str) -> None:
        self._ensure_active("set_current_context")
        self._context = ContextPath.parse(context)

    def working_context(self, cwd: Path | str | None = None) -> ContextPath:
        """``/<basename of cwd>/<current context>``."""
        return working_context(self._context, cwd)

    def parse_key(self, text: str, cwd: Path | str | None = None) -> KeyReference:
        """Parse a user-entered dotted key relative to the working context.

        Raises:
            KeyParseError: If the key is empty.
        """
        return KeyReference.parse(text, base=self.working_context(cwd))

    # === Vault registry ===

    @property
    def default_vault(self) -> str | None:
        return self._default_vault

    @property
    def vault_names(self) -> list[str]:
        return list(self._vaults)

    @property
    def dirty_vaults(self) -> frozenset[str]:
        return frozenset(self._dirty_vaults)

    def vault_exists(self, name: str) -> bool:
        return name in self._vaults

    def get_vault(self, name: str | None = None) -> ProtocolVault:
        """Vault for an explicit name, else the default vault.

        Raises:
            VaultNotSpecifiedError: If no name is given and no default is set.
            VaultNotFoundError: If the effective name is not registered.
        """
        return self._get_vault(self.effective_vault_name(name))

    def effective_vault_name(self, name: str | None = None) -> str:
        """Explicit name, else the default vault name.

        Raises:
            VaultNotSpecifiedError: If neither is available.
        """
        effective = name or self._default_vault
        if not effective:
            raise VaultNotSpecifiedError(
                context=ModelSecretsErrorContext(operation="resolve_vault")
            )
        return effective

    def set_default_vault(self, name: str) -> None:
        """Make ``name`` the default vault.

        Raises:
            VaultNotFoundError: If ``name`` is not registered.
        """
        self._ensure_active("set_default_vault")
        self._get_vault(name)
        self._default_vault = name

    def add_vault(self, name: str, vault: ProtocolVault) -> None:
        """Register an already constructed vault under ``name``.

        Raises:
            VaultAlreadyExistsError: If ``name`` is already registered.
        """
        self._ensure_active("add_vault")
        if name in self._vaults:
            raise VaultAlreadyExistsError(
                name,
                context=ModelSecretsErrorContext(
                    operation="add_vault", target_name=name
                ),
            )
        self._vaults[name] = vault
        self._dirty_vaults.add(name)
        logger.info(
            "Registered vault",
            extra={
                "vault": name,
                "provider": vault.provider.value,
                "state": vault.state.value,
            },
        )

    async def create_vault(
        self,
        name: str,
        provider: EnumVaultProvider | str,
        set_default: bool = False,
        **options: object,
    ) -> ProtocolVault:
        """Construct a new vault backend and register it under ``name``.

        The name is checked before any backend I/O happens.

        Raises:
            VaultAlreadyExistsError: If ``name`` is already registered.
            VaultBackendError: If the backend cannot allocate the store.
        """
        self._ensure_active("create_vault")
        if name in self._vaults:
            raise VaultAlreadyExistsError(
                name,
                context=ModelSecretsErrorContext(
                    operation="create_vault", target_name=name
                ),
            )
        vault = await construct_vault(name, provider, **options)
        self.add_vault(name, vault)
        if set_default:
            self.set_default_vault(name)
        return vault

    # === Vault-scoped secrets ===

    def get_secret(
        self, key_ref: KeyReference, vault_name: str | None = None
    ) -> str | None:
        return self.get_vault(vault_name).store.get(key_ref)

    def get_all_secrets(
        self, path: ContextPath | str, vault_name: str | None = None
    ) -> dict[str, str]:
        return self.get_vault(vault_name).store.get_all_for_path(path)

    def set_secret(
        self,
        key_ref: KeyReference,
        value: str,
        vault_name: str | None = None,
    ) -> str | None:
        """Write a secret into the effective vault and mark it dirty."""
        self._ensure_active("set_secret")
        name = self.effective_vault_name(vault_name)
        previous = self._get_vault(name).mutable_store().set(key_ref, value)
        self._dirty_vaults.add(name)
        return previous

    def remove_secret(
        self, key_ref: KeyReference, vault_name: str | None = None
    ) -> str | None:
        """Remove a secret from the effective vault's exact context.

        The vault is only marked dirty when something was removed.
        """
        self._ensure_active("remove_secret")
        name = self.effective_vault_name(vault_name)
        vault = self._get_vault(name)
        if key_ref not in vault.store:
            return None
        removed = vault.mutable_store().remove(key_ref)
        self._dirty_vaults.add(name)
        return removed

    def display_vault(self, vault_name: str | None = None) -> str:
        return self.get_vault(vault_name).store.render_tree()

    # === Internals ===

    def _get_vault(self, name: str) -> ProtocolVault:
        vault = self._vaults.get(name)
        if vault is None:
            raise VaultNotFoundError(
                name,
                context=ModelSecretsErrorContext(
                    operation="get_vault", target_name=name
                ),
            )
        return vault

    def _ensure_active(self, operation: str) -> None:
        if self._saved:
            raise ConfigConsumedError(
                context=ModelSecretsErrorContext(
                    operation=operation, target_name=str(self._descriptor_path)
                )
            )


def _read_descriptor(path: Path) -> ModelConfigDescriptor:
    context = ModelSecretsErrorContext(operation="load", target_name=str(path))
    if not path.exists():
        logger.info(
            "Descriptor not found, starting from an empty config",
            extra={"descriptor_path": str(path)},
        )
        return ModelConfigDescriptor()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigDescriptorError(
            f"Failed to read descriptor: {type(e).__name__}",
            context=context,
        ) from e
    try:
        return ModelConfigDescriptor.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise ConfigDescriptorError(
            "Descriptor is not valid JSON",
            context=context,
            line=e.lineno,
        ) from e
    except ValidationError as e:
        raise ConfigDescriptorError(
            f"Failed to parse descriptor: {e.error_count()} invalid field(s)",
            context=context,
            invalid_fields=[
                ".".join(str(part) for part in err["loc"]) for err in e.errors()
            ],
        ) from e


def init_descriptor(path: Path | str) -> Path:
    """Write an empty default descriptor at ``path`` unless one exists.

    Raises:
        ConfigDescriptorError: If the file cannot be written.
    """
    target = Path(path)
    if target.exists():
        return target
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            ModelConfigDescriptor().model_dump_json(indent=2), encoding="utf-8"
        )
    except OSError as e:
        raise ConfigDescriptorError(
            f"Failed to initialize descriptor: {type(e).__name__}",
            context=ModelSecretsErrorContext(
                operation="init", target_name=str(target)
            ),
        ) from e
    logger.info("Initialized descriptor", extra={"descriptor_path": str(target)})
    return target


__all__ = ["SecretsConfig", "init_descriptor"]
