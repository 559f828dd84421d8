# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Local file vault backend.

Keeps the vault payload as pretty-printed JSON in a single file. The file
path is the backing identity and the version token is a digest of the last
written content, so rewriting an identical payload yields the same token.

Intended for local development and for machines without a remote secret
store. The payload is stored unencrypted; protect it with filesystem
permissions (the file is created with mode 0600).
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
from pathlib import Path

from omnibase_secrets.enums import EnumVaultLifecycleState, EnumVaultProvider
from omnibase_secrets.errors import ModelSecretsErrorContext, VaultBackendError
from omnibase_secrets.models.model_vault_descriptor import (
    ModelLocalFileVaultDescriptor,
)
from omnibase_secrets.store.context_store import ContextStore
from omnibase_secrets.utils.util_config_paths import default_vault_dir
from omnibase_secrets.vaults.vault_base import (
    BaseVault,
    VaultPayload,
    store_from_payload,
)

logger = logging.getLogger(__name__)

VERSION_DIGEST_LENGTH: int = 16
EMPTY_PAYLOAD: str = "{}"


def _content_version(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:VERSION_DIGEST_LENGTH]


class LocalFileVault(BaseVault):
    """Vault whose payload lives in a local JSON file."""

    provider = EnumVaultProvider.LOCAL_FILE

    def __init__(
        self,
        file_path: Path,
        name: str,
        version: str = "",
        store: ContextStore[str] | None = None,
        state: EnumVaultLifecycleState = EnumVaultLifecycleState.LOADED,
    ) -> None:
        super().__init__(name=name, version=version, store=store, state=state)
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        return self._file_path

    @classmethod
    async def create(
        cls,
        name: str,
        directory: Path | str | None = None,
    ) -> LocalFileVault:
        """Allocate ``<directory>/<name>.json``, adopting it if it already exists.

        Args:
            name: Backing store name, used as the file stem
            directory: Target directory (defaults to the config dir's ``vaults``)

        Raises:
            VaultBackendError: If the file cannot be read or created.
        """
        base = Path(directory).expanduser() if directory else default_vault_dir()
        file_path = (base / f"{name}.json").resolve()
        if file_path.exists():
            logger.info(
                "Adopting existing local vault file",
                extra={"vault": name, "path": str(file_path)},
            )
            return cls._read(file_path, name)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            _write_private(file_path, EMPTY_PAYLOAD)
        except OSError as e:
            raise VaultBackendError(
                f"Failed to create vault file: {type(e).__name__}",
                context=ModelSecretsErrorContext(
                    operation="create", target_name=name
                ),
                path=str(file_path),
            ) from e

        logger.info(
            "Created local vault file",
            extra={"vault": name, "path": str(file_path)},
        )
        return cls(
            file_path=file_path,
            name=name,
            version=_content_version(EMPTY_PAYLOAD),
            state=EnumVaultLifecycleState.CREATED,
        )

    @classmethod
    async def from_descriptor(
        cls,
        descriptor: ModelLocalFileVaultDescriptor,
    ) -> LocalFileVault:
        """Reload a vault from its descriptor.

        Raises:
            VaultBackendError: If the payload file is missing or malformed.
        """
        return cls._read(Path(descriptor.id), descriptor.name)

    @classmethod
    def _read(cls, file_path: Path, name: str) -> LocalFileVault:
        context = ModelSecretsErrorContext(operation="load", target_name=name)
        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise VaultBackendError(
                f"Failed to read vault file: {type(e).__name__}",
                context=context,
                path=str(file_path),
            ) from e

        try:
            payload = json.loads(content) if content.strip() else None
        except json.JSONDecodeError as e:
            raise VaultBackendError(
                "Vault file is not valid JSON",
                context=context,
                path=str(file_path),
                line=e.lineno,
            ) from e

        return cls(
            file_path=file_path,
            name=name,
            version=_content_version(content),
            store=store_from_payload(payload, name),
            state=EnumVaultLifecycleState.LOADED,
        )

    async def _write_payload(self, payload: VaultPayload) -> str:
        content = json.dumps(payload, indent=2, sort_keys=True)
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            _write_private(self._file_path, content)
        except OSError as e:
            raise VaultBackendError(
                f"Failed to write vault file: {type(e).__name__}",
                context=ModelSecretsErrorContext(
                    operation="persist", target_name=self.name
                ),
                path=str(self._file_path),
            ) from e
        return _content_version(content)

    def to_descriptor(self) -> ModelLocalFileVaultDescriptor:
        return ModelLocalFileVaultDescriptor(
            id=str(self._file_path),
            name=self.name,
            version=self.version,
        )


def _write_private(file_path: Path, content: str) -> None:
    fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(content)


__all__ = ["LocalFileVault"]
