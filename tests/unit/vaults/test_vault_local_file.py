# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for LocalFileVault lifecycle and persistence."""

from __future__ import annotations

import json
import stat
from pathlib import Path

import pytest

from omnibase_secrets.enums import EnumVaultLifecycleState, EnumVaultProvider
from omnibase_secrets.errors import VaultBackendError
from omnibase_secrets.models import KeyReference, ModelLocalFileVaultDescriptor
from omnibase_secrets.vaults import LocalFileVault, ProtocolVault


class TestLocalFileVaultCreate:
    """Allocation of the backing file."""

    @pytest.mark.asyncio
    async def test_create_writes_empty_payload(self, vault_dir: Path) -> None:
        """A new vault starts CREATED with an empty JSON object on disk."""
        vault = await LocalFileVault.create("team", directory=vault_dir)

        assert vault.state is EnumVaultLifecycleState.CREATED
        assert vault.file_path == (vault_dir / "team.json").resolve()
        assert json.loads(vault.file_path.read_text()) == {}
        assert len(vault.store) == 0
        assert vault.version

    @pytest.mark.asyncio
    async def test_create_uses_private_permissions(self, vault_dir: Path) -> None:
        vault = await LocalFileVault.create("team", directory=vault_dir)

        mode = stat.S_IMODE(vault.file_path.stat().st_mode)
        assert mode & 0o077 == 0

    @pytest.mark.asyncio
    async def test_create_defaults_to_config_dir(
        self, isolated_config_env: Path
    ) -> None:
        vault = await LocalFileVault.create("team")

        expected = isolated_config_env / "vaults" / "team.json"
        assert vault.file_path == expected.resolve()

    @pytest.mark.asyncio
    async def test_create_adopts_existing_file(self, vault_dir: Path) -> None:
        """An existing payload file is loaded rather than overwritten."""
        vault_dir.mkdir(parents=True)
        (vault_dir / "team.json").write_text(
            json.dumps({"/db": {"password": "kept"}})
        )

        vault = await LocalFileVault.create("team", directory=vault_dir)

        assert vault.state is EnumVaultLifecycleState.LOADED
        assert vault.store.get(KeyReference.parse("db.password")) == "kept"

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        vault = LocalFileVault(file_path=tmp_path / "v.json", name="v")

        assert isinstance(vault, ProtocolVault)
        assert vault.provider is EnumVaultProvider.LOCAL_FILE


class TestLocalFileVaultLifecycle:
    """CREATED/LOADED -> DIRTY -> PERSISTED transitions."""

    @pytest.mark.asyncio
    async def test_mutable_store_marks_dirty(self, vault_dir: Path) -> None:
        vault = await LocalFileVault.create("team", directory=vault_dir)

        vault.mutable_store().set(KeyReference.parse("token"), "abc")

        assert vault.is_dirty
        assert vault.state is EnumVaultLifecycleState.DIRTY

    @pytest.mark.asyncio
    async def test_persist_writes_and_refreshes_version(
        self, vault_dir: Path
    ) -> None:
        vault = await LocalFileVault.create("team", directory=vault_dir)
        created_version = vault.version
        vault.mutable_store().set(KeyReference.parse("db.password"), "pw")

        version = await vault.persist()

        assert vault.state is EnumVaultLifecycleState.PERSISTED
        assert version == vault.version
        assert version != created_version
        assert json.loads(vault.file_path.read_text()) == {
            "/db": {"password": "pw"}
        }

    @pytest.mark.asyncio
    async def test_persist_without_changes_is_noop(self, vault_dir: Path) -> None:
        """persist() on a clean vault leaves the file and version untouched."""
        vault = await LocalFileVault.create("team", directory=vault_dir)
        before = vault.file_path.stat().st_mtime_ns

        version = await vault.persist()

        assert version == vault.version
        assert vault.state is EnumVaultLifecycleState.CREATED
        assert vault.file_path.stat().st_mtime_ns == before

    @pytest.mark.asyncio
    async def test_persist_twice_is_idempotent(
        self, team_vault: LocalFileVault
    ) -> None:
        first = team_vault.version

        second = await team_vault.persist()

        assert second == first
        assert team_vault.state is EnumVaultLifecycleState.PERSISTED

    @pytest.mark.asyncio
    async def test_identical_payload_yields_same_version(
        self, team_vault: LocalFileVault
    ) -> None:
        first = team_vault.version
        team_vault.mutable_store()

        assert await team_vault.persist() == first

    @pytest.mark.asyncio
    async def test_write_failure_keeps_vault_dirty(
        self, team_vault: LocalFileVault, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail_write(*args: object, **kwargs: object) -> None:
            raise PermissionError("read-only")

        monkeypatch.setattr(
            "omnibase_secrets.vaults.vault_local_file._write_private", fail_write
        )
        team_vault.mutable_store().set(KeyReference.parse("x"), "y")

        with pytest.raises(VaultBackendError) as exc_info:
            await team_vault.persist()

        assert team_vault.is_dirty
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestLocalFileVaultDescriptor:
    """Descriptor round-trip and load failures."""

    @pytest.mark.asyncio
    async def test_descriptor_round_trip(self, team_vault: LocalFileVault) -> None:
        descriptor = team_vault.to_descriptor()

        reloaded = await LocalFileVault.from_descriptor(descriptor)

        assert descriptor.provider == "local_file"
        assert descriptor.id == str(team_vault.file_path)
        assert reloaded.version == team_vault.version
        assert reloaded.store == team_vault.store
        assert reloaded.state is EnumVaultLifecycleState.LOADED

    @pytest.mark.asyncio
    async def test_missing_file_fails(self, tmp_path: Path) -> None:
        descriptor = ModelLocalFileVaultDescriptor(
            id=str(tmp_path / "gone.json"), name="gone"
        )

        with pytest.raises(VaultBackendError) as exc_info:
            await LocalFileVault.from_descriptor(descriptor)

        assert exc_info.value.context["target_name"] == "gone"

    @pytest.mark.asyncio
    async def test_invalid_json_fails(self, tmp_path: Path) -> None:
        payload = tmp_path / "broken.json"
        payload.write_text("{not json")
        descriptor = ModelLocalFileVaultDescriptor(id=str(payload), name="broken")

        with pytest.raises(VaultBackendError, match="not valid JSON"):
            await LocalFileVault.from_descriptor(descriptor)

    @pytest.mark.asyncio
    async def test_non_string_secret_fails(self, tmp_path: Path) -> None:
        payload = tmp_path / "typed.json"
        payload.write_text(json.dumps({"/": {"port": 5432}}))
        descriptor = ModelLocalFileVaultDescriptor(id=str(payload), name="typed")

        with pytest.raises(VaultBackendError, match="Malformed vault payload"):
            await LocalFileVault.from_descriptor(descriptor)

    @pytest.mark.asyncio
    async def test_empty_file_loads_empty_store(self, tmp_path: Path) -> None:
        payload = tmp_path / "empty.json"
        payload.write_text("")
        descriptor = ModelLocalFileVaultDescriptor(id=str(payload), name="empty")

        vault = await LocalFileVault.from_descriptor(descriptor)

        assert len(vault.store) == 0
