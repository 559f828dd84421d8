# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for vault construction and descriptor dispatch."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr, TypeAdapter

from omnibase_secrets.enums import EnumVaultProvider
from omnibase_secrets.errors import VaultBackendError
from omnibase_secrets.models import (
    ModelHashiCorpVaultDescriptor,
    ModelLocalFileVaultDescriptor,
    ModelVaultDescriptor,
)
from omnibase_secrets.vaults import (
    HashiCorpVault,
    LocalFileVault,
    ModelHashiCorpVaultSettings,
    construct_vault,
    load_vault_from_descriptor,
)


class TestConstructVault:
    """Provider dispatch for new vaults."""

    @pytest.mark.asyncio
    async def test_local_file(self, vault_dir: Path) -> None:
        vault = await construct_vault(
            "team", EnumVaultProvider.LOCAL_FILE, directory=vault_dir
        )

        assert isinstance(vault, LocalFileVault)

    @pytest.mark.asyncio
    async def test_provider_given_as_string(self, vault_dir: Path) -> None:
        vault = await construct_vault("team", "local_file", directory=vault_dir)

        assert vault.provider is EnumVaultProvider.LOCAL_FILE

    @pytest.mark.asyncio
    async def test_hashicorp(self) -> None:
        client = MagicMock()
        client.secrets.kv.v2.read_secret_version.return_value = {
            "data": {"data": {}, "metadata": {"version": 1}}
        }
        settings = ModelHashiCorpVaultSettings(
            url="https://vault.example.com:8200", token=SecretStr("s.x")
        )

        vault = await construct_vault(
            "team",
            EnumVaultProvider.HASHICORP_VAULT,
            settings=settings,
            client=client,
        )

        assert isinstance(vault, HashiCorpVault)

    @pytest.mark.asyncio
    async def test_unknown_provider(self) -> None:
        with pytest.raises(VaultBackendError) as exc_info:
            await construct_vault("team", "onepassword")

        assert "local_file" in exc_info.value.context["supported"]


class TestLoadVaultFromDescriptor:
    """Tagged-union decoding and dispatch."""

    def test_descriptor_union_is_tagged_by_provider(self) -> None:
        adapter: TypeAdapter[ModelVaultDescriptor] = TypeAdapter(ModelVaultDescriptor)

        local = adapter.validate_python(
            {"provider": "local_file", "id": "/tmp/v.json", "name": "v"}
        )
        remote = adapter.validate_python(
            {
                "provider": "hashicorp_vault",
                "id": "apps/v",
                "name": "v",
                "url": "https://vault:8200",
            }
        )

        assert isinstance(local, ModelLocalFileVaultDescriptor)
        assert isinstance(remote, ModelHashiCorpVaultDescriptor)

    @pytest.mark.asyncio
    async def test_local_descriptor(self, team_vault: LocalFileVault) -> None:
        vault = await load_vault_from_descriptor(team_vault.to_descriptor())

        assert isinstance(vault, LocalFileVault)
        assert vault.store == team_vault.store
