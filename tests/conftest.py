# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for omnibase_secrets tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio

from omnibase_secrets.models import KeyReference
from omnibase_secrets.store import ContextStore
from omnibase_secrets.utils.util_config_paths import ENV_CONFIG_DIR, ENV_CONFIG_FILE
from omnibase_secrets.vaults import LocalFileVault


@pytest.fixture(autouse=True)
def isolated_config_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point every default config location at a per-test directory."""
    config_dir = tmp_path / "config-home"
    monkeypatch.setenv(ENV_CONFIG_DIR, str(config_dir))
    monkeypatch.delenv(ENV_CONFIG_FILE, raising=False)
    for name in (
        "VAULT_ADDR",
        "VAULT_TOKEN",
        "VAULT_NAMESPACE",
        "VAULT_MOUNT_POINT",
        "VAULT_SKIP_VERIFY",
    ):
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture
def layered_store() -> ContextStore[str]:
    """Store with ``foo`` overridden at /, /foo and /foo/bar."""
    store: ContextStore[str] = ContextStore()
    store.set_value("/", "foo", "bar1")
    store.set_value("/", "fem", "great")
    store.set_value("/foo", "foo", "bar2")
    store.set_value("/foo/bar", "foo", "bar3")
    return store


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    return tmp_path / "vaults"


@pytest.fixture
def descriptor_path(tmp_path: Path) -> Path:
    return tmp_path / "descriptor" / "config.json"


@pytest_asyncio.fixture
async def team_vault(vault_dir: Path) -> LocalFileVault:
    """Persisted local vault holding ``db.password`` and ``prod.db.password``."""
    vault = await LocalFileVault.create("team", directory=vault_dir)
    store = vault.mutable_store()
    store.set(KeyReference.parse("db.password"), "dev-secret")
    store.set(KeyReference.parse("prod.db.password"), "prod-secret")
    await vault.persist()
    return vault
