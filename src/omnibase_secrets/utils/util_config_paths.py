# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Filesystem and working-context path helpers.

Descriptor Location (first match wins):
    1. ``OMNIBASE_SECRETS_CONFIG``: explicit descriptor file
    2. ``OMNIBASE_SECRETS_CONFIG_DIR``: directory holding ``config.json``
    3. ``$XDG_CONFIG_HOME/omnibase-secrets/config.json``
    4. ``~/.config/omnibase-secrets/config.json``
"""

from __future__ import annotations

import os
from pathlib import Path

from omnibase_secrets.models.model_context_path import ContextPath
from omnibase_secrets.models.model_key_reference import KEY_SEPARATOR

ENV_CONFIG_FILE: str = "OMNIBASE_SECRETS_CONFIG"
ENV_CONFIG_DIR: str = "OMNIBASE_SECRETS_CONFIG_DIR"
APP_DIR_NAME: str = "omnibase-secrets"
DEFAULT_DESCRIPTOR_NAME: str = "config.json"
VAULTS_DIR_NAME: str = "vaults"


def default_config_dir() -> Path:
    """Directory holding the descriptor and local vault payloads."""
    explicit = os.environ.get(ENV_CONFIG_DIR)
    if explicit:
        return Path(explicit).expanduser()
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home).expanduser() if xdg_home else Path.home() / ".config"
    return base / APP_DIR_NAME


def default_descriptor_path(
    config_dir: Path | str | None = None,
    file_name: str | None = None,
) -> Path:
    """Resolve the descriptor file location.

    Args:
        config_dir: Directory override; environment lookup is skipped when given
        file_name: File name override (default ``config.json``)
    """
    if config_dir is None and file_name is None:
        explicit = os.environ.get(ENV_CONFIG_FILE)
        if explicit:
            return Path(explicit).expanduser()
    directory = Path(config_dir).expanduser() if config_dir else default_config_dir()
    return directory / (file_name or DEFAULT_DESCRIPTOR_NAME)


def default_vault_dir() -> Path:
    return default_config_dir() / VAULTS_DIR_NAME


def working_context(
    context: ContextPath | str,
    cwd: Path | str | None = None,
) -> ContextPath:
    """Scope user-entered keys to ``/<basename of cwd>/<context>``.

    The same descriptor serves many projects; each project directory gets its
    own top-level context named after the directory. A ``.`` in the directory
    name becomes ``_`` so keys under it still render as parseable dotted text.
    """
    directory = Path(cwd) if cwd is not None else Path.cwd()
    project = directory.name.replace(KEY_SEPARATOR, "_")
    base = ContextPath((project,)) if project else ContextPath.root()
    return base.joinpath(*ContextPath.parse(context).segments)


__all__ = [
    "APP_DIR_NAME",
    "DEFAULT_DESCRIPTOR_NAME",
    "ENV_CONFIG_DIR",
    "ENV_CONFIG_FILE",
    "default_config_dir",
    "default_descriptor_path",
    "default_vault_dir",
    "working_context",
]
