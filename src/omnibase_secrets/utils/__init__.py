# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Utility helpers for omnibase_secrets."""

from omnibase_secrets.utils.util_config_paths import (
    default_config_dir,
    default_descriptor_path,
    default_vault_dir,
    working_context,
)

__all__: list[str] = [
    "default_config_dir",
    "default_descriptor_path",
    "default_vault_dir",
    "working_context",
]
