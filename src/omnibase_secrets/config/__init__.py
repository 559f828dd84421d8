# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""SecretsConfig aggregate and descriptor helpers."""

from omnibase_secrets.config.secrets_config import SecretsConfig, init_descriptor

__all__: list[str] = ["SecretsConfig", "init_descriptor"]
