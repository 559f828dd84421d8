# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ONEX Secrets - context-scoped configuration with vault-backed secrets.

This package provides a hierarchical key/value store whose entries are either
literal strings or references into named vaults:

- ContextStore: path-scoped store with ancestor-override resolution
- KeyReference: dotted key grammar (``prod.db.password``)
- ModelLiteralValue / ModelSecretRef: config value indirection
- ProtocolVault: pluggable secret store (local file, HashiCorp Vault)
- SecretsConfig: aggregate root that loads and saves the descriptor file

Key Components:
    - SecretsConfig: load -> mutate -> save once per invocation
    - Vault backends behind a closed, provider-tagged descriptor union
    - Structured errors with EnumSecretsErrorCode classification
"""

from omnibase_secrets.config import SecretsConfig, init_descriptor
from omnibase_secrets.models import (
    ConfigValue,
    ContextPath,
    KeyReference,
    ModelLiteralValue,
    ModelSecretRef,
)
from omnibase_secrets.store import ContextStore

__all__: list[str] = [
    "ConfigValue",
    "ContextPath",
    "ContextStore",
    "KeyReference",
    "ModelLiteralValue",
    "ModelSecretRef",
    "SecretsConfig",
    "init_descriptor",
]
