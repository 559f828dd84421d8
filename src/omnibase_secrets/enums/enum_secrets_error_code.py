# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error codes for secrets configuration errors.

Each error class in ``omnibase_secrets.errors`` carries exactly one of these
codes so callers can map failures to exit codes without isinstance chains.
"""

from enum import Enum


class EnumSecretsErrorCode(str, Enum):
    """Classification codes for SecretsConfigError subclasses."""

    OPERATION_FAILED = "operation_failed"
    INVALID_KEY = "invalid_key"
    VAULT_NOT_FOUND = "vault_not_found"
    SECRET_NOT_FOUND = "secret_not_found"
    VAULT_NOT_SPECIFIED = "vault_not_specified"
    VAULT_ALREADY_EXISTS = "vault_already_exists"
    DESCRIPTOR_ERROR = "descriptor_error"
    CONFIG_CONSUMED = "config_consumed"
    BACKEND_ERROR = "backend_error"


__all__ = ["EnumSecretsErrorCode"]
