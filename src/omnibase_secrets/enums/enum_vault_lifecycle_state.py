# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Lifecycle State Enumeration."""

from enum import Enum


class EnumVaultLifecycleState(str, Enum):
    """Lifecycle states of a vault within one invocation.

    Attributes:
        CREATED: A new backing store was allocated for this vault
        LOADED: An existing payload was fetched from the backing store
        DIRTY: Local mutations are pending and not yet persisted
        PERSISTED: Pending mutations were written and the version refreshed
    """

    CREATED = "created"
    LOADED = "loaded"
    DIRTY = "dirty"
    PERSISTED = "persisted"


__all__ = ["EnumVaultLifecycleState"]
