# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Context-scoped storage and tree rendering."""

from omnibase_secrets.store.context_store import ContextStore
from omnibase_secrets.store.util_context_tree import (
    ContextTreeIndex,
    render_context_tree,
)

__all__: list[str] = ["ContextStore", "ContextTreeIndex", "render_context_tree"]
