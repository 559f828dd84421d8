# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""On-disk descriptor model for a SecretsConfig.

File layout::

    {
      "config": {
        "/": {"region": "eu-west-1"},
        "/my-app": {"db_password": {"team": {"path": "/db", "key": "password"}}}
      },
      "context": "/",
      "default_secret": "team",
      "secrets": {
        "team": {"provider": "local_file", "id": "...", "name": "team"}
      }
    }

Unknown top-level fields are rejected.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from omnibase_secrets.models.model_config_value import EncodedConfigValue
from omnibase_secrets.models.model_vault_descriptor import ModelVaultDescriptor


class ModelConfigDescriptor(BaseModel):
    """Serialized state of a SecretsConfig.

    Attributes:
        config: Context path -> key -> encoded config value
        context: Current working context
        default_secret: Name of the default vault, if any
        secrets: Vault name -> portable vault descriptor
    """

    model_config = ConfigDict(extra="forbid")

    config: dict[str, dict[str, EncodedConfigValue]] = Field(
        default_factory=dict,
        description="Context path -> key -> encoded config value",
    )
    context: str = Field(
        default="/",
        description="Current working context",
    )
    default_secret: Optional[str] = Field(
        default=None,
        description="Name of the default vault",
    )
    secrets: dict[str, ModelVaultDescriptor] = Field(
        default_factory=dict,
        description="Vault name -> portable vault descriptor",
    )


__all__ = ["ModelConfigDescriptor"]
