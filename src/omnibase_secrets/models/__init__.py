# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Value types and serialization models for omnibase_secrets."""

from omnibase_secrets.models.model_config_descriptor import ModelConfigDescriptor
from omnibase_secrets.models.model_config_value import (
    ConfigValue,
    EncodedConfigValue,
    ModelLiteralValue,
    ModelSecretRef,
    decode_config_value,
    describe_config_value,
    encode_config_value,
    resolve_config_value,
)
from omnibase_secrets.models.model_context_path import ROOT_PATH, ContextPath
from omnibase_secrets.models.model_key_reference import KeyReference
from omnibase_secrets.models.model_vault_descriptor import (
    ModelHashiCorpVaultDescriptor,
    ModelLocalFileVaultDescriptor,
    ModelVaultDescriptor,
)

__all__: list[str] = [
    "ROOT_PATH",
    "ConfigValue",
    "ContextPath",
    "EncodedConfigValue",
    "KeyReference",
    "ModelConfigDescriptor",
    "ModelHashiCorpVaultDescriptor",
    "ModelLiteralValue",
    "ModelLocalFileVaultDescriptor",
    "ModelSecretRef",
    "ModelVaultDescriptor",
    "decode_config_value",
    "describe_config_value",
    "encode_config_value",
    "resolve_config_value",
]
