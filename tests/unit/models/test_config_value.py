# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for config value encoding and resolution."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from omnibase_secrets.errors import ConfigDescriptorError
from omnibase_secrets.models import (
    KeyReference,
    ModelLiteralValue,
    ModelSecretRef,
    decode_config_value,
    describe_config_value,
    encode_config_value,
    resolve_config_value,
)
from omnibase_secrets.store import ContextStore


@pytest.fixture
def vaults() -> dict[str, MagicMock]:
    store: ContextStore[str] = ContextStore()
    store.set(KeyReference.parse("db.password"), "s3cret")
    vault = MagicMock()
    vault.store = store
    return {"team": vault}


class TestDescriptorCodec:
    """Untagged string / single-key object encoding."""

    def test_literal_encodes_as_string(self) -> None:
        assert encode_config_value(ModelLiteralValue(value="plain")) == "plain"

    def test_secret_encodes_as_single_key_object(self) -> None:
        ref = ModelSecretRef.from_dotted("team", "db.password")

        assert encode_config_value(ref) == {
            "team": {"path": "/db", "key": "password"}
        }

    def test_decode_string_is_literal(self) -> None:
        assert decode_config_value("plain") == ModelLiteralValue(value="plain")

    def test_decode_object_is_secret_ref(self) -> None:
        decoded = decode_config_value({"team": {"path": "/db", "key": "password"}})

        assert decoded == ModelSecretRef.from_dotted("team", "db.password")

    @pytest.mark.parametrize(
        "raw",
        [
            42,
            None,
            ["a"],
            {},
            {"a": {"path": "/", "key": "k"}, "b": {"path": "/", "key": "k"}},
        ],
    )
    def test_decode_rejects_other_shapes(self, raw: object) -> None:
        with pytest.raises(ConfigDescriptorError):
            decode_config_value(raw)

    def test_decode_rejects_malformed_key(self) -> None:
        with pytest.raises(ConfigDescriptorError) as exc_info:
            decode_config_value({"team": {"path": "/db"}})

        assert exc_info.value.context["vault_name"] == "team"


class TestResolution:
    """Resolving values against registered vaults."""

    def test_literal_resolves_to_itself(self, vaults: dict[str, MagicMock]) -> None:
        assert resolve_config_value(ModelLiteralValue(value="x"), vaults) == "x"

    def test_secret_resolves_through_vault_store(
        self, vaults: dict[str, MagicMock]
    ) -> None:
        ref = ModelSecretRef.from_dotted("team", "db.password")

        assert resolve_config_value(ref, vaults) == "s3cret"

    def test_secret_resolution_uses_ancestor_fallback(
        self, vaults: dict[str, MagicMock]
    ) -> None:
        ref = ModelSecretRef.from_dotted("team", "db.replica.password")

        assert resolve_config_value(ref, vaults) == "s3cret"

    def test_unknown_vault_resolves_to_none(
        self, vaults: dict[str, MagicMock]
    ) -> None:
        ref = ModelSecretRef.from_dotted("other", "db.password")

        assert resolve_config_value(ref, vaults) is None

    def test_describe(self) -> None:
        ref = ModelSecretRef.from_dotted("team", "db.password")

        assert describe_config_value(ref) == "secret [team::db.password]"
        assert describe_config_value(ModelLiteralValue(value="v")) == "v"
