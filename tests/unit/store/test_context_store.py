# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ContextStore resolution rules."""

from __future__ import annotations

import pytest

from omnibase_secrets.errors import ConfigDescriptorError
from omnibase_secrets.models import ContextPath, KeyReference
from omnibase_secrets.store import ContextStore


class TestContextStoreReadWrite:
    """Exact-context writes and hierarchical reads."""

    def test_write_then_read(self) -> None:
        store: ContextStore[str] = ContextStore()
        store.set_value("/app", "token", "abc")

        assert store.get_value("/app", "token") == "abc"

    def test_set_returns_previous_value(self) -> None:
        store: ContextStore[str] = ContextStore()

        assert store.set_value("/", "k", "v1") is None
        assert store.set_value("/", "k", "v2") == "v1"
        assert store.get_value("/", "k") == "v2"

    def test_missing_key_returns_none(self) -> None:
        store: ContextStore[str] = ContextStore()

        assert store.get_value("/a/b", "missing") is None

    def test_ancestor_fallback(self) -> None:
        store: ContextStore[str] = ContextStore()
        store.set_value("/", "region", "eu")

        assert store.get_value("/deep/nested/context", "region") == "eu"

    def test_descendant_overrides_ancestor(
        self, layered_store: ContextStore[str]
    ) -> None:
        assert layered_store.get_value("/", "foo") == "bar1"
        assert layered_store.get_value("/foo", "foo") == "bar2"
        assert layered_store.get_value("/foo/bar", "foo") == "bar3"
        assert layered_store.get_value("/foo/bar/baz", "foo") == "bar3"
        assert layered_store.get_value("/other", "foo") == "bar1"

    def test_get_exact_ignores_ancestors(
        self, layered_store: ContextStore[str]
    ) -> None:
        assert layered_store.get_exact("/foo", "fem") is None
        assert layered_store.get_exact("/", "fem") == "great"

    def test_key_reference_helpers(self) -> None:
        store: ContextStore[str] = ContextStore()
        ref = KeyReference.parse("db.password")

        store.set(ref, "secret")

        assert store.get(ref) == "secret"
        assert ref in store
        assert store.remove(ref) == "secret"
        assert ref not in store


class TestContextStoreFold:
    """Merged view from the root down to a path."""

    def test_get_all_for_path_folds_overrides(
        self, layered_store: ContextStore[str]
    ) -> None:
        assert layered_store.get_all_for_path("/") == {"foo": "bar1", "fem": "great"}
        assert layered_store.get_all_for_path("/foo") == {
            "foo": "bar2",
            "fem": "great",
        }
        assert layered_store.get_all_for_path("/foo/bar") == {
            "foo": "bar3",
            "fem": "great",
        }

    def test_get_all_on_empty_store(self) -> None:
        store: ContextStore[str] = ContextStore()

        assert store.get_all_for_path("/anything") == {}


class TestContextStoreRemoval:
    """Removal touches only the exact context."""

    def test_remove_does_not_touch_ancestors(
        self, layered_store: ContextStore[str]
    ) -> None:
        removed = layered_store.remove_value("/foo/bar", "foo")

        assert removed == "bar3"
        assert layered_store.get_value("/foo/bar", "foo") == "bar2"
        assert layered_store.get_value("/foo", "foo") == "bar2"
        assert layered_store.get_value("/", "foo") == "bar1"

    def test_remove_missing_returns_none(
        self, layered_store: ContextStore[str]
    ) -> None:
        assert layered_store.remove_value("/nope", "foo") is None
        assert layered_store.remove_value("/foo", "nope") is None
        assert len(layered_store) == 4

    def test_remove_unreferenced_key_at_descendant_leaves_ancestor(
        self, layered_store: ContextStore[str]
    ) -> None:
        assert layered_store.remove_value("/foo", "fem") is None
        assert layered_store.get_value("/foo", "fem") == "great"

    def test_empty_context_is_dropped(self) -> None:
        store: ContextStore[str] = ContextStore()
        store.set_value("/a", "k", "v")

        store.remove_value("/a", "k")

        assert store.contexts() == []
        assert len(store) == 0


class TestContextStoreKeysUnder:
    """Prefix enumeration."""

    def test_keys_under_is_segment_wise(self) -> None:
        store: ContextStore[str] = ContextStore()
        store.set_value("/foo", "a", "1")
        store.set_value("/foo/bar", "b", "2")
        store.set_value("/foobar", "c", "3")

        keys = [str(ref) for ref in store.keys_under("/foo")]

        assert keys == ["foo.a", "foo.bar.b"]

    def test_keys_under_root_lists_everything(
        self, layered_store: ContextStore[str]
    ) -> None:
        keys = [str(ref) for ref in layered_store.keys_under(ContextPath.root())]

        assert keys == ["fem", "foo", "foo.foo", "foo.bar.foo"]

    def test_keys_under_is_lazy(self, layered_store: ContextStore[str]) -> None:
        iterator = layered_store.keys_under("/")

        assert next(iterator) == KeyReference.parse("fem")


class TestContextStoreSerialization:
    """Mapping round-trip used by descriptor persistence."""

    def test_to_mapping(self, layered_store: ContextStore[str]) -> None:
        assert layered_store.to_mapping() == {
            "/": {"foo": "bar1", "fem": "great"},
            "/foo": {"foo": "bar2"},
            "/foo/bar": {"foo": "bar3"},
        }

    def test_from_mapping_restores_equal_store(
        self, layered_store: ContextStore[str]
    ) -> None:
        restored = ContextStore.from_mapping(layered_store.to_mapping(), str)

        assert restored == layered_store

    def test_from_mapping_rejects_non_mapping_entries(self) -> None:
        with pytest.raises(ConfigDescriptorError):
            ContextStore.from_mapping(
                {"/": ["not", "a", "map"]},  # type: ignore[dict-item]
                str,
            )
