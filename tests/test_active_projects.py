"""Tests for the active-project mapping (core/active_projects.py).

All tests use the in-memory store from ``conftest.py``.

Coverage:
* Setting on an empty store, clearing, idempotence.
* Other directories are preserved across updates.
* Every call round-trips through the store (no caching).
* Store failures propagate unchanged.
* A stored mapping that is not a JSON object is a store error.
"""

from __future__ import annotations

from typing import Any

import pytest

from projctx.core.active_projects import ACTIVE_PROJECTS_KEY, ActiveProjectStore
from projctx.exceptions import ConfigStoreError


class _BrokenStore:
    def get(self, key: str, default: Any = None) -> Any:
        raise ConfigStoreError("disk on fire")

    def set(self, key: str, value: Any) -> None:
        raise ConfigStoreError("disk on fire")


class TestSetActive:
    def test_set_on_empty_store(self, memory_store: Any) -> None:
        ActiveProjectStore(memory_store).set_active("/dir/a", "proj1")
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == {"/dir/a": "proj1"}

    def test_set_twice_is_idempotent(self, memory_store: Any) -> None:
        store = ActiveProjectStore(memory_store)
        store.set_active("/dir/a", "proj1")
        once = dict(memory_store.data[ACTIVE_PROJECTS_KEY])
        store.set_active("/dir/a", "proj1")
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == once == {"/dir/a": "proj1"}

    def test_replaces_existing_alias(self, memory_store: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/a": "old"}
        ActiveProjectStore(memory_store).set_active("/dir/a", "new")
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == {"/dir/a": "new"}

    def test_other_directories_preserved(self, memory_store: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/b": "proj2"}
        ActiveProjectStore(memory_store).set_active("/dir/a", "proj1")
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == {
            "/dir/a": "proj1",
            "/dir/b": "proj2",
        }

    def test_writes_full_map_once(self, memory_store: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/b": "proj2"}
        ActiveProjectStore(memory_store).set_active("/dir/a", "proj1")
        assert memory_store.writes == [
            (ACTIVE_PROJECTS_KEY, {"/dir/a": "proj1", "/dir/b": "proj2"}),
        ]


class TestClear:
    @pytest.mark.parametrize("alias", [None, ""])
    def test_empty_alias_removes_key(self, memory_store: Any, alias: str | None) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/a": "proj1"}
        ActiveProjectStore(memory_store).set_active("/dir/a", alias)
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == {}
        assert "/dir/a" not in memory_store.data[ACTIVE_PROJECTS_KEY]

    def test_clear_active(self, memory_store: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/a": "proj1", "/dir/b": "proj2"}
        ActiveProjectStore(memory_store).clear_active("/dir/a")
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == {"/dir/b": "proj2"}

    def test_clear_unknown_dir_is_noop(self, memory_store: Any) -> None:
        ActiveProjectStore(memory_store).clear_active("/never/set")
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == {}


class TestReads:
    def test_get_active(self, memory_store: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/a": "proj1"}
        store = ActiveProjectStore(memory_store)
        assert store.get_active("/dir/a") == "proj1"
        assert store.get_active("/dir/b") is None

    def test_reads_are_not_cached(self, memory_store: Any) -> None:
        store = ActiveProjectStore(memory_store)
        assert store.get_active("/dir/a") is None
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/a": "external"}
        assert store.get_active("/dir/a") == "external"

    def test_all_active_returns_copy(self, memory_store: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/dir/a": "proj1"}
        snapshot = ActiveProjectStore(memory_store).all_active()
        snapshot["/dir/z"] = "mutated"
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == {"/dir/a": "proj1"}

    def test_known_aliases_distinct_sorted(self, memory_store: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = {"/a": "prod", "/b": "dev", "/c": "prod"}
        assert ActiveProjectStore(memory_store).known_aliases() == ["dev", "prod"]


class TestStoreFailures:
    def test_set_propagates(self) -> None:
        with pytest.raises(ConfigStoreError, match="disk on fire"):
            ActiveProjectStore(_BrokenStore()).set_active("/dir/a", "proj1")

    def test_get_propagates(self) -> None:
        with pytest.raises(ConfigStoreError):
            ActiveProjectStore(_BrokenStore()).get_active("/dir/a")

    @pytest.mark.parametrize("stored", ["oops", ["a"], 3])
    def test_non_mapping_value_is_a_store_error(self, memory_store: Any, stored: Any) -> None:
        memory_store.data[ACTIVE_PROJECTS_KEY] = stored
        store = ActiveProjectStore(memory_store)
        with pytest.raises(ConfigStoreError, match="must be a JSON object") as exc_info:
            store.get_active("/dir/a")
        assert exc_info.value.hint is not None
        with pytest.raises(ConfigStoreError):
            store.set_active("/dir/a", "proj1")
        assert memory_store.data[ACTIVE_PROJECTS_KEY] == stored
