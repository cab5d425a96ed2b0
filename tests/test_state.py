"""Tests for state path helpers."""

from typing import Any

from pydantic import BaseModel

from reactive_resources.state import (
    get_in,
    merge_in,
    pending_key,
    remove_in,
    set_in,
    values_equal,
)


class FooState(BaseModel):
    """Test model."""
    by_id: dict[str, Any] = {}
    errors: list[str] | None = None


class TodoState(BaseModel):
    """Test model declaring only the entity map."""
    by_id: dict[str, Any] = {}


class ListErrorsState(BaseModel):
    """Test model with a non-optional error list."""
    errors: list[str] = []


class TestGetIn:
    """Tests for get_in."""

    def test_reads_nested_value(self):
        assert get_in({"a": {"b": 1}}, ("a", "b")) == 1

    def test_absent_path_returns_default(self):
        assert get_in({"a": {}}, ("a", "b")) is None
        assert get_in(None, ("a",), "x") == "x"
        assert get_in({"a": 1}, ("a", "b")) is None

    def test_reads_model_fields(self):
        state = FooState(by_id={"1": {"id": "1"}})

        assert get_in(state, ("by_id", "1")) == {"id": "1"}
        assert get_in(state, ("missing",)) is None


class TestSetIn:
    """Tests for set_in."""

    def test_does_not_mutate(self):
        state = {"a": {"b": 1}}
        new_state = set_in(state, ("a", "b"), 2)

        assert new_state == {"a": {"b": 2}}
        assert state == {"a": {"b": 1}}

    def test_keeps_untouched_branches(self):
        state = {"a": {"b": 1}, "c": {"d": 2}}
        new_state = set_in(state, ("a", "b"), 2)

        assert new_state["c"] is state["c"]

    def test_creates_missing_containers(self):
        assert set_in({}, ("a", "b"), True) == {"a": {"b": True}}
        assert set_in(None, ("a",), 1) == {"a": 1}

    def test_same_value_returns_original(self):
        state = {"a": {"b": True}}

        assert set_in(state, ("a", "b"), True) is state

    def test_updates_model_by_copy(self):
        state = FooState()
        new_state = set_in(state, ("by_id", "1"), {"id": "1"})

        assert isinstance(new_state, FooState)
        assert new_state.by_id == {"1": {"id": "1"}}
        assert state.by_id == {}


class TestRemoveIn:
    """Tests for remove_in."""

    def test_removes_nested_key(self):
        state = {"a": {"b": 1, "c": 2}}

        assert remove_in(state, ("a", "b")) == {"a": {"c": 2}}
        assert state == {"a": {"b": 1, "c": 2}}

    def test_absent_path_returns_original(self):
        state = {"a": {"b": 1}}

        assert remove_in(state, ("a", "x")) is state
        assert remove_in(state, ("x", "y")) is state

    def test_resets_declared_model_field_to_default(self):
        state = ListErrorsState(errors=["e"])
        new_state = remove_in(state, ("errors",))

        assert new_state.errors == []
        assert state.errors == ["e"]

    def test_declared_field_at_default_returns_original(self):
        state = ListErrorsState()

        assert remove_in(state, ("errors",)) is state

    def test_removes_undeclared_model_key(self):
        state = set_in(TodoState(), ("errors",), ["e"])
        new_state = remove_in(state, ("errors",))

        assert get_in(new_state, ("errors",)) is None
        assert get_in(state, ("errors",)) == ["e"]


class TestMergeIn:
    """Tests for merge_in."""

    def test_merges_entries(self):
        state = {"by_id": {"1": "a"}}

        assert merge_in(state, ("by_id",), {"2": "b"}) == {"by_id": {"1": "a", "2": "b"}}

    def test_empty_entries_return_original(self):
        state = {"by_id": {}}

        assert merge_in(state, ("by_id",), {}) is state


class TestValuesEqual:
    """Tests for values_equal."""

    def test_deep_equality(self):
        assert values_equal({"a": {"b": [1, 2]}}, {"a": {"b": [1, 2]}})
        assert not values_equal({"a": {"b": [1, 2]}}, {"a": {"b": [1]}})

    def test_models_compare_by_dump(self):
        assert values_equal(FooState(errors=["e"]), FooState(errors=["e"]))
        assert not values_equal(FooState(), FooState(errors=["e"]))

    def test_models_compare_undeclared_keys(self):
        state = TodoState()
        pending = set_in(state, ("pending", "fetching", "1"), True)

        assert get_in(pending, ("pending", "fetching", "1")) is True
        assert not values_equal(state, pending)
        assert values_equal(pending, pending.model_copy(deep=True))

    def test_sequence_types_must_match(self):
        assert not values_equal([1, 2], (1, 2))
        assert not values_equal(FooState(), {"by_id": {}, "errors": None})


class TestPendingKey:
    """Tests for pending_key."""

    def test_builtin_verbs(self):
        assert pending_key("FETCH") == "fetching"
        assert pending_key("UPDATE") == "updating"
        assert pending_key("REMOVE") == "removing"

    def test_custom_verb(self):
        assert pending_key("SYNC") == "syncing"
        assert pending_key("ARCHIVE") == "archiving"
