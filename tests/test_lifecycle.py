"""Tests for the built-in lifecycle reducers."""

import pytest

from reactive_resources import (
    ResourceConfig,
    ResourceError,
    make_fetch_lifecycle,
    make_lifecycle_reducer,
    make_remove_lifecycle,
    make_update_lifecycle,
)

config = ResourceConfig(resource="foo", entities_path="by_id")


def action(type, reference_id=None, **fields):
    if reference_id is not None:
        fields["meta"] = {"referenceId": reference_id}
    return {"type": type, **fields}


class TestStart:
    """Tests for the START phase."""

    def test_collection_start_sets_collection_flag(self):
        reducer = make_fetch_lifecycle(config)

        state = reducer({}, action("FETCH_foo_START"))

        assert state == {"collection_pending": {"fetching": True}}

    def test_entity_start_sets_flag_for_id(self):
        reducer = make_update_lifecycle(config)

        state = reducer({}, action("UPDATE_foo_START", "1"))

        assert state == {"pending": {"updating": {"1": True}}}

    def test_start_clears_errors_for_id(self):
        reducer = make_remove_lifecycle(config)
        state = {"errors_by_id": {"1": ["e"], "2": ["x"]}}

        state = reducer(state, action("REMOVE_foo_START", "1"))

        assert state["errors_by_id"] == {"2": ["x"]}
        assert state["pending"] == {"removing": {"1": True}}

    def test_collection_start_clears_root_errors(self):
        reducer = make_fetch_lifecycle(config)
        state = {"errors": ["e"], "errors_by_id": {"1": ["x"]}}

        state = reducer(state, action("FETCH_foo_START"))

        assert "errors" not in state
        assert state["errors_by_id"] == {"1": ["x"]}

    def test_ignores_other_verbs_and_resources(self):
        reducer = make_fetch_lifecycle(config)
        state = {"by_id": {}}

        assert reducer(state, action("UPDATE_foo_START")) is state
        assert reducer(state, action("FETCH_bar_START")) is state
        assert reducer(state, action("FETCH_foo")) is state


class TestSuccess:
    """Tests for the SUCCESS phase."""

    def test_clears_pending_flag(self):
        reducer = make_fetch_lifecycle(config)
        state = reducer({}, action("FETCH_foo_START", "1"))

        state = reducer(state, action("FETCH_foo_SUCCESS", "1", payload={"id": "1"}))

        assert state["pending"] == {"fetching": {"1": False}}
        assert state["by_id"] == {"1": {"id": "1"}}

    def test_fetch_merges_sequence_payload_by_id(self):
        reducer = make_fetch_lifecycle(config)
        state = {"by_id": {"1": {"id": "1", "name": "old"}}}

        state = reducer(
            state,
            action("FETCH_foo_SUCCESS", payload=[{"id": "2"}, {"id": "1", "name": "new"}]),
        )

        assert state["by_id"] == {"1": {"id": "1", "name": "new"}, "2": {"id": "2"}}
        assert state["collection_pending"] == {"fetching": False}

    def test_fetch_merges_mapping_payload(self):
        reducer = make_fetch_lifecycle(config)

        state = reducer({"by_id": {}}, action("FETCH_foo_SUCCESS", payload={"3": {"id": "3"}}))

        assert state["by_id"] == {"3": {"id": "3"}}

    def test_custom_id_key(self):
        reducer = make_fetch_lifecycle(config.model_copy(update={"id_key": "pk"}))

        state = reducer({}, action("FETCH_foo_SUCCESS", payload=[{"pk": 7}]))

        assert state["by_id"] == {7: {"pk": 7}}

    def test_entity_without_id_raises(self):
        reducer = make_fetch_lifecycle(config)

        with pytest.raises(ResourceError):
            reducer({}, action("FETCH_foo_SUCCESS", payload=[{"name": "nameless"}]))

    def test_update_replaces_entity(self):
        reducer = make_update_lifecycle(config)
        state = {"by_id": {"1": {"id": "1", "name": "old"}, "2": {"id": "2"}}}

        new_state = reducer(
            state, action("UPDATE_foo_SUCCESS", "1", payload={"id": "1", "name": "new"})
        )

        assert new_state["by_id"]["1"] == {"id": "1", "name": "new"}
        assert new_state["by_id"]["2"] is state["by_id"]["2"]

    def test_success_without_payload_keeps_entities(self):
        reducer = make_update_lifecycle(config)
        state = {"by_id": {"1": {"id": "1"}}}

        new_state = reducer(state, action("UPDATE_foo_SUCCESS", "1"))

        assert new_state["by_id"] is state["by_id"]

    def test_remove_deletes_entity(self):
        reducer = make_remove_lifecycle(config)
        state = {"by_id": {"1": {"id": "1"}, "2": {"id": "2"}}}

        state = reducer(state, action("REMOVE_foo_SUCCESS", "1"))

        assert state["by_id"] == {"2": {"id": "2"}}
        assert state["pending"] == {"removing": {"1": False}}

    def test_remove_collection_deletes_listed_ids(self):
        reducer = make_remove_lifecycle(config)
        state = {"by_id": {"1": {}, "2": {}, "3": {}}}

        state = reducer(state, action("REMOVE_foo_SUCCESS", payload=["1", "3", "9"]))

        assert state["by_id"] == {"2": {}}


class TestFailure:
    """Tests for the FAILURE phase."""

    def test_stores_errors_by_id(self):
        reducer = make_fetch_lifecycle(config)
        state = reducer({}, action("FETCH_foo_START", "789"))

        state = reducer(state, action("FETCH_foo_FAILURE", "789", errors=["e"]))

        assert state["errors_by_id"] == {"789": ["e"]}
        assert state["pending"] == {"fetching": {"789": False}}
        assert "errors" not in state

    def test_stores_root_errors(self):
        reducer = make_update_lifecycle(config)

        state = reducer({}, action("UPDATE_foo_FAILURE", errors=["root"]))

        assert state["errors"] == ["root"]
        assert state["collection_pending"] == {"updating": False}

    def test_failure_without_start(self):
        reducer = make_remove_lifecycle(config)

        state = reducer({}, action("REMOVE_foo_FAILURE", "1"))

        assert state == {"pending": {"removing": {"1": False}}, "errors_by_id": {"1": []}}


class TestCustomVerb:
    """Tests for lifecycle reducers of verbs without a built-in mutation."""

    def test_tracks_pending_and_errors(self):
        reducer = make_lifecycle_reducer("ARCHIVE", config)

        state = reducer({}, action("ARCHIVE_foo_START", "1"))
        assert state == {"pending": {"archiving": {"1": True}}}

        state = reducer(state, action("ARCHIVE_foo_SUCCESS", "1", payload={"id": "1"}))
        assert state == {"pending": {"archiving": {"1": False}}}

    def test_reducer_name(self):
        reducer = make_lifecycle_reducer("ARCHIVE", config)

        assert reducer.__name__ == "archive_foo_lifecycle"
