"""Built-in sub-reducers for the fetch, update and remove lifecycles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable, Mapping

from .actions import (
    FETCH,
    REMOVE,
    UPDATE,
    Action,
    ActionTypeCodec,
    ActionTypeMatch,
    Lifecycle,
    action_type_of,
    to_action,
)
from .errors import ResourceError
from .state import (
    COLLECTION_PENDING,
    ERRORS,
    ERRORS_BY_ID,
    PENDING,
    merge_in,
    pending_key,
    remove_in,
    set_in,
)
from .types import Reducer

if TYPE_CHECKING:
    from .reducers import ResourceConfig


def _set_pending(state: Any, flag: str, reference_id: Hashable | None, value: bool) -> Any:
    if reference_id is None:
        return set_in(state, (COLLECTION_PENDING, flag), value)
    return set_in(state, (PENDING, flag, reference_id), value)


def _clear_errors(state: Any, reference_id: Hashable | None) -> Any:
    if reference_id is None:
        return remove_in(state, (ERRORS,))
    return remove_in(state, (ERRORS_BY_ID, reference_id))


def _store_errors(state: Any, reference_id: Hashable | None, errors: list[Any] | None) -> Any:
    errors = list(errors or [])
    if reference_id is None:
        return set_in(state, (ERRORS,), errors)
    return set_in(state, (ERRORS_BY_ID, reference_id), errors)


def _entity_id(entity: Any, id_key: str) -> Hashable:
    if isinstance(entity, Mapping):
        entity_id = entity.get(id_key)
    else:
        entity_id = getattr(entity, id_key, None)

    if entity_id is None:
        raise ResourceError(f"Entity has no {id_key!r}: {entity!r}")

    return entity_id


def _upsert_entities(state: Any, action: Action, config: ResourceConfig) -> Any:
    payload = action.payload
    entities_path = (config.entities_path,)

    if payload is None:
        return state

    if action.reference_id is not None:
        return set_in(state, (*entities_path, action.reference_id), payload)

    if isinstance(payload, Mapping):
        return merge_in(state, entities_path, payload)

    if isinstance(payload, (list, tuple)):
        entries = {_entity_id(entity, config.id_key): entity for entity in payload}
        return merge_in(state, entities_path, entries)

    return state


def _remove_entities(state: Any, action: Action, config: ResourceConfig) -> Any:
    if action.reference_id is not None:
        return remove_in(state, (config.entities_path, action.reference_id))

    if isinstance(action.payload, (list, tuple)):
        for entity_id in action.payload:
            state = remove_in(state, (config.entities_path, entity_id))

    return state


# Entity-map mutation applied on success, per verb
_SUCCESS_MUTATIONS = {
    FETCH: _upsert_entities,
    UPDATE: _upsert_entities,
    REMOVE: _remove_entities,
}


def make_lifecycle_reducer(verb: str, config: ResourceConfig) -> Reducer[Any, Any]:
    """
    Create the sub-reducer handling ``verb`` for one resource.

    - START sets the pending flag and clears prior errors for the same target.
    - SUCCESS clears the pending flag and applies the verb's entity mutation.
    - FAILURE clears the pending flag and stores ``action.errors``.

    The target is ``meta.referenceId`` when present, otherwise the collection.
    Verbs without a built-in mutation only get pending and error bookkeeping.

    Args:
        verb: Upper-case verb, e.g. ``FETCH``.
        config: The resource configuration.

    Returns:
        Function (state, action) -> new_state.
    """
    codec = ActionTypeCodec(config.resource)
    flag = pending_key(verb)
    mutate = _SUCCESS_MUTATIONS.get(verb)

    def reducer(state: Any, action: Any) -> Any:
        parsed = codec.parse(action_type_of(action))

        if not isinstance(parsed, ActionTypeMatch) or parsed.verb != verb:
            return state

        action = to_action(action)
        reference_id = action.reference_id

        match parsed.lifecycle:
            case Lifecycle.START:
                state = _set_pending(state, flag, reference_id, True)
                return _clear_errors(state, reference_id)
            case Lifecycle.SUCCESS:
                state = _set_pending(state, flag, reference_id, False)
                if mutate is None:
                    return state
                return mutate(state, action, config)
            case Lifecycle.FAILURE:
                state = _set_pending(state, flag, reference_id, False)
                return _store_errors(state, reference_id, action.errors)

        return state

    reducer.__name__ = f"{verb.lower()}_{config.resource}_lifecycle"
    return reducer


def make_fetch_lifecycle(config: ResourceConfig) -> Reducer[Any, Any]:
    """Create the FETCH lifecycle reducer."""
    return make_lifecycle_reducer(FETCH, config)


def make_update_lifecycle(config: ResourceConfig) -> Reducer[Any, Any]:
    """Create the UPDATE lifecycle reducer."""
    return make_lifecycle_reducer(UPDATE, config)


def make_remove_lifecycle(config: ResourceConfig) -> Reducer[Any, Any]:
    """Create the REMOVE lifecycle reducer."""
    return make_lifecycle_reducer(REMOVE, config)


LIFECYCLE_REDUCER_FACTORIES = {
    "make_fetch_lifecycle": make_fetch_lifecycle,
    "make_update_lifecycle": make_update_lifecycle,
    "make_remove_lifecycle": make_remove_lifecycle,
}
