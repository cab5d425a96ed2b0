"""
Resources Example - Demonstrates make_resource with the built-in lifecycles.

Dispatches a fetch of a todo collection, an update of one todo and a failed
removal, printing what the selectors read after each action.
"""

from reactive_resources import (
    FETCH,
    REMOVE,
    UPDATE,
    Lifecycle,
    combine_reducers,
    make_action_type,
    make_resource,
)


# --- Resource ---


todos = make_resource(
    resource="todos",
    entities_path="by_id",
    initial_state={"by_id": {}},
)

root_reducer = combine_reducers({"todos": todos.reducer})
select = todos.selectors


# --- Actions ---


def todo_action(verb, lifecycle, reference_id=None, **fields):
    """Build an action following the VERB_resource_LIFECYCLE convention."""
    action = {"type": make_action_type(verb, "todos", lifecycle), **fields}
    if reference_id is not None:
        action["meta"] = {"referenceId": reference_id}
    return action


ACTIONS = [
    todo_action(FETCH, Lifecycle.START),
    todo_action(
        FETCH,
        Lifecycle.SUCCESS,
        payload=[
            {"id": "1", "text": "Write reducers", "done": False},
            {"id": "2", "text": "Write selectors", "done": False},
        ],
    ),
    todo_action(UPDATE, Lifecycle.START, "1"),
    todo_action(
        UPDATE,
        Lifecycle.SUCCESS,
        "1",
        payload={"id": "1", "text": "Write reducers", "done": True},
    ),
    todo_action(REMOVE, Lifecycle.START, "2"),
    todo_action(REMOVE, Lifecycle.FAILURE, "2", errors=["Todo is locked"]),
]


# --- Run ---


def main() -> None:
    state = root_reducer(None, {"type": "@@INIT"})

    for action in ACTIONS:
        previous = state
        state = root_reducer(state, action)

        print(f"{action['type']}{' (unchanged)' if state is previous else ''}")
        print(f"  fetching all: {select.get_are_todos_entities_fetching(state)}")
        print(f"  updating 1:   {select.get_is_todos_updating(state, id='1')}")
        print(f"  removing 2:   {select.get_is_todos_removing(state, id='2')}")
        print(f"  errors for 2: {select.get_todos_errors_by_id(state, id='2')}")

    print(f"current todo: {select.get_current_todos(state)}")
    print(f"all todos:    {list(select.get_todos_entities(state).values())}")


if __name__ == "__main__":
    main()
