"""
Custom Reducer Example - Demonstrates custom reducer factories.

Adds a TOGGLE verb handled by a custom reducer, and reacts to an external
CLEAR_COMPLETED action that does not follow the naming convention.
"""

from dataclasses import dataclass

from pydantic import BaseModel

from reactive_resources import (
    ActionTypeCodec,
    ActionTypeMatch,
    ResourceConfig,
    make_resource,
    to_action,
)


# --- State Model ---


class Todo(BaseModel):
    """A todo entity."""

    id: str
    text: str
    done: bool = False


class TodoState(BaseModel):
    """State of the todos resource."""

    by_id: dict[str, Todo] = {}


# --- Actions ---


@dataclass
class ActionMeta:
    reference_id: str


@dataclass
class ToggleTodo:
    """Toggle one todo; follows the convention as TOGGLE_todos."""

    meta: ActionMeta
    type: str = "TOGGLE_todos"


@dataclass
class ClearCompleted:
    """External action, outside the naming convention."""

    type: str = "CLEAR_COMPLETED"


# --- Custom Reducer Factories ---


def make_toggle_reducer(config: ResourceConfig):
    """Flip ``done`` on the referenced todo."""
    codec = ActionTypeCodec(config.resource)

    def reducer(state: TodoState, action) -> TodoState:
        match codec.parse(action.type):
            case ActionTypeMatch(verb="TOGGLE"):
                pass
            case _:
                return state

        todo_id = to_action(action).reference_id
        todo = state.by_id.get(todo_id)
        if todo is None:
            return state

        toggled = todo.model_copy(update={"done": not todo.done})
        return state.model_copy(update={"by_id": {**state.by_id, todo_id: toggled}})

    return reducer


def make_clear_completed_reducer(config: ResourceConfig):
    """Drop every completed todo."""

    def reducer(state: TodoState, action) -> TodoState:
        if action.type != "CLEAR_COMPLETED":
            return state

        remaining = {key: todo for key, todo in state.by_id.items() if not todo.done}
        return state.model_copy(update={"by_id": remaining})

    return reducer


todos = make_resource(
    resource="todos",
    entities_path="by_id",
    initial_state=TodoState(
        by_id={
            "1": Todo(id="1", text="Write reducers"),
            "2": Todo(id="2", text="Write selectors"),
        }
    ),
    custom_reducer_factories=[
        ("make_toggle_reducer", make_toggle_reducer),
        ("make_clear_completed_reducer", make_clear_completed_reducer),
    ],
    external_action_types=["CLEAR_COMPLETED"],
)


# --- Run ---


def main() -> None:
    state = todos.reducer(None, ClearCompleted())
    print(f"nothing completed, same state: {state is todos.config.initial_state}")

    state = todos.reducer(state, ToggleTodo(meta=ActionMeta(reference_id="1")))
    state = todos.reducer(state, ClearCompleted())

    root = {"todos": state}
    print(f"remaining: {list(todos.selectors.get_todos_entities(root))}")
    print(f"current:   {todos.selectors.get_current_todos(root)}")


if __name__ == "__main__":
    main()
