"""
Reactive Resources - reducers and selectors generated for normalized resources.

Given a resource name and the key holding its entities, this package builds
a pure reducer handling the fetch/update/remove lifecycles (each with
START/SUCCESS/FAILURE phases) and a matching family of selectors.

Key Features:
- make_reducer: Lifecycle reducers composed with custom sub-reducers
- make_selectors: Entity, error and pending-flag selectors named after the resource
- make_resource: Both from one configuration
- combine_reducers: Slice a top-level state by resource name

Example:
    ```python
    from reactive_resources import combine_reducers, make_resource

    foo = make_resource(
        resource="foo",
        entities_path="by_id",
        initial_state={"by_id": {}},
    )
    root_reducer = combine_reducers({"foo": foo.reducer})

    state = root_reducer(None, {"type": "@@INIT"})
    state = root_reducer(state, {"type": "FETCH_foo_START", "meta": {"referenceId": "1"}})

    foo.selectors.get_is_foo_fetching(state, id="1")  # True
    ```
"""

import logging

# Action types
from .actions import (
    FETCH,
    UPDATE,
    REMOVE,
    INIT,
    Action,
    ActionMeta,
    ActionTypeCodec,
    ActionTypeMatch,
    Lifecycle,
    NoMatch,
    make_action_type,
    parse_action_type,
    to_action,
)

# Lifecycle reducers
from .lifecycle import (
    LIFECYCLE_REDUCER_FACTORIES,
    make_fetch_lifecycle,
    make_lifecycle_reducer,
    make_remove_lifecycle,
    make_update_lifecycle,
)

# Reducer factory
from .reducers import (
    Resource,
    ResourceConfig,
    combine_reducers,
    make_reducer,
    make_resource,
)

# Selector factory
from .selectors import (
    SelectorConfig,
    SelectorSet,
    make_selectors,
)

# Errors
from .errors import (
    InvalidActionError,
    ResourceError,
)

# Types
from .types import (
    Reducer,
    ReducerFactory,
    Selector,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0a1"

__all__ = [
    # Actions
    "FETCH",
    "UPDATE",
    "REMOVE",
    "INIT",
    "Action",
    "ActionMeta",
    "ActionTypeCodec",
    "ActionTypeMatch",
    "Lifecycle",
    "NoMatch",
    "make_action_type",
    "parse_action_type",
    "to_action",
    # Lifecycle
    "LIFECYCLE_REDUCER_FACTORIES",
    "make_fetch_lifecycle",
    "make_lifecycle_reducer",
    "make_remove_lifecycle",
    "make_update_lifecycle",
    # Reducers
    "Resource",
    "ResourceConfig",
    "combine_reducers",
    "make_reducer",
    "make_resource",
    # Selectors
    "SelectorConfig",
    "SelectorSet",
    "make_selectors",
    # Errors
    "InvalidActionError",
    "ResourceError",
    # Types
    "Reducer",
    "ReducerFactory",
    "Selector",
]
