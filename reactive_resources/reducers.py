"""Resource reducer factory - composes lifecycle and custom sub-reducers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .actions import ActionTypeCodec, ActionTypeMatch, action_type_of
from .lifecycle import LIFECYCLE_REDUCER_FACTORIES
from .selectors import SelectorConfig, SelectorSet, make_selectors
from .state import get_in, values_equal
from .types import Reducer

logger = logging.getLogger(__name__)


class ResourceConfig(BaseModel):
    """
    Configuration of one resource.

    Both snake_case names and the camelCase wire names are accepted:

        ```python
        ResourceConfig(resource="foo", entities_path="byId")
        ResourceConfig.model_validate({"resource": "foo", "entitiesPath": "byId"})
        ```

    Attributes:
        resource: Name used in action types and selector names.
        entities_path: Key of the entity map inside the resource's state.
        initial_state: State returned before the first handled action.
        custom_reducer_factories: Ordered (name, factory) pairs; a mapping is
            accepted and read in insertion order.
        external_action_types: Action types outside the naming convention
            that still reach the custom reducers.
        id_key: Entity field used to key entities from sequence payloads.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    resource: str = Field(min_length=1)
    entities_path: str = Field(alias="entitiesPath")
    initial_state: Any = Field(default_factory=dict, alias="initialState")
    custom_reducer_factories: tuple[tuple[str, Callable[..., Any]], ...] = Field(
        default=(), alias="customReducerFactories"
    )
    external_action_types: tuple[str, ...] = Field(
        default=(), alias="externalActionTypes"
    )
    id_key: str = Field(default="id", alias="idKey")

    @field_validator("custom_reducer_factories", mode="before")
    @classmethod
    def validate_custom_reducer_factories(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    def selector_config(self) -> SelectorConfig:
        """Get the selector configuration for the same resource."""
        return SelectorConfig(resource=self.resource, entities_path=self.entities_path)


def _resolve_config(
    config: ResourceConfig | Mapping[str, Any] | None, fields: dict[str, Any]
) -> ResourceConfig:
    if isinstance(config, ResourceConfig):
        if not fields:
            return config
        config = {name: getattr(config, name) for name in ResourceConfig.model_fields}

    return ResourceConfig.model_validate({**(config or {}), **fields})


def make_reducer(
    config: ResourceConfig | Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> Reducer[Any, Any]:
    """
    Create the reducer for one resource.

    On every call the reducer:

    1. Returns ``state`` untouched if the action type neither follows
       ``VERB_resource[_LIFECYCLE]`` nor is an external action type.
    2. Runs the built-in lifecycle reducers if the type follows the convention.
    3. Chains the custom reducers in declared order; each one receives the
       previous one's output.
    4. Returns the original ``state`` if the result is equal to it by value.

    Custom factories are called once, here, with the ``ResourceConfig``. A
    custom factory named like a built-in one (``make_fetch_lifecycle``)
    replaces it. Exceptions raised by sub-reducers propagate to the caller.

    Args:
        config: A ``ResourceConfig`` or a mapping of its fields.
        **fields: Fields to set or override.

    Returns:
        Function (state, action) -> new_state. ``state=None`` stands for the
        configured initial state.

    Example:
        ```python
        foo_reducer = make_reducer(
            resource="foo",
            entities_path="by_id",
            initial_state={"by_id": {}},
        )

        state = foo_reducer(None, {"type": "@@INIT"})
        state = foo_reducer(state, {"type": "FETCH_foo_START"})
        ```
    """
    config = _resolve_config(config, fields)
    codec = ActionTypeCodec(config.resource, config.external_action_types)

    overridden = {name for name, _ in config.custom_reducer_factories}
    lifecycle_reducers = [
        factory(config)
        for name, factory in LIFECYCLE_REDUCER_FACTORIES.items()
        if name not in overridden
    ]
    custom_reducers = [factory(config) for _, factory in config.custom_reducer_factories]
    initial_state = config.initial_state

    logger.debug(
        "Created reducer for %r (lifecycle=%d, custom=%s, external=%s)",
        config.resource,
        len(lifecycle_reducers),
        [name for name, _ in config.custom_reducer_factories],
        sorted(codec.external_action_types),
    )

    def reducer(state: Any, action: Any) -> Any:
        if state is None:
            state = initial_state

        action_type = action_type_of(action)
        follows_convention = isinstance(codec.parse(action_type), ActionTypeMatch)

        if not follows_convention and not codec.is_external(action_type):
            return state

        next_state = state

        if follows_convention:
            for sub_reducer in lifecycle_reducers:
                next_state = sub_reducer(next_state, action)

        for sub_reducer in custom_reducers:
            next_state = sub_reducer(next_state, action)

        if values_equal(state, next_state):
            return state

        return next_state

    reducer.__name__ = f"{config.resource}_reducer"
    return reducer


def combine_reducers(reducers: Mapping[str, Reducer[Any, Any]]) -> Reducer[Any, Any]:
    """
    Combine reducers into one reducer over a mapping keyed like ``reducers``.

    Each reducer receives ``state[key]`` (None when absent). The original
    state is returned when every slice came back as the same object.
    """
    reducers = dict(reducers)

    def combination(state: Any, action: Any) -> Any:
        if state is None:
            state = {}

        next_slices = {}
        changed = False

        for key, reducer in reducers.items():
            previous = get_in(state, (key,))
            next_slices[key] = reducer(previous, action)
            changed = changed or next_slices[key] is not previous

        if not changed:
            return state

        return {**state, **next_slices}

    return combination


@dataclass(frozen=True, slots=True)
class Resource:
    """A resource's reducer and selectors, built from one configuration."""

    config: ResourceConfig
    reducer: Reducer[Any, Any]
    selectors: SelectorSet


def make_resource(
    config: ResourceConfig | Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> Resource:
    """Create the reducer and selectors of a resource from one configuration."""
    config = _resolve_config(config, fields)
    return Resource(
        config=config,
        reducer=make_reducer(config),
        selectors=make_selectors(config.selector_config()),
    )
