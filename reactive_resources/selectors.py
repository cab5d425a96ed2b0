"""Base selector factory - the named family of read functions for a resource."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .actions import FETCH, REMOVE, UPDATE
from .state import (
    COLLECTION_PENDING,
    ERRORS,
    ERRORS_BY_ID,
    PENDING,
    get_in,
    pending_key,
)
from .types import Selector

logger = logging.getLogger(__name__)


class SelectorConfig(BaseModel):
    """Where a resource's state lives: ``state[resource][entities_path]``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    resource: str = Field(min_length=1)
    entities_path: str = Field(alias="entitiesPath")


# (resource state, config, props) -> value
Read = Callable[[Any, SelectorConfig, Mapping[str, Any]], Any]


def _select_entities(resource_state: Any, config: SelectorConfig, props: Mapping[str, Any]) -> Any:
    return get_in(resource_state, (config.entities_path,))


def _select_by_id(resource_state: Any, config: SelectorConfig, props: Mapping[str, Any]) -> Any:
    return get_in(resource_state, (config.entities_path, props.get("id")))


def _select_current(resource_state: Any, config: SelectorConfig, props: Mapping[str, Any]) -> Any:
    entities = get_in(resource_state, (config.entities_path,))
    if not isinstance(entities, Mapping):
        return None
    # First entity in insertion order
    return next(iter(entities.values()), None)


def _select_errors(resource_state: Any, config: SelectorConfig, props: Mapping[str, Any]) -> Any:
    return get_in(resource_state, (ERRORS,))


def _select_errors_by_id(resource_state: Any, config: SelectorConfig, props: Mapping[str, Any]) -> Any:
    return get_in(resource_state, (ERRORS_BY_ID, props.get("id")))


def _select_are_entities_fetching(
    resource_state: Any, config: SelectorConfig, props: Mapping[str, Any]
) -> bool:
    return bool(get_in(resource_state, (COLLECTION_PENDING, pending_key(FETCH)), False))


def _select_pending_by_id(verb: str) -> Read:
    flag = pending_key(verb)

    def read(resource_state: Any, config: SelectorConfig, props: Mapping[str, Any]) -> Any:
        return get_in(resource_state, (PENDING, flag, props.get("id")))

    return read


# Selector name templates, formatted with the snake-cased resource name
SELECTOR_TEMPLATES: tuple[tuple[str, Read], ...] = (
    ("get_{name}_entities", _select_entities),
    ("get_{name}_by_id", _select_by_id),
    ("get_current_{name}", _select_current),
    ("get_{name}_errors", _select_errors),
    ("get_{name}_errors_by_id", _select_errors_by_id),
    ("get_are_{name}_entities_fetching", _select_are_entities_fetching),
    ("get_is_{name}_fetching", _select_pending_by_id(FETCH)),
    ("get_is_{name}_updating", _select_pending_by_id(UPDATE)),
    ("get_is_{name}_removing", _select_pending_by_id(REMOVE)),
)


def snake_case(resource: str) -> str:
    """Convert a resource name to the form used in selector names (``userProfile`` -> ``user_profile``)."""
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", resource)
    name = re.sub(r"[^0-9a-zA-Z_]+", "_", name)
    return name.strip("_").lower()


def _bind(read: Read, config: SelectorConfig, name: str) -> Selector:
    def selector(state: Any, props: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Any:
        resource_state = get_in(state, (config.resource,))
        return read(resource_state, config, {**(props or {}), **kwargs})

    selector.__name__ = selector.__qualname__ = name
    return selector


class SelectorSet(Mapping[str, Selector]):
    """
    Read-only mapping of selector name to selector, with attribute access.

    Example:
        ```python
        selectors = make_selectors(resource="foo", entities_path="by_id")

        selectors["get_foo_by_id"](state, {"id": "123"})
        selectors.get_foo_by_id(state, id="123")
        ```
    """

    __slots__ = ("_selectors",)

    def __init__(self, selectors: Mapping[str, Selector]) -> None:
        self._selectors = dict(selectors)

    def __getitem__(self, name: str) -> Selector:
        return self._selectors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._selectors)

    def __len__(self) -> int:
        return len(self._selectors)

    def __getattr__(self, name: str) -> Selector:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._selectors[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} has no selector {name!r}"
            ) from None

    def __repr__(self) -> str:
        return f"SelectorSet({list(self._selectors)!r})"


def make_selectors(
    config: SelectorConfig | Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> SelectorSet:
    """
    Create the base selectors of a resource.

    Every selector takes ``(state, props=None, **kwargs)`` where ``state`` holds
    the resource's slice at ``state[resource]`` and ``props``/``kwargs`` may
    carry an ``id``. Selectors never raise on absent data; they return None
    (``get_are_*_entities_fetching`` returns False).

    Args:
        config: A ``SelectorConfig`` or a mapping of its fields.
        **fields: Fields to set or override.

    Returns:
        A SelectorSet with the nine selectors, for resource ``foo``:
        ``get_foo_entities``, ``get_foo_by_id``, ``get_current_foo``,
        ``get_foo_errors``, ``get_foo_errors_by_id``,
        ``get_are_foo_entities_fetching``, ``get_is_foo_fetching``,
        ``get_is_foo_updating`` and ``get_is_foo_removing``.

    Names are the snake_case form of the camelCase wire names used by
    JavaScript selector sets: ``getFooById`` is ``get_foo_by_id``,
    ``getAreFooEntitiesFetching`` is ``get_are_foo_entities_fetching``.
    """
    if not isinstance(config, SelectorConfig):
        config = SelectorConfig.model_validate({**(config or {}), **fields})
    elif fields:
        config = SelectorConfig.model_validate({**config.model_dump(), **fields})

    resource_name = snake_case(config.resource)
    selectors = {}

    for template, read in SELECTOR_TEMPLATES:
        name = template.format(name=resource_name)
        selectors[name] = _bind(read, config, name)

    logger.debug("Created selectors for %r: %s", config.resource, list(selectors))

    return SelectorSet(selectors)
