"""Immutable helpers for reading and writing a resource's state slice.

Writes copy only the containers along the written path; every other branch
keeps its identity. Containers may be plain mappings or Pydantic models. A model
need not declare the bookkeeping keys: undeclared keys are kept on the
instance and read back with getattr, but are left out of ``model_dump()``.
"""

from __future__ import annotations

from typing import Any, Hashable, Mapping, Sequence

from pydantic import BaseModel

from .actions import FETCH, REMOVE, UPDATE

# Keys of the bookkeeping stored next to the entity map
ERRORS = "errors"
ERRORS_BY_ID = "errors_by_id"
PENDING = "pending"
COLLECTION_PENDING = "collection_pending"

_PENDING_KEYS = {
    FETCH: "fetching",
    UPDATE: "updating",
    REMOVE: "removing",
}

_MISSING = object()

Path = Sequence[Hashable]


def pending_key(verb: str) -> str:
    """Get the pending-flag key for a verb (``FETCH`` -> ``fetching``)."""
    if verb in _PENDING_KEYS:
        return _PENDING_KEYS[verb]

    stem = verb.lower()
    if stem.endswith("e") and not stem.endswith("ee"):
        stem = stem[:-1]
    return f"{stem}ing"


def _get(container: Any, key: Hashable, default: Any) -> Any:
    if isinstance(container, Mapping):
        return container.get(key, default)
    if isinstance(container, BaseModel) and isinstance(key, str):
        return getattr(container, key, default)
    return default


def get_in(container: Any, path: Path, default: Any = None) -> Any:
    """
    Read a nested value.

    Returns ``default`` when any step of the path is absent; never raises.
    """
    current = container
    for key in path:
        current = _get(current, key, _MISSING)
        if current is _MISSING:
            return default
    return current


def _assoc(container: Any, key: Hashable, value: Any) -> Any:
    if isinstance(container, BaseModel):
        return container.model_copy(update={key: value})
    if container is None:
        return {key: value}
    return {**container, key: value}


def _dissoc(container: Any, key: Hashable) -> Any:
    if isinstance(container, BaseModel):
        fields = type(container).model_fields
        if key in fields:
            # Declared fields are reset to their default, not dropped
            field = fields[key]
            default = None if field.is_required() else field.get_default(call_default_factory=True)
            if values_equal(getattr(container, key), default):
                return container
            return container.model_copy(update={key: default})

        copied = container.model_copy()
        copied.__dict__.pop(key, None)
        if copied.__pydantic_extra__:
            copied.__pydantic_extra__.pop(key, None)
        copied.__pydantic_fields_set__.discard(key)
        return copied
    return {k: v for k, v in container.items() if k != key}


def set_in(container: Any, path: Path, value: Any) -> Any:
    """
    Return a copy of ``container`` with ``value`` stored at ``path``.

    Missing intermediate containers are created as dicts. If the stored value
    is already ``value`` (by identity) the original container is returned.
    """
    if not path:
        return value

    key, rest = path[0], path[1:]
    child = _get(container, key, None)
    new_child = set_in(child, rest, value)

    if new_child is child and _get(container, key, _MISSING) is not _MISSING:
        return container

    return _assoc(container, key, new_child)


def remove_in(container: Any, path: Path) -> Any:
    """
    Return a copy of ``container`` without the value at ``path``.

    Removing an absent path returns the original container.
    """
    if not path:
        return container

    key, rest = path[0], path[1:]
    child = _get(container, key, _MISSING)

    if child is _MISSING:
        return container

    if not rest:
        return _dissoc(container, key)

    new_child = remove_in(child, rest)

    if new_child is child:
        return container

    return _assoc(container, key, new_child)


def merge_in(container: Any, path: Path, entries: Mapping[Hashable, Any]) -> Any:
    """Return a copy of ``container`` with ``entries`` merged into the mapping at ``path``."""
    if not entries:
        return container

    current = get_in(container, path)

    if current is None:
        merged: Any = dict(entries)
    elif isinstance(current, BaseModel):
        merged = current.model_copy(update=dict(entries))
    else:
        merged = {**current, **entries}

    return set_in(container, path, merged)


def _instance_state(model: BaseModel) -> dict[str, Any]:
    # Keys written with model_copy(update=...) that are not declared fields
    # live in __dict__ or __pydantic_extra__ and are left out of model_dump()
    return {**model.__dict__, **(model.__pydantic_extra__ or {})}


def values_equal(old: Any, new: Any) -> bool:
    """
    Deep value equality used to decide whether a reducer changed anything.

    Pydantic models compare by type and by everything stored on the instance,
    including keys that are not declared fields.
    """
    if old is new:
        return True

    if isinstance(old, BaseModel) or isinstance(new, BaseModel):
        return type(old) is type(new) and values_equal(
            _instance_state(old), _instance_state(new)
        )

    if isinstance(old, Mapping) and isinstance(new, Mapping):
        return old.keys() == new.keys() and all(
            values_equal(old[key], new[key]) for key in old
        )

    if isinstance(old, (list, tuple)) and isinstance(new, (list, tuple)):
        return (
            type(old) is type(new)
            and len(old) == len(new)
            and all(values_equal(a, b) for a, b in zip(old, new))
        )

    return old == new
