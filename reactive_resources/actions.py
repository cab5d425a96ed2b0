"""Action types: the ``VERB_resource_LIFECYCLE`` convention and the action model.

Every action driving the built-in lifecycle behavior carries a type built as
``f"{VERB}_{resource}_{LIFECYCLE}"``, for example ``FETCH_foo_START``.
Custom reducers may use their own verbs (``CUSTOM_foo``) and may omit the
lifecycle suffix.

Example:
    ```python
    from reactive_resources.actions import FETCH, Lifecycle, make_action_type

    make_action_type(FETCH, "foo", Lifecycle.START)  # "FETCH_foo_START"
    ```
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidActionError

# Built-in verbs
FETCH = "FETCH"
UPDATE = "UPDATE"
REMOVE = "REMOVE"

BUILTIN_VERBS = (FETCH, UPDATE, REMOVE)

INIT = "@@INIT"


class Lifecycle(str, Enum):
    """Phase of an asynchronous operation on a resource."""

    START = "START"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


_LIFECYCLE_PATTERN = "|".join(lifecycle.value for lifecycle in Lifecycle)


@dataclass(frozen=True, slots=True)
class ActionTypeMatch:
    """An action type that follows the convention for a resource."""

    verb: str
    resource: str
    lifecycle: Lifecycle | None = None


@dataclass(frozen=True, slots=True)
class NoMatch:
    """An action type that does not follow the convention for a resource."""

    action_type: str


ParsedActionType = ActionTypeMatch | NoMatch


def make_action_type(
    verb: str, resource: str, lifecycle: Lifecycle | str | None = None
) -> str:
    """
    Build an action type string.

    Args:
        verb: Upper-case verb, e.g. ``FETCH``.
        resource: Resource name, used verbatim.
        lifecycle: Optional lifecycle phase.

    Returns:
        ``VERB_resource`` or ``VERB_resource_LIFECYCLE``.
    """
    if lifecycle is None:
        return f"{verb}_{resource}"

    return f"{verb}_{resource}_{Lifecycle(lifecycle).value}"


def _compile(resource: str) -> re.Pattern[str]:
    # An upper-case resource cannot be told apart from a multi-word verb
    # (FETCH_ADMIN_USER for USER), so its verbs are single words
    verb = r"[A-Z][A-Z0-9_]*?" if resource != resource.upper() else r"[A-Z][A-Z0-9]*"
    return re.compile(
        rf"^(?P<verb>{verb})_{re.escape(resource)}"
        rf"(?:_(?P<lifecycle>{_LIFECYCLE_PATTERN}))?$"
    )


def parse_action_type(action_type: str, resource: str) -> ParsedActionType:
    """
    Parse an action type against the convention for one resource.

    The resource segment must match exactly: ``FETCH_foobar_START`` does not
    match the resource ``foo``.
    Verbs may span several words (``BULK_FETCH``) unless the resource name has
    no lower-case letter, in which case verbs are single words.
    """
    return ActionTypeCodec(resource).parse(action_type)


class ActionTypeCodec:
    """
    Parses action types for one resource and knows its external action types.

    Example:
        ```python
        codec = ActionTypeCodec("foo", ["MY_CUSTOM_ACTION_TYPE"])

        match codec.parse("FETCH_foo_START"):
            case ActionTypeMatch(verb, _, lifecycle):
                ...
            case NoMatch():
                ...
        ```
    """

    __slots__ = ("_resource", "_pattern", "_external")

    def __init__(
        self, resource: str, external_action_types: Iterable[str] = ()
    ) -> None:
        self._resource = resource
        self._pattern = _compile(resource)
        self._external = frozenset(external_action_types)

    @property
    def resource(self) -> str:
        """Get the resource name."""
        return self._resource

    @property
    def external_action_types(self) -> frozenset[str]:
        """Get the allow-listed external action types."""
        return self._external

    def parse(self, action_type: str) -> ParsedActionType:
        """Parse an action type into a tagged result."""
        found = self._pattern.match(action_type)

        if found is None:
            return NoMatch(action_type)

        lifecycle = found.group("lifecycle")

        return ActionTypeMatch(
            verb=found.group("verb"),
            resource=self._resource,
            lifecycle=Lifecycle(lifecycle) if lifecycle else None,
        )

    def is_external(self, action_type: str) -> bool:
        """Check whether the action type is allow-listed for this resource."""
        return action_type in self._external

    def pertains_to(self, action_type: str) -> bool:
        """Check whether the resource's reducers should see the action type."""
        return self.is_external(action_type) or isinstance(
            self.parse(action_type), ActionTypeMatch
        )

    def make(self, verb: str, lifecycle: Lifecycle | str | None = None) -> str:
        """Build an action type for this resource."""
        return make_action_type(verb, self._resource, lifecycle)

    def __repr__(self) -> str:
        return f"ActionTypeCodec({self._resource!r})"


class ActionMeta(BaseModel):
    """Action metadata; ``referenceId`` names the single entity concerned."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    reference_id: str | int | None = Field(default=None, alias="referenceId")


class Action(BaseModel):
    """
    An action as read by the built-in lifecycle reducers.

    Accepts the wire shape ``{"type", "meta": {"referenceId"}, "errors",
    "payload"}``; unknown keys are kept.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str
    meta: ActionMeta | None = None
    errors: list[Any] | None = None
    payload: Any = None

    @property
    def reference_id(self) -> str | int | None:
        """Get ``meta.referenceId``, or None for collection-level actions."""
        if self.meta is None:
            return None
        return self.meta.reference_id


def action_type_of(action: Any) -> str:
    """
    Read the type of an action given as a model, mapping or object.

    Raises:
        InvalidActionError: If the action has no string type.
    """
    if isinstance(action, Mapping):
        action_type = action.get("type")
    else:
        action_type = getattr(action, "type", None)

    if not isinstance(action_type, str):
        raise InvalidActionError(action)

    return action_type


def _meta_of(meta: Any) -> Any:
    if meta is None or isinstance(meta, (Mapping, ActionMeta)):
        return meta

    reference_id = getattr(meta, "reference_id", None)
    if reference_id is None:
        reference_id = getattr(meta, "referenceId", None)
    return {"referenceId": reference_id}


def to_action(value: Any) -> Action:
    """
    Coerce a mapping, an ``Action`` or an object with a ``type`` into an ``Action``.

    Raises:
        InvalidActionError: If the value has no string type.
        pydantic.ValidationError: If the remaining fields are malformed.
    """
    if isinstance(value, Action):
        return value

    action_type = action_type_of(value)

    if isinstance(value, Mapping):
        return Action.model_validate(value)

    return Action.model_validate(
        {
            "type": action_type,
            "meta": _meta_of(getattr(value, "meta", None)),
            "errors": getattr(value, "errors", None),
            "payload": getattr(value, "payload", None),
        }
    )
