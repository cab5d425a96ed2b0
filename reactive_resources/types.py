"""Type definitions for reactive-resources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, TypeVar

if TYPE_CHECKING:
    from .reducers import ResourceConfig

# Type variables
T = TypeVar("T")
A = TypeVar("A")  # Action type


class Reducer(Protocol[T, A]):
    """Protocol for reducer functions."""

    def __call__(self, state: T, action: A) -> T:
        """Process an action and return new state."""
        ...


class ReducerFactory(Protocol):
    """Protocol for sub-reducer factories."""

    def __call__(self, config: ResourceConfig) -> Reducer[Any, Any]:
        """Build a reducer for the given resource configuration."""
        ...


class Selector(Protocol):
    """Protocol for selector functions."""

    def __call__(
        self, state: Any, props: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """Read a value from a state snapshot."""
        ...
