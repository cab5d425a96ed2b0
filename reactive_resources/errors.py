"""Exceptions raised by reactive-resources."""

from __future__ import annotations

from typing import Any


class ResourceError(Exception):
    """Base class for reactive-resources errors."""


class InvalidActionError(ResourceError, TypeError):
    """Raised when a value cannot be read as an action."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Expected an action with a string 'type', got {type(value).__name__}: {value!r}"
        )
