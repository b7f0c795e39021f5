"""Result values returned by every request."""

from dataclasses import dataclass
from typing import Any, TypeAlias

from .errors import JiraRequestError

# Decoded JSON: dict, list, str, int, float, bool or None
JSONValue: TypeAlias = Any


@dataclass(frozen=True)
class Ok:
    """A successful request carrying the decoded JSON body."""

    value: JSONValue

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    """A failed request.

    ``reason`` is the decoded JSON error body returned by Jira (with its own
    ``errorMessages``/``errors`` keys), or a description string when no usable
    response was received.
    """

    reason: JSONValue

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True


Result: TypeAlias = Ok | Err


def unwrap_or_raise(result: Result, label: str) -> JSONValue:
    """Return the value of an ``Ok`` result, or raise for an ``Err``.

    Args:
        result: The result to unwrap.
        label: Where the call came from, used in the error message.

    Raises:
        JiraRequestError: If the result is an ``Err``.
    """
    if isinstance(result, Ok):
        return result.value
    raise JiraRequestError(label, result.reason)
