"""Exceptions raised by jira-rest.

Transport and HTTP failures are returned as ``Err`` values, not raised.
These exceptions cover misconfiguration and the explicit ``*_or_raise``
accessors.
"""

from typing import Any


class JiraRestError(Exception):
    """Base class for jira-rest errors."""

    pass


class NotConfiguredError(JiraRestError):
    """Raised when the site URL or credentials are missing."""

    pass


class JiraRequestError(JiraRestError):
    """Raised when a request result is unwrapped and turns out to be a failure."""

    def __init__(self, label: str, reason: Any):
        self.label = label
        self.reason = reason
        super().__init__(f"Error in {label}: {reason!r}")
