"""jira-rest - a small client for the Jira Cloud REST API."""

import logging as _stdlib_logging

from .credentials import ApiTokenCredentials, BearerTokenCredentials
from .errors import JiraRequestError, JiraRestError, NotConfiguredError
from .project import Project
from .request import JiraRequest
from .result import Err, Ok, Result, unwrap_or_raise

__version__ = "0.1.0"

_stdlib_logging.getLogger("jira_rest").addHandler(_stdlib_logging.NullHandler())

__all__ = [
    "ApiTokenCredentials",
    "BearerTokenCredentials",
    "Err",
    "JiraRequest",
    "JiraRequestError",
    "JiraRestError",
    "NotConfiguredError",
    "Ok",
    "Project",
    "Result",
    "unwrap_or_raise",
]
