"""Query-string construction for Jira endpoints.

Each endpoint accepts a fixed set of query parameters. Caller options are
filtered against that whitelist and rendered in whitelist order, each pair
followed by ``&`` so a raw fragment such as ``jql=project=10000`` can be
appended directly.
"""

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

QueryOptions = Mapping[str, Any] | Iterable[tuple[str, Any]]

# Allowed query parameter names, keyed by operation
OPTION_WHITELISTS: dict[str, tuple[str, ...]] = {
    "project.all": ("expand", "recent"),
    "project.get": ("expand",),
    "project.get_issue": ("expand",),
    "project.get_issues": ("fields", "expand", "properties"),
}


def allowed_options(operation: str) -> tuple[str, ...]:
    """Return the whitelist for an operation.

    Raises:
        KeyError: If the operation has no whitelist entry.
    """
    return OPTION_WHITELISTS[operation]


def convert(options: QueryOptions | None, allowed: Iterable[str]) -> str:
    """Render whitelisted options as a query-string fragment.

    Unknown names are dropped. When a name appears more than once, the
    first occurrence wins.

    Args:
        options: (name, value) pairs or a mapping of name to value.
        allowed: Recognized parameter names, in output order.

    Returns:
        ``"a=1&b=2&"``, or ``""`` when nothing survives the filter.
    """
    if not options:
        return ""

    pairs = options.items() if isinstance(options, Mapping) else options
    values: dict[str, Any] = {}
    for name, value in pairs:
        values.setdefault(name, value)

    return "".join(
        f"{name}={quote(str(values[name]), safe='')}&"
        for name in allowed
        if name in values
    )
