"""Access to the Jira Project resource and the issues inside a project.

Each accessor returns an ``Ok``/``Err`` result. The ``*_or_raise`` variants
return the unwrapped value instead and raise ``JiraRequestError`` on failure.
"""

from typing import Any

from opentelemetry import trace

from .config import JiraRestConfig
from .credentials import CredentialProvider
from .query_params import allowed_options, convert
from .request import JiraRequest
from .result import JSONValue, Result, unwrap_or_raise

tracer = trace.get_tracer(__name__)


class Project:
    """Project and issue endpoints of the Jira REST API."""

    def __init__(self, request: JiraRequest):
        self.request = request

    @classmethod
    def from_config(
        cls,
        config: JiraRestConfig | None = None,
        credentials: CredentialProvider | None = None,
    ) -> "Project":
        """Create a Project accessor backed by a configured dispatcher."""
        return cls(JiraRequest.from_config(config, credentials))

    def _label(self, method: str) -> str:
        return f"{type(self).__module__}.{type(self).__qualname__}.{method}"

    async def all(self, **query_params: Any) -> Result:
        """Return all projects visible to the user.

        Args:
            **query_params: ``expand`` and ``recent``; anything else is ignored.

        Returns:
            ``Ok([{"id": "1010", ...}, ...])`` or ``Err(reason)``.
        """
        return await self.request.get_one(
            "/project", convert(query_params, allowed_options("project.all"))
        )

    async def all_or_raise(self, **query_params: Any) -> list[JSONValue]:
        """Same as ``all`` but raises ``JiraRequestError`` if it fails."""
        return unwrap_or_raise(await self.all(**query_params), self._label("all_or_raise"))

    async def get(self, project_id: str, **query_params: Any) -> Result:
        """Return a single project by id or key.

        Args:
            project_id: Project id or key, used verbatim in the path.
            **query_params: ``expand`` (e.g. ``"lead,url,description"``).
        """
        return await self.request.get_one(
            f"/project/{project_id}", convert(query_params, allowed_options("project.get"))
        )

    async def get_or_raise(self, project_id: str, **query_params: Any) -> JSONValue:
        """Same as ``get`` but raises ``JiraRequestError`` if it fails."""
        return unwrap_or_raise(
            await self.get(project_id, **query_params), self._label("get_or_raise")
        )

    async def get_issues(self, project_id: str, **query_params: Any) -> Result:
        """Return the issues of a project via the search endpoint.

        Only the first page of search results is returned.

        Args:
            project_id: Project id or key, placed in ``jql=project=...``.
            **query_params: ``fields``, ``expand`` and ``properties``.

        Returns:
            ``Ok([{"id": "100040", ...}, ...])`` or ``Err(reason)``.
        """
        with tracer.start_as_current_span("jira_rest.Project.get_issues") as span:
            span.set_attribute("jira.project_id", project_id)
            query = convert(query_params, allowed_options("project.get_issues"))
            return await self.request.get_all(
                "/search", "issues", f"{query}jql=project={project_id}"
            )

    async def get_issues_or_raise(self, project_id: str, **query_params: Any) -> list[JSONValue]:
        """Same as ``get_issues`` but raises ``JiraRequestError`` if it fails."""
        return unwrap_or_raise(
            await self.get_issues(project_id, **query_params),
            self._label("get_issues_or_raise"),
        )

    async def get_issue(self, issue_id: str, **query_params: Any) -> Result:
        """Return a single issue by id or key (e.g. ``"ISSUE-1012"``)."""
        return await self.request.get_one(
            f"/issue/{issue_id}", convert(query_params, allowed_options("project.get_issue"))
        )

    async def get_issue_or_raise(self, issue_id: str, **query_params: Any) -> JSONValue:
        """Same as ``get_issue`` but raises ``JiraRequestError`` if it fails."""
        return unwrap_or_raise(
            await self.get_issue(issue_id, **query_params), self._label("get_issue_or_raise")
        )

    async def update_issue(self, issue_id: str, payload: Any) -> Result:
        """Update an issue, e.g. ``{"fields": {"summary": "New title"}}``.

        Jira answers 204 with no body, so success is ``Ok("Request successful")``.
        """
        return await self.request.put(f"/issue/{issue_id}", "", payload)

    async def create_issue(self, payload: Any) -> Result:
        """Create an issue.

        Returns:
            ``Ok({"id": ..., "key": ..., "self": ...})``, or ``Err`` carrying
            Jira's ``errorMessages``/``errors`` body (e.g. a missing issue type).
        """
        return await self.request.post("/issue", "", payload)
