"""HTTP dispatch for the Jira REST API.

Every operation is a single request/response exchange that returns an
``Ok``/``Err`` result instead of raising. Transport failures and non-2xx
responses both come back as ``Err``; nothing is retried.
"""

from typing import Any

import httpx
from opentelemetry import trace

from .config import DEFAULT_USER_AGENT, JiraRestConfig, load_config
from .credentials import CredentialProvider, resolve_credentials
from .logging import PerformanceTimer, get_logger
from .result import Err, Ok, Result

logger = get_logger("request")
tracer = trace.get_tracer(__name__)

# Returned by POST/PUT when Jira answers 2xx with an empty or non-JSON body
SUCCESS_PLACEHOLDER = "Request successful"


class JiraRequest:
    """Issues requests against a single Jira REST API base URL."""

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider,
        *,
        timeout: float | None = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize the dispatcher.

        Args:
            base_url: API root, e.g. ``https://team.atlassian.net/rest/api/2``.
            credentials: Provider of the ``Authorization`` header.
            timeout: Seconds before httpx gives up; None disables the timeout.
            user_agent: Sent as the ``User-Agent`` header.
        """
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_config(
        cls,
        config: JiraRestConfig | None = None,
        credentials: CredentialProvider | None = None,
    ) -> "JiraRequest":
        """Build a dispatcher from settings.toml / environment configuration.

        Raises:
            NotConfiguredError: If the site URL or credentials are missing.
        """
        config = config or load_config()
        return cls(
            config.jira.api_base,
            credentials or resolve_credentials(),
            timeout=config.jira.timeout,
            user_agent=config.jira.user_agent,
        )

    def _headers(self) -> dict[str, str]:
        return {
            **self.credentials.auth_header(),
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def _url(self, path: str, query_string: str) -> str:
        url = f"{self.base_url}{path}"
        if query_string:
            url = f"{url}?{query_string}"
        return url

    async def get_one(self, path: str, query_string: str = "") -> Result:
        """GET a single JSON document.

        Returns:
            ``Ok(json)`` on 2xx, ``Err(json)`` for a JSON error body, or
            ``Err(description)`` when no decodable response was received.
        """
        response = await self._send("GET", path, query_string)
        if isinstance(response, Err):
            return response
        return _decode(response)

    async def get_all(self, path: str, result_field: str, query_string: str = "") -> Result:
        """GET a search-style endpoint and unwrap the list under ``result_field``.

        Only one page is fetched.
        """
        result = await self.get_one(path, query_string)
        if isinstance(result, Err):
            return result
        body = result.value
        if not isinstance(body, dict) or result_field not in body:
            return Err(f"Response has no '{result_field}' field")
        return Ok(body[result_field])

    async def post(self, path: str, query_string: str, payload: Any) -> Result:
        """POST ``payload`` as JSON."""
        response = await self._send("POST", path, query_string, payload)
        if isinstance(response, Err):
            return response
        return _decode(response, empty_success=True)

    async def put(self, path: str, query_string: str, payload: Any) -> Result:
        """PUT ``payload`` as JSON. Update semantics are entirely Jira's."""
        response = await self._send("PUT", path, query_string, payload)
        if isinstance(response, Err):
            return response
        return _decode(response, empty_success=True)

    async def _send(
        self,
        method: str,
        path: str,
        query_string: str,
        payload: Any = None,
    ) -> httpx.Response | Err:
        """Send one request, mapping transport failures to ``Err``."""
        url = self._url(path, query_string)
        logger.debug(f"Jira {method} {url}")

        kwargs: dict[str, Any] = {"headers": self._headers()}
        if method in ("POST", "PUT"):
            kwargs["json"] = payload

        with tracer.start_as_current_span("jira_rest.request") as span:
            span.set_attribute("http.request.method", method)
            span.set_attribute("jira.path", path)
            try:
                with PerformanceTimer("jira_request", method=method, path=path) as timer:
                    async with httpx.AsyncClient(timeout=self.timeout) as client:
                        response = await client.request(method, url, **kwargs)
                    timer.add_metric("status", response.status_code)
            except httpx.HTTPError as e:
                logger.error(f"Jira {method} {path} failed: {e!r}")
                span.set_attribute("error.type", type(e).__name__)
                return Err(_describe_transport_error(e))
            span.set_attribute("http.response.status_code", response.status_code)

        if not response.is_success:
            logger.warning(f"Jira {method} {path} returned HTTP {response.status_code}")
        return response


def _decode(response: httpx.Response, empty_success: bool = False) -> Result:
    """Map a response to a result by status class and body."""
    try:
        body = response.json()
    except ValueError:
        if response.is_success:
            if empty_success:
                return Ok(SUCCESS_PLACEHOLDER)
            return Err(f"HTTP {response.status_code}: response body is not valid JSON")
        return Err(
            f"HTTP {response.status_code} {response.reason_phrase}: response body is not valid JSON"
        )

    if response.is_success:
        return Ok(body)
    return Err(body)


def _describe_transport_error(error: httpx.HTTPError) -> str:
    message = str(error) or "no response received"
    return f"{type(error).__name__}: {message}"
