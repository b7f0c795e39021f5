"""Shared pytest fixtures for jira-rest tests."""

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from jira_rest.config import JiraRestConfig
from jira_rest.credentials import ApiTokenCredentials
from jira_rest.project import Project
from jira_rest.request import JiraRequest

SITE_URL = "https://yourteam.atlassian.net"
API_BASE = f"{SITE_URL}/rest/api/2"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real JIRA_* variables from leaking into tests."""
    for name in [
        "JIRA_SITE_URL",
        "JIRA_TIMEOUT",
        "JIRA_USER_EMAIL",
        "JIRA_API_TOKEN",
        "JIRA_ACCESS_TOKEN",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Point the config module at a temporary settings.toml."""
    settings = tmp_path / "settings.toml"
    monkeypatch.setattr("jira_rest.config.SETTINGS_FILE", settings)
    monkeypatch.setattr("jira_rest.config.JIRA_REST_HOME", tmp_path)
    return settings


@pytest.fixture
def mock_config() -> JiraRestConfig:
    """Create a configuration pointing at a fake site."""
    config = JiraRestConfig()
    config.jira.site_url = SITE_URL
    config.jira.timeout = 5.0
    return config


@pytest.fixture
def credentials() -> ApiTokenCredentials:
    return ApiTokenCredentials(email="user@example.com", api_token="secret-token")


@pytest.fixture
def jira_request(credentials: ApiTokenCredentials) -> JiraRequest:
    """Create a dispatcher against the fake site."""
    return JiraRequest(API_BASE, credentials, timeout=5.0)


@pytest.fixture
def project(jira_request: JiraRequest) -> Project:
    return Project(jira_request)


@pytest.fixture(scope="session")
def _session_span_exporter() -> InMemorySpanExporter:
    # The global tracer provider can only be set once per process
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return exporter


@pytest.fixture
def span_exporter(_session_span_exporter: InMemorySpanExporter) -> InMemorySpanExporter:
    """Collect the spans finished during one test."""
    _session_span_exporter.clear()
    yield _session_span_exporter
    _session_span_exporter.clear()
