"""Credential providers for the Jira REST API.

The request dispatcher only needs an ``Authorization`` header. Credentials
come from explicit construction, the environment, or the system keyring;
no interactive authentication flow lives here.
"""

import base64
import json
import os
from dataclasses import dataclass
from typing import Protocol

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from .errors import NotConfiguredError

KEYRING_SERVICE = "jira-rest"
KEYRING_USERNAME = "tokens"


class CredentialProvider(Protocol):
    """Anything that can produce an authorization header."""

    def auth_header(self) -> dict[str, str]:
        """Return the headers that authenticate a request."""
        ...


@dataclass(frozen=True)
class ApiTokenCredentials:
    """Email + API token, sent as HTTP Basic auth (Jira Cloud)."""

    email: str
    api_token: str

    def auth_header(self) -> dict[str, str]:
        credentials = f"{self.email}:{self.api_token}"
        encoded = base64.b64encode(credentials.encode()).decode()
        return {"Authorization": f"Basic {encoded}"}


@dataclass(frozen=True)
class BearerTokenCredentials:
    """A pre-issued access token, sent as a Bearer token."""

    token: str

    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def store_credentials(tokens: dict) -> None:
    """Store credentials in the system keyring.

    Args:
        tokens: A dict with either ``email`` and ``api_token``, or ``access_token``.
    """
    # Store as JSON to handle multiple fields
    keyring.set_password(KEYRING_SERVICE, KEYRING_USERNAME, json.dumps(tokens))


def get_credentials() -> dict | None:
    """Retrieve stored credentials from the system keyring.

    Returns:
        The stored dict, or None if nothing usable is stored.
    """
    try:
        tokens_json = keyring.get_password(KEYRING_SERVICE, KEYRING_USERNAME)
    except KeyringError:
        return None
    if not tokens_json:
        return None
    try:
        return json.loads(tokens_json)
    except json.JSONDecodeError:
        return None


def delete_credentials() -> None:
    """Delete stored credentials from the system keyring."""
    try:
        keyring.delete_password(KEYRING_SERVICE, KEYRING_USERNAME)
    except PasswordDeleteError:
        pass  # Already deleted or never existed


def credentials_from_dict(data: dict) -> CredentialProvider | None:
    """Build a provider from a stored credentials dict."""
    if data.get("email") and data.get("api_token"):
        return ApiTokenCredentials(email=data["email"], api_token=data["api_token"])
    if data.get("access_token"):
        return BearerTokenCredentials(token=data["access_token"])
    return None


def resolve_credentials() -> CredentialProvider:
    """Find credentials in the environment, then in the keyring.

    Environment variables: ``JIRA_USER_EMAIL`` + ``JIRA_API_TOKEN`` for Basic
    auth, or ``JIRA_ACCESS_TOKEN`` for a bearer token.

    Raises:
        NotConfiguredError: If no credentials are available.
    """
    provider = credentials_from_dict(
        {
            "email": os.getenv("JIRA_USER_EMAIL"),
            "api_token": os.getenv("JIRA_API_TOKEN"),
            "access_token": os.getenv("JIRA_ACCESS_TOKEN"),
        }
    )
    if provider is not None:
        return provider

    stored = get_credentials()
    if stored:
        provider = credentials_from_dict(stored)
        if provider is not None:
            return provider

    raise NotConfiguredError(
        "No Jira credentials found. Set JIRA_USER_EMAIL and JIRA_API_TOKEN or run 'jira-rest auth login'."
    )
