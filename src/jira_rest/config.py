"""Configuration management for jira-rest.

Settings are loaded from ./.jira-rest/settings.toml (in the current working directory) with the following precedence:
1. CLI flags (highest)
2. Environment variables
3. Config file
4. Built-in defaults (lowest)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import toml

from .errors import NotConfiguredError

# Default paths - stored in current working directory
JIRA_REST_HOME = Path.cwd() / ".jira-rest"
SETTINGS_FILE = JIRA_REST_HOME / "settings.toml"

DEFAULT_API_PATH = "/rest/api/2"
DEFAULT_USER_AGENT = "jira-rest"


@dataclass
class JiraSettings:
    """Connection settings for the Jira site."""

    site_url: str = ""  # e.g. https://yourteam.atlassian.net
    api_path: str = DEFAULT_API_PATH
    timeout: float = 30.0  # seconds, passed to httpx
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def api_base(self) -> str:
        """Site URL joined with the REST API path."""
        if not self.site_url:
            raise NotConfiguredError(
                "No Jira site URL configured. Set JIRA_SITE_URL or run 'jira-rest auth login'."
            )
        return f"{self.site_url.rstrip('/')}/{self.api_path.strip('/')}"


@dataclass
class LoggingConfig:
    """Logging configuration section."""

    level: str = "info"  # file handler level
    console_level: str = "warning"
    to_file: bool = True


@dataclass
class JiraRestConfig:
    """Main configuration container."""

    jira: JiraSettings = field(default_factory=JiraSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def ensure_home() -> None:
    """Create the jira-rest home directory if it doesn't exist."""
    JIRA_REST_HOME.mkdir(parents=True, exist_ok=True)


def load_config() -> JiraRestConfig:
    """Load configuration from settings.toml and the environment, merging with defaults."""
    config = JiraRestConfig()

    data: dict[str, Any] = {}
    if SETTINGS_FILE.exists():
        try:
            data = toml.load(SETTINGS_FILE)
        except (toml.TomlDecodeError, OSError):
            data = {}

    # Merge jira section
    if "jira" in data:
        jira_data = data["jira"]
        for key in ["site_url", "api_path", "user_agent"]:
            if key in jira_data:
                setattr(config.jira, key, str(jira_data[key]))
        if "timeout" in jira_data:
            config.jira.timeout = _parse_timeout(jira_data["timeout"], "[jira] timeout")

    # Merge logging section
    if "logging" in data:
        log_data = data["logging"]
        for key in ["level", "console_level"]:
            if key in log_data:
                setattr(config.logging, key, str(log_data[key]))
        if "to_file" in log_data:
            config.logging.to_file = _parse_bool(log_data["to_file"], "[logging] to_file")

    _apply_environment(config)
    return config


def _parse_timeout(value: Any, source: str) -> float:
    """Parse a timeout in seconds.

    Raises:
        NotConfiguredError: If the value is not a number.
    """
    try:
        return float(value)
    except (TypeError, ValueError):
        raise NotConfiguredError(f"{source} must be a number of seconds, got {value!r}") from None


def _parse_bool(value: Any, source: str) -> bool:
    """Accept TOML booleans and the strings true/false, yes/no, on/off and 1/0."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes", "1", "on"):
        return True
    if text in ("false", "no", "0", "off"):
        return False
    raise NotConfiguredError(f"{source} must be true or false, got {value!r}")


def _apply_environment(config: JiraRestConfig) -> None:
    """Override file settings with JIRA_* environment variables."""
    site_url = os.getenv("JIRA_SITE_URL")
    if site_url:
        config.jira.site_url = site_url

    timeout = os.getenv("JIRA_TIMEOUT")
    if timeout:
        config.jira.timeout = _parse_timeout(timeout, "JIRA_TIMEOUT")


def save_config(config: JiraRestConfig) -> None:
    """Save configuration to settings.toml."""
    ensure_home()

    data: dict[str, Any] = {
        "jira": {
            "site_url": config.jira.site_url,
            "api_path": config.jira.api_path,
            "timeout": config.jira.timeout,
            "user_agent": config.jira.user_agent,
        },
        "logging": {
            "level": config.logging.level,
            "console_level": config.logging.console_level,
            "to_file": config.logging.to_file,
        },
    }

    with open(SETTINGS_FILE, "w") as f:
        toml.dump(data, f)


def create_default_config() -> bool:
    """Create a default settings.toml if it doesn't exist.

    Returns:
        True if a new config was created (first run), False if it already existed.
    """
    ensure_home()

    if SETTINGS_FILE.exists():
        return False

    commented_config = '''# jira-rest configuration

[jira]
# Your Jira Cloud site, e.g. "https://yourteam.atlassian.net"
# Can also be set with the JIRA_SITE_URL environment variable.
site_url = ""

# REST API path appended to the site URL
api_path = "/rest/api/2"

# Request timeout in seconds (JIRA_TIMEOUT overrides)
timeout = 30.0

user_agent = "jira-rest"

# Credentials are not stored here. Run "jira-rest auth login" to keep an
# API token in the system keyring, or export JIRA_USER_EMAIL and
# JIRA_API_TOKEN (or JIRA_ACCESS_TOKEN for a bearer token).

[logging]
# File log level: debug, info, warning, error
level = "info"
console_level = "warning"
to_file = true
'''

    SETTINGS_FILE.write_text(commented_config)
    return True
