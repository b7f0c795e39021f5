"""Command-line interface for jira-rest.

Thin wrappers over the Project accessors that print JSON results.
"""

import asyncio
import json
import sys
from typing import Any

import click

from . import __version__
from .config import SETTINGS_FILE, create_default_config, load_config, save_config
from .credentials import (
    ApiTokenCredentials,
    delete_credentials,
    store_credentials,
)
from .errors import JiraRestError
from .logging import configure_logging
from .project import Project
from .request import JiraRequest
from .result import Ok


def _echo_json(value: Any, err: bool = False) -> None:
    click.echo(json.dumps(value, indent=2, sort_keys=True), err=err)


def _parse_payload(payload: str) -> Any:
    """Parse a JSON payload argument."""
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Payload is not valid JSON: {e}") from e


def _options(**kwargs: str | None) -> dict[str, str]:
    """Drop options the user didn't pass."""
    return {key: value for key, value in kwargs.items() if value is not None}


def _fail(error: Exception) -> None:
    click.echo(f"✗ {error}", err=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version information")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on the console")
@click.pass_context
def main(ctx: click.Context, version: bool, verbose: bool) -> None:
    """jira-rest - query and update Jira from the command line.

    Examples:

        jira-rest auth login                   Store an API token

        jira-rest project list                 List all projects

        jira-rest project issues 10000         List issues in a project

        jira-rest issue show TB-123            Show one issue
    """
    try:
        configure_logging(verbose)
    except JiraRestError as e:
        _fail(e)
    create_default_config()

    if version:
        click.echo(f"jira-rest version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Auth commands
@main.group("auth")
def auth_group() -> None:
    """Manage stored Jira credentials."""
    pass


@auth_group.command("login")
@click.option("--site-url", prompt="Enter your Jira site URL (e.g., https://yourcompany.atlassian.net)")
@click.option("--email", prompt="Enter your Jira email address")
@click.option("--api-token", prompt="Enter your Jira API token", hide_input=True)
def auth_login(site_url: str, email: str, api_token: str) -> None:
    """Store an API token in the system keyring."""
    asyncio.run(cmd_login(site_url, email, api_token))


@auth_group.command("logout")
def auth_logout() -> None:
    """Remove stored credentials."""
    delete_credentials()
    click.echo("✓ Removed stored Jira credentials")


# Project commands
@main.group("project")
def project_group() -> None:
    """Projects and their issues."""
    pass


@project_group.command("list")
@click.option("--expand", help="Comma-separated fields to expand")
@click.option("--recent", help="Only return this many recently viewed projects")
def project_list(expand: str | None, recent: str | None) -> None:
    """List all projects."""
    asyncio.run(cmd_project_list(_options(expand=expand, recent=recent)))


@project_group.command("show")
@click.argument("project_id")
@click.option("--expand", help="Comma-separated fields to expand")
def project_show(project_id: str, expand: str | None) -> None:
    """Show a single project."""
    asyncio.run(cmd_project_show(project_id, _options(expand=expand)))


@project_group.command("issues")
@click.argument("project_id")
@click.option("--fields", help="Comma-separated issue fields to return")
@click.option("--expand", help="Comma-separated fields to expand")
@click.option("--properties", help="Comma-separated issue properties to return")
def project_issues(
    project_id: str,
    fields: str | None,
    expand: str | None,
    properties: str | None,
) -> None:
    """List the issues in a project (first page only)."""
    options = _options(fields=fields, expand=expand, properties=properties)
    asyncio.run(cmd_project_issues(project_id, options))


# Issue commands
@main.group("issue")
def issue_group() -> None:
    """Single issues."""
    pass


@issue_group.command("show")
@click.argument("issue_id")
@click.option("--expand", help="Comma-separated fields to expand")
def issue_show(issue_id: str, expand: str | None) -> None:
    """Show a single issue."""
    asyncio.run(cmd_issue_show(issue_id, _options(expand=expand)))


@issue_group.command("create")
@click.argument("payload")
def issue_create(payload: str) -> None:
    """Create an issue from a JSON payload.

    Example:

        jira-rest issue create '{"fields": {"project": {"id": "10000"}, "issuetype": {"id": "10001"}, "summary": "Hi"}}'
    """
    asyncio.run(cmd_issue_create(_parse_payload(payload)))


@issue_group.command("update")
@click.argument("issue_id")
@click.argument("payload")
def issue_update(issue_id: str, payload: str) -> None:
    """Update an issue from a JSON payload."""
    asyncio.run(cmd_issue_update(issue_id, _parse_payload(payload)))


async def cmd_login(site_url: str, email: str, api_token: str) -> None:
    """Verify and store API token credentials."""
    if not site_url.startswith("http"):
        site_url = f"https://{site_url}"

    config = load_config()
    config.jira.site_url = site_url.rstrip("/")
    credentials = ApiTokenCredentials(email=email, api_token=api_token)

    click.echo("Testing connection...")
    request = JiraRequest.from_config(config, credentials)
    result = await request.get_one("/myself")
    if not isinstance(result, Ok):
        click.echo(f"✗ Connection test failed: {result.reason!r}", err=True)
        sys.exit(1)

    store_credentials({"email": email, "api_token": api_token})
    save_config(config)
    click.echo(f"✓ Connected to {config.jira.site_url} as {email}")
    click.echo(f"  Site URL saved to {SETTINGS_FILE}")


async def cmd_project_list(options: dict[str, str]) -> None:
    try:
        _echo_json(await Project.from_config().all_or_raise(**options))
    except JiraRestError as e:
        _fail(e)


async def cmd_project_show(project_id: str, options: dict[str, str]) -> None:
    try:
        _echo_json(await Project.from_config().get_or_raise(project_id, **options))
    except JiraRestError as e:
        _fail(e)


async def cmd_project_issues(project_id: str, options: dict[str, str]) -> None:
    try:
        _echo_json(await Project.from_config().get_issues_or_raise(project_id, **options))
    except JiraRestError as e:
        _fail(e)


async def cmd_issue_show(issue_id: str, options: dict[str, str]) -> None:
    try:
        _echo_json(await Project.from_config().get_issue_or_raise(issue_id, **options))
    except JiraRestError as e:
        _fail(e)


async def cmd_issue_create(payload: Any) -> None:
    try:
        result = await Project.from_config().create_issue(payload)
    except JiraRestError as e:
        _fail(e)
        return
    if isinstance(result, Ok):
        _echo_json(result.value)
    else:
        click.echo("✗ Jira rejected the issue:", err=True)
        _echo_json(result.reason, err=True)
        sys.exit(1)


async def cmd_issue_update(issue_id: str, payload: Any) -> None:
    try:
        result = await Project.from_config().update_issue(issue_id, payload)
    except JiraRestError as e:
        _fail(e)
        return
    if isinstance(result, Ok):
        click.echo(f"✓ {issue_id}: {result.value}")
    else:
        click.echo(f"✗ Jira rejected the update to {issue_id}:", err=True)
        _echo_json(result.reason, err=True)
        sys.exit(1)
