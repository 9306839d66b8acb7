"""Configuration file commands."""

import logging
from pathlib import Path

import click

from ..config import (
    PROJECT_CONFIG_NAMES,
    FileSource,
    global_config_path,
    init_config,
    project_config_path,
)
from ..exceptions import ConfigError
from ..jira import JiraFetcher
from ..utils.decorators import handle_cli_errors
from ..utils.logging import mask_sensitive
from .context import CliContext, pass_cli
from .output import emit

logger = logging.getLogger("atlassian-cli.commands")

global_option = click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Use the global config file instead of the project one",
)


def _target_path(cli: CliContext, global_: bool) -> Path:
    if global_:
        return global_config_path()
    if cli.config_path is not None:
        return cli.config_path
    return project_config_path() or Path.cwd() / PROJECT_CONFIG_NAMES[0]


@click.group("config")
def config_group() -> None:
    """Create, inspect and validate configuration."""


@config_group.command("init")
@global_option
@handle_cli_errors
def init(global_: bool) -> None:
    """Write a config file template."""
    path = init_config(global_=global_)
    click.echo(f"Created {path}", err=True)
    click.echo("Set ATLASSIAN_API_TOKEN in your environment to authenticate.", err=True)


@config_group.command("show")
@pass_cli
@handle_cli_errors
def show(cli: CliContext) -> None:
    """Show the resolved configuration with the token masked."""
    config = cli.resolve(validate=False)
    emit(
        {
            "profile": config.profile_name,
            "domain": config.domain,
            "email": config.email,
            "token": mask_sensitive(config.token),
            "jira": {
                "projects_filter": list(config.projects_filter),
                "search_default_fields": (
                    list(config.search_default_fields)
                    if config.search_default_fields is not None
                    else None
                ),
                "search_custom_fields": list(config.search_custom_fields),
            },
            "confluence": {
                "spaces_filter": list(config.spaces_filter),
                "custom_includes": list(config.confluence_custom_includes),
            },
            "optimization": {
                "response_exclude_fields": sorted(config.response_exclude_fields),
            },
            "performance": {
                "request_timeout_ms": config.request_timeout_ms,
                "rate_limit_delay_ms": config.rate_limit_delay_ms,
            },
        },
        cli.pretty,
    )


@config_group.command("list")
@pass_cli
@handle_cli_errors
def list_profiles(cli: CliContext) -> None:
    """List the profiles defined in the project and global files."""
    project_path = cli.config_path or project_config_path()
    result = {}
    for name, path in (("project", project_path), ("global", global_config_path())):
        source = FileSource(path, name=name)
        result[name] = {
            "path": str(path) if path is not None else None,
            "exists": source.exists,
            "profiles": source.profiles(),
        }
    emit(result, cli.pretty)


@config_group.command("path")
@global_option
@pass_cli
def path(cli: CliContext, global_: bool) -> None:
    """Print the config file path in use."""
    click.echo(str(_target_path(cli, global_)))


@config_group.command("edit")
@global_option
@pass_cli
@handle_cli_errors
def edit(cli: CliContext, global_: bool) -> None:
    """Open the config file in $EDITOR."""
    target = _target_path(cli, global_)
    if not target.is_file():
        raise ConfigError(
            f"Config file not found: {target}. Run 'atlassian-cli config init' first"
        )
    click.edit(filename=str(target))


@config_group.command("validate")
@pass_cli
@handle_cli_errors
def validate(cli: CliContext) -> None:
    """Check the credentials against the Jira API."""
    config = cli.resolve()
    user = JiraFetcher(config).get_myself() or {}
    logger.info(f"Authenticated as {user.get('displayName')}")
    emit(
        {
            "valid": True,
            "profile": config.profile_name,
            "domain": config.domain,
            "user": user.get("displayName"),
            "account_id": user.get("accountId"),
        },
        cli.pretty,
    )
