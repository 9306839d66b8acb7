import logging
from pathlib import Path

import click
from dotenv import find_dotenv, load_dotenv

from .commands import config_group, confluence_group, jira_group
from .commands.context import CliContext
from .utils.logging import level_from_verbosity, setup_logging

__version__ = "0.1.0"

logger = logging.getLogger("atlassian-cli")


@click.group()
@click.version_option(__version__, prog_name="atlassian-cli")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to use instead of the project-local one",
)
@click.option("--profile", help="Profile table to read from config files")
@click.option("--domain", help="Atlassian domain (e.g., company.atlassian.net)")
@click.option("--email", help="Account email")
@click.option("--token", help="API token (prefer ATLASSIAN_API_TOKEN)")
@click.option("--pretty", is_flag=True, help="Indent JSON output")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    profile: str | None,
    domain: str | None,
    email: str | None,
    token: str | None,
    pretty: bool,
    verbose: int,
    env_file: str | None,
) -> None:
    """Atlassian Jira and Confluence from the command line.

    Output is JSON on stdout; logs and progress go to stderr.
    """
    # Load environment variables from file if specified, otherwise try .env in cwd
    if env_file:
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    setup_logging(level_from_verbosity(verbose))
    if env_file:
        logger.debug(f"Loaded environment from file: {env_file}")

    ctx.obj = CliContext(
        config_path=config_path,
        profile=profile,
        domain=domain,
        email=email,
        token=token,
        pretty=pretty,
    )


main.add_command(jira_group)
main.add_command(confluence_group)
main.add_command(config_group)


__all__ = ["__version__", "main"]


if __name__ == "__main__":
    main()
