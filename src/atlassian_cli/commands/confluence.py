"""Confluence commands."""

import click

from ..pagination import CollectMode
from ..utils.decorators import handle_cli_errors
from ..utils.precedence import split_list
from .context import CliContext, pass_cli
from .options import format_option, pagination_options
from .output import emit, emit_result, page_handler

all_fields_option = click.option(
    "--all-fields",
    "include_all_fields",
    is_flag=True,
    help="Include every expandable field in the response",
)


@click.group()
def confluence() -> None:
    """Confluence search, pages and comments."""


@confluence.command("search")
@click.argument("cql")
@pagination_options(default_limit=25)
@click.option("--expand", help="Comma-separated extra expand values")
@all_fields_option
@format_option
@pass_cli
@handle_cli_errors
def search(
    cli: CliContext,
    cql: str,
    limit: int,
    fetch_all: bool,
    stream: bool,
    expand: str | None,
    include_all_fields: bool,
    output_format: str,
) -> None:
    """Search content with CQL."""
    mode = CollectMode.from_flags(fetch_all, stream)
    result = cli.confluence().search(
        cql,
        limit=limit,
        expand=split_list(expand),
        include_all_fields=include_all_fields,
        as_markdown=output_format == "markdown",
        mode=mode,
        on_page=page_handler(mode, "results"),
    )
    emit_result(result, mode, "results", cli.pretty)


@confluence.command("get")
@click.argument("page_id")
@click.option("--include", help="Comma-separated extra include flags, e.g. labels,likes")
@all_fields_option
@format_option
@pass_cli
@handle_cli_errors
def get_page(
    cli: CliContext,
    page_id: str,
    include: str | None,
    include_all_fields: bool,
    output_format: str,
) -> None:
    """Get a page by id."""
    page = cli.confluence().get_page(
        page_id,
        as_markdown=output_format == "markdown",
        include_all_fields=include_all_fields,
        additional_includes=split_list(include),
    )
    emit(page, cli.pretty)


@confluence.command("children")
@click.argument("page_id")
@pass_cli
@handle_cli_errors
def children(cli: CliContext, page_id: str) -> None:
    """List the child pages of a page."""
    emit(cli.confluence().get_page_children(page_id), cli.pretty)


@confluence.command("comments")
@click.argument("page_id")
@format_option
@pass_cli
@handle_cli_errors
def comments(cli: CliContext, page_id: str, output_format: str) -> None:
    """List the footer comments of a page."""
    result = cli.confluence().get_page_comments(
        page_id, as_markdown=output_format == "markdown"
    )
    emit(result, cli.pretty)


@confluence.command("create")
@click.argument("space_key")
@click.argument("title")
@click.argument("content")
@pass_cli
@handle_cli_errors
def create_page(cli: CliContext, space_key: str, title: str, content: str) -> None:
    """Create a page from storage-format CONTENT."""
    emit(cli.confluence().create_page(space_key, title, content), cli.pretty)


@confluence.command("update")
@click.argument("page_id")
@click.argument("title")
@click.argument("content")
@pass_cli
@handle_cli_errors
def update_page(cli: CliContext, page_id: str, title: str, content: str) -> None:
    """Replace the title and body of a page."""
    emit(cli.confluence().update_page(page_id, title, content), cli.pretty)
