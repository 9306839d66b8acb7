"""Jira commands."""

import json

import click

from ..exceptions import UsageError
from ..pagination import CollectMode
from ..utils.decorators import handle_cli_errors
from ..utils.precedence import split_list
from .context import CliContext, pass_cli
from .options import format_option, pagination_options
from .output import emit, emit_result, page_handler


@click.group()
def jira() -> None:
    """Jira issues, comments, transitions and attachments."""


@jira.command("get")
@click.argument("issue_key")
@format_option
@pass_cli
@handle_cli_errors
def get_issue(cli: CliContext, issue_key: str, output_format: str) -> None:
    """Get an issue with its attachments and comments."""
    issue = cli.jira().get_issue(issue_key, as_markdown=output_format == "markdown")
    emit(issue, cli.pretty)


@jira.command("search")
@click.argument("jql")
@pagination_options(default_limit=50)
@click.option("--fields", help="Comma-separated fields to return")
@format_option
@pass_cli
@handle_cli_errors
def search(
    cli: CliContext,
    jql: str,
    limit: int,
    fetch_all: bool,
    stream: bool,
    fields: str | None,
    output_format: str,
) -> None:
    """Search issues with JQL."""
    mode = CollectMode.from_flags(fetch_all, stream)
    result = cli.jira().search_issues(
        jql,
        limit=limit,
        fields=split_list(fields),
        as_markdown=output_format == "markdown",
        mode=mode,
        on_page=page_handler(mode, "issues"),
    )
    emit_result(result, mode, "issues", cli.pretty)


@jira.command("create")
@click.argument("project_key")
@click.argument("summary")
@click.argument("issue_type")
@click.option("--description", help="Plain text or ADF JSON")
@pass_cli
@handle_cli_errors
def create_issue(
    cli: CliContext,
    project_key: str,
    summary: str,
    issue_type: str,
    description: str | None,
) -> None:
    """Create an issue."""
    emit(
        cli.jira().create_issue(project_key, summary, issue_type, description),
        cli.pretty,
    )


@jira.command("update")
@click.argument("issue_key")
@click.argument("fields_json")
@pass_cli
@handle_cli_errors
def update_issue(cli: CliContext, issue_key: str, fields_json: str) -> None:
    """Update issue fields from a JSON object."""
    try:
        fields = json.loads(fields_json)
    except json.JSONDecodeError as e:
        raise UsageError(f"FIELDS_JSON is not valid JSON: {e}") from e
    if not isinstance(fields, dict):
        raise UsageError("FIELDS_JSON must be a JSON object")
    emit(cli.jira().update_issue(issue_key, fields), cli.pretty)


@jira.command("comments")
@click.argument("issue_key")
@format_option
@pass_cli
@handle_cli_errors
def list_comments(cli: CliContext, issue_key: str, output_format: str) -> None:
    """List the comments of an issue."""
    comments = cli.jira().get_issue_comments(
        issue_key, as_markdown=output_format == "markdown"
    )
    emit(comments, cli.pretty)


@jira.group("comment")
def comment() -> None:
    """Add or edit issue comments."""


@comment.command("add")
@click.argument("issue_key")
@click.argument("text")
@pass_cli
@handle_cli_errors
def add_comment(cli: CliContext, issue_key: str, text: str) -> None:
    """Add a comment (plain text or ADF JSON)."""
    emit(cli.jira().add_comment(issue_key, text), cli.pretty)


@comment.command("update")
@click.argument("issue_key")
@click.argument("comment_id")
@click.argument("text")
@pass_cli
@handle_cli_errors
def update_comment(cli: CliContext, issue_key: str, comment_id: str, text: str) -> None:
    """Replace the body of a comment."""
    emit(cli.jira().update_comment(issue_key, comment_id, text), cli.pretty)


@jira.command("transitions")
@click.argument("issue_key")
@pass_cli
@handle_cli_errors
def list_transitions(cli: CliContext, issue_key: str) -> None:
    """List the transitions available for an issue."""
    emit(cli.jira().get_transitions(issue_key), cli.pretty)


@jira.command("transition")
@click.argument("issue_key")
@click.argument("transition_id")
@pass_cli
@handle_cli_errors
def transition(cli: CliContext, issue_key: str, transition_id: str) -> None:
    """Move an issue through a workflow transition."""
    emit(cli.jira().transition_issue(issue_key, transition_id), cli.pretty)


@jira.command("attachments")
@click.argument("issue_key")
@pass_cli
@handle_cli_errors
def list_attachments(cli: CliContext, issue_key: str) -> None:
    """List the attachments of an issue."""
    emit(cli.jira().get_attachments(issue_key), cli.pretty)


@jira.command("download")
@click.argument("attachment_id")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Target file (default: the attachment filename)",
)
@pass_cli
@handle_cli_errors
def download(cli: CliContext, attachment_id: str, output_path: str | None) -> None:
    """Download an attachment."""
    emit(cli.jira().download_attachment(attachment_id, output_path), cli.pretty)


@jira.command("users")
@click.argument("query")
@click.option("--limit", type=click.IntRange(min=1), default=50, show_default=True)
@pass_cli
@handle_cli_errors
def search_users(cli: CliContext, query: str, limit: int) -> None:
    """Search users by name or email."""
    emit(cli.jira().search_users(query, limit=limit), cli.pretty)
