"""JSON output on stdout; progress and totals on stderr."""

import json
from collections.abc import Callable, Sequence
from typing import Any

import click

from ..models import SearchResult
from ..pagination import CollectMode


def render(data: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def emit(data: Any, pretty: bool = False) -> None:
    """Write one JSON value to stdout."""
    click.echo(render(data, pretty))


def progress(message: str) -> None:
    click.echo(message, err=True)


def page_handler(
    mode: CollectMode, noun: str
) -> Callable[[int, Sequence[Any]], None] | None:
    """
    Build the per-page callback for a paginated command.

    In stream mode each item is written to stdout as one JSON line as soon as
    its page arrives; in all mode only progress is reported.
    """
    if mode is CollectMode.SINGLE:
        return None

    def on_page(page_number: int, items: Sequence[Any]) -> None:
        if mode is CollectMode.STREAM:
            for item in items:
                click.echo(render(item))
        progress(f"Page {page_number}: {len(items)} {noun}")

    return on_page


def emit_result(
    result: SearchResult, mode: CollectMode, noun: str, pretty: bool = False
) -> None:
    """Finish a paginated command: the buffered result, or the streamed total."""
    if mode is CollectMode.STREAM:
        progress(f"Total: {result.total} {noun} fetched")
        return
    if mode is CollectMode.ALL:
        progress(f"Total: {result.total} {noun} fetched")
    emit(result.to_simplified_dict(), pretty)
