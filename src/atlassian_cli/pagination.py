"""Multi-page result collection.

Jira pages with an opaque ``nextPageToken``; Confluence pages with a
``_links.next`` link. Both are wrapped as a PageCursor so that one loop
serves every paginated command.
"""

import enum
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from .exceptions import UsageError
from .models import SearchResult

logger = logging.getLogger("atlassian-cli.pagination")

# Upper bound on pages fetched by one command
MAX_PAGES = 1000


@dataclass(frozen=True)
class PageCursor:
    """Continuation marker for the next page: a link or an opaque token."""

    kind: Literal["link", "token"]
    value: str

    @classmethod
    def link(cls, value: str | None) -> "PageCursor | None":
        return cls("link", value) if value else None

    @classmethod
    def token(cls, value: str | None) -> "PageCursor | None":
        return cls("token", value) if value else None


class CollectMode(enum.Enum):
    SINGLE = "single"
    ALL = "all"
    STREAM = "stream"

    @classmethod
    def from_flags(cls, fetch_all: bool, stream: bool) -> "CollectMode":
        """
        Select the mode from the ``--all``/``--stream`` flags.

        Raises:
            UsageError: If streaming is requested without ``--all``
        """
        if stream and not fetch_all:
            raise UsageError("--stream requires --all")
        if stream:
            return cls.STREAM
        return cls.ALL if fetch_all else cls.SINGLE


FetchPage = Callable[[PageCursor | None], tuple[Sequence[Any], PageCursor | None]]


def collect(
    fetch_page: FetchPage,
    mode: CollectMode,
    delay_ms: int = 0,
    on_page: Callable[[int, Sequence[Any]], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
    max_pages: int = MAX_PAGES,
) -> SearchResult:
    """
    Fetch one or more pages and gather their items.

    Args:
        fetch_page: Performs one request for the given cursor (None first) and
            returns the page items and the cursor for the next page
        mode: SINGLE fetches one page; ALL buffers every page; STREAM hands
            each page to ``on_page`` without buffering it
        delay_ms: Pause between page requests
        on_page: Called with the page number and items of each non-empty
            page in ALL and STREAM modes
        sleep: Sleep function, replaceable in tests
        max_pages: Stop after this many pages

    Returns:
        SearchResult with the buffered items (empty in STREAM mode) and the
        number of items seen

    Raises:
        Any error raised by ``fetch_page``; pages already handed to
        ``on_page`` stay emitted.
    """
    if mode is CollectMode.SINGLE:
        items, _ = fetch_page(None)
        items = list(items)
        return SearchResult(items=items, total=len(items))

    buffered: list[Any] = []
    seen = 0
    cursor: PageCursor | None = None
    page_number = 0

    while True:
        page_number += 1
        items, cursor = fetch_page(cursor)
        items = list(items)
        seen += len(items)
        if items:
            if on_page is not None:
                on_page(page_number, items)
            if mode is CollectMode.ALL:
                buffered.extend(items)

        if cursor is None or not items:
            break
        if page_number >= max_pages:
            logger.warning(
                f"Stopped after {max_pages} pages; results may be incomplete"
            )
            break
        if delay_ms > 0:
            sleep(delay_ms / 1000)

    logger.debug(f"Collected {seen} items from {page_number} pages")
    return SearchResult(items=buffered, total=seen)
