"""Module for Confluence search operations."""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..models import SearchResult
from ..pagination import CollectMode, PageCursor, collect
from ..preprocessing import storage_to_markdown
from ..query import apply_spaces_filter
from .client import ConfluenceClient
from .constants import MAX_SEARCH_LIMIT, SEARCH_PATH
from .fields import expand_param
from .utils import build_next_url

logger = logging.getLogger("atlassian-cli.confluence")


def storage_body_to_markdown(content: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a content object whose storage body is Markdown."""
    body = content.get("body")
    storage = body.get("storage") if isinstance(body, dict) else None
    if not isinstance(storage, dict) or not isinstance(storage.get("value"), str):
        return content
    return {**content, "body": {"markdown": storage_to_markdown(storage["value"])}}


def search_result_to_markdown(item: dict[str, Any]) -> dict[str, Any]:
    content = item.get("content")
    if isinstance(content, dict):
        return {**item, "content": storage_body_to_markdown(content)}
    return storage_body_to_markdown(item)


class SearchMixin(ConfluenceClient):
    """Mixin for Confluence search operations."""

    def search(
        self,
        cql: str,
        limit: int = 25,
        expand: Sequence[str] | None = None,
        include_all_fields: bool = False,
        as_markdown: bool = False,
        mode: CollectMode = CollectMode.SINGLE,
        on_page: Callable[[int, Sequence[Any]], None] | None = None,
    ) -> SearchResult:
        """
        Search content using CQL (Confluence Query Language).

        Args:
            cql: Confluence Query Language string
            limit: Maximum results to return in single-page mode
            expand: Extra expand values added to the defaults
            include_all_fields: Expand space, history and metadata as well
            as_markdown: Render storage bodies as Markdown
            mode: Single page, all pages buffered, or all pages streamed
            on_page: Receives the page number and results of each page

        Returns:
            SearchResult with the matching content

        Raises:
            TransportError: If a page request fails
        """
        final_cql = apply_spaces_filter(cql, self.config)
        if final_cql != cql:
            logger.info(f"Applied spaces filter to query: {final_cql}")
        page_size = MAX_SEARCH_LIMIT if mode is not CollectMode.SINGLE else limit
        params = {
            "cql": final_cql,
            "limit": min(page_size, MAX_SEARCH_LIMIT),
            "expand": expand_param(include_all_fields, expand),
        }

        def fetch_page(
            cursor: PageCursor | None,
        ) -> tuple[list[dict[str, Any]], PageCursor | None]:
            if cursor is None:
                data = self._request("get", SEARCH_PATH, params=params)
            else:
                data = self._request("get", cursor.value, absolute=True)
            data = self._filtered(data or {})
            results = data.get("results") or []
            if as_markdown:
                results = [search_result_to_markdown(item) for item in results]
            return results, PageCursor.link(build_next_url(data.get("_links")))

        return collect(
            fetch_page,
            mode,
            delay_ms=self.config.rate_limit_delay_ms,
            on_page=on_page,
        )
