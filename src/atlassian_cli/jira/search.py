"""Module for Jira search operations."""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..filtering import resolve_search_fields
from ..models import SearchResult
from ..pagination import CollectMode, PageCursor, collect
from ..preprocessing import adf_to_markdown
from ..query import apply_projects_filter
from .client import JiraClient
from .constants import MAX_RESULTS_PER_PAGE, SEARCH_PATH

logger = logging.getLogger("atlassian-cli.jira")


def issue_to_markdown(issue: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the issue with an ADF description rendered as Markdown."""
    fields = issue.get("fields")
    if not isinstance(fields, dict) or not isinstance(fields.get("description"), dict):
        return issue
    return {
        **issue,
        "fields": {**fields, "description": adf_to_markdown(fields["description"])},
    }


class SearchMixin(JiraClient):
    """Mixin for Jira search operations."""

    def search_issues(
        self,
        jql: str,
        limit: int = 50,
        fields: Sequence[str] | None = None,
        as_markdown: bool = False,
        mode: CollectMode = CollectMode.SINGLE,
        on_page: Callable[[int, Sequence[Any]], None] | None = None,
    ) -> SearchResult:
        """
        Search for issues using JQL (Jira Query Language).

        The query is scoped to the configured projects filter, and the
        requested fields follow the caller, then the configuration, then the
        built-in defaults.

        Args:
            jql: JQL query string
            limit: Maximum issues to return in single-page mode
            fields: Fields to return; overrides every configured default
            as_markdown: Render issue descriptions as Markdown
            mode: Single page, all pages buffered, or all pages streamed
            on_page: Receives the page number and issues of each page

        Returns:
            SearchResult with the issues and their count

        Raises:
            TransportError: If a page request fails
        """
        final_jql = apply_projects_filter(jql, self.config)
        if final_jql != jql:
            logger.info(f"Applied projects filter to query: {final_jql}")
        resolved_fields = resolve_search_fields(fields, self.config, as_markdown)
        page_size = limit if mode is CollectMode.SINGLE else MAX_RESULTS_PER_PAGE

        def fetch_page(
            cursor: PageCursor | None,
        ) -> tuple[list[dict[str, Any]], PageCursor | None]:
            body: dict[str, Any] = {
                "jql": final_jql,
                "maxResults": page_size,
                "fields": list(resolved_fields),
            }
            if cursor is not None:
                body["nextPageToken"] = cursor.value
            data = self._filtered(self._request("post", SEARCH_PATH, json=body)) or {}
            issues = data.get("issues") or []
            if as_markdown:
                issues = [issue_to_markdown(issue) for issue in issues]
            return issues, PageCursor.token(data.get("nextPageToken"))

        return collect(
            fetch_page,
            mode,
            delay_ms=self.config.rate_limit_delay_ms,
            on_page=on_page,
        )
