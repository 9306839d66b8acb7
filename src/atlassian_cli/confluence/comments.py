"""Module for Confluence comment operations."""

import logging
from typing import Any

from .client import ConfluenceClient
from .constants import PAGES_PATH
from .fields import v2_params
from .search import storage_body_to_markdown

logger = logging.getLogger("atlassian-cli.confluence")


class CommentsMixin(ConfluenceClient):
    """Mixin for Confluence comment operations."""

    def get_page_comments(self, page_id: str, as_markdown: bool = False) -> dict[str, Any]:
        """
        Get the footer comments of a page.

        Args:
            page_id: The page id
            as_markdown: Replace comment storage bodies with Markdown

        Returns:
            ``{"items": [...]}``
        """
        data = self._request(
            "get",
            f"{PAGES_PATH}/{page_id}/footer-comments",
            params=v2_params(self.config.confluence_custom_includes),
        ) or {}
        comments = data.get("results") or []
        if as_markdown:
            comments = [storage_body_to_markdown(comment) for comment in comments]
        return self._filtered({"items": comments})
