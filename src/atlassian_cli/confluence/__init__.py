"""Confluence API module for atlassian-cli.

This module provides the Confluence client and its operation mixins.
"""

from .client import ConfluenceClient
from .comments import CommentsMixin
from .pages import PagesMixin
from .search import SearchMixin


class ConfluenceFetcher(SearchMixin, PagesMixin, CommentsMixin):
    """Main entry point for Confluence operations.

    This class combines functionality from various mixins:
    - SearchMixin: CQL search with single-page, buffered and streamed modes
    - PagesMixin: Page retrieval, children, creation and update
    - CommentsMixin: Footer comments
    """

    pass


__all__ = ["ConfluenceFetcher", "ConfluenceClient"]
