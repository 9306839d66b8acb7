"""Module for Jira user operations."""

import logging
from typing import Any

from .client import JiraClient

logger = logging.getLogger("atlassian-cli.jira")


class UsersMixin(JiraClient):
    """Mixin for Jira user operations."""

    def search_users(self, query: str, limit: int = 50) -> list[dict[str, Any]]:
        """
        Find users by name or email.

        Args:
            query: Text matched against display name and email
            limit: Maximum users to return

        Returns:
            The matching user records
        """
        users = self._request(
            "get",
            "rest/api/3/user/search",
            params={"query": query, "maxResults": limit},
        )
        return self._filtered(users or [])
