"""Module for Jira transition operations."""

import logging
from typing import Any

from ..filtering import apply_field_filtering_to_params
from .client import JiraClient

logger = logging.getLogger("atlassian-cli.jira")


class TransitionsMixin(JiraClient):
    """Mixin for Jira transition operations."""

    def get_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        """Get the transitions currently available for an issue."""
        data = self._request(
            "get",
            f"rest/api/3/issue/{issue_key}/transitions",
            params=apply_field_filtering_to_params(),
        )
        data = self._filtered(data or {})
        return data.get("transitions") or []

    def transition_issue(self, issue_key: str, transition_id: str) -> dict[str, Any]:
        """
        Move an issue through a workflow transition.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            transition_id: The id of one of the available transitions

        Returns:
            An empty dictionary on success
        """
        self._request(
            "post",
            f"rest/api/3/issue/{issue_key}/transitions",
            json={"transition": {"id": str(transition_id)}},
        )
        logger.info(f"Transitioned {issue_key} with transition {transition_id}")
        return {}
