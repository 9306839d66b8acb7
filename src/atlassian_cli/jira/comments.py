"""Module for Jira comment operations."""

import logging
from typing import Any

from ..models import JiraComment
from ..preprocessing import parse_input_argument
from .client import JiraClient

logger = logging.getLogger("atlassian-cli.jira")


class CommentsMixin(JiraClient):
    """Mixin for Jira comment operations."""

    def get_issue_comments(
        self, issue_key: str, as_markdown: bool = False
    ) -> dict[str, Any]:
        """
        Get the comments of an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            as_markdown: Render comment bodies as Markdown

        Returns:
            ``{"comments": [...], "total": n}``
        """
        data = self._request("get", f"rest/api/3/issue/{issue_key}/comment") or {}
        comments = [
            JiraComment.from_api_response(item, as_markdown=as_markdown).to_simplified_dict()
            for item in data.get("comments") or []
        ]
        return self._filtered({"comments": comments, "total": len(comments)})

    def add_comment(self, issue_key: str, comment: str) -> dict[str, Any]:
        """
        Add a comment to an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            comment: Plain text or ADF JSON text

        Returns:
            The id of the created comment
        """
        body = {"body": parse_input_argument(comment, "comment")}
        result = self._request(
            "post", f"rest/api/3/issue/{issue_key}/comment", json=body
        ) or {}
        logger.info(f"Added comment {result.get('id')} to {issue_key}")
        return {"id": result.get("id")}

    def update_comment(
        self, issue_key: str, comment_id: str, comment: str
    ) -> dict[str, Any]:
        """
        Replace the body of an existing comment.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            comment_id: The comment id
            comment: Plain text or ADF JSON text

        Returns:
            The id of the updated comment
        """
        body = {"body": parse_input_argument(comment, "comment")}
        result = self._request(
            "put", f"rest/api/3/issue/{issue_key}/comment/{comment_id}", data=body
        ) or {}
        return {"id": result.get("id", comment_id)}
