"""
Simplified views of Jira issues, comments and attachments.
"""

import logging
from typing import Any

from pydantic import Field

from ..preprocessing import adf_to_markdown, inject_attachment_ids
from .base import ApiModel

logger = logging.getLogger("atlassian-cli.models")


def _nested(data: dict[str, Any], field: str, key: str) -> Any:
    value = data.get(field)
    return value.get(key) if isinstance(value, dict) else None


def _render_document(
    value: Any, as_markdown: bool, attachments: list[dict[str, Any]] | None = None
) -> Any:
    if not as_markdown:
        return value
    if isinstance(value, dict):
        return adf_to_markdown(value, attachments)
    if isinstance(value, str) and attachments:
        return inject_attachment_ids(value, attachments)
    return value


class JiraAttachment(ApiModel):
    """An issue attachment, with its download URL."""

    id: str | None = None
    filename: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    size: int | None = None
    content: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraAttachment":
        if not isinstance(data, dict):
            logger.debug("Received non-dictionary attachment data")
            return cls()
        attachment_id = data.get("id")
        return cls(
            id=str(attachment_id) if attachment_id is not None else None,
            filename=data.get("filename"),
            mime_type=data.get("mimeType"),
            size=data.get("size"),
            content=data.get("content"),
        )


class JiraComment(ApiModel):
    """An issue comment with the author reduced to a display name."""

    id: str | None = None
    author: str | None = None
    body: Any = None
    created: str | None = None
    updated: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraComment":
        """
        Create a JiraComment from a Jira API response.

        Args:
            data: The comment data from the Jira API
            **kwargs: ``as_markdown`` renders an ADF body as Markdown;
                ``attachments`` fills ids into media placeholders

        Returns:
            A JiraComment instance
        """
        if not isinstance(data, dict):
            return cls()
        comment_id = data.get("id")
        return cls(
            id=str(comment_id) if comment_id is not None else None,
            author=_nested(data, "author", "displayName"),
            body=_render_document(
                data.get("body"),
                kwargs.get("as_markdown", False),
                kwargs.get("attachments"),
            ),
            created=data.get("created"),
            updated=data.get("updated"),
        )


class JiraIssueView(ApiModel):
    """The compact issue view printed by ``jira get``."""

    key: str | None = None
    summary: str | None = None
    type: str | None = None
    status: str | None = None
    priority: str | None = None
    assignee: str | None = None
    reporter: str | None = None
    project: str | None = None
    created: str | None = None
    updated: str | None = None
    description: Any = None
    attachments: list[JiraAttachment] = Field(default_factory=list)
    comments: list[JiraComment] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraIssueView":
        """
        Create the issue view from an issue response and its comments.

        Args:
            data: The issue data from the Jira API
            **kwargs: ``as_markdown`` (bool) and ``comments`` (raw comment list)

        Returns:
            A JiraIssueView instance
        """
        if not isinstance(data, dict):
            return cls()
        as_markdown = kwargs.get("as_markdown", False)
        fields = data.get("fields") or {}

        attachments = [
            JiraAttachment.from_api_response(item)
            for item in fields.get("attachment") or []
        ]
        attachment_dicts = [a.to_simplified_dict() for a in attachments]
        comments = [
            JiraComment.from_api_response(
                item, as_markdown=as_markdown, attachments=attachment_dicts
            )
            for item in kwargs.get("comments") or []
        ]

        return cls(
            key=data.get("key"),
            summary=fields.get("summary"),
            type=_nested(fields, "issuetype", "name"),
            status=_nested(fields, "status", "name"),
            priority=_nested(fields, "priority", "name"),
            assignee=_nested(fields, "assignee", "displayName"),
            reporter=_nested(fields, "reporter", "displayName"),
            project=_nested(fields, "project", "name"),
            created=fields.get("created"),
            updated=fields.get("updated"),
            description=_render_document(
                fields.get("description"), as_markdown, attachment_dicts
            ),
            attachments=attachments,
            comments=comments,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Every scalar key is always present; attachments only when there are any."""
        result = self.model_dump(exclude={"attachments", "comments"})
        if self.attachments:
            result["attachments"] = [a.to_simplified_dict() for a in self.attachments]
        result["comments"] = [c.to_simplified_dict() for c in self.comments]
        return result
