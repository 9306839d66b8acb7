"""Module for Jira issue operations."""

import logging
from typing import Any

from ..filtering import apply_field_filtering_to_params
from ..models import JiraIssueView
from ..preprocessing import parse_input_argument, process_input
from .client import JiraClient

logger = logging.getLogger("atlassian-cli.jira")

ISSUE_VIEW_FIELDS = (
    "summary,description,status,priority,issuetype,assignee,reporter,"
    "project,created,updated,attachment"
)


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations."""

    def get_issue(self, issue_key: str, as_markdown: bool = False) -> dict[str, Any]:
        """
        Get the simplified view of an issue with its attachments and comments.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            as_markdown: Render the description and comments as Markdown,
                with attachment ids filled into media placeholders

        Returns:
            The simplified issue dictionary
        """
        issue = self._request(
            "get", f"rest/api/3/issue/{issue_key}", params={"fields": ISSUE_VIEW_FIELDS}
        )
        comments = self._request("get", f"rest/api/3/issue/{issue_key}/comment") or {}
        view = JiraIssueView.from_api_response(
            issue or {},
            as_markdown=as_markdown,
            comments=comments.get("comments"),
        )
        return self._filtered(view.to_simplified_dict())

    def create_issue(
        self,
        project_key: str,
        summary: str,
        issue_type: str,
        description: str | dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Create a new issue.

        Args:
            project_key: The key of the project
            summary: The issue summary
            issue_type: The issue type name (e.g. 'Task', 'Bug')
            description: Plain text, an ADF document, or ADF JSON text

        Returns:
            The key and id of the created issue

        Raises:
            ConversionError: If the description is not text or a valid ADF doc
            TransportError: If the API rejects the request
        """
        if isinstance(description, str):
            description_adf = parse_input_argument(description, "description")
        else:
            description_adf = process_input(description, "description")

        body = {
            "fields": {
                "project": {"key": project_key},
                "summary": summary,
                "issuetype": {"name": issue_type},
                "description": description_adf,
            }
        }
        result = self._request(
            "post",
            "rest/api/3/issue",
            json=body,
            params=apply_field_filtering_to_params(),
        ) or {}
        logger.info(f"Created issue {result.get('key')}")
        return {"key": result.get("key"), "id": result.get("id")}

    def update_issue(self, issue_key: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Update issue fields.

        A ``description`` given as text or ADF JSON text is converted to ADF.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            fields: Field values keyed by field id

        Returns:
            An empty dictionary on success
        """
        fields = dict(fields)
        if "description" in fields:
            description = fields["description"]
            if isinstance(description, str):
                fields["description"] = parse_input_argument(description, "description")
            else:
                fields["description"] = process_input(description, "description")

        self._request("put", f"rest/api/3/issue/{issue_key}", data={"fields": fields})
        logger.info(f"Updated issue {issue_key}")
        return {}
