"""Attachment operations for Jira API client."""

import logging
import os
from pathlib import Path
from typing import Any

from ..exceptions import TransportError
from ..models import JiraAttachment
from .client import JiraClient

logger = logging.getLogger("atlassian-cli.jira")


class AttachmentsMixin(JiraClient):
    """Mixin for Jira attachment operations."""

    def get_attachments(self, issue_key: str) -> list[dict[str, Any]]:
        """List the attachments of an issue."""
        data = self._request(
            "get", f"rest/api/3/issue/{issue_key}", params={"fields": "attachment"}
        ) or {}
        attachments = (data.get("fields") or {}).get("attachment") or []
        return [
            JiraAttachment.from_api_response(item).to_simplified_dict()
            for item in attachments
        ]

    def download_attachment(
        self, attachment_id: str, output_path: str | Path | None = None
    ) -> dict[str, Any]:
        """
        Download an attachment to disk.

        The attachment metadata supplies the content URL and the default
        filename.

        Args:
            attachment_id: The attachment id
            output_path: Target file; defaults to the attachment filename in
                the current directory

        Returns:
            The filename, path, size and id of the downloaded attachment

        Raises:
            TransportError: If the metadata has no content URL or a request fails
        """
        metadata = self._request("get", f"rest/api/3/attachment/{attachment_id}") or {}
        content_url = metadata.get("content")
        if not content_url:
            raise TransportError(
                "get",
                f"{self.config.base_url}/rest/api/3/attachment/{attachment_id}",
                message="No content URL in attachment metadata",
            )
        filename = metadata.get("filename") or "attachment"

        content = self._request(
            "get", content_url, absolute=True, not_json_response=True
        ) or b""

        target = Path(output_path) if output_path else Path.cwd() / filename
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(content)
        logger.info(f"Downloaded attachment {attachment_id} to {target}")

        return {
            "filename": filename,
            "path": os.fspath(target),
            "size": len(content),
            "id": attachment_id,
        }
