"""Module for Confluence page operations."""

import logging
from typing import Any

from ..exceptions import TransportError
from .client import ConfluenceClient
from .constants import PAGES_PATH, SPACES_PATH
from .fields import v2_params
from .search import storage_body_to_markdown

logger = logging.getLogger("atlassian-cli.confluence")


class PagesMixin(ConfluenceClient):
    """Mixin for Confluence page operations."""

    def _page_params(
        self,
        include_all_fields: bool = False,
        additional_includes: list[str] | None = None,
    ) -> dict[str, str]:
        return v2_params(
            self.config.confluence_custom_includes,
            include_all_fields,
            additional_includes,
        )

    def get_page(
        self,
        page_id: str,
        as_markdown: bool = False,
        include_all_fields: bool = False,
        additional_includes: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Get a page by id.

        Args:
            page_id: The page id
            as_markdown: Replace the storage body with Markdown
            include_all_fields: Include labels, properties and operations
            additional_includes: Extra v2 ``include-*`` flags for this call

        Returns:
            The page object
        """
        params = self._page_params(include_all_fields, additional_includes)
        page = self._request("get", f"{PAGES_PATH}/{page_id}", params=params) or {}
        if as_markdown:
            page = storage_body_to_markdown(page)
        return self._filtered(page)

    def get_page_children(self, page_id: str) -> dict[str, Any]:
        """List the direct child pages of a page."""
        data = self._request(
            "get", f"{PAGES_PATH}/{page_id}/children", params=self._page_params()
        ) or {}
        return self._filtered({"items": data.get("results") or []})

    def _space_id(self, space_key: str) -> str:
        url = SPACES_PATH
        data = self._request("get", url, params={"keys": space_key}) or {}
        results = data.get("results") or []
        if not results or not results[0].get("id"):
            raise TransportError(
                "get",
                f"{self.config.wiki_url}/{url}?keys={space_key}",
                message=f"Space not found: {space_key}",
            )
        return str(results[0]["id"])

    def create_page(self, space_key: str, title: str, content: str) -> dict[str, Any]:
        """
        Create a page in a space.

        Args:
            space_key: The key of the target space
            title: The page title
            content: The page body in storage format

        Returns:
            The id and title of the created page
        """
        body = {
            "spaceId": self._space_id(space_key),
            "status": "current",
            "title": title,
            "body": {"representation": "storage", "value": content},
        }
        data = self._request(
            "post", PAGES_PATH, json=body, params=self._page_params()
        ) or {}
        logger.info(f"Created page {data.get('id')} in space {space_key}")
        return {"id": data.get("id"), "title": data.get("title")}

    def update_page(self, page_id: str, title: str, content: str) -> dict[str, Any]:
        """
        Replace the title and body of a page, bumping its version.

        Args:
            page_id: The page id
            title: The new title
            content: The new body in storage format

        Returns:
            The page id and its new version number
        """
        current = self._request(
            "get", f"{PAGES_PATH}/{page_id}", params={"include-version": "true"}
        ) or {}
        version = ((current.get("version") or {}).get("number")) or 0

        body = {
            "id": page_id,
            "status": "current",
            "title": title,
            "body": {"representation": "storage", "value": content},
            "version": {"number": version + 1},
        }
        data = self._request(
            "put", f"{PAGES_PATH}/{page_id}", data=body, params=self._page_params()
        ) or {}
        new_version = (data.get("version") or {}).get("number", version + 1)
        logger.info(f"Updated page {page_id} to version {new_version}")
        return {"id": data.get("id", page_id), "version": new_version}
