"""Base client module for Confluence API interactions."""

import logging
from typing import Any

from atlassian import Confluence

from ..config import ResolvedConfig
from ..filtering import apply_response_filter
from ..utils.transport import call_api

# Configure logging
logger = logging.getLogger("atlassian-cli.confluence")


class ConfluenceClient:
    """Base client for Confluence Cloud API interactions (v1 search, v2 pages)."""

    config: ResolvedConfig

    def __init__(self, config: ResolvedConfig) -> None:
        """Initialize the Confluence client.

        Args:
            config: The resolved configuration for this invocation
        """
        self.config = config
        self.confluence = Confluence(
            url=config.wiki_url,
            username=config.email,
            password=config.token,
            cloud=True,
            timeout=config.timeout_seconds,
        )
        logger.debug(f"Confluence client initialized for {config.wiki_url}")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Perform a request, raising TransportError on failure."""
        return call_api(
            self.confluence, method, path, base_url=self.config.wiki_url, **kwargs
        )

    def _filtered(self, data: Any) -> Any:
        """Strip the configured response_exclude_fields from a response."""
        return apply_response_filter(data, self.config)
