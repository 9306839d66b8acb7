"""Base client module for Jira API interactions."""

import logging
from typing import Any

from atlassian import Jira

from ..config import ResolvedConfig
from ..filtering import apply_response_filter
from ..utils.transport import call_api
from .constants import MYSELF_PATH

# Configure logging
logger = logging.getLogger("atlassian-cli.jira")


class JiraClient:
    """Base client for Jira Cloud REST API v3 interactions."""

    config: ResolvedConfig

    def __init__(self, config: ResolvedConfig) -> None:
        """Initialize the Jira client.

        Args:
            config: The resolved configuration for this invocation
        """
        self.config = config
        self.jira = Jira(
            url=config.base_url,
            username=config.email,
            password=config.token,
            cloud=True,
            timeout=config.timeout_seconds,
        )
        logger.debug(f"Jira client initialized for {config.base_url}")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Perform a request, raising TransportError on failure."""
        return call_api(
            self.jira, method, path, base_url=self.config.base_url, **kwargs
        )

    def _filtered(self, data: Any) -> Any:
        """Strip the configured response_exclude_fields from a response."""
        return apply_response_filter(data, self.config)

    def get_myself(self) -> dict[str, Any]:
        """Return the authenticated user, used to validate credentials."""
        return self._request("get", MYSELF_PATH)
