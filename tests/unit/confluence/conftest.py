"""Test fixtures for Confluence unit tests."""

from unittest.mock import MagicMock, patch

import pytest

from atlassian_cli.confluence import ConfluenceFetcher


@pytest.fixture
def mock_atlassian_confluence():
    """Patch the atlassian Confluence class and yield the instance it returns."""
    with patch("atlassian_cli.confluence.client.Confluence") as mock_confluence_class:
        mock_confluence = MagicMock()
        mock_confluence_class.return_value = mock_confluence
        yield mock_confluence


@pytest.fixture
def confluence_fetcher(config, mock_atlassian_confluence):
    """A ConfluenceFetcher whose HTTP client is a MagicMock."""
    return ConfluenceFetcher(config)


@pytest.fixture
def storage_page():
    return {
        "id": "123",
        "title": "Home",
        "version": {"number": 4},
        "body": {
            "storage": {
                "representation": "storage",
                "value": "<h2>Intro</h2><p>Welcome <strong>all</strong></p>",
            }
        },
    }
