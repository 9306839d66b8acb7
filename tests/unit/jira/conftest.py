"""Test fixtures for Jira unit tests."""

from unittest.mock import MagicMock, patch

import pytest

from atlassian_cli.jira import JiraFetcher


@pytest.fixture
def mock_atlassian_jira():
    """Patch the atlassian Jira class and yield the instance it returns."""
    with patch("atlassian_cli.jira.client.Jira") as mock_jira_class:
        mock_jira = MagicMock()
        mock_jira_class.return_value = mock_jira
        yield mock_jira


@pytest.fixture
def jira_fetcher(config, mock_atlassian_jira):
    """A JiraFetcher whose HTTP client is a MagicMock."""
    return JiraFetcher(config)
