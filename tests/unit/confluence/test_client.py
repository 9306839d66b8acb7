from unittest.mock import patch

from atlassian_cli.confluence import ConfluenceFetcher


def test_client_construction(make_config):
    with patch("atlassian_cli.confluence.client.Confluence") as mock_confluence_class:
        fetcher = ConfluenceFetcher(make_config())

    mock_confluence_class.assert_called_once_with(
        url="https://test.atlassian.net/wiki",
        username="user@example.com",
        password="test_token_value",
        cloud=True,
        timeout=30.0,
    )
    assert fetcher.confluence is mock_confluence_class.return_value
