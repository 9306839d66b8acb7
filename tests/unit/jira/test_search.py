"""Tests for the Jira search mixin."""

from unittest.mock import MagicMock, patch

import pytest

from atlassian_cli.constants import DEFAULT_SEARCH_FIELDS
from atlassian_cli.jira import JiraFetcher
from atlassian_cli.jira.constants import MAX_RESULTS_PER_PAGE, SEARCH_PATH
from atlassian_cli.pagination import CollectMode


def issue(key, description=None):
    fields = {"summary": f"Issue {key}", "status": {"name": "Open"}}
    if description is not None:
        fields["description"] = description
    return {"id": key.split("-")[1], "key": key, "fields": fields}


class TestSearchIssues:
    def test_single_page(self, jira_fetcher, mock_atlassian_jira):
        mock_atlassian_jira.post.return_value = {
            "issues": [issue("PROJ-1")],
            "nextPageToken": "next",
        }

        result = jira_fetcher.search_issues("status = Open", limit=10)

        assert result.total == 1
        assert result.items[0]["key"] == "PROJ-1"
        mock_atlassian_jira.post.assert_called_once_with(
            SEARCH_PATH,
            json={
                "jql": "status = Open",
                "maxResults": 10,
                "fields": list(DEFAULT_SEARCH_FIELDS),
            },
        )

    def test_projects_filter_applied(self, make_config, mock_atlassian_jira):
        fetcher = JiraFetcher(make_config(projects_filter=("PROJ", "OPS")))
        mock_atlassian_jira.post.return_value = {"issues": []}

        fetcher.search_issues("status = Open ORDER BY created DESC")

        body = mock_atlassian_jira.post.call_args.kwargs["json"]
        assert body["jql"] == (
            "project IN (PROJ,OPS) AND (status = Open) ORDER BY created DESC"
        )

    def test_explicit_fields(self, jira_fetcher, mock_atlassian_jira):
        mock_atlassian_jira.post.return_value = {"issues": []}
        jira_fetcher.search_issues("x = 1", fields=["key", "summary", "key"])
        body = mock_atlassian_jira.post.call_args.kwargs["json"]
        assert body["fields"] == ["key", "summary", "key"]

    def test_markdown_converts_descriptions(self, jira_fetcher, mock_atlassian_jira):
        description = {
            "type": "doc",
            "version": 1,
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Hi"}]}],
        }
        mock_atlassian_jira.post.return_value = {"issues": [issue("PROJ-1", description)]}

        result = jira_fetcher.search_issues("x = 1", as_markdown=True)

        body = mock_atlassian_jira.post.call_args.kwargs["json"]
        assert "description" in body["fields"]
        assert result.items[0]["fields"]["description"] == "Hi"

    def test_all_pages_follow_token(self, make_config, mock_atlassian_jira):
        fetcher = JiraFetcher(make_config(rate_limit_delay_ms=0))
        mock_atlassian_jira.post.side_effect = [
            {"issues": [issue("PROJ-1"), issue("PROJ-2")], "nextPageToken": "t1"},
            {"issues": [issue("PROJ-3")]},
        ]
        pages = []

        result = fetcher.search_issues(
            "x = 1",
            mode=CollectMode.ALL,
            on_page=lambda n, items: pages.append(len(items)),
        )

        assert [i["key"] for i in result.items] == ["PROJ-1", "PROJ-2", "PROJ-3"]
        assert result.total == 3
        assert pages == [2, 1]
        first, second = mock_atlassian_jira.post.call_args_list
        assert first.kwargs["json"]["maxResults"] == MAX_RESULTS_PER_PAGE
        assert "nextPageToken" not in first.kwargs["json"]
        assert second.kwargs["json"]["nextPageToken"] == "t1"

    def test_delay_between_pages(self, make_config, mock_atlassian_jira):
        fetcher = JiraFetcher(make_config(rate_limit_delay_ms=150))
        mock_atlassian_jira.post.side_effect = [
            {"issues": [issue("PROJ-1")], "nextPageToken": "t1"},
            {"issues": [issue("PROJ-2")]},
        ]
        with patch("atlassian_cli.pagination.time.sleep") as mock_sleep:
            fetcher.search_issues("x = 1", mode=CollectMode.ALL)
        mock_sleep.assert_called_once_with(0.15)

    def test_stream_does_not_buffer(self, jira_fetcher, mock_atlassian_jira):
        mock_atlassian_jira.post.side_effect = [
            {"issues": [issue("PROJ-1")], "nextPageToken": "t1"},
            {"issues": [issue("PROJ-2")]},
        ]
        on_page = MagicMock()

        result = jira_fetcher.search_issues("x = 1", mode=CollectMode.STREAM, on_page=on_page)

        assert result.items == []
        assert result.total == 2
        assert on_page.call_count == 2

    def test_response_exclusions(self, make_config, mock_atlassian_jira):
        fetcher = JiraFetcher(make_config(response_exclude_fields=frozenset({"avatarUrls"})))
        mock_atlassian_jira.post.return_value = {
            "issues": [
                {
                    "key": "PROJ-1",
                    "fields": {"assignee": {"displayName": "A", "avatarUrls": {"16x16": "u"}}},
                }
            ]
        }

        result = fetcher.search_issues("x = 1")

        assert result.items[0]["fields"]["assignee"] == {"displayName": "A"}


@pytest.mark.parametrize("limit", [1, 50])
def test_limit_passed_through(jira_fetcher, mock_atlassian_jira, limit):
    mock_atlassian_jira.post.return_value = {"issues": []}
    jira_fetcher.search_issues("x = 1", limit=limit)
    assert mock_atlassian_jira.post.call_args.kwargs["json"]["maxResults"] == limit
