"""Jira API module for atlassian-cli.

This module provides the Jira client and its operation mixins.
"""

from .attachments import AttachmentsMixin
from .client import JiraClient
from .comments import CommentsMixin
from .issues import IssuesMixin
from .search import SearchMixin
from .transitions import TransitionsMixin
from .users import UsersMixin


class JiraFetcher(
    SearchMixin,
    IssuesMixin,
    CommentsMixin,
    TransitionsMixin,
    AttachmentsMixin,
    UsersMixin,
):
    """
    The main Jira client class providing access to all Jira operations.

    This class inherits from multiple mixins that provide specific functionality:
    - SearchMixin: JQL search with single-page, buffered and streamed modes
    - IssuesMixin: Issue view, creation and update
    - CommentsMixin: Comment listing, creation and update
    - TransitionsMixin: Workflow transitions
    - AttachmentsMixin: Attachment listing and download
    - UsersMixin: User search
    """

    pass


__all__ = ["JiraFetcher", "JiraClient"]
