"""
Pydantic models for atlassian-cli output.
"""

from .base import ApiModel
from .jira import JiraAttachment, JiraComment, JiraIssueView
from .search import SearchResult

__all__ = [
    "ApiModel",
    "JiraAttachment",
    "JiraComment",
    "JiraIssueView",
    "SearchResult",
]
