"""Jira issue tracker integration.

This package provides:
- IssueClient: async REST client for the issue endpoint
- IssueRecord / IssueComment: normalized issue data
- extract_text: rich-text (ADF) flattening
"""

from jira_ai.integrations.jira.adf import NodeKind, classify_node, extract_text
from jira_ai.integrations.jira.client import IssueClient, build_issue_url
from jira_ai.integrations.jira.models import (
    IssueComment,
    IssueRecord,
    issue_record_from_json,
)

__all__ = [
    "IssueClient",
    "IssueComment",
    "IssueRecord",
    "NodeKind",
    "build_issue_url",
    "classify_node",
    "extract_text",
    "issue_record_from_json",
]
