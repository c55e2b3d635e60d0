"""Normalized Jira issue data and the mapping from raw API JSON.

Jira omits fields freely (unassigned issues,
hidden priority, etc.) and some fields arrive as null or as unexpected
types. Every missing or malformed value degrades to a documented default
string instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Defaults used when the tracker response lacks a field
DEFAULT_KEY = "UNKNOWN"
DEFAULT_TITLE = "No summary"
DEFAULT_STATUS = "Unknown"
DEFAULT_ISSUE_TYPE = "Unknown"
DEFAULT_ASSIGNEE = "Unassigned"
DEFAULT_REPORTER = "Unknown"
DEFAULT_PRIORITY = "N/A"
DEFAULT_AUTHOR = "Unknown"

# Fields requested from the issue endpoint
ISSUE_FIELDS: tuple[str, ...] = (
    "summary",
    "description",
    "comment",
    "status",
    "issuetype",
    "assignee",
    "reporter",
    "priority",
)


@dataclass(frozen=True)
class IssueComment:
    """A single issue comment.

    Attributes:
        author: Display name of the author
        body: Raw body (plain string for API v2, ADF tree for v3)
    """

    author: str
    body: Any = ""


@dataclass(frozen=True)
class IssueRecord:
    """Normalized Jira issue.

    Produced once per fetch and not cached. ``description`` and comment
    bodies keep the raw value from the tracker; flatten them with
    ``extract_text`` when plain text is needed.
    """

    key: str
    title: str = DEFAULT_TITLE
    status: str = DEFAULT_STATUS
    issue_type: str = DEFAULT_ISSUE_TYPE
    assignee: str = DEFAULT_ASSIGNEE
    reporter: str = DEFAULT_REPORTER
    priority: str = DEFAULT_PRIORITY
    description: Any = ""
    comments: tuple[IssueComment, ...] = field(default_factory=tuple)


def safe_nested_get(obj: Any, key: str, default: str) -> str:
    """Safely get a string from an object that might not be a dict.

    Example::

        status_name = safe_nested_get(fields.get("status"), "name", "Unknown")

    instead of ``fields.get("status", {}).get("name")``, which fails when
    status is null.

    Args:
        obj: The object to read (may be None, dict, or other type)
        key: The key to retrieve
        default: Value returned when obj is not a dict or the value is empty

    Returns:
        The value as a string, or default
    """
    if isinstance(obj, dict):
        value = obj.get(key)
        if value is not None and value != "":
            return str(value)
    return default


def _author_name(author: Any) -> str:
    """Resolve a comment author: displayName, then name, then "Unknown"."""
    if isinstance(author, dict):
        for key in ("displayName", "name"):
            value = author.get(key)
            if isinstance(value, str) and value:
                return value
    return DEFAULT_AUTHOR


def _map_comments(raw_comment: Any) -> tuple[IssueComment, ...]:
    if not isinstance(raw_comment, dict):
        return ()
    raw_list = raw_comment.get("comments")
    if not isinstance(raw_list, list):
        return ()
    return tuple(
        IssueComment(author=_author_name(entry.get("author")), body=entry.get("body") or "")
        for entry in raw_list
        if isinstance(entry, dict)
    )


def issue_record_from_json(raw_data: Any, issue_key: str | None = None) -> IssueRecord:
    """Convert a raw Jira issue response to an IssueRecord.

    Handles edge cases gracefully:
    - Empty or non-dict raw_data
    - Missing fields
    - Non-dict values where dicts are expected (e.g., assignee: null)

    Args:
        raw_data: Parsed JSON from GET /rest/api/{2|3}/issue/{key}
        issue_key: Requested key, used when the response has no "key"

    Returns:
        Populated IssueRecord
    """
    data: dict[str, Any] = raw_data if isinstance(raw_data, dict) else {}
    raw_fields = data.get("fields")
    fields: dict[str, Any] = raw_fields if isinstance(raw_fields, dict) else {}

    key = data.get("key")
    if not isinstance(key, str) or not key:
        key = issue_key or DEFAULT_KEY

    summary = fields.get("summary")
    title = summary if isinstance(summary, str) and summary else DEFAULT_TITLE

    return IssueRecord(
        key=key,
        title=title,
        status=safe_nested_get(fields.get("status"), "name", DEFAULT_STATUS),
        issue_type=safe_nested_get(fields.get("issuetype"), "name", DEFAULT_ISSUE_TYPE),
        assignee=safe_nested_get(fields.get("assignee"), "displayName", DEFAULT_ASSIGNEE),
        reporter=safe_nested_get(fields.get("reporter"), "displayName", DEFAULT_REPORTER),
        priority=safe_nested_get(fields.get("priority"), "name", DEFAULT_PRIORITY),
        description=fields.get("description") or "",
        comments=_map_comments(fields.get("comment")),
    )


__all__ = [
    "DEFAULT_ASSIGNEE",
    "DEFAULT_AUTHOR",
    "DEFAULT_ISSUE_TYPE",
    "DEFAULT_KEY",
    "DEFAULT_PRIORITY",
    "DEFAULT_REPORTER",
    "DEFAULT_STATUS",
    "DEFAULT_TITLE",
    "ISSUE_FIELDS",
    "IssueComment",
    "IssueRecord",
    "issue_record_from_json",
    "safe_nested_get",
]
