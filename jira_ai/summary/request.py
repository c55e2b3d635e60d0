"""Summary request composition.

Turns a fetched issue into the prompt sent to the AI backend. Pure data
transformation: no I/O, no failure modes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from jira_ai.integrations.jira.adf import extract_text
from jira_ai.integrations.jira.models import IssueComment, IssueRecord
from jira_ai.profiles.base import ConnectionProfile

NO_COMMENTS_PLACEHOLDER = "(no comments)"

PROMPT_PREAMBLE = "You are an expert assistant that summarizes Jira issues for developers."

OUTPUT_FORMAT_DIRECTIVE = (
    "Return ONLY valid JSON with keys: one_line_summary (string), "
    "tasks (array of short actionable tasks), "
    "final_comment (string suitable for posting as a Jira comment)."
)

SYSTEM_PROMPT = (
    "You are a concise assistant who returns ONLY JSON with keys "
    "one_line_summary, tasks (array), final_comment."
)


def render_comments(comments: Iterable[IssueComment]) -> str:
    """Render comments as "author: body" blocks separated by a blank line.

    Bodies are flattened with extract_text. An empty list renders as the
    "(no comments)" placeholder.
    """
    rendered = [f"{comment.author}: {extract_text(comment.body)}" for comment in comments]
    return "\n\n".join(rendered) if rendered else NO_COMMENTS_PLACEHOLDER


def build_prompt(issue_key: str, title: str, description: str, comments_text: str) -> str:
    """Assemble the summarizer instruction block."""
    return "\n".join(
        [
            PROMPT_PREAMBLE,
            f"Ticket: {issue_key}",
            f"Title: {title}",
            f"Description: {description}",
            "Comments:",
            comments_text,
            "",
            OUTPUT_FORMAT_DIRECTIVE,
        ]
    )


@dataclass(frozen=True)
class SummaryRequest:
    """Everything an AI backend needs to summarize one issue.

    Attributes:
        issue_key: Issue key (e.g., "PROJ-123")
        base_url: Jira instance URL of the profile
        email: Jira account email (forwarded only when explicitly requested)
        api_token: Jira API token (hidden from repr)
        title: Issue title
        description: Flattened description text
        comments_text: Rendered comments section
        requesting_user: Per-install user identifier
        prompt: Full instruction block for the model
    """

    issue_key: str
    base_url: str
    email: str
    api_token: str = field(repr=False)
    title: str
    description: str
    comments_text: str
    requesting_user: str
    prompt: str

    def to_proxy_payload(self, include_credentials: bool = False) -> dict[str, Any]:
        """Build the summary proxy request body.

        Credentials stay on the client unless include_credentials is set,
        in which case a proxy with server-side re-fetch can use them.
        """
        payload: dict[str, Any] = {
            "issueKey": self.issue_key,
            "jiraUrl": self.base_url,
            "title": self.title,
            "description": self.description,
            "comments": self.comments_text,
            "userId": self.requesting_user,
        }
        if include_credentials:
            payload["jiraEmail"] = self.email
            payload["jiraToken"] = self.api_token
        return payload


def build_summary_request(
    issue_key: str,
    profile: ConnectionProfile,
    issue: IssueRecord,
    extracted_description: str,
    requesting_user: str,
) -> SummaryRequest:
    """Compose the summary request for a fetched issue.

    Args:
        issue_key: Requested issue key
        profile: Profile the issue was fetched with
        issue: Normalized issue
        extracted_description: Description already flattened to text
        requesting_user: Per-install user identifier

    Returns:
        SummaryRequest with the full prompt
    """
    comments_text = render_comments(issue.comments)
    return SummaryRequest(
        issue_key=issue_key,
        base_url=profile.base_url,
        email=profile.email,
        api_token=profile.api_token,
        title=issue.title,
        description=extracted_description,
        comments_text=comments_text,
        requesting_user=requesting_user,
        prompt=build_prompt(issue_key, issue.title, extracted_description, comments_text),
    )


__all__ = [
    "NO_COMMENTS_PLACEHOLDER",
    "OUTPUT_FORMAT_DIRECTIVE",
    "SYSTEM_PROMPT",
    "SummaryRequest",
    "build_prompt",
    "build_summary_request",
    "render_comments",
]
