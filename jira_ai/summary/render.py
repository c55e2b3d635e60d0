"""Markdown rendering of a finished summary run."""

from __future__ import annotations

from jira_ai.summary.orchestrator import SummaryView
from jira_ai.summary.result import RawSummary, StructuredSummary, SummaryResult

NO_DESCRIPTION_PLACEHOLDER = "No description"


def render_summary_markdown(summary: SummaryResult) -> str:
    """Render the AI summary section body."""
    if isinstance(summary, RawSummary):
        return f"```\n{summary.raw_text}\n```"

    lines = [f"**Summary:** {summary.one_line_summary}", "", "**Tasks:**"]
    if summary.tasks:
        lines.extend(f"- [ ] {task}" for task in summary.tasks)
    else:
        lines.append("_No tasks_")
    lines.extend(["", "**Suggested comment:**", "", summary.final_comment])
    return "\n".join(lines)


def render_view_markdown(view: SummaryView) -> str:
    """Render the ticket document: header, fields, description, AI summary."""
    issue = view.issue
    description = view.description_text or NO_DESCRIPTION_PLACEHOLDER
    return "\n".join(
        [
            f"# Jira Ticket: {issue.key}",
            f"## {issue.title}",
            "",
            f"**Type:** {issue.issue_type}  ",
            f"**Status:** {issue.status}  ",
            f"**Assignee:** {issue.assignee}  ",
            f"**Reporter:** {issue.reporter}  ",
            f"**Priority:** {issue.priority}  ",
            "",
            "---",
            "",
            "## Description",
            description,
            "",
            "---",
            "",
            "## AI Summary",
            render_summary_markdown(view.summary),
            "",
        ]
    )


def view_to_dict(view: SummaryView) -> dict[str, object]:
    """JSON-ready form of a view, used by ``summarize --json``."""
    issue = view.issue
    summary_kind = "structured" if isinstance(view.summary, StructuredSummary) else "raw"
    return {
        "issue": {
            "key": issue.key,
            "title": issue.title,
            "status": issue.status,
            "issue_type": issue.issue_type,
            "assignee": issue.assignee,
            "reporter": issue.reporter,
            "priority": issue.priority,
            "description": view.description_text,
            "comments_count": len(issue.comments),
        },
        "summary_kind": summary_kind,
        "summary": view.summary.to_dict(),
    }


__all__ = [
    "NO_DESCRIPTION_PLACEHOLDER",
    "render_summary_markdown",
    "render_view_markdown",
    "view_to_dict",
]
