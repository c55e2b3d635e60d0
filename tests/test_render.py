"""Tests for jira_ai.summary.render module."""

from jira_ai.integrations.jira.models import IssueRecord
from jira_ai.summary.orchestrator import SummaryView
from jira_ai.summary.render import (
    NO_DESCRIPTION_PLACEHOLDER,
    render_summary_markdown,
    render_view_markdown,
    view_to_dict,
)
from jira_ai.summary.result import RawSummary, StructuredSummary


def _view(summary, description_text="App crashes on save") -> SummaryView:
    issue = IssueRecord(key="ABC-1", title="Fix crash", status="In Progress", issue_type="Bug")
    return SummaryView(issue=issue, description_text=description_text, summary=summary)


class TestRenderSummaryMarkdown:
    """Tests for render_summary_markdown."""

    def test_structured(self):
        text = render_summary_markdown(StructuredSummary("Fix it", ("One", "Two"), "Done soon"))

        assert "**Summary:** Fix it" in text
        assert "- [ ] One\n- [ ] Two" in text
        assert text.endswith("Done soon")

    def test_structured_without_tasks(self):
        assert "_No tasks_" in render_summary_markdown(StructuredSummary("Fix it", (), ""))

    def test_raw_is_fenced(self):
        assert render_summary_markdown(RawSummary("free text")) == "```\nfree text\n```"


class TestRenderView:
    """Tests for render_view_markdown and view_to_dict."""

    def test_document_sections(self):
        text = render_view_markdown(_view(RawSummary("x")))

        assert text.startswith("# Jira Ticket: ABC-1\n## Fix crash")
        assert "**Status:** In Progress" in text
        assert "## Description\nApp crashes on save" in text
        assert "## AI Summary" in text

    def test_empty_description_placeholder(self):
        assert NO_DESCRIPTION_PLACEHOLDER in render_view_markdown(_view(RawSummary("x"), ""))

    def test_view_to_dict(self):
        data = view_to_dict(_view(RawSummary("x")))

        assert data["summary_kind"] == "raw"
        assert data["summary"] == {"raw": "x"}
        assert data["issue"]["comments_count"] == 0
