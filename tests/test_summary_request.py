"""Tests for jira_ai.summary.request module."""

from __future__ import annotations

import pytest

from jira_ai.integrations.jira.models import IssueComment, issue_record_from_json
from jira_ai.summary.request import (
    NO_COMMENTS_PLACEHOLDER,
    OUTPUT_FORMAT_DIRECTIVE,
    build_prompt,
    build_summary_request,
    render_comments,
)


class TestRenderComments:
    """Tests for render_comments."""

    def test_no_comments_placeholder(self):
        assert render_comments([]) == NO_COMMENTS_PLACEHOLDER == "(no comments)"

    def test_author_and_flattened_body(self):
        """ADF bodies are flattened; entries are separated by a blank line."""
        comments = [
            IssueComment("Alice", {"content": [{"type": "text", "text": "Looks good"}]}),
            IssueComment("Bob", "plain body"),
        ]

        assert render_comments(comments) == "Alice: Looks good\n\nBob: plain body"


class TestBuildPrompt:
    """Tests for build_prompt."""

    def test_line_layout(self):
        prompt = build_prompt("ABC-1", "Fix crash", "App crashes", "(no comments)")

        lines = prompt.split("\n")
        assert lines[0].startswith("You are an expert assistant")
        assert lines[1:6] == [
            "Ticket: ABC-1",
            "Title: Fix crash",
            "Description: App crashes",
            "Comments:",
            "(no comments)",
        ]
        assert lines[6] == ""
        assert lines[7] == OUTPUT_FORMAT_DIRECTIVE

    def test_directive_names_all_keys(self):
        for key in ("one_line_summary", "tasks", "final_comment"):
            assert key in OUTPUT_FORMAT_DIRECTIVE


class TestBuildSummaryRequest:
    """Tests for build_summary_request."""

    def test_composes_request(self, main_profile, jira_issue_v3):
        issue = issue_record_from_json(jira_issue_v3)

        request = build_summary_request(
            "ABC-1", main_profile, issue, "App crashes on save", "user-123"
        )

        assert request.issue_key == "ABC-1"
        assert request.base_url == main_profile.base_url
        assert request.title == "Fix crash"
        assert request.description == "App crashes on save"
        assert request.comments_text == "(no comments)"
        assert request.requesting_user == "user-123"
        assert "Title: Fix crash" in request.prompt
        assert "Description: App crashes on save" in request.prompt

    def test_repr_hides_token(self, main_profile, jira_issue_v3):
        request = build_summary_request(
            "ABC-1", main_profile, issue_record_from_json(jira_issue_v3), "", "u"
        )

        assert main_profile.api_token not in repr(request)

    @pytest.mark.parametrize("include", [False, True])
    def test_proxy_payload(self, main_profile, jira_issue_v3, include):
        """Credentials are only included when explicitly requested."""
        request = build_summary_request(
            "ABC-1", main_profile, issue_record_from_json(jira_issue_v3), "desc", "user-123"
        )

        payload = request.to_proxy_payload(include_credentials=include)

        assert payload["issueKey"] == "ABC-1"
        assert payload["jiraUrl"] == main_profile.base_url
        assert payload["description"] == "desc"
        assert payload["comments"] == "(no comments)"
        assert payload["userId"] == "user-123"
        assert ("jiraToken" in payload) is include
        assert ("jiraEmail" in payload) is include
