"""Tests for jira_ai.cli module."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from jira_ai import __version__
from jira_ai.cli import app
from jira_ai.integrations.jira.models import issue_record_from_json
from jira_ai.summary.result import StructuredSummary
from jira_ai.utils.errors import ExitCode
from tests.fakes import FakeSummaryBackend

runner = CliRunner()

STRUCTURED = StructuredSummary("Fix save crash", ("Reproduce", "Patch"), "Looking into it")


def _add_main_profile() -> None:
    result = runner.invoke(
        app,
        [
            "profile",
            "add",
            "Main",
            "--url",
            "https://company.atlassian.net/",
            "--email",
            "dev@example.com",
            "--token",
            "jira-api-token",
        ],
    )
    assert result.exit_code == 0, result.output


def _issue_client_mock(jira_issue) -> MagicMock:
    client = MagicMock()
    client.fetch_for_profile = AsyncMock(return_value=issue_record_from_json(jira_issue))
    return MagicMock(return_value=client)


class TestCLIVersion:
    """Tests for --version flag."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])

        assert "summarize" in result.output


# =============================================================================
# Profile commands
# =============================================================================


class TestProfileCommands:
    """Tests for jira-ai profile add/list/update/delete."""

    def test_add_and_list(self, isolated_cli_env):
        _add_main_profile()

        result = runner.invoke(app, ["profile", "list"])

        assert result.exit_code == 0
        assert "Main" in result.stdout
        assert "https://company.atlassian.net" in result.stdout
        assert "jira-api-token" not in result.stdout

    def test_add_strips_trailing_slash(self, isolated_cli_env):
        _add_main_profile()

        stored = json.loads(isolated_cli_env.read_text())

        assert "https://company.atlassian.net/" not in json.dumps(stored)

    def test_duplicate_add_fails(self, isolated_cli_env):
        _add_main_profile()

        result = runner.invoke(
            app,
            ["profile", "add", "Main", "--url", "https://other.net", "--email", "x@y", "--token", "t"],
        )

        assert result.exit_code == ExitCode.PROFILE_ERROR
        assert "already exists" in result.output

    def test_add_rejects_non_http_url(self, isolated_cli_env):
        result = runner.invoke(
            app, ["profile", "add", "Main", "--url", "ftp://x", "--email", "a@b", "--token", "t"]
        )

        assert result.exit_code != 0
        assert not isolated_cli_env.exists()

    def test_add_prompts_for_token(self, isolated_cli_env):
        result = runner.invoke(
            app,
            ["profile", "add", "Main", "--url", "https://company.atlassian.net", "--email", "a@b"],
            input="prompted-token\n",
        )

        assert result.exit_code == 0, result.output
        assert "prompted-token" in isolated_cli_env.read_text()

    def test_list_empty(self, isolated_cli_env):
        result = runner.invoke(app, ["profile", "list"])

        assert result.exit_code == 0
        assert "No Jira connections" in result.output

    def test_update_email(self, isolated_cli_env):
        _add_main_profile()

        result = runner.invoke(app, ["profile", "update", "Main", "--email", "new@example.com"])

        assert result.exit_code == 0, result.output
        assert "new@example.com" in runner.invoke(app, ["profile", "list"]).stdout

    def test_update_unknown_profile(self, isolated_cli_env):
        result = runner.invoke(app, ["profile", "update", "Nope", "--email", "a@b"])

        assert result.exit_code == ExitCode.PROFILE_ERROR

    def test_update_without_changes(self, isolated_cli_env):
        result = runner.invoke(app, ["profile", "update", "Main"])

        assert result.exit_code != 0

    def test_delete(self, isolated_cli_env):
        _add_main_profile()

        result = runner.invoke(app, ["profile", "delete", "Main"])

        assert result.exit_code == 0
        assert "No Jira connections" in runner.invoke(app, ["profile", "list"]).output

    def test_delete_unknown_is_warning(self, isolated_cli_env):
        result = runner.invoke(app, ["profile", "delete", "Nope"])

        assert result.exit_code == 0
        assert "does not exist" in result.output


# =============================================================================
# Summarize command
# =============================================================================


class TestSummarizeCommand:
    """Tests for jira-ai summarize."""

    def test_no_profiles(self, isolated_cli_env):
        result = runner.invoke(app, ["summarize", "ABC-1"])

        assert result.exit_code == ExitCode.PROFILE_ERROR
        assert "No Jira connections" in result.output

    def test_unknown_profile(self, isolated_cli_env):
        _add_main_profile()

        result = runner.invoke(app, ["summarize", "ABC-1", "--profile", "Other"])

        assert result.exit_code == ExitCode.PROFILE_ERROR

    def test_markdown_output(self, isolated_cli_env, jira_issue_v3):
        _add_main_profile()
        backend = FakeSummaryBackend([STRUCTURED])

        with (
            patch("jira_ai.cli.app.IssueClient", _issue_client_mock(jira_issue_v3)),
            patch("jira_ai.cli.app.create_summary_backend", return_value=backend),
        ):
            result = runner.invoke(app, ["summarize", "ABC-1"])

        assert result.exit_code == 0, result.output
        assert "Jira Ticket: ABC-1" in result.stdout
        assert "Fix save crash" in result.stdout
        assert backend.requests[0].issue_key == "ABC-1"

    def test_json_output(self, isolated_cli_env, jira_issue_v3):
        _add_main_profile()
        backend = FakeSummaryBackend([STRUCTURED])

        with (
            patch("jira_ai.cli.app.IssueClient", _issue_client_mock(jira_issue_v3)),
            patch("jira_ai.cli.app.create_summary_backend", return_value=backend),
        ):
            result = runner.invoke(app, ["summarize", "ABC-1", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["issue"]["key"] == "ABC-1"
        assert data["issue"]["description"] == "App crashes on save"
        assert data["summary_kind"] == "structured"
        assert data["summary"]["tasks"] == ["Reproduce", "Patch"]

    def test_user_id_is_persisted(self, isolated_cli_env, jira_issue_v3, tmp_path):
        _add_main_profile()
        backend = FakeSummaryBackend([STRUCTURED])

        with (
            patch("jira_ai.cli.app.IssueClient", _issue_client_mock(jira_issue_v3)),
            patch("jira_ai.cli.app.create_summary_backend", return_value=backend),
        ):
            runner.invoke(app, ["summarize", "ABC-1", "--json"])

        assert backend.requests[0].requesting_user
        assert "USER_ID=" in (tmp_path / ".jira-ai-config").read_text()

    def test_missing_provider_key(self, isolated_cli_env, jira_issue_v3):
        _add_main_profile()

        with patch("jira_ai.cli.app.IssueClient", _issue_client_mock(jira_issue_v3)):
            result = runner.invoke(app, ["summarize", "ABC-1"])

        assert result.exit_code == ExitCode.CONFIGURATION_ERROR
        assert "OPENAI_API_KEY" in result.output

    def test_proxy_without_url(self, isolated_cli_env, jira_issue_v3, monkeypatch):
        _add_main_profile()
        monkeypatch.setenv("SUMMARY_BACKEND", "proxy")

        with patch("jira_ai.cli.app.IssueClient", _issue_client_mock(jira_issue_v3)):
            result = runner.invoke(app, ["summarize", "ABC-1"])

        assert result.exit_code == ExitCode.CONFIGURATION_ERROR
        assert "PROXY_URL" in result.output

    def test_invalid_backend_setting(self, isolated_cli_env, monkeypatch):
        _add_main_profile()
        monkeypatch.setenv("SUMMARY_BACKEND", "gemini")

        result = runner.invoke(app, ["summarize", "ABC-1"])

        assert result.exit_code == ExitCode.CONFIGURATION_ERROR
