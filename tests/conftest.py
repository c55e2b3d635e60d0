"""Shared pytest fixtures for Jira AI Helper tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from jira_ai.profiles import ConnectionProfile, InMemoryProfileStore

# Enable pytest-asyncio for async test support
pytest_plugins = ("pytest_asyncio",)

JIRA_URL = "https://company.atlassian.net"


@pytest.fixture
def main_profile() -> ConnectionProfile:
    """Profile named "Main" pointing at a test Jira instance."""
    return ConnectionProfile(
        name="Main",
        base_url=JIRA_URL,
        email="dev@example.com",
        api_token="jira-api-token",
    )


@pytest.fixture
def memory_store(main_profile: ConnectionProfile) -> InMemoryProfileStore:
    """In-memory store holding the "Main" profile."""
    return InMemoryProfileStore([main_profile])


@pytest.fixture
def jira_issue_v3() -> dict[str, Any]:
    """Jira API v3 issue response with an ADF description and no comments."""
    return {
        "key": "ABC-1",
        "fields": {
            "summary": "Fix crash",
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {
                        "type": "paragraph",
                        "content": [{"type": "text", "text": "App crashes on save"}],
                    }
                ],
            },
            "comment": {"comments": []},
            "status": {"name": "In Progress"},
            "issuetype": {"name": "Bug"},
            "assignee": {"displayName": "Ada Lovelace"},
            "reporter": {"displayName": "Grace Hopper"},
            "priority": {"name": "High"},
        },
    }


@pytest.fixture
def completion_body() -> Callable[[str], dict[str, Any]]:
    """Build a chat-completions response wrapping the given answer."""

    def _build(content: str) -> dict[str, Any]:
        return {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        }

    return _build


@pytest.fixture
def request_log() -> list[httpx.Request]:
    """Requests seen by a mock transport, in order."""
    return []


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary config file with sample values."""
    config_file = tmp_path / ".jira-ai-config"
    config_file.write_text(
        """# Jira AI Helper configuration
JIRA_API_VERSION="2"
REQUEST_TIMEOUT_SECONDS="45"
SUMMARY_BACKEND="proxy"
PROXY_URL="https://proxy.example.com"
AI_MAX_TOKENS="500"
PROXY_ALLOW_REFETCH="true"
"""
    )
    return config_file


@pytest.fixture
def isolated_cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at a temporary config file and profile store.

    Returns:
        The profiles file path
    """
    profiles_file = tmp_path / "profiles.json"
    monkeypatch.setattr("jira_ai.config.manager.CONFIG_FILE", tmp_path / ".jira-ai-config")
    monkeypatch.setenv("PROFILE_STORE", "file")
    monkeypatch.setenv("PROFILES_FILE", str(profiles_file))
    for name in ("OPENAI_API_KEY", "Jira_AI_Key", "JIRA_AI_KEY", "SUMMARY_BACKEND", "PROXY_URL"):
        monkeypatch.delenv(name, raising=False)
    return profiles_file
