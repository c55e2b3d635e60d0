"""Tests for jira_ai.utils.logging module."""

import importlib
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

import jira_ai.utils.logging as logging_module


@pytest.fixture(autouse=True)
def restore_logging_module():
    """Reload the module after each test so env patches do not leak."""
    yield
    logging_module._logger = None
    importlib.reload(logging_module)
    logging.getLogger("jira_ai").handlers.clear()


def _reload_with(env: dict[str, str], clear: bool = False):
    with patch.dict(os.environ, env, clear=clear):
        logging_module._logger = None
        importlib.reload(logging_module)
    return logging_module


class TestLogging:
    """Tests for logging functionality."""

    def test_log_disabled_by_default(self):
        """Logging is disabled when JIRA_AI_LOG is not set."""
        module = _reload_with({}, clear=True)

        assert module.LOG_ENABLED is False

    def test_log_enabled_with_env_var(self):
        module = _reload_with({"JIRA_AI_LOG": "true"})

        assert module.LOG_ENABLED is True

    def test_log_file_default_path(self):
        module = _reload_with({}, clear=True)

        assert module.LOG_FILE == Path.home() / ".jira-ai.log"

    def test_log_file_custom_path(self, tmp_path):
        custom = tmp_path / "custom.log"

        module = _reload_with({"JIRA_AI_LOG_FILE": str(custom)})

        assert module.LOG_FILE == custom

    def test_disabled_logger_uses_null_handler(self):
        module = _reload_with({}, clear=True)

        logger = module.setup_logging()

        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_enabled_logger_writes_file(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        module = _reload_with({"JIRA_AI_LOG": "true", "JIRA_AI_LOG_FILE": str(log_file)})

        module.log_message("hello from test")
        module.log_request("GET", "https://x/rest/api/3/issue/A-1", 200)
        for handler in module.get_logger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "hello from test" in content
        assert "HTTP GET https://x/rest/api/3/issue/A-1 -> 200" in content

    def test_setup_logging_is_cached(self):
        module = _reload_with({}, clear=True)

        assert module.setup_logging() is module.get_logger()


class TestTruncateBody:
    """Tests for truncate_body."""

    def test_short_body_unchanged(self):
        assert logging_module.truncate_body("short") == "short"

    def test_long_body_truncated(self):
        result = logging_module.truncate_body("x" * 500, limit=10)

        assert result == "xxxxxxxxxx... (500 chars)"
