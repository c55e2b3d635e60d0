"""Utility modules for Jira AI Helper.

This package contains:
- console: Rich-based terminal output utilities
- env_utils: Environment variable helpers
- errors: Custom exceptions and exit codes
- logging: Logging configuration
"""

from jira_ai.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from jira_ai.utils.env_utils import (
    SENSITIVE_KEY_PATTERNS,
    first_env_value,
    is_sensitive_key,
)
from jira_ai.utils.errors import (
    ConfigurationError,
    ExitCode,
    IssueFetchError,
    JiraAiError,
    SummaryBackendError,
    UserCancelledError,
)
from jira_ai.utils.logging import log_message, log_request, setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    # Env Utils
    "SENSITIVE_KEY_PATTERNS",
    "first_env_value",
    "is_sensitive_key",
    # Errors
    "ExitCode",
    "JiraAiError",
    "ConfigurationError",
    "IssueFetchError",
    "SummaryBackendError",
    "UserCancelledError",
    # Logging
    "setup_logging",
    "log_message",
    "log_request",
]
