"""AI summary backends.

This module provides:
- SummaryBackend: abstract base
- OpenAIChatBackend: direct chat-completions provider
- ProxySummaryBackend: client for the summary proxy
- create_summary_backend: factory driven by Settings
"""

from jira_ai.integrations.backends.base import SummaryBackend
from jira_ai.integrations.backends.factory import (
    BackendKind,
    create_summary_backend,
    parse_backend_kind,
)
from jira_ai.integrations.backends.openai import OpenAIChatBackend
from jira_ai.integrations.backends.proxy import ProxySummaryBackend

__all__ = [
    "BackendKind",
    "OpenAIChatBackend",
    "ProxySummaryBackend",
    "SummaryBackend",
    "create_summary_backend",
    "parse_backend_kind",
]
