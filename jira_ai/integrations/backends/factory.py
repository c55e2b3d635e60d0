"""Factory for creating summary backend instances from settings."""

from __future__ import annotations

from enum import Enum

import httpx

from jira_ai.config.settings import Settings
from jira_ai.integrations.backends.base import SummaryBackend
from jira_ai.integrations.backends.openai import OpenAIChatBackend
from jira_ai.integrations.backends.proxy import ProxySummaryBackend
from jira_ai.utils.errors import ConfigurationError


class BackendKind(Enum):
    """Supported summary backends.

    Attributes:
        OPENAI: Call a chat-completions provider directly
        PROXY: Call a deployed summary proxy
    """

    OPENAI = "openai"
    PROXY = "proxy"


def parse_backend_kind(value: str | None) -> BackendKind:
    """Parse a SUMMARY_BACKEND value.

    Raises:
        ConfigurationError: If value is not a known backend
    """
    if value is None or value.strip() == "":
        return BackendKind.OPENAI
    try:
        return BackendKind(value.strip().lower())
    except ValueError:
        valid = ", ".join(kind.value for kind in BackendKind)
        raise ConfigurationError(
            f"Invalid SUMMARY_BACKEND '{value}'. Allowed values: {valid}"
        ) from None


def create_summary_backend(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> SummaryBackend:
    """Create the backend selected by SUMMARY_BACKEND.

    Each call creates a new, independent backend instance (no caching).

    Args:
        settings: Loaded settings
        http_client: Optional shared HTTP client

    Returns:
        Configured SummaryBackend

    Raises:
        ConfigurationError: If the backend name is invalid
    """
    kind = parse_backend_kind(settings.summary_backend)

    if kind is BackendKind.PROXY:
        return ProxySummaryBackend(
            settings.proxy_url,
            http_client=http_client,
            timeout_seconds=settings.request_timeout_seconds,
        )

    return OpenAIChatBackend(
        api_url=settings.ai_api_url,
        model=settings.ai_model,
        max_tokens=settings.ai_max_tokens,
        temperature=settings.ai_temperature,
        http_client=http_client,
        timeout_seconds=settings.request_timeout_seconds,
    )


__all__ = ["BackendKind", "create_summary_backend", "parse_backend_kind"]
