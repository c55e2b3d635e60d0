"""Summary backend that calls the summary proxy (``/api/generate-summary``).

The client has already fetched and flattened the ticket; only the issue
key, Jira URL, description text and user id are sent. Tracker credentials
are forwarded only when ``forward_credentials`` is set, for proxies that
re-fetch the ticket server-side.
"""

from __future__ import annotations

import json

import httpx

from jira_ai.integrations.backends.base import DEFAULT_TIMEOUT_SECONDS, SummaryBackend
from jira_ai.summary.request import SummaryRequest
from jira_ai.summary.result import SummaryResult, summary_from_payload
from jira_ai.utils.errors import ConfigurationError, SummaryBackendError

GENERATE_SUMMARY_PATH = "/api/generate-summary"


class ProxySummaryBackend(SummaryBackend):
    """Summarize through a deployed summary proxy."""

    def __init__(
        self,
        proxy_url: str,
        *,
        forward_credentials: bool = False,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(http_client=http_client, timeout_seconds=timeout_seconds)
        self.proxy_url = proxy_url
        self.forward_credentials = forward_credentials

    @property
    def name(self) -> str:
        return "Summary proxy"

    @property
    def endpoint(self) -> str:
        return self.proxy_url.rstrip("/") + GENERATE_SUMMARY_PATH

    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        if not self.proxy_url.strip():
            raise ConfigurationError("PROXY_URL is not configured for the proxy summary backend")

        response = await self._post_json(
            self.endpoint,
            request.to_proxy_payload(include_credentials=self.forward_credentials),
        )
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SummaryBackendError(
                "Summary proxy returned a response that is not valid JSON",
                status=response.status_code,
                body=response.text,
            ) from e

        summary = summary_from_payload(body.get("summary") if isinstance(body, dict) else None)
        if summary is None:
            raise SummaryBackendError(
                "Summary proxy response has no summary",
                status=response.status_code,
                body=response.text,
            )
        return summary


__all__ = ["GENERATE_SUMMARY_PATH", "ProxySummaryBackend"]
