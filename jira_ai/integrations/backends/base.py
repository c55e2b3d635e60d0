"""Base class for AI summary backends.

A backend turns a SummaryRequest into a SummaryResult with at most one
HTTP request per call. Nothing is retried: a failed call surfaces as
SummaryBackendError carrying the upstream status and raw body.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from jira_ai.summary.request import SummaryRequest
from jira_ai.summary.result import SummaryResult
from jira_ai.utils.errors import SummaryBackendError
from jira_ai.utils.logging import log_request, truncate_body

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class SummaryBackend(ABC):
    """Base class for summarization backends.

    HTTP Client Sharing:
        Backends accept an optional shared ``httpx.AsyncClient``. Without
        one, a client is created per request. The per-request timeout is
        applied either way.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http_client = http_client
        self.timeout_seconds = timeout_seconds

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name."""

    @abstractmethod
    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        """Summarize one issue.

        Raises:
            ConfigurationError: If a required credential or endpoint is missing
                (checked before any network call)
            SummaryBackendError: On a non-2xx upstream status or transport failure
        """

    async def _post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """POST a JSON body and return a successful response.

        Raises:
            SummaryBackendError: On a non-2xx status (status and raw body
                preserved) or a transport failure (status None)
        """
        timeout = httpx.Timeout(self.timeout_seconds)
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    url, json=payload, headers=headers, timeout=timeout
                )
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except (httpx.TransportError, httpx.InvalidURL) as e:
            log_request("POST", url, None)
            raise SummaryBackendError(cause=e) from e

        log_request("POST", url, response.status_code)

        if not response.is_success:
            logger.debug("%s error body: %s", self.name, truncate_body(response.text))
            raise SummaryBackendError(status=response.status_code, body=response.text)
        return response


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "SummaryBackend"]
