"""Jira REST API client.

Fetches a single issue with HTTP Basic auth (email + API token) and maps
the response to an IssueRecord. This is the only supported auth mode.

HTTP Client Sharing:
    An ``httpx.AsyncClient`` can be injected for connection pooling (and for
    tests). Without one, a client is created per request. The timeout is
    applied per request in both cases.

URL Handling:
    The base URL is normalized by stripping trailing slashes, so
    "https://company.atlassian.net" and "https://company.atlassian.net/"
    build the same endpoint. The issue key is percent-encoded.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from jira_ai.config.settings import SUPPORTED_JIRA_API_VERSIONS
from jira_ai.integrations.jira.models import ISSUE_FIELDS, IssueRecord, issue_record_from_json
from jira_ai.profiles.base import ConnectionProfile
from jira_ai.utils.errors import ConfigurationError, IssueFetchError
from jira_ai.utils.logging import log_request, truncate_body

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def build_issue_url(base_url: str, issue_key: str, api_version: str = "3") -> str:
    """Build the issue endpoint URL.

    Args:
        base_url: Jira instance URL, with or without trailing slashes
        issue_key: Issue key (e.g., "PROJ-123"), percent-encoded here
        api_version: REST API version ("2" or "3")

    Returns:
        Endpoint URL without query string
    """
    base = base_url.rstrip("/")
    return f"{base}/rest/api/{api_version}/issue/{quote(issue_key, safe='')}"


class IssueClient:
    """Client for the Jira issue endpoint.

    Attributes:
        api_version: Jira REST API version used for requests
        timeout_seconds: Per-request timeout
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        api_version: str = "3",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Optional shared HTTP client
            api_version: Jira REST API version ("2" or "3")
            timeout_seconds: Per-request timeout

        Raises:
            ConfigurationError: If api_version is not supported
        """
        if api_version not in SUPPORTED_JIRA_API_VERSIONS:
            raise ConfigurationError(
                f"Unsupported Jira API version '{api_version}'. "
                f"Allowed values: {', '.join(sorted(SUPPORTED_JIRA_API_VERSIONS))}"
            )
        self._http_client = http_client
        self.api_version = api_version
        self.timeout_seconds = timeout_seconds

    async def fetch(
        self,
        base_url: str,
        issue_key: str,
        email: str,
        api_token: str,
    ) -> IssueRecord:
        """Fetch and normalize one issue.

        API endpoint: GET /rest/api/{version}/issue/{issueIdOrKey}

        Args:
            base_url: Jira instance URL
            issue_key: Issue key (e.g., "PROJ-123")
            email: Account email for Basic auth
            api_token: Jira API token

        Returns:
            Normalized IssueRecord

        Raises:
            ConfigurationError: If the key or any credential is empty
            IssueFetchError: On a non-2xx response, an unparseable body,
                or a transport failure (status None)
        """
        issue_key = issue_key.strip()
        missing = [
            name
            for name, value in (
                ("issue key", issue_key),
                ("Jira URL", base_url.strip()),
                ("email", email),
                ("API token", api_token),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Cannot fetch Jira issue: missing {', '.join(missing)}")

        url = build_issue_url(base_url, issue_key, self.api_version)
        raw = await self._get_json(url, email, api_token)
        return issue_record_from_json(raw, issue_key)

    async def fetch_for_profile(self, profile: ConnectionProfile, issue_key: str) -> IssueRecord:
        """Fetch an issue using a stored connection profile."""
        return await self.fetch(profile.base_url, issue_key, profile.email, profile.api_token)

    async def _get_json(self, url: str, email: str, api_token: str) -> Any:
        params = {"fields": ",".join(ISSUE_FIELDS)}
        headers = {"Accept": "application/json"}
        auth = httpx.BasicAuth(email, api_token)
        timeout = httpx.Timeout(self.timeout_seconds)

        try:
            if self._http_client is not None:
                response = await self._http_client.get(
                    url, params=params, headers=headers, auth=auth, timeout=timeout
                )
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.get(url, params=params, headers=headers, auth=auth)
        except (httpx.TransportError, httpx.InvalidURL) as e:
            log_request("GET", url, None)
            raise IssueFetchError(cause=e) from e

        log_request("GET", url, response.status_code)

        if not response.is_success:
            logger.debug("Jira error body: %s", truncate_body(response.text))
            raise IssueFetchError(status=response.status_code, body=response.text)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise IssueFetchError(
                "Jira returned a response that is not valid JSON",
                status=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise IssueFetchError(
                "Jira returned an unexpected response shape",
                status=response.status_code,
                body=response.text,
            )
        return data


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "IssueClient",
    "build_issue_url",
]
