"""Summary proxy: FastAPI implementation of ``POST /api/generate-summary``.

The proxy holds the AI provider key so clients do not need one. By
default it summarizes the description text the client already extracted
and never sees tracker credentials. With ``PROXY_ALLOW_REFETCH=true`` a
request without ``description`` may carry ``jiraEmail``/``jiraToken``;
the proxy then fetches the ticket itself and echoes its metadata.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from jira_ai import SCRIPT_NAME, __version__
from jira_ai.config.manager import ConfigManager, require_provider_key, validate_settings
from jira_ai.config.settings import Settings
from jira_ai.integrations.backends.openai import OpenAIChatBackend
from jira_ai.integrations.backends.proxy import GENERATE_SUMMARY_PATH
from jira_ai.integrations.jira.adf import extract_text
from jira_ai.integrations.jira.client import IssueClient
from jira_ai.summary.request import NO_COMMENTS_PLACEHOLDER, build_prompt, render_comments
from jira_ai.summary.result import parse_summary_output
from jira_ai.utils.errors import ConfigurationError, IssueFetchError, SummaryBackendError
from jira_ai.utils.logging import log_message

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _error_response(
    status_code: int,
    error: str,
    details: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _upstream_error_response(error: str, exc: IssueFetchError | SummaryBackendError) -> JSONResponse:
    """Relay an upstream failure.

    A non-2xx upstream status is passed through with the raw body as
    details. Transport failures and unreadable 2xx bodies become 502.
    """
    if exc.status is not None and not 200 <= exc.status < 300:
        return _error_response(exc.status, error, details=exc.body)
    return _error_response(502, error, details=str(exc))


def _body_text(body: Mapping[str, Any], key: str) -> str:
    value = body.get(key)
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return ""


def create_app(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    environ: Mapping[str, str] | None = None,
) -> FastAPI:
    """Create the proxy application.

    Args:
        settings: Settings to use (loaded through ConfigManager when None)
        http_client: Optional shared HTTP client for Jira and AI calls
        environ: Mapping the provider key is read from (defaults to os.environ)

    Raises:
        ConfigurationError: If settings are invalid
    """
    if settings is None:
        settings = ConfigManager(environ=environ).load()
    validate_settings(settings)

    issue_client = IssueClient(
        http_client,
        api_version=settings.jira_api_version,
        timeout_seconds=settings.request_timeout_seconds,
    )

    app = FastAPI(
        title=f"{SCRIPT_NAME} summary proxy",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next: Any) -> Response:
        response: Response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error("Proxy misconfigured: %s", exc)
        return _error_response(500, str(exc))

    @app.exception_handler(IssueFetchError)
    async def issue_fetch_error_handler(request: Request, exc: IssueFetchError) -> JSONResponse:
        log_message(f"Proxy Jira fetch failed: status {exc.status}")
        return _upstream_error_response("Jira API error", exc)

    @app.exception_handler(SummaryBackendError)
    async def summary_backend_error_handler(
        request: Request, exc: SummaryBackendError
    ) -> JSONResponse:
        log_message(f"Proxy AI request failed: status {exc.status}")
        return _upstream_error_response("AI provider error", exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # Runs outside the CORS middleware, so headers are set here
        logger.exception("Unexpected proxy error")
        return _error_response(500, str(exc) or type(exc).__name__, headers=CORS_HEADERS)

    @app.api_route(GENERATE_SUMMARY_PATH, methods=ROUTE_METHODS)
    async def generate_summary(request: Request) -> Response:
        """Summarize one ticket for a client."""
        if request.method == "OPTIONS":
            return Response(status_code=204)
        if request.method != "POST":
            return _error_response(
                405, "Method not allowed. Use POST.", headers={"Allow": "POST"}
            )

        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error_response(400, "Request body must be valid JSON.")
        if not isinstance(body, dict):
            return _error_response(400, "Request body must be a JSON object.")

        issue_key = _body_text(body, "issueKey")
        jira_url = _body_text(body, "jiraUrl")
        if not issue_key:
            return _error_response(400, "Missing issueKey in request body.")
        if not jira_url:
            return _error_response(400, "Missing jiraUrl in request body.")

        refetch = body.get("description") is None
        if refetch and not settings.proxy_allow_refetch:
            return _error_response(400, "Missing description in request body.")
        email = _body_text(body, "jiraEmail")
        token = _body_text(body, "jiraToken")
        if refetch and not (email and token):
            return _error_response(400, "Missing jiraEmail or jiraToken in request body.")

        # Checked before any outbound call
        provider_key = require_provider_key(environ)

        jira_meta: dict[str, Any] | None = None
        if refetch:
            issue = await issue_client.fetch(jira_url, issue_key, email, token)
            title = issue.title
            description = extract_text(issue.description)
            comments_text = render_comments(issue.comments)
            jira_meta = {
                "key": issue.key,
                "title": title,
                "description": description,
                "commentsCount": len(issue.comments),
            }
        else:
            title = _body_text(body, "title")
            description = extract_text(body.get("description"))
            comments_text = _body_text(body, "comments") or NO_COMMENTS_PLACEHOLDER

        log_message(f"Proxy summarizing {issue_key} (refetch={refetch})")
        backend = OpenAIChatBackend(
            api_url=settings.ai_api_url,
            model=settings.ai_model,
            max_tokens=settings.ai_max_tokens,
            temperature=settings.ai_temperature,
            http_client=http_client,
            timeout_seconds=settings.request_timeout_seconds,
            key_resolver=lambda: provider_key,
        )
        answer = await backend.complete(build_prompt(issue_key, title, description, comments_text))

        content: dict[str, Any] = {"summary": parse_summary_output(answer).to_dict()}
        if jira_meta is not None:
            content["jira"] = jira_meta
        return JSONResponse(status_code=200, content=content)

    return app


__all__ = ["CORS_HEADERS", "create_app"]
