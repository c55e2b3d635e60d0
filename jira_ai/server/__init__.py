"""Summary proxy server."""

from jira_ai.server.app import CORS_HEADERS, create_app

__all__ = ["CORS_HEADERS", "create_app"]
