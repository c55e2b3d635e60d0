"""Logging configuration for Jira AI Helper.

Application events go to an optional log file controlled by environment
variables. Library modules keep using ``logging.getLogger(__name__)``; the
file handler hangs off the ``jira_ai`` logger so their records land in
the same file.

Environment Variables:
    JIRA_AI_LOG: Set to "true" to enable logging (default: "false")
    JIRA_AI_LOG_FILE: Path to log file (default: ~/.jira-ai.log)
"""

import logging
import os
from pathlib import Path

# Environment variable configuration
LOG_ENABLED = os.environ.get("JIRA_AI_LOG", "false").lower() == "true"
LOG_FILE = Path(os.environ.get("JIRA_AI_LOG_FILE", str(Path.home() / ".jira-ai.log")))

# Maximum length of a response body written to the log
MAX_LOGGED_BODY_LENGTH = 200

# Module-level logger instance
_logger: logging.Logger | None = None


def setup_logging() -> logging.Logger:
    """Configure logging based on environment variables.

    Creates a logger that writes to the configured log file when
    JIRA_AI_LOG is set to "true". Otherwise, uses a NullHandler
    to suppress all log output.

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger("jira_ai")

    # Clear any existing handlers
    logger.handlers.clear()

    if LOG_ENABLED:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(LOG_FILE)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if os.environ.get("JIRA_AI_DEBUG") else logging.INFO)
    else:
        logger.addHandler(logging.NullHandler())

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured logger instance, creating it if necessary."""
    global _logger
    if _logger is None:
        return setup_logging()
    return _logger


def log_message(message: str) -> None:
    """Log a message if logging is enabled.

    Messages are only written to the log file if JIRA_AI_LOG=true.

    Args:
        message: Message to log
    """
    get_logger().info(message)


def truncate_body(body: str, limit: int = MAX_LOGGED_BODY_LENGTH) -> str:
    """Shorten a response body before it is written to a log."""
    if len(body) <= limit:
        return body
    return f"{body[:limit]}... ({len(body)} chars)"


def log_request(method: str, url: str, status: int | None) -> None:
    """Log an outbound HTTP request and its status.

    Only the method, URL and status are recorded; headers and bodies
    carry credentials or prompt text and are never logged here.

    Args:
        method: HTTP method
        url: Request URL (must not embed credentials)
        status: Response status, or None for a transport failure
    """
    outcome = str(status) if status is not None else "transport error"
    get_logger().info(f"HTTP {method} {url} -> {outcome}")


__all__ = [
    "LOG_ENABLED",
    "LOG_FILE",
    "setup_logging",
    "get_logger",
    "log_message",
    "log_request",
    "truncate_body",
]
