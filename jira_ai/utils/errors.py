"""Custom exceptions and exit codes for Jira AI Helper.

This module defines the exit codes and the exception hierarchy shared by
the profile store, the Jira client, the summary backends and the CLI.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Process exit codes used by the CLI.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIGURATION_ERROR = 2
    PROFILE_ERROR = 3
    USER_CANCELLED = 4
    ISSUE_FETCH_ERROR = 5
    SUMMARY_BACKEND_ERROR = 6


class JiraAiError(Exception):
    """Base exception for Jira AI Helper errors.

    All custom exceptions in this application should inherit from this class.
    Each exception type has an associated exit code for proper error reporting.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class ConfigurationError(JiraAiError):
    """A required credential, endpoint or setting is missing or invalid.

    Raised before any network call is made:
    - No AI provider key in the environment
    - Proxy URL not configured for the proxy backend
    - Invalid Jira API version or timeout value
    - Empty issue key or incomplete connection credentials
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.CONFIGURATION_ERROR


class UserCancelledError(JiraAiError):
    """User cancelled the operation (e.g. Ctrl+C at a prompt)."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.USER_CANCELLED


class _RemoteServiceError(JiraAiError):
    """Shared shape for failures talking to a remote HTTP service.

    Attributes:
        status: HTTP status code, or None for transport failures
        body: Raw response body, preserved verbatim for diagnostics
        cause: Underlying transport exception, if any
    """

    service_name: ClassVar[str] = "Remote service"

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        body: str = "",
        cause: BaseException | None = None,
    ) -> None:
        self.status = status
        self.body = body
        self.cause = cause
        if message is None:
            if status is not None:
                message = f"{self.service_name} returned HTTP {status}"
                if body:
                    message += f": {body}"
            elif cause is not None:
                message = f"{self.service_name} request failed: {type(cause).__name__}: {cause}"
            else:
                message = f"{self.service_name} request failed"
        super().__init__(message)


class IssueFetchError(_RemoteServiceError):
    """Jira answered with a non-2xx status or could not be reached."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.ISSUE_FETCH_ERROR
    service_name: ClassVar[str] = "Jira"


class SummaryBackendError(_RemoteServiceError):
    """The summarization provider failed or could not be reached."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.SUMMARY_BACKEND_ERROR
    service_name: ClassVar[str] = "Summary backend"


__all__ = [
    "ExitCode",
    "JiraAiError",
    "ConfigurationError",
    "UserCancelledError",
    "IssueFetchError",
    "SummaryBackendError",
]
