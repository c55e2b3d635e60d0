"""Exceptions raised by profile stores.

- ProfileError: Base exception for all profile store failures
- DuplicateProfileError: A profile with the same name already exists
- ProfileNotFoundError: The named profile is not registered
- ProfileStoreError: The backing storage could not be read or written
"""

from __future__ import annotations

from typing import ClassVar

from jira_ai.utils.errors import ExitCode, JiraAiError


class ProfileError(JiraAiError):
    """Base exception for profile store failures.

    These are local validation or storage errors and never involve
    the network.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.PROFILE_ERROR


class DuplicateProfileError(ProfileError):
    """Raised by add() when the profile name is already registered.

    Attributes:
        name: The conflicting profile name
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        if message is None:
            message = f"Profile '{name}' already exists"
        super().__init__(message)


class ProfileNotFoundError(ProfileError):
    """Raised when an operation needs a profile that is not registered.

    Attributes:
        name: The missing profile name
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        if message is None:
            message = f"Profile '{name}' not found"
        super().__init__(message)


class ProfileStoreError(ProfileError):
    """Raised when the backing storage is unreadable, corrupt or unwritable."""

    pass


__all__ = [
    "ProfileError",
    "DuplicateProfileError",
    "ProfileNotFoundError",
    "ProfileStoreError",
]
