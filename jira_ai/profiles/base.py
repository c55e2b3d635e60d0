"""Connection profiles and the abstract profile store.

A profile is a named set of Jira connection credentials (URL, email, API
token). Stores keep two views that must never disagree: the ordered
registry of names and the credential triple behind each name.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from jira_ai.profiles.exceptions import ProfileNotFoundError

# Canonical credential keys, shared with the Jira client
CREDENTIAL_KEYS: frozenset[str] = frozenset({"url", "email", "token"})

T = TypeVar("T")


@dataclass(frozen=True)
class ConnectionProfile:
    """Named Jira connection credentials.

    Attributes:
        name: Unique, non-empty profile name
        base_url: Jira instance URL (e.g., https://company.atlassian.net)
        email: Account email used for Basic auth
        api_token: Jira API token (hidden from repr)
    """

    name: str
    base_url: str
    email: str
    api_token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Profile name must not be empty")

    def credentials(self) -> Mapping[str, str]:
        """Return the credential triple as a read-only mapping."""
        return MappingProxyType(
            {"url": self.base_url, "email": self.email, "token": self.api_token}
        )

    @classmethod
    def from_credentials(cls, name: str, credentials: Mapping[str, Any]) -> ConnectionProfile:
        """Build a profile from a stored credential mapping.

        Raises:
            KeyError: If a canonical credential key is missing
        """
        return cls(
            name=name,
            base_url=str(credentials["url"]),
            email=str(credentials["email"]),
            api_token=str(credentials["token"]),
        )


class ProfileStore(ABC):
    """Durable mapping of profile names to Jira credentials.

    Contract:
        - add() raises DuplicateProfileError for an existing name and leaves
          the stored entry untouched; on success the registry entry and the
          credentials become visible together.
        - delete() of an unknown name is a no-op.
        - get() returns None for an unknown name.

    A single asyncio.Lock serializes writers inside one process. Writers in
    different processes are last-write-wins.
    """

    def __init__(self) -> None:
        self._write_lock = asyncio.Lock()

    @staticmethod
    async def _run_blocking(func: Callable[..., T], *args: Any) -> T:
        """Run blocking storage I/O in the default executor, off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    @abstractmethod
    async def add(self, profile: ConnectionProfile) -> None:
        """Register a new profile."""

    @abstractmethod
    async def list(self) -> list[str]:
        """Return registered profile names in registration order."""

    @abstractmethod
    async def get(self, name: str) -> ConnectionProfile | None:
        """Return the profile, or None if it is not registered."""

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Remove a profile; unknown names are ignored."""

    @abstractmethod
    async def _replace(self, profile: ConnectionProfile) -> None:
        """Overwrite the credentials of an already registered profile."""

    async def update(self, profile: ConnectionProfile) -> None:
        """Replace the credentials of an existing profile.

        Raises:
            ProfileNotFoundError: If the profile is not registered
        """
        async with self._write_lock:
            if profile.name not in await self.list():
                raise ProfileNotFoundError(profile.name)
            await self._replace(profile)

    async def require(self, name: str) -> ConnectionProfile:
        """Return the profile or raise ProfileNotFoundError."""
        profile = await self.get(name)
        if profile is None:
            raise ProfileNotFoundError(name)
        return profile


__all__ = [
    "CREDENTIAL_KEYS",
    "ConnectionProfile",
    "ProfileStore",
]
