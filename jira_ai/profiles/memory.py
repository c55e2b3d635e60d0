"""In-memory profile store, used by tests and embedding callers."""

from __future__ import annotations

from jira_ai.profiles.base import ConnectionProfile, ProfileStore
from jira_ai.profiles.exceptions import DuplicateProfileError


class InMemoryProfileStore(ProfileStore):
    """Profile store kept in process memory.

    The registry and the credentials live in one dict keyed by name
    (insertion-ordered), so they cannot drift apart.
    """

    def __init__(self, profiles: list[ConnectionProfile] | None = None) -> None:
        super().__init__()
        self._profiles: dict[str, ConnectionProfile] = {}
        for profile in profiles or []:
            if profile.name in self._profiles:
                raise DuplicateProfileError(profile.name)
            self._profiles[profile.name] = profile

    async def add(self, profile: ConnectionProfile) -> None:
        async with self._write_lock:
            if profile.name in self._profiles:
                raise DuplicateProfileError(profile.name)
            self._profiles[profile.name] = profile

    async def list(self) -> list[str]:
        return [*self._profiles]

    async def get(self, name: str) -> ConnectionProfile | None:
        return self._profiles.get(name)

    async def delete(self, name: str) -> None:
        async with self._write_lock:
            self._profiles.pop(name, None)

    async def _replace(self, profile: ConnectionProfile) -> None:
        self._profiles[profile.name] = profile


__all__ = ["InMemoryProfileStore"]
