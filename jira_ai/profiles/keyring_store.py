"""Profile store backed by the operating system's secret storage.

Uses the ``keyring`` library. The registry is stored as a JSON list under
the ``connections`` entry and each profile's credentials as a JSON object
under ``profile:<name>``. The secret store has no multi-key transactions,
so writes are ordered instead:

- add: credentials first, registry entry second
- delete: registry entry first, credentials second

A reader therefore never sees a registered name whose credentials are
missing. A crash between the two steps can leave unregistered credentials
behind, which are invisible and overwritten by the next add.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from jira_ai.profiles.base import CREDENTIAL_KEYS, ConnectionProfile, ProfileStore
from jira_ai.profiles.exceptions import DuplicateProfileError, ProfileStoreError
from jira_ai.utils.logging import log_message

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "jira-ai-helper"
REGISTRY_ENTRY = "connections"


def _profile_entry(name: str) -> str:
    return f"profile:{name}"


class KeyringProfileStore(ProfileStore):
    """Profile store using the system keyring.

    Attributes:
        service_name: Keyring service under which all entries are stored
    """

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME) -> None:
        super().__init__()
        self.service_name = service_name

    async def add(self, profile: ConnectionProfile) -> None:
        async with self._write_lock:
            await self._run_blocking(self._add_entries, profile)
        log_message(f"Profile added: {profile.name}")

    async def list(self) -> list[str]:
        return await self._run_blocking(self._read_registry)

    async def get(self, name: str) -> ConnectionProfile | None:
        return await self._run_blocking(self._load_profile, name)

    async def delete(self, name: str) -> None:
        async with self._write_lock:
            await self._run_blocking(self._delete_entries, name)
        log_message(f"Profile deleted: {name}")

    async def _replace(self, profile: ConnectionProfile) -> None:
        await self._run_blocking(self._write_credentials, profile)
        log_message(f"Profile updated: {profile.name}")

    # Blocking helpers below run in the default executor

    def _add_entries(self, profile: ConnectionProfile) -> None:
        registry = self._read_registry()
        if profile.name in registry:
            raise DuplicateProfileError(profile.name)
        self._write_credentials(profile)
        self._write_registry([*registry, profile.name])

    def _load_profile(self, name: str) -> ConnectionProfile | None:
        if name not in self._read_registry():
            return None
        raw = self._get_secret(_profile_entry(name))
        if raw is None:
            logger.warning("Profile '%s' is registered without stored credentials", name)
            return None
        try:
            stored: Any = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Profile '%s' has unreadable credentials", name)
            return None
        if not isinstance(stored, dict) or not CREDENTIAL_KEYS <= stored.keys():
            return None
        return ConnectionProfile.from_credentials(name, stored)

    def _delete_entries(self, name: str) -> None:
        registry = self._read_registry()
        if name in registry:
            self._write_registry([n for n in registry if n != name])
        try:
            keyring.delete_password(self.service_name, _profile_entry(name))
        except PasswordDeleteError:
            pass  # nothing stored
        except KeyringError as e:
            raise ProfileStoreError(f"Cannot delete credentials for '{name}': {e}") from e

    def _get_secret(self, entry: str) -> str | None:
        try:
            return keyring.get_password(self.service_name, entry)
        except KeyringError as e:
            raise ProfileStoreError(f"Cannot read secret storage: {e}") from e

    def _set_secret(self, entry: str, value: str) -> None:
        try:
            keyring.set_password(self.service_name, entry, value)
        except KeyringError as e:
            raise ProfileStoreError(f"Cannot write secret storage: {e}") from e

    def _read_registry(self) -> list[str]:
        raw = self._get_secret(REGISTRY_ENTRY)
        if not raw:
            return []
        try:
            names = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Profile registry in secret storage is unreadable; treating as empty")
            return []
        if not isinstance(names, list):
            return []
        return [name for name in names if isinstance(name, str)]

    def _write_registry(self, names: list[str]) -> None:
        self._set_secret(REGISTRY_ENTRY, json.dumps(names))

    def _write_credentials(self, profile: ConnectionProfile) -> None:
        self._set_secret(_profile_entry(profile.name), json.dumps(dict(profile.credentials())))


__all__ = ["DEFAULT_SERVICE_NAME", "KeyringProfileStore"]
