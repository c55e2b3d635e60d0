"""Connection profile storage.

This package provides:
- ConnectionProfile: named Jira credentials
- ProfileStore: async store interface
- InMemoryProfileStore, FileProfileStore, KeyringProfileStore: implementations
- create_profile_store: factory selecting an implementation from Settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jira_ai.profiles.base import CREDENTIAL_KEYS, ConnectionProfile, ProfileStore
from jira_ai.profiles.exceptions import (
    DuplicateProfileError,
    ProfileError,
    ProfileNotFoundError,
    ProfileStoreError,
)
from jira_ai.profiles.file_store import FileProfileStore
from jira_ai.profiles.memory import InMemoryProfileStore
from jira_ai.utils.errors import ConfigurationError

if TYPE_CHECKING:
    from jira_ai.config.settings import Settings


def create_profile_store(settings: Settings) -> ProfileStore:
    """Create the profile store selected by the PROFILE_STORE setting.

    Args:
        settings: Loaded settings

    Returns:
        A ProfileStore implementation

    Raises:
        ConfigurationError: If PROFILE_STORE names an unknown backend
    """
    kind = settings.profile_store.strip().lower()
    if kind == "file":
        return FileProfileStore(settings.profiles_file)
    if kind == "keyring":
        # Imported lazily so file-based setups never touch the OS keyring
        from jira_ai.profiles.keyring_store import KeyringProfileStore

        return KeyringProfileStore()
    if kind == "memory":
        return InMemoryProfileStore()
    raise ConfigurationError(
        f"Invalid PROFILE_STORE '{settings.profile_store}'. Allowed values: file, keyring, memory"
    )


__all__ = [
    "CREDENTIAL_KEYS",
    "ConnectionProfile",
    "ProfileStore",
    "InMemoryProfileStore",
    "FileProfileStore",
    "create_profile_store",
    "ProfileError",
    "DuplicateProfileError",
    "ProfileNotFoundError",
    "ProfileStoreError",
]
