"""JSON-file profile store.

The whole store is one JSON document:

    {
      "registry": ["Main", "Staging"],
      "credentials": {
        "Main": {"url": "...", "email": "...", "token": "..."},
        ...
      }
    }

Every write replaces the file atomically (temp file in the same directory,
then rename), so a reader sees either the old or the new document and never
a registry entry without its credentials.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from jira_ai.profiles.base import CREDENTIAL_KEYS, ConnectionProfile, ProfileStore
from jira_ai.profiles.exceptions import DuplicateProfileError, ProfileStoreError
from jira_ai.utils.logging import log_message

logger = logging.getLogger(__name__)


def _empty_document() -> dict[str, Any]:
    return {"registry": [], "credentials": {}}


def _has_credentials(stored: Any) -> bool:
    return isinstance(stored, dict) and CREDENTIAL_KEYS <= stored.keys()


class FileProfileStore(ProfileStore):
    """Profile store backed by a 0600 JSON file.

    Attributes:
        path: Location of the JSON document
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path).expanduser()

    async def add(self, profile: ConnectionProfile) -> None:
        async with self._write_lock:
            document = await self._run_blocking(self._read_document)
            if profile.name in document["registry"]:
                raise DuplicateProfileError(profile.name)
            document["credentials"][profile.name] = dict(profile.credentials())
            document["registry"].append(profile.name)
            await self._run_blocking(self._write_document, document)
        log_message(f"Profile added: {profile.name}")

    async def list(self) -> list[str]:
        document = await self._run_blocking(self._read_document)
        credentials = document["credentials"]
        return [name for name in document["registry"] if _has_credentials(credentials.get(name))]

    async def get(self, name: str) -> ConnectionProfile | None:
        document = await self._run_blocking(self._read_document)
        if name not in document["registry"]:
            return None
        stored = document["credentials"].get(name)
        if not _has_credentials(stored):
            logger.warning("Profile '%s' is registered without complete credentials", name)
            return None
        return ConnectionProfile.from_credentials(name, stored)

    async def delete(self, name: str) -> None:
        async with self._write_lock:
            document = await self._run_blocking(self._read_document)
            if name not in document["registry"] and name not in document["credentials"]:
                return
            document["registry"] = [n for n in document["registry"] if n != name]
            document["credentials"].pop(name, None)
            await self._run_blocking(self._write_document, document)
        log_message(f"Profile deleted: {name}")

    async def _replace(self, profile: ConnectionProfile) -> None:
        document = await self._run_blocking(self._read_document)
        document["credentials"][profile.name] = dict(profile.credentials())
        await self._run_blocking(self._write_document, document)
        log_message(f"Profile updated: {profile.name}")

    def _read_document(self) -> dict[str, Any]:
        """Load the JSON document, returning an empty one if the file is missing.

        Raises:
            ProfileStoreError: If the file cannot be read or has the wrong shape
        """
        if not self.path.exists():
            return _empty_document()
        try:
            text = self.path.read_text(encoding="utf-8")
            if not text.strip():
                return _empty_document()
            raw = json.loads(text)
        except (OSError, json.JSONDecodeError) as e:
            raise ProfileStoreError(f"Cannot read profile store {self.path}: {e}") from e

        registry = raw.get("registry") if isinstance(raw, dict) else None
        credentials = raw.get("credentials") if isinstance(raw, dict) else None
        if not isinstance(registry, list) or not isinstance(credentials, dict):
            raise ProfileStoreError(f"Profile store {self.path} is malformed")
        return {
            "registry": [name for name in registry if isinstance(name, str)],
            "credentials": credentials,
        }

    def _write_document(self, document: dict[str, Any]) -> None:
        """Atomically replace the store file.

        Raises:
            ProfileStoreError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".jira-ai-profiles-")
        except OSError as e:
            raise ProfileStoreError(f"Cannot write profile store {self.path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.write("\n")
            os.chmod(temp_path, 0o600)
            Path(temp_path).replace(self.path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise ProfileStoreError(f"Cannot write profile store {self.path}: {e}") from e


__all__ = ["FileProfileStore"]
