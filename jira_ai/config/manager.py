"""Configuration manager for Jira AI Helper.

This module provides the ConfigManager class for loading, saving, and
managing configuration values with a cascading hierarchy:

    1. Environment Variables (highest priority)
    2. Global Config (~/.jira-ai-config)
    3. Built-in Defaults (lowest priority)
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
import uuid
from collections.abc import Mapping
from pathlib import Path

from jira_ai.config.settings import (
    CONFIG_FILE,
    MAX_REQUEST_TIMEOUT_SECONDS,
    PROVIDER_KEY_ENV_VARS,
    SUPPORTED_JIRA_API_VERSIONS,
    Settings,
)
from jira_ai.utils.env_utils import first_env_value, is_sensitive_key
from jira_ai.utils.errors import ConfigurationError
from jira_ai.utils.logging import log_message

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
_LINE_PATTERN = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)=(.*)$")


def resolve_provider_key(environ: Mapping[str, str] | None = None) -> str | None:
    """Resolve the AI provider key from the environment.

    Checks PROVIDER_KEY_ENV_VARS in order and returns the first non-empty
    value. The key is never read from the config file.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        The provider key, or None if no accepted variable is set
    """
    return first_env_value(PROVIDER_KEY_ENV_VARS, environ)


def require_provider_key(environ: Mapping[str, str] | None = None) -> str:
    """Like resolve_provider_key, but a missing key is a ConfigurationError."""
    key = resolve_provider_key(environ)
    if key is None:
        raise ConfigurationError(
            "AI provider key not configured. Set one of: " + ", ".join(PROVIDER_KEY_ENV_VARS)
        )
    return key


def validate_settings(settings: Settings) -> None:
    """Validate settings that would otherwise fail late on the network.

    Raises:
        ConfigurationError: If the Jira API version or timeout is invalid
    """
    if settings.jira_api_version not in SUPPORTED_JIRA_API_VERSIONS:
        raise ConfigurationError(
            f"Invalid JIRA_API_VERSION '{settings.jira_api_version}'. "
            f"Allowed values: {', '.join(sorted(SUPPORTED_JIRA_API_VERSIONS))}"
        )
    if not 0 < settings.request_timeout_seconds <= MAX_REQUEST_TIMEOUT_SECONDS:
        raise ConfigurationError(
            f"REQUEST_TIMEOUT_SECONDS must be between 0 and {MAX_REQUEST_TIMEOUT_SECONDS:g}, "
            f"got {settings.request_timeout_seconds:g}"
        )


class ConfigManager:
    """Manages configuration loading and saving.

    Configuration Precedence (highest to lowest):
    1. Environment Variables - CI/CD, temporary overrides
    2. Global Config (~/.jira-ai-config) - User defaults
    3. Built-in Defaults - Fallback values

    Security features:
    - Safe line-by-line parsing (no eval/exec)
    - Key name validation
    - Atomic file writes
    - Secure file permissions (600)

    Attributes:
        settings: Current settings instance
        global_config_path: Path to global ~/.jira-ai-config file
    """

    def __init__(
        self,
        global_config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the configuration manager.

        Args:
            global_config_path: Optional custom path to global config file.
                                Defaults to ~/.jira-ai-config.
            environ: Optional environment mapping (defaults to os.environ)
        """
        self.global_config_path = global_config_path or CONFIG_FILE
        self._environ = environ
        self.settings = Settings()
        self._raw_values: dict[str, str] = {}

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def load(self) -> Settings:
        """Load configuration from all sources with cascading precedence.

        This method is idempotent - each call starts from clean defaults
        to prevent stale values from persisting across multiple loads.

        Returns:
            Settings instance with loaded values
        """
        self.settings = Settings()
        self._raw_values = {}

        if self.global_config_path.exists():
            log_message(f"Loading global configuration from {self.global_config_path}")
            self._raw_values.update(self._read_file_values(self.global_config_path))

        self._load_environment()

        for key, value in self._raw_values.items():
            self._apply_value_to_settings(key, value)

        log_message(f"Configuration loaded successfully ({len(self._raw_values)} keys)")
        return self.settings

    def _load_environment(self) -> None:
        """Override config with environment variables for known keys only."""
        for key in Settings.get_config_keys():
            env_value = self.environ.get(key)
            if env_value is not None:
                self._raw_values[key] = env_value

    def _apply_value_to_settings(self, key: str, value: str) -> None:
        """Apply a raw config value to the settings object.

        Args:
            key: Configuration key
            value: Raw string value from file or environment
        """
        attr = self.settings.get_attribute_for_key(key)
        if attr is None:
            return  # Unknown key, ignore

        current_value = getattr(self.settings, attr)

        if isinstance(current_value, bool):
            setattr(self.settings, attr, value.strip().lower() in ("true", "1", "yes"))
        elif isinstance(current_value, int):
            try:
                setattr(self.settings, attr, int(value))
            except ValueError:
                logger.warning(f"Ignoring non-integer value for {key}")
        elif isinstance(current_value, float):
            try:
                setattr(self.settings, attr, float(value))
            except ValueError:
                logger.warning(f"Ignoring non-numeric value for {key}")
        else:
            setattr(self.settings, attr, value.strip())

    def save(self, key: str, value: str) -> None:
        """Save a configuration value to the global config file.

        Writes the value and then reloads all configuration, so in-memory
        settings always reflect the effective value (an environment
        variable still wins over the saved one).

        Args:
            key: Configuration key (must match pattern: [a-zA-Z_][a-zA-Z0-9_]*)
            value: Configuration value to save

        Raises:
            ValueError: If key name is invalid
        """
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid config key: {key}")

        target_path = self.global_config_path
        existing_lines: list[str] = []
        if target_path.exists():
            existing_lines = target_path.read_text().splitlines()

        new_lines: list[str] = []
        written = False
        escaped_value = self._escape_value_for_storage(value)

        for line in existing_lines:
            match = _LINE_PATTERN.match(line.strip())
            if match and match.group(1) == key:
                new_lines.append(f'{key}="{escaped_value}"')
                written = True
            else:
                # Preserve comments, blank lines and other keys
                new_lines.append(line)

        if not written:
            new_lines.append(f'{key}="{escaped_value}"')

        self._atomic_write_to_path(new_lines, target_path)

        if is_sensitive_key(key):
            log_message(f"Configuration saved: {key}=<REDACTED>")
        else:
            log_message(f"Configuration saved: {key}")

        self.load()

    def get_or_create_user_id(self) -> str:
        """Return the per-install user identifier, creating it on first use.

        The identifier is a random UUID4 persisted as USER_ID in the global
        config so summary requests can be attributed without any account.
        """
        if self.settings.user_id:
            return self.settings.user_id
        user_id = str(uuid.uuid4())
        self.save("USER_ID", user_id)
        log_message("Generated new user identifier")
        return user_id

    def _read_file_values(self, path: Path) -> dict[str, str]:
        """Read key=value pairs from a config file without modifying state.

        Args:
            path: Path to the config file

        Returns:
            Dictionary of key-value pairs
        """
        values: dict[str, str] = {}

        with path.open() as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                match = _LINE_PATTERN.match(line)
                if match:
                    key, value = match.groups()
                    # Only unescape for double-quoted values (single quotes are literal)
                    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                        value = self._unescape_value(value[1:-1])
                    elif len(value) >= 2 and value.startswith("'") and value.endswith("'"):
                        value = value[1:-1]
                    values[key] = value
        return values

    @staticmethod
    def _atomic_write_to_path(lines: list[str], target_path: Path) -> None:
        """Atomically write lines to a config file with 0600 permissions.

        Args:
            lines: Lines to write
            target_path: Path to write to
        """
        target_path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=target_path.parent,
            prefix=".jira-ai-config-",
        )
        try:
            with os.fdopen(fd, "w") as f:
                f.write("\n".join(lines))
                if lines:
                    f.write("\n")

            os.chmod(temp_path, 0o600)
            Path(temp_path).replace(target_path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    @staticmethod
    def _escape_value_for_storage(value: str) -> str:
        """Escape backslashes and double quotes for double-quoted storage."""
        result = value.replace("\\", "\\\\")
        result = result.replace('"', '\\"')
        return result

    @staticmethod
    def _unescape_value(value: str) -> str:
        """Reverse _escape_value_for_storage."""
        result = value.replace("\\\\", "\\")
        result = result.replace('\\"', '"')
        return result


__all__ = [
    "ConfigManager",
    "require_provider_key",
    "resolve_provider_key",
    "validate_settings",
]
