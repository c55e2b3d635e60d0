"""Settings dataclass for Jira AI Helper configuration.

This module defines the Settings dataclass that holds all configuration
values, plus the ordered list of environment variables accepted for the
AI provider key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# Accepted environment variables for the AI provider key, in lookup order.
# Provider keys are only ever read from the environment, never from files.
PROVIDER_KEY_ENV_VARS: tuple[str, ...] = ("OPENAI_API_KEY", "Jira_AI_Key", "JIRA_AI_KEY")

DEFAULT_AI_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_PROFILES_FILE = Path.home() / ".jira-ai-profiles.json"

SUPPORTED_JIRA_API_VERSIONS = frozenset({"2", "3"})
MAX_REQUEST_TIMEOUT_SECONDS = 300.0


@dataclass
class Settings:
    """Configuration settings for Jira AI Helper.

    All settings have sensible defaults and can be loaded from
    the configuration file (~/.jira-ai-config) or the environment.

    Attributes:
        jira_api_version: Jira REST API version used for issue fetches ("2" or "3")
        request_timeout_seconds: Per-request timeout for Jira and AI calls
        summary_backend: Summarization backend ("openai" or "proxy")
        ai_api_url: Chat-completions endpoint for the openai backend
        ai_model: Model name sent to the chat-completions endpoint
        ai_max_tokens: Upper bound on generated tokens
        ai_temperature: Sampling temperature (kept low for parseable output)
        proxy_url: Base URL of the summary proxy for the proxy backend
        proxy_allow_refetch: Let the proxy re-fetch tickets with client credentials
        profile_store: Profile storage backend ("file", "keyring" or "memory")
        profiles_file: Path of the JSON profile store
        user_id: Persisted per-install user identifier
    """

    # Jira settings
    jira_api_version: str = "3"
    request_timeout_seconds: float = 30.0

    # Summary backend settings
    summary_backend: str = "openai"
    ai_api_url: str = DEFAULT_AI_API_URL
    ai_model: str = "gpt-3.5-turbo"
    ai_max_tokens: int = 800
    ai_temperature: float = 0.2

    # Proxy settings
    proxy_url: str = ""
    proxy_allow_refetch: bool = False

    # Profile settings
    profile_store: str = "file"
    profiles_file: str = str(DEFAULT_PROFILES_FILE)

    # Identity
    user_id: str = ""

    # Config key to attribute mapping
    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "JIRA_API_VERSION": "jira_api_version",
            "REQUEST_TIMEOUT_SECONDS": "request_timeout_seconds",
            "SUMMARY_BACKEND": "summary_backend",
            "AI_API_URL": "ai_api_url",
            "AI_MODEL": "ai_model",
            "AI_MAX_TOKENS": "ai_max_tokens",
            "AI_TEMPERATURE": "ai_temperature",
            "PROXY_URL": "proxy_url",
            "PROXY_ALLOW_REFETCH": "proxy_allow_refetch",
            "PROFILE_STORE": "profile_store",
            "PROFILES_FILE": "profiles_file",
            "USER_ID": "user_id",
        },
        repr=False,
    )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key."""
        return self._key_mapping.get(key)

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get list of all valid configuration keys."""
        temp = cls()
        return list(temp._key_mapping.keys())


# Default configuration file path
CONFIG_FILE = Path.home() / ".jira-ai-config"


__all__ = [
    "Settings",
    "CONFIG_FILE",
    "DEFAULT_AI_API_URL",
    "DEFAULT_PROFILES_FILE",
    "MAX_REQUEST_TIMEOUT_SECONDS",
    "PROVIDER_KEY_ENV_VARS",
    "SUPPORTED_JIRA_API_VERSIONS",
]
