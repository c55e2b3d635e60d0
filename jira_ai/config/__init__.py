"""Configuration management for Jira AI Helper.

This package contains:
- settings: Settings dataclass with all configuration options
- manager: ConfigManager for loading/saving configuration, provider key lookup
"""

from jira_ai.config.manager import (
    ConfigManager,
    require_provider_key,
    resolve_provider_key,
    validate_settings,
)
from jira_ai.config.settings import CONFIG_FILE, PROVIDER_KEY_ENV_VARS, Settings

__all__ = [
    "CONFIG_FILE",
    "PROVIDER_KEY_ENV_VARS",
    "ConfigManager",
    "Settings",
    "require_provider_key",
    "resolve_provider_key",
    "validate_settings",
]
