"""Environment variable utilities for Jira AI Helper.

Provides sensitive key detection (so secrets never reach the logs) and
ordered-fallback lookup for settings that accept several variable names.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

# Keys containing these substrings are considered sensitive and should not be logged
SENSITIVE_KEY_PATTERNS = ("TOKEN", "KEY", "SECRET", "PASSWORD", "CREDENTIAL")


def is_sensitive_key(key: str) -> bool:
    """Check if a configuration key contains sensitive data.

    Args:
        key: The configuration key name

    Returns:
        True if the key is considered sensitive
    """
    key_upper = key.upper()
    return any(pattern in key_upper for pattern in SENSITIVE_KEY_PATTERNS)


def first_env_value(
    names: Iterable[str],
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Return the first non-empty value among the given variable names.

    Names are checked in order; a variable that is set but empty (or only
    whitespace) is skipped so it cannot mask a later, valid one.

    Args:
        names: Ordered variable names to try
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        The first non-empty value, stripped, or None if none is set
    """
    source = os.environ if environ is None else environ
    for name in names:
        value = source.get(name)
        if value and value.strip():
            return value.strip()
    return None


__all__ = [
    "SENSITIVE_KEY_PATTERNS",
    "first_env_value",
    "is_sensitive_key",
]
