"""Environment helper utilities.

Provides functions for parsing environment variables into typed
configuration values.
"""

from __future__ import annotations

import os


def env_flag(name: str, default: bool) -> bool:
    """Return True/False for typical truthy env encodings."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_optional_float(name: str) -> float | None:
    """Return a float from the environment, or None when unset or blank."""
    value = (os.getenv(name) or "").strip()
    if not value:
        return None
    return float(value)


def env_optional_int(name: str, default: int) -> int | None:
    """Return an int from the environment where 0 or less means disabled.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        The positive integer, or None when the value is 0 or negative.
    """
    value = (os.getenv(name) or "").strip()
    parsed = int(value) if value else default
    return parsed if parsed > 0 else None


__all__ = [
    "env_flag",
    "env_optional_float",
    "env_optional_int",
]
