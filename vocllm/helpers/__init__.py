"""Shared helper functions used by configuration and the CLI."""

from .env import env_flag, env_optional_float, env_optional_int

__all__ = [
    "env_flag",
    "env_optional_float",
    "env_optional_int",
]
