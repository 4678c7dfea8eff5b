"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def optional_env_var(name: str) -> str | None:
    """Return an environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_flag(name: str) -> bool:
    value = optional_env_var(name)
    return value is not None and value.lower() in _TRUTHY
