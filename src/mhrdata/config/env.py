"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import MissingConfigurationError


def env_str(name: str, default: str) -> str:
    """Return the environment variable ``name`` or ``default`` when unset/blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Return a comma separated environment variable as a tuple."""

    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    if not items:
        raise MissingConfigurationError(f"Missing configuration for: {name}")
    return items
