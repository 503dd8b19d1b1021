"""Settings modules, one per deployment environment."""

from __future__ import annotations

import os

_ENVIRONMENTS = {
    "dev": "development",
    "development": "development",
    "test": "testing",
    "testing": "testing",
    "prod": "production",
    "production": "production",
}


def get_settings_module(env: str | None = None) -> str:
    """Dotted path of the settings module for ``env`` (``APP_ENV`` when omitted).

    Unknown names use the development settings.
    """
    name = (env or os.getenv("APP_ENV") or "development").strip().lower()
    return f"config.{_ENVIRONMENTS.get(name, 'development')}"
