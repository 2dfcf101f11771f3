"""Read access to the optimizer settings.

The host platform persists settings; this module only reads them. Values are
strings, and a missing or empty value reads as absent.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

from dotenv import dotenv_values, find_dotenv

from melcloud_optimizer.const import ENV_SETTING_KEYS


if TYPE_CHECKING:
    from pathlib import Path

_LOGGER = logging.getLogger(__name__)


class SettingsReader(Protocol):
    """Anything that can return a setting value by key."""

    def get(self, key: str) -> str | None:
        """Return the value for ``key`` or None if it is not set."""


class MappingSettings:
    """Settings backed by a plain mapping."""

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        """Return the value for ``key`` as a string, or None if unset or empty."""
        value = self._values.get(key)
        if value is None or value == "":
            return None
        return str(value)


def load_env_settings(path: str | Path | None = None) -> MappingSettings:
    """Build settings from a .env file and the process environment.

    Environment variables take precedence over the file. Only the variables in
    ``ENV_SETTING_KEYS`` are read, each stored under its setting key
    (``MELCLOUD_USER`` becomes ``melcloud_user``).

    Args:
        path: Optional path to a .env file. Defaults to ``.env`` in the working directory.

    Returns:
        MappingSettings with the values found.
    """
    file_values = dotenv_values(path if path is not None else find_dotenv(usecwd=True))

    values: dict[str, str] = {}
    for env_name, setting_key in ENV_SETTING_KEYS.items():
        value = os.environ.get(env_name, file_values.get(env_name))
        if value:
            values[setting_key] = value

    _LOGGER.debug("Loaded settings: %s", sorted(values))
    return MappingSettings(values)
