"""Cooldown timestamps stored in a configuration file.

Each cooldown is the epoch time, in milliseconds, at which it was last reset.
Paths are node paths inside the holder's configuration, for example
``(player_uuid, "daily-kit")``.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Optional

from libraryapi.configurate import ConfigHolder
from libraryapi.plugins import PLUGIN_MANAGER

__all__ = ["CooldownService", "current_millis"]


def current_millis() -> int:
    return int(time.time() * 1000)


class CooldownService:
    def __init__(self, config: ConfigHolder, clock: Optional[Callable[[], int]] = None) -> None:
        self._config = config
        self._clock = clock or current_millis

    def get_cooldown(self, *path: Any) -> int:
        """Return the timestamp stored at ``path``, or 0."""

        return self._config.get_node(*path).get_long(0)

    def completed_time(self, *path: Any) -> int:
        """Milliseconds elapsed since the cooldown was reset."""

        return self._clock() - self.get_cooldown(*path)

    def remaining_time(self, cooldown: int, *path: Any) -> int:
        """Milliseconds left of a ``cooldown`` millisecond cooldown."""

        return cooldown - self.completed_time(*path)

    def is_finished(self, cooldown: int, *path: Any) -> bool:
        return self.remaining_time(cooldown, *path) <= 0

    def reset_cooldown(self, *path: Any) -> bool:
        """Stamp the cooldown at ``path`` with the current time and save.

        Returns whether the configuration was saved.
        """

        self._config.get_node(*path).set_value(self._clock())
        return self._config.save()


PLUGIN_MANAGER.expose("cooldown_service", CooldownService)
