"""Helper services for plugins running inside a Sponge game server.

The library bundles the small utilities most plugins end up writing
themselves:

* :mod:`libraryapi.gui`: reusable inventory views whose slots run actions
  when clicked.
* :mod:`libraryapi.configurate`: configuration trees backed by JSON or YAML.
* :mod:`libraryapi.cooldown`: cooldowns persisted in a configuration file.
* :mod:`libraryapi.logger`: a logger mirroring messages into log files.
* :mod:`libraryapi.message`: keyed messages with per-locale translations.

Services are also exposed to other plugins through
:data:`libraryapi.plugins.PLUGIN_MANAGER`.
"""

from __future__ import annotations

from .configurate import ConfigHolder
from .cooldown import CooldownService
from .gui import Element, Layout, View
from .logger import LoggerService, LogFile
from .message import MessageService, TranslatableMessage
from .plugins import PLUGIN_MANAGER, PluginError, PluginManager
from .settings import LibrarySettings

__version__ = "0.2.0"

__all__ = [
    "ConfigHolder",
    "CooldownService",
    "Element",
    "Layout",
    "LibrarySettings",
    "LogFile",
    "LoggerService",
    "MessageService",
    "PLUGIN_MANAGER",
    "PluginError",
    "PluginManager",
    "TranslatableMessage",
    "View",
]
