"""Holder pairing a configuration loader with its loaded root node."""
from __future__ import annotations

import logging
from typing import Any

from libraryapi.exceptions import ConfigurationError

from .loaders import ConfigurationLoader
from .node import ConfigurationNode

__all__ = ["ConfigHolder"]

logger = logging.getLogger("libraryapi.configurate")


class ConfigHolder:
    """Contains a :class:`ConfigurationLoader` and its root node.

    The file is loaded once when the holder is created; failures at that
    point raise :class:`ConfigurationError`.  Later calls to :meth:`load` and
    :meth:`save` report failures by returning ``False`` and keep the
    previously loaded tree.
    """

    def __init__(self, loader: ConfigurationLoader) -> None:
        self._loader = loader
        try:
            self._node = loader.load()
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Unable to load configuration from '{loader.path}'.") from exc

    @property
    def loader(self) -> ConfigurationLoader:
        return self._loader

    @property
    def root_node(self) -> ConfigurationNode:
        return self._node

    def get_node(self, *path: Any) -> ConfigurationNode:
        """Return the node at ``path`` below the root node."""

        return self._node.get_node(*path)

    def save(self) -> bool:
        """Write the root node through the loader.  Returns whether it worked."""

        try:
            self._loader.save(self._node)
        except (OSError, ValueError, TypeError, ConfigurationError):
            logger.exception("Unable to save configuration to %s", self._loader.path)
            return False
        return True

    def load(self) -> bool:
        """Reload the root node from the loader.  Returns whether it worked."""

        try:
            self._node = self._loader.load()
        except (OSError, ValueError, ConfigurationError):
            logger.exception("Unable to load configuration from %s", self._loader.path)
            return False
        return True
