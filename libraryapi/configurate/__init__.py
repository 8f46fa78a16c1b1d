"""Configuration trees backed by JSON or YAML files."""
from __future__ import annotations

from libraryapi.plugins import PLUGIN_MANAGER

from .holder import ConfigHolder
from .loaders import (
    ConfigurationLoader,
    JsonConfigurationLoader,
    YamlConfigurationLoader,
    loader_for_path,
)
from .node import ConfigurationNode

PLUGIN_MANAGER.expose("config_holder", ConfigHolder)
PLUGIN_MANAGER.expose("config_loader_for_path", loader_for_path)

__all__ = [
    "ConfigHolder",
    "ConfigurationLoader",
    "ConfigurationNode",
    "JsonConfigurationLoader",
    "YamlConfigurationLoader",
    "loader_for_path",
]
