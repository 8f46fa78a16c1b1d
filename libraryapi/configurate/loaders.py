"""File loaders turning configuration files into node trees."""
from __future__ import annotations

from abc import ABC, abstractmethod
import json
from pathlib import Path
from typing import Any, Dict, Type

import yaml

from libraryapi.exceptions import ConfigurationError

from .node import ConfigurationNode

__all__ = [
    "ConfigurationLoader",
    "JsonConfigurationLoader",
    "YamlConfigurationLoader",
    "loader_for_path",
]


class ConfigurationLoader(ABC):
    """Loads and saves a :class:`ConfigurationNode` tree from one file.

    A file that does not exist yet loads as an empty node; saving creates
    the parent directories.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def create_empty_node(self) -> ConfigurationNode:
        return ConfigurationNode()

    def load(self) -> ConfigurationNode:
        if not self.path.exists():
            return self.create_empty_node()
        text = self.path.read_text(encoding="utf8")
        if not text.strip():
            return self.create_empty_node()
        data = self._decode(text)
        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration root of '{self.path}' must be a mapping, got {type(data).__name__}."
            )
        return ConfigurationNode.from_python(data)

    def save(self, node: ConfigurationNode) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = node.to_python()
        self.path.write_text(self._encode(data if data is not None else {}), encoding="utf8")

    @abstractmethod
    def _decode(self, text: str) -> Any:
        """Parse ``text`` into plain Python data."""

    @abstractmethod
    def _encode(self, data: Any) -> str:
        """Serialise plain Python ``data``."""


class JsonConfigurationLoader(ConfigurationLoader):
    def __init__(self, path: Path | str, *, indent: int = 2) -> None:
        super().__init__(path)
        self.indent = indent

    def _decode(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in '{self.path}': {exc}") from exc

    def _encode(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent)


class YamlConfigurationLoader(ConfigurationLoader):
    def _decode(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in '{self.path}': {exc}") from exc

    def _encode(self, data: Any) -> str:
        try:
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Cannot write YAML to '{self.path}': {exc}") from exc


_LOADERS_BY_SUFFIX: Dict[str, Type[ConfigurationLoader]] = {
    ".json": JsonConfigurationLoader,
    ".yml": YamlConfigurationLoader,
    ".yaml": YamlConfigurationLoader,
}


def loader_for_path(path: Path | str) -> ConfigurationLoader:
    """Return a loader matching the suffix of ``path``."""

    path = Path(path)
    loader_type = _LOADERS_BY_SUFFIX.get(path.suffix.lower())
    if loader_type is None:
        raise ConfigurationError(
            f"No configuration loader for '{path.name}'. Supported suffixes: "
            + ", ".join(sorted(_LOADERS_BY_SUFFIX))
        )
    return loader_type(path)
