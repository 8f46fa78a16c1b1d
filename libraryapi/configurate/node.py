"""Hierarchical configuration nodes.

A :class:`ConfigurationNode` either holds a scalar/list value or a set of
named children.  Looking up a path that does not exist returns a *virtual*
node: it remembers where it would live but is only attached to the tree once
a value is set on it.  Reading a virtual node yields the supplied default.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

__all__ = ["ConfigurationNode"]

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


class ConfigurationNode:
    def __init__(self, key: Optional[str] = None, parent: Optional["ConfigurationNode"] = None) -> None:
        self._key = key
        self._parent = parent
        self._value: Any = None
        self._children: Dict[str, ConfigurationNode] = {}
        self._attached = parent is None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    @property
    def key(self) -> Optional[str]:
        return self._key

    @property
    def parent(self) -> Optional["ConfigurationNode"]:
        return self._parent

    @property
    def path(self) -> Tuple[str, ...]:
        keys: List[str] = []
        node: Optional[ConfigurationNode] = self
        while node is not None and node._key is not None:
            keys.append(node._key)
            node = node._parent
        return tuple(reversed(keys))

    def get_node(self, *path: Any) -> "ConfigurationNode":
        """Return the node at ``path`` below this one, virtual if missing."""

        node = self
        for key in path:
            key = str(key)
            child = node._children.get(key)
            if child is None:
                child = ConfigurationNode(key, node)
            node = child
        return node

    def is_virtual(self) -> bool:
        return not self._attached

    def has_children(self) -> bool:
        return bool(self._children)

    def children(self) -> Mapping[str, "ConfigurationNode"]:
        return dict(self._children)

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def remove_child(self, key: Any) -> bool:
        child = self._children.pop(str(key), None)
        if child is None:
            return False
        child._attached = False
        return True

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------
    def set_value(self, value: Any) -> "ConfigurationNode":
        """Set this node's value, attaching it (and its parents) to the tree.

        Mappings replace the node's children.  ``None`` detaches the node.
        """

        if value is None:
            if self._parent is not None:
                self._parent.remove_child(self._key)
            self._value = None
            self._children.clear()
            return self
        self._children.clear()
        if isinstance(value, Mapping):
            self._value = None
            for key, item in value.items():
                self.get_node(key).set_value(item)
        else:
            self._value = list(value) if isinstance(value, tuple) else value
        self._attach()
        return self

    def get_value(self, default: Any = None) -> Any:
        if self._children:
            return self.to_python()
        if self._value is None:
            return default
        return self._value

    def get_string(self, default: Optional[str] = None) -> Optional[str]:
        value = self.get_value()
        if value is None or isinstance(value, (dict, list)):
            return default
        return str(value)

    def get_int(self, default: int = 0) -> int:
        value = self.get_value()
        if isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_long(self, default: int = 0) -> int:
        return self.get_int(default)

    def get_float(self, default: float = 0.0) -> float:
        value = self.get_value()
        if isinstance(value, bool):
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def get_bool(self, default: bool = False) -> bool:
        value = self.get_value()
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        return default

    def get_list(self, default: Optional[List[Any]] = None) -> List[Any]:
        value = self.get_value()
        if isinstance(value, list):
            return list(value)
        return list(default) if default is not None else []

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------
    def to_python(self) -> Any:
        if self._children:
            return {key: child.to_python() for key, child in self._children.items()}
        return self._value

    @classmethod
    def from_python(cls, data: Any) -> "ConfigurationNode":
        node = cls()
        if data is not None:
            node.set_value(data)
        return node

    def _attach(self) -> None:
        node = self
        while node._parent is not None and not node._attached:
            node._parent._children[node._key] = node
            node._attached = True
            node._parent._value = None
            node = node._parent

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        location = ".".join(self.path) or "<root>"
        return f"ConfigurationNode({location}={self.to_python()!r})"
