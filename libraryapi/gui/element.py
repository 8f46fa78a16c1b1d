"""Immutable GUI elements bound to inventory slots."""
from __future__ import annotations

from typing import Any, Callable, Optional

from libraryapi.plugins import PLUGIN_MANAGER

__all__ = ["Element", "EMPTY_ITEM", "EmptyItem"]

Action = Callable[[Any], None]


class EmptyItem:
    """Host neutral display payload representing an empty slot."""

    __slots__ = ()

    def copy(self) -> "EmptyItem":
        return self

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return "EMPTY_ITEM"


EMPTY_ITEM = EmptyItem()


def _no_action(user: Any) -> None:
    return None


class Element:
    """A slot's display payload and the action processed when it is clicked.

    Elements never change after construction and can be shared freely between
    views.  The payload is copied on every read so callers cannot reach the
    element's internal state.
    """

    __slots__ = ("_item", "_action")

    def __init__(self, item: Any, action: Optional[Action] = None) -> None:
        if action is not None and not callable(action):
            raise TypeError(f"Element actions must be callable, got {type(action)!r}.")
        object.__setattr__(self, "_item", item)
        object.__setattr__(self, "_action", action if action is not None else _no_action)

    @classmethod
    def empty(cls) -> "Element":
        """Return the shared empty element.

        The instance is reference stable, so ``element is Element.empty()``
        identifies slots that were reset.
        """

        return _EMPTY

    @property
    def action(self) -> Action:
        return self._action

    def get_item(self) -> Any:
        """Return a copy of this element's display payload."""

        return self._item.copy()

    def process(self, user: Any) -> None:
        """Run the action for ``user``.  Exceptions propagate to the caller."""

        self._action(user)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} instances are immutable.")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} instances are immutable.")

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        if self is _EMPTY:
            return "Element.empty()"
        return f"Element({self._item!r})"


_EMPTY = Element(EMPTY_ITEM)

PLUGIN_MANAGER.expose("gui_element", Element)
