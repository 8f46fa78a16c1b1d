"""Structural contracts for the inventory host.

A :class:`~libraryapi.gui.view.View` never talks to a concrete server API.  It
relies on the small set of operations described here, which both the in-memory
host (:mod:`libraryapi.gui.memory`) and the Sponge bridge
(:mod:`libraryapi.sponge`) implement.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Protocol, runtime_checkable

__all__ = [
    "ClickEvent",
    "ClickListener",
    "InventoryHost",
    "ItemPayload",
    "OrderedInventory",
    "Slot",
    "Transaction",
]


@runtime_checkable
class ItemPayload(Protocol):
    def copy(self) -> Any:  # pragma: no cover - structural typing helper
        ...


@runtime_checkable
class Slot(Protocol):
    def set(self, item: Any) -> None:  # pragma: no cover - structural typing helper
        ...


@runtime_checkable
class OrderedInventory(Protocol):
    def size(self) -> int:  # pragma: no cover - structural typing helper
        ...

    def get_slot(self, index: int) -> Optional[Slot]:  # pragma: no cover
        ...


class Transaction(Protocol):
    """A host reported change to one slot during a click.

    ``slot_index`` is ``None`` when the slot does not belong to the view's
    inventory (for example the clicking player's own inventory).
    """

    slot_index: Optional[int]


@runtime_checkable
class ClickEvent(Protocol):
    def set_cancelled(self, cancelled: bool) -> None:  # pragma: no cover
        ...

    def is_cancelled(self) -> bool:  # pragma: no cover
        ...

    def user(self) -> Optional[Any]:  # pragma: no cover
        ...

    def transactions(self) -> Iterable[Transaction]:  # pragma: no cover
        ...


ClickListener = Callable[[ClickEvent], None]


@runtime_checkable
class InventoryHost(Protocol):
    def build_inventory(
        self, archetype: Any, plugin: Any, listener: ClickListener
    ) -> OrderedInventory:  # pragma: no cover - structural typing helper
        ...

    def open(self, user: Any, inventory: OrderedInventory, plugin: Any) -> None:  # pragma: no cover
        ...
