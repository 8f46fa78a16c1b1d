"""Pure Python inventory host.

The in-memory host implements the contracts of :mod:`libraryapi.gui.host`
without a running server.  It is useful for previewing layouts, for unit tests
and for hosts that render inventories on their own.  Clicks are simulated with
:meth:`MemoryInventory.click`, which delivers the event to the listener bound
when the inventory was built, exactly like the real host does.
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from libraryapi.plugins import PLUGIN_MANAGER

from .element import EMPTY_ITEM
from .host import ClickListener

__all__ = [
    "Archetype",
    "MemoryClickEvent",
    "MemoryInventory",
    "MemoryInventoryHost",
    "MemoryItem",
    "MemorySlot",
    "SlotTransaction",
    "CHEST",
    "DOUBLE_CHEST",
    "HOPPER",
]


@dataclass(frozen=True)
class Archetype:
    """Shape of an inventory, in rows of ``columns`` slots."""

    identifier: str
    rows: int
    columns: int = 9

    @property
    def size(self) -> int:
        return self.rows * self.columns


CHEST = Archetype("chest", 3)
DOUBLE_CHEST = Archetype("double_chest", 6)
HOPPER = Archetype("hopper", 1, 5)


@dataclass
class MemoryItem:
    """Mutable item stack used as a display payload."""

    kind: str
    quantity: int = 1
    name: Optional[str] = None
    lore: List[str] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)

    def copy(self) -> "MemoryItem":
        return deepcopy(self)


class MemorySlot:
    """A single addressable slot of a :class:`MemoryInventory`."""

    def __init__(self, index: int) -> None:
        self.index = index
        self.item: Any = EMPTY_ITEM

    def set(self, item: Any) -> None:
        self.item = item

    def clear(self) -> None:
        self.item = EMPTY_ITEM

    def is_empty(self) -> bool:
        return self.item is EMPTY_ITEM


@dataclass(frozen=True)
class SlotTransaction:
    slot_index: Optional[int]


class MemoryClickEvent:
    """Click event bundling one transaction per affected slot."""

    def __init__(self, user: Any, transactions: Sequence[SlotTransaction]) -> None:
        self._user = user
        self._transactions = tuple(transactions)
        self._cancelled = False

    def set_cancelled(self, cancelled: bool) -> None:
        self._cancelled = bool(cancelled)

    def is_cancelled(self) -> bool:
        return self._cancelled

    def user(self) -> Any:
        return self._user

    def transactions(self) -> Tuple[SlotTransaction, ...]:
        return self._transactions


class MemoryInventory:
    """Fixed size ordered inventory with a single click listener."""

    def __init__(self, archetype: Archetype, plugin: Any, listener: ClickListener) -> None:
        self.archetype = archetype
        self.plugin = plugin
        self._listener = listener
        self._slots = [MemorySlot(index) for index in range(archetype.size)]
        self.viewers: List[Tuple[Any, Any]] = []

    def size(self) -> int:
        return len(self._slots)

    def get_slot(self, index: int) -> Optional[MemorySlot]:
        if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self._slots):
            return self._slots[index]
        return None

    def peek(self, index: int) -> Any:
        """Return the payload currently displayed at ``index``."""

        return self._slots[index].item

    def contents(self) -> List[Any]:
        return [slot.item for slot in self._slots]

    def click(self, user: Any, *indices: Optional[int]) -> MemoryClickEvent:
        """Simulate a click by ``user`` touching ``indices`` and return the event.

        Indices outside the inventory are reported with ``slot_index=None``,
        the way the real host reports slots of another inventory.
        """

        transactions = [
            SlotTransaction(index if self.get_slot(index) is not None else None)
            for index in indices
        ]
        event = MemoryClickEvent(user, transactions)
        self._listener(event)
        return event


class MemoryInventoryHost:
    """Host implementation building :class:`MemoryInventory` instances."""

    def __init__(self) -> None:
        self.inventories: List[MemoryInventory] = []

    def build_inventory(self, archetype: Archetype, plugin: Any, listener: ClickListener) -> MemoryInventory:
        inventory = MemoryInventory(archetype, plugin, listener)
        self.inventories.append(inventory)
        return inventory

    def open(self, user: Any, inventory: MemoryInventory, plugin: Any) -> None:
        inventory.viewers.append((user, plugin))

    def iter_viewers(self) -> Iterable[Tuple[MemoryInventory, Any]]:
        for inventory in self.inventories:
            for user, _ in inventory.viewers:
                yield inventory, user


PLUGIN_MANAGER.expose("gui_memory_host", MemoryInventoryHost)
