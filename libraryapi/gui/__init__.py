"""GUI views built from inventory slots mapped to clickable elements."""
from __future__ import annotations

from .element import EMPTY_ITEM, Element, EmptyItem
from .host import ClickEvent, InventoryHost, OrderedInventory, Slot
from .layout import Layout
from .memory import (
    CHEST,
    DOUBLE_CHEST,
    HOPPER,
    Archetype,
    MemoryClickEvent,
    MemoryInventory,
    MemoryInventoryHost,
    MemoryItem,
    SlotTransaction,
)
from .view import View

__all__ = [
    "Archetype",
    "CHEST",
    "ClickEvent",
    "DOUBLE_CHEST",
    "EMPTY_ITEM",
    "Element",
    "EmptyItem",
    "HOPPER",
    "InventoryHost",
    "Layout",
    "MemoryClickEvent",
    "MemoryInventory",
    "MemoryInventoryHost",
    "MemoryItem",
    "OrderedInventory",
    "Slot",
    "SlotTransaction",
    "View",
]
