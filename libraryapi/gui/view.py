"""Reusable GUI views backed by a single host inventory.

A :class:`View` is built once per inventory layout and reopened for as many
users as needed, so the inventory is never rebuilt when a player opens it.
Changes made through :meth:`View.define` and :meth:`View.update` show up for
every viewer immediately because they all look at the same inventory.

Clicks never move items.  The host delivers every click on the inventory to
:meth:`View.process_click`, which cancels the event and runs the action of the
element mapped to the clicked slot.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from libraryapi.plugins import PLUGIN_MANAGER

from .element import Element
from .host import ClickEvent, InventoryHost, OrderedInventory

__all__ = ["View"]

logger = logging.getLogger("libraryapi.gui")


class View:
    """A GUI view: one inventory plus a slot index to :class:`Element` table.

    The host builds the inventory when the view is created and binds
    :meth:`process_click` as its only click listener.  ``plugin`` is the
    owning plugin; it is used to build the inventory and as the cause when
    the view is opened.
    """

    def __init__(self, archetype: Any, plugin: Any, host: InventoryHost) -> None:
        self._plugin = plugin
        self._host = host
        self._slots: Dict[int, Element] = {}
        self._inventory: OrderedInventory = host.build_inventory(archetype, plugin, self.process_click)

    @property
    def inventory(self) -> OrderedInventory:
        return self._inventory

    @property
    def plugin(self) -> Any:
        return self._plugin

    @property
    def size(self) -> int:
        return self._inventory.size()

    @property
    def slots(self) -> Mapping[int, Element]:
        """Read-only view of the current slot index to element table."""

        return MappingProxyType(self._slots)

    def element_at(self, index: int) -> Optional[Element]:
        """Return the element mapped to ``index`` or ``None`` if not intercepted."""

        return self._slots.get(index)

    def define(self, elements: Mapping[int, Element]) -> None:
        """Define the whole view from ``elements``.

        Every slot of the inventory is written.  Indices missing from
        ``elements`` are filled with :meth:`Element.empty`, so afterwards every
        slot is intercepted.
        """

        self._slots.clear()
        for index in range(self._inventory.size()):
            self._update_index(index, elements.get(index, Element.empty()))

    def update(self, elements: Mapping[int, Element]) -> None:
        """Update only the slots present in ``elements``.

        All other slots keep their current element.  Indices that do not
        resolve to a slot are ignored.
        """

        for index, element in elements.items():
            self._update_index(index, element)

    def open(self, user: Any) -> None:
        """Open this view for ``user``, caused by the owning plugin."""

        self._host.open(user, self._inventory, self._plugin)

    def process_click(self, event: ClickEvent) -> None:
        """Dispatch a click on this view's inventory.

        The event is always cancelled.  When the event has an acting user,
        each transaction hitting a mapped slot processes that slot's element,
        in the order the host reported the transactions.
        """

        event.set_cancelled(True)
        user = event.user()
        if user is None:
            return
        for transaction in event.transactions():
            element = self._slots.get(transaction.slot_index)
            if element is not None:
                event.set_cancelled(True)
                element.process(user)

    def _update_index(self, index: int, element: Element) -> None:
        slot = self._inventory.get_slot(index)
        if slot is None:
            logger.debug("Ignoring element for index %s outside of a %s slot view", index, self.size)
            return
        slot.set(element.get_item())
        self._slots[index] = element


PLUGIN_MANAGER.expose("gui_view", View)
