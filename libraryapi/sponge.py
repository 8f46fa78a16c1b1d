"""Inventory host backed by the Sponge API running in the server JVM.

:class:`SpongeInventoryHost` adapts Sponge inventories, slots and click events
to the contracts in :mod:`libraryapi.gui.host` so a
:class:`~libraryapi.gui.View` can drive a real server GUI::

    start_runtime(LibrarySettings.from_env())
    view = View(archetype, plugin_container, SpongeInventoryHost())

The inventory is built with a single ``ClickInventoryEvent`` listener that
forwards every event to the view.  Java slots are mapped back to their slot
index so clicks on slots outside the view's inventory resolve to ``None``.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

from libraryapi.gui.element import EMPTY_ITEM
from libraryapi.gui.host import ClickListener
from libraryapi.java_backend import JavaIntegrationBackend, active_backend
from libraryapi.plugins import PLUGIN_MANAGER
from libraryapi.settings import LibrarySettings

__all__ = [
    "SpongeClickEvent",
    "SpongeInventory",
    "SpongeInventoryHost",
    "SpongeSlot",
    "SpongeTransaction",
    "start_runtime",
]

INVENTORY = "org.spongepowered.api.item.inventory.Inventory"
ORDERED_INVENTORY = "org.spongepowered.api.item.inventory.type.OrderedInventory"
SLOT_INDEX = "org.spongepowered.api.item.inventory.property.SlotIndex"
CLICK_INVENTORY_EVENT = "org.spongepowered.api.event.item.inventory.ClickInventoryEvent"
CAUSE = "org.spongepowered.api.event.cause.Cause"
PLAYER = "org.spongepowered.api.entity.living.player.Player"
CONSUMER = "java.util.function.Consumer"


def start_runtime(settings: LibrarySettings, backend: Optional[JavaIntegrationBackend] = None) -> JavaIntegrationBackend:
    """Start the JVM with the classpath and arguments from ``settings``."""

    backend = backend or active_backend()
    backend.ensure_bridge()
    backend.start_vm(settings.compute_classpath(), settings.jvm_args)
    return backend


def _optional(value: Any) -> Any:
    return value.get() if value.isPresent() else None


class SpongeSlot:
    def __init__(self, index: int, handle: Any) -> None:
        self.index = index
        self.handle = handle

    def set(self, item: Any) -> None:
        if item is EMPTY_ITEM:
            self.handle.clear()
        else:
            self.handle.set(item)


class SpongeInventory:
    """An ``OrderedInventory`` handle plus a Java slot to index table."""

    def __init__(self, handle: Any, backend: JavaIntegrationBackend) -> None:
        self.handle = handle
        self._backend = backend
        self._indices: Optional[Dict[Any, int]] = None

    def size(self) -> int:
        return int(self.handle.size())

    def get_slot(self, index: int) -> Optional[SpongeSlot]:
        if not isinstance(index, int) or isinstance(index, bool) or index < 0:
            return None
        slot_index = self._backend.jclass(SLOT_INDEX).of(index)
        slot = _optional(self.handle.getSlot(slot_index))
        if slot is None:
            return None
        return SpongeSlot(index, slot)

    def index_of(self, java_slot: Any) -> Optional[int]:
        """Return the index of ``java_slot`` or ``None`` if it is not ours."""

        if self._indices is None:
            self._indices = {}
            for index in range(self.size()):
                slot = self.get_slot(index)
                if slot is not None:
                    self._indices[slot.handle] = index
        return self._indices.get(java_slot)


class SpongeTransaction:
    def __init__(self, slot_index: Optional[int], handle: Any) -> None:
        self.slot_index = slot_index
        self.handle = handle


class SpongeClickEvent:
    """Wraps a ``ClickInventoryEvent`` delivered to a view's inventory."""

    def __init__(self, handle: Any, inventory: SpongeInventory, backend: JavaIntegrationBackend) -> None:
        self.handle = handle
        self._inventory = inventory
        self._backend = backend

    def set_cancelled(self, cancelled: bool) -> None:
        self.handle.setCancelled(bool(cancelled))

    def is_cancelled(self) -> bool:
        return bool(self.handle.isCancelled())

    def user(self) -> Any:
        player_class = self._backend.class_literal(self._backend.jclass(PLAYER))
        return _optional(self.handle.getCause().first(player_class))

    def transactions(self) -> Iterator[SpongeTransaction]:
        for transaction in self.handle.getTransactions():
            yield SpongeTransaction(self._inventory.index_of(transaction.getSlot()), transaction)


class SpongeInventoryHost:
    """Builds and opens Sponge inventories through a JVM backend."""

    def __init__(self, backend: Optional[JavaIntegrationBackend] = None) -> None:
        self._backend = backend or active_backend()

    @property
    def backend(self) -> JavaIntegrationBackend:
        return self._backend

    def build_inventory(self, archetype: Any, plugin: Any, listener: ClickListener) -> SpongeInventory:
        backend = self._backend
        built: Dict[str, SpongeInventory] = {}

        def accept(event: Any) -> None:
            listener(SpongeClickEvent(event, built["inventory"], backend))

        consumer = backend.create_proxy(CONSUMER, {"accept": accept})
        event_class = backend.class_literal(backend.jclass(CLICK_INVENTORY_EVENT))
        ordered_class = backend.class_literal(backend.jclass(ORDERED_INVENTORY))
        handle = (
            backend.jclass(INVENTORY)
            .builder()
            .of(archetype)
            .listener(event_class, consumer)
            .build(plugin)
            .query(ordered_class)
        )
        built["inventory"] = SpongeInventory(handle, backend)
        return built["inventory"]

    def open(self, user: Any, inventory: SpongeInventory, plugin: Any) -> None:
        cause = self._backend.jclass(CAUSE).source(plugin).build()
        user.openInventory(inventory.handle, cause)


PLUGIN_MANAGER.expose("sponge_inventory_host", SpongeInventoryHost)
PLUGIN_MANAGER.expose("sponge_start_runtime", start_runtime)
