from types import SimpleNamespace

import pytest

from libraryapi.gui import (
    CHEST,
    EMPTY_ITEM,
    Element,
    MemoryClickEvent,
    MemoryItem,
    SlotTransaction,
    View,
)


def _kinds(inventory):
    return [None if item is EMPTY_ITEM else item.kind for item in inventory.contents()]


def test_construction_builds_one_inventory_with_view_listener(host, plugin):
    view = View(CHEST, plugin, host)

    assert len(host.inventories) == 1
    assert view.inventory is host.inventories[0]
    assert view.inventory.plugin is plugin
    assert view.size == 27
    assert dict(view.slots) == {}


def test_define_fills_gaps_with_empty(five_slot_view, recording_element):
    a, action_a = recording_element("a")
    b, action_b = recording_element("b")

    five_slot_view.define({0: a, 2: b})

    assert _kinds(five_slot_view.inventory) == ["a", None, "b", None, None]
    assert len(five_slot_view.slots) == 5
    assert five_slot_view.element_at(0) is a
    assert five_slot_view.element_at(1) is Element.empty()
    assert five_slot_view.element_at(2) is b
    assert five_slot_view.element_at(4) is Element.empty()

    five_slot_view.inventory.click("alice", 2)
    five_slot_view.inventory.click("alice", 1)

    assert action_b.users == ["alice"]
    assert action_a.users == []


def test_define_writes_copies_of_items(five_slot_view):
    item = MemoryItem("gold")
    five_slot_view.define({3: Element(item)})

    displayed = five_slot_view.inventory.peek(3)
    assert displayed == item
    assert displayed is not item


def test_define_replaces_previous_definition(five_slot_view, recording_element):
    a, _ = recording_element("a")
    five_slot_view.define({0: a, 1: a, 2: a})

    five_slot_view.define({})

    assert _kinds(five_slot_view.inventory) == [None] * 5
    assert all(element is Element.empty() for element in five_slot_view.slots.values())
    assert sorted(five_slot_view.slots) == [0, 1, 2, 3, 4]


def test_define_ignores_indices_outside_inventory(five_slot_view, recording_element):
    a, _ = recording_element("a")

    five_slot_view.define({0: a, 5: a, -1: a, 99: a})

    assert sorted(five_slot_view.slots) == [0, 1, 2, 3, 4]
    assert _kinds(five_slot_view.inventory) == ["a", None, None, None, None]


def test_update_changes_only_given_slots(five_slot_view, recording_element):
    a, _ = recording_element("a")
    b, _ = recording_element("b")
    c, action_c = recording_element("c")
    five_slot_view.define({0: a, 2: b})

    five_slot_view.update({1: c})

    assert _kinds(five_slot_view.inventory) == ["a", "c", "b", None, None]
    assert five_slot_view.element_at(0) is a
    assert five_slot_view.element_at(1) is c
    assert five_slot_view.element_at(2) is b
    assert five_slot_view.element_at(3) is Element.empty()

    five_slot_view.inventory.click("bob", 1)
    assert action_c.users == ["bob"]


def test_update_never_widens_coverage(five_slot_view, recording_element):
    a, _ = recording_element("a")

    five_slot_view.update({1: a, 7: a})

    assert dict(five_slot_view.slots) == {1: a}
    assert five_slot_view.element_at(0) is None
    assert _kinds(five_slot_view.inventory) == [None, "a", None, None, None]


def test_boolean_keys_are_not_slot_indices(five_slot_view, recording_element):
    a, _ = recording_element("a")

    five_slot_view.update({True: a, False: a})

    assert dict(five_slot_view.slots) == {}
    assert _kinds(five_slot_view.inventory) == [None] * 5
    assert five_slot_view.inventory.get_slot(True) is None


def test_click_on_unmapped_slot_is_cancelled_without_dispatch(five_slot_view):
    event = five_slot_view.inventory.click("alice", 3)

    assert event.is_cancelled()


def test_click_is_always_cancelled(five_slot_view, recording_element):
    a, action = recording_element("a")
    five_slot_view.define({0: a})

    mapped = five_slot_view.inventory.click("alice", 0)
    outside = five_slot_view.inventory.click("alice", 42)
    no_transactions = five_slot_view.inventory.click("alice")

    assert mapped.is_cancelled()
    assert outside.is_cancelled()
    assert no_transactions.is_cancelled()
    assert action.users == ["alice"]


def test_click_without_user_never_dispatches(five_slot_view, recording_element):
    a, action = recording_element("a")
    five_slot_view.define({0: a})

    event = five_slot_view.inventory.click(None, 0)

    assert event.is_cancelled()
    assert action.users == []


def test_multiple_transactions_dispatch_in_host_order(five_slot_view):
    calls = []
    elements = {
        index: Element(MemoryItem(str(index)), lambda user, index=index: calls.append((index, user)))
        for index in range(5)
    }
    five_slot_view.define(elements)

    event = MemoryClickEvent("carol", [SlotTransaction(3), SlotTransaction(None), SlotTransaction(0), SlotTransaction(3)])
    five_slot_view.process_click(event)

    assert calls == [(3, "carol"), (0, "carol"), (3, "carol")]
    assert event.is_cancelled()


def test_each_click_processes_action_exactly_once(five_slot_view, recording_element):
    a, action = recording_element("a")
    five_slot_view.define({4: a})

    for _ in range(3):
        five_slot_view.inventory.click("dave", 4)

    assert action.users == ["dave"] * 3


def test_action_errors_propagate_after_cancelling(five_slot_view):
    def explode(user):
        raise RuntimeError("boom")

    five_slot_view.define({0: Element(MemoryItem("tnt"), explode)})
    event = MemoryClickEvent("erin", [SlotTransaction(0)])

    with pytest.raises(RuntimeError):
        five_slot_view.process_click(event)
    assert event.is_cancelled()


def test_open_delegates_to_host_for_each_user(five_slot_view, host, plugin):
    five_slot_view.open("alice")
    five_slot_view.open("bob")

    assert five_slot_view.inventory.viewers == [("alice", plugin), ("bob", plugin)]
    assert len(host.inventories) == 1


def test_elements_can_be_shared_between_views(host, plugin, recording_element):
    shared, action = recording_element("shared")
    first = View(CHEST, plugin, host)
    second = View(CHEST, plugin, host)

    first.define({0: shared})
    second.update({26: shared})

    first.inventory.click("alice", 0)
    second.inventory.click("bob", 26)

    assert action.users == ["alice", "bob"]


def test_slots_view_is_read_only(five_slot_view):
    five_slot_view.define({})

    with pytest.raises(TypeError):
        five_slot_view.slots[0] = Element.empty()


def test_view_accepts_any_host_implementation(plugin):
    written = {}
    opened = []

    class Slot:
        def __init__(self, index):
            self.index = index

        def set(self, item):
            written[self.index] = item

    class Inventory:
        def size(self):
            return 2

        def get_slot(self, index):
            return Slot(index) if index in (0, 1) else None

    listeners = []
    host = SimpleNamespace(
        build_inventory=lambda archetype, owner, listener: listeners.append(listener) or Inventory(),
        open=lambda user, inventory, owner: opened.append((user, owner)),
    )

    view = View("custom", plugin, host)
    view.define({1: Element(MemoryItem("x"))})
    view.open("zoe")

    assert listeners == [view.process_click]
    assert written[0] is EMPTY_ITEM
    assert written[1].kind == "x"
    assert opened == [("zoe", plugin)]
