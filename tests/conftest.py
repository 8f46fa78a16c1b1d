from __future__ import annotations

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from libraryapi.configurate import ConfigHolder, JsonConfigurationLoader
from libraryapi.gui import Archetype, Element, MemoryInventoryHost, MemoryItem, View
from libraryapi.plugins import PluginManager
from tests.stubs import StubBackend


class RecordingAction:
    """Callable recording every user it was invoked with."""

    def __init__(self) -> None:
        self.users = []

    def __call__(self, user) -> None:
        self.users.append(user)


@pytest.fixture()
def host() -> MemoryInventoryHost:
    return MemoryInventoryHost()


@pytest.fixture()
def plugin():
    return object()


@pytest.fixture()
def five_slot_view(host, plugin) -> View:
    return View(Archetype("five", 1, 5), plugin, host)


@pytest.fixture()
def recording_element():
    """Factory returning ``(element, action)`` pairs for an item kind."""

    def factory(kind: str):
        action = RecordingAction()
        return Element(MemoryItem(kind), action), action

    return factory


@pytest.fixture()
def config_holder(tmp_path) -> ConfigHolder:
    return ConfigHolder(JsonConfigurationLoader(tmp_path / "config.json"))


@pytest.fixture()
def stub_backend() -> StubBackend:
    backend = StubBackend()
    backend.running = True
    return backend


@pytest.fixture()
def isolated_manager():
    """Return a fresh plugin manager for isolated tests."""

    manager = PluginManager()
    yield manager
    manager._plugins.clear()
    manager._exposed.clear()
    manager._export_subscribers.clear()
