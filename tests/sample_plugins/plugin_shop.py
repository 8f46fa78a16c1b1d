"""Minimal plugin used by the auto discovery tests.

It builds a shop view through the services exposed by the library, the way a
real plugin would on start-up.
"""

from libraryapi.gui import HOPPER, MemoryItem


class ShopPlugin:
    def __init__(self, view_type, element_type, host) -> None:
        self.name = "demo_shop"
        self.purchases = []
        self.view = view_type(HOPPER, self, host)
        self.view.define({2: element_type(MemoryItem("emerald"), self.purchases.append)})

    def open_shop(self, user):
        self.view.open(user)
        return self.view


def setup_plugin(manager, exposed):
    """Entry point used by :meth:`PluginManager.register_plugin`."""

    host = exposed["gui_memory_host"]()
    plugin = ShopPlugin(exposed["gui_view"], exposed["gui_element"], host)
    manager.expose("demo_shop", plugin)
    return plugin
