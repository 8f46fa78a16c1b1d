"""Nested plugin used to ensure recursive discovery works."""

from dataclasses import dataclass, field


@dataclass
class CoolPlugin:
    name: str = "cool_nested"
    calls: list = field(default_factory=list)

    def open_shop(self, user):
        self.calls.append(user)
        return "cool"


def setup_plugin(manager, exposed):
    plugin = CoolPlugin()
    manager.expose("cool_plugin", plugin)
    return plugin
