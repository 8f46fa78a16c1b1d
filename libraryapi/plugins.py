"""Plugin infrastructure for :mod:`libraryapi`.

Other plugins running inside the host reach the library's services through a
single :class:`PluginManager` instance.  Every service module exposes its
public classes with :meth:`PluginManager.expose` so a plugin only needs the
manager to find a :class:`~libraryapi.gui.View`, a configuration loader or the
message service.

Plugins are plain modules providing a ``setup_plugin(manager, exposed)``
callable.  The manager imports them, passes the exposed mapping and keeps the
returned object around so hooks can later be broadcast to it.
"""
from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from importlib.util import find_spec
from pathlib import Path
import pkgutil
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple


_MISSING = object()

ExportCallback = Callable[[Dict[str, Any], MappingProxyType], None]


class PluginError(RuntimeError):
    """Raised whenever a plugin cannot be registered or executed."""


@dataclass
class PluginRecord:
    """Simple data container describing a registered plugin."""

    name: str
    module: str
    obj: Any
    exposed: MappingProxyType


class PluginManager:
    """Co-ordinates plugin registration and access to library services."""

    def __init__(self) -> None:
        self._plugins: Dict[str, PluginRecord] = {}
        self._exposed: Dict[str, Any] = {}
        self._export_subscribers: List[ExportCallback] = []

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    @property
    def exposed(self) -> MappingProxyType:
        """Immutable view of the currently exposed library objects."""

        return MappingProxyType(self._exposed)

    @property
    def plugins(self) -> MappingProxyType:
        """Immutable view of the registered plugins."""

        return MappingProxyType(self._plugins)

    def expose(self, name: str, obj: Any) -> None:
        """Expose an object to plugins under ``name``.

        Existing entries are overwritten.  Subscribers are only notified when
        the exposed object actually changed.
        """

        if not name:
            raise PluginError("Exposed names must be non-empty strings.")
        previous = self._exposed.get(name, _MISSING)
        self._exposed[name] = obj
        if previous is _MISSING or previous is not obj:
            self._notify_export_subscribers({name: obj})

    def expose_module(self, module_name: str, alias: Optional[str] = None) -> None:
        """Expose all public attributes of ``module_name`` under ``alias``."""

        module = import_module(module_name)
        export_name = alias or module_name
        export: Dict[str, Any] = {
            key: getattr(module, key)
            for key in dir(module)
            if not key.startswith("_")
        }
        self.expose(export_name, MappingProxyType(export))

    def register_plugin(self, module_name: str, attr: str = "setup_plugin") -> PluginRecord:
        """Import ``module_name`` and run its setup function.

        The callable receives the manager and the exposed mapping and may
        return any object; hooks are later looked up on that object.
        """

        if module_name in self._plugins:
            raise PluginError(f"Plugin '{module_name}' is already registered.")

        module = import_module(module_name)
        try:
            factory = getattr(module, attr)
        except AttributeError as exc:
            raise PluginError(
                f"Plugin '{module_name}' does not provide a '{attr}' callable."
            ) from exc

        if not callable(factory):
            raise PluginError(
                f"Plugin '{module_name}.{attr}' must be callable, got {type(factory)!r}."
            )

        instance = factory(self, self.exposed)
        record = PluginRecord(
            name=getattr(instance, "name", module_name),
            module=module_name,
            obj=instance,
            exposed=self.exposed,
        )
        self._plugins[module_name] = record
        return record

    def broadcast(self, hook: str, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        """Invoke ``hook`` on all registered plugins and collect responses."""

        responses: Dict[str, Any] = {}
        for name, record in self._plugins.items():
            target = getattr(record.obj, hook, None)
            if target is None:
                continue
            if not callable(target):
                raise PluginError(
                    f"Hook '{hook}' on plugin '{name}' is not callable (got {type(target)!r})."
                )
            responses[name] = target(*args, **kwargs)
        return responses

    def ensure(self, required: Iterable[str]) -> None:
        """Validate that all ``required`` plugins have been registered."""

        missing = [name for name in required if name not in self._plugins]
        if missing:
            raise PluginError(
                "Missing required plugin(s): " + ", ".join(sorted(missing))
            )

    def subscribe_to_exports(self, callback: ExportCallback, *, replay: bool = True) -> None:
        """Register ``callback`` to receive newly exposed objects."""

        if callback in self._export_subscribers:
            return
        self._export_subscribers.append(callback)
        if replay:
            callback(dict(self._exposed), self.exposed)

    def auto_discover(
        self,
        location: str | Path,
        *,
        attr: str = "setup_plugin",
        recursive: bool = True,
        match: Optional[Callable[[str], bool]] = None,
    ) -> Dict[str, PluginRecord]:
        """Automatically register plugins located under the package ``location``."""

        package_name, search_paths = self._resolve_auto_discover_location(location)
        matcher = match or self._default_auto_discover_match
        discovered: Dict[str, PluginRecord] = {}
        failures: List[Tuple[str, Exception]] = []
        for module_name in self._walk_auto_discover_modules(
            search_paths, package_name, recursive
        ):
            if not matcher(module_name):
                continue
            try:
                discovered[module_name] = self.register_plugin(module_name, attr=attr)
            except PluginError as exc:
                failures.append((module_name, exc))
        if failures:
            reasons = "\n".join(f"- {name}: {error}" for name, error in failures)
            raise PluginError(
                "Failed to auto discover plugin modules:\n" + reasons
            )
        return discovered

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _notify_export_subscribers(self, exposure_diff: Dict[str, Any]) -> None:
        if not self._export_subscribers:
            return
        snapshot = self.exposed
        for callback in list(self._export_subscribers):
            callback(dict(exposure_diff), snapshot)

    @staticmethod
    def _default_auto_discover_match(module_name: str) -> bool:
        base = module_name.rsplit(".", 1)[-1].lower()
        return base.startswith("plugin_") or base.endswith("plugin")

    @staticmethod
    def _resolve_auto_discover_location(location: str | Path) -> Tuple[str, Sequence[str]]:
        spec = None
        if not isinstance(location, Path):
            try:
                spec = find_spec(str(location))
            except ModuleNotFoundError as exc:
                raise PluginError(f"Plugin location '{location}' cannot be imported.") from exc
        if spec is None or not spec.submodule_search_locations:
            raise PluginError(
                f"Plugin location '{location}' is not an importable package."
            )
        return str(location), list(spec.submodule_search_locations)

    @staticmethod
    def _walk_auto_discover_modules(
        search_paths: Sequence[str],
        package_name: str,
        recursive: bool,
    ) -> Iterator[str]:
        for module_info in pkgutil.walk_packages(search_paths, package_name + "."):
            if module_info.ispkg and not recursive:
                continue
            yield module_info.name


PLUGIN_MANAGER = PluginManager()

__all__ = ["PLUGIN_MANAGER", "PluginManager", "PluginError", "PluginRecord"]
