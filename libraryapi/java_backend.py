"""Pluggable bridge between Python and the game server's JVM.

All JVM access of the library goes through the backend registered here.  A
backend offers the few primitives the Sponge host needs: starting the VM,
resolving classes and wrapping Python callables as Java functional interface
proxies.  JPype is the default backend; tests and alternative bridges can
register their own implementation and activate it with :func:`use_backend`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from importlib.util import find_spec
import os
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

from libraryapi.exceptions import BridgeUnavailableError, JVMNotStartedError
from libraryapi.plugins import PLUGIN_MANAGER

__all__ = [
    "JavaIntegrationBackend",
    "JavaBackendManager",
    "JAVA_BACKENDS",
    "register_backend",
    "use_backend",
    "active_backend",
    "active_backend_name",
    "available_backends",
]


class JavaIntegrationBackend(ABC):
    """Abstract base class for JVM bridge implementations."""

    name: str

    @abstractmethod
    def is_bridge_available(self) -> bool:
        """Return ``True`` when the bridge runtime can be imported."""

    @abstractmethod
    def start_vm(self, classpath_entries: Sequence[Path | str], jvm_args: Sequence[str] = ()) -> None:
        """Start or attach to the JVM."""

    @abstractmethod
    def is_vm_running(self) -> bool:
        """Return ``True`` if the underlying JVM is active."""

    @abstractmethod
    def shutdown_vm(self) -> None:
        """Attempt to stop the underlying JVM if supported."""

    @abstractmethod
    def jclass(self, name: str) -> Any:
        """Return the Java class handle for ``name``."""

    @abstractmethod
    def class_literal(self, java_class: Any) -> Any:
        """Return the ``java.lang.Class`` object of a class handle."""

    @abstractmethod
    def create_proxy(self, interface_name: str, methods: Mapping[str, Callable[..., Any]]) -> Any:
        """Return a proxy instance implementing ``interface_name``."""

    def ensure_bridge(self) -> None:
        """Raise :class:`BridgeUnavailableError` when the bridge cannot be used."""

        if not self.is_bridge_available():
            raise BridgeUnavailableError(
                f"The '{self.name}' JVM bridge is not installed."
            )

    def ensure_vm(self) -> None:
        if not self.is_vm_running():
            raise JVMNotStartedError(
                f"The '{self.name}' backend has no running JVM. Call start_runtime() first."
            )


class JavaBackendManager:
    """Thread-safe registry for JVM integration backends."""

    def __init__(self) -> None:
        self._backends: Dict[str, JavaIntegrationBackend] = {}
        self._active_name: Optional[str] = None
        self._lock = RLock()

    def register(self, backend: JavaIntegrationBackend, *, activate: bool = False) -> None:
        with self._lock:
            self._backends[backend.name] = backend
            if activate or self._active_name is None:
                self._active_name = backend.name

    def unregister(self, name: str) -> None:
        with self._lock:
            self._backends.pop(name, None)
            if self._active_name == name:
                self._active_name = next(iter(sorted(self._backends)), None)

    def available(self) -> Iterable[str]:
        with self._lock:
            return tuple(sorted(self._backends))

    def get(self, name: Optional[str] = None) -> JavaIntegrationBackend:
        with self._lock:
            target = name or self._active_name
            if target is None or target not in self._backends:
                raise BridgeUnavailableError("No JVM integration backend has been registered.")
            return self._backends[target]

    def activate(self, name: str) -> JavaIntegrationBackend:
        with self._lock:
            if name not in self._backends:
                raise KeyError(name)
            backend = self._backends[name]
            backend.ensure_bridge()
            self._active_name = name
            return backend

    def active_name(self) -> str:
        with self._lock:
            return self.get().name


JAVA_BACKENDS = JavaBackendManager()


def register_backend(backend: JavaIntegrationBackend, *, activate: bool = False) -> None:
    """Register ``backend`` with the global manager."""

    JAVA_BACKENDS.register(backend, activate=activate)


def use_backend(name: str) -> JavaIntegrationBackend:
    """Activate and return the backend identified by ``name``."""

    return JAVA_BACKENDS.activate(name)


def active_backend() -> JavaIntegrationBackend:
    """Return the currently active backend."""

    return JAVA_BACKENDS.get()


def active_backend_name() -> str:
    return JAVA_BACKENDS.active_name()


def available_backends() -> Iterable[str]:
    return JAVA_BACKENDS.available()


# -- JPype backend -----------------------------------------------------------


class _JPypeBackend(JavaIntegrationBackend):
    name = "jpype"

    def is_bridge_available(self) -> bool:
        return find_spec("jpype") is not None

    def start_vm(self, classpath_entries: Sequence[Path | str], jvm_args: Sequence[str] = ()) -> None:
        self.ensure_bridge()
        import jpype

        if jpype.isJVMStarted():
            return
        classpath = [str(path) for path in classpath_entries]
        jpype.startJVM(*jvm_args, classpath=[os.pathsep.join(classpath)])
        import jpype.imports  # noqa: F401

    def is_vm_running(self) -> bool:
        if not self.is_bridge_available():
            return False
        import jpype

        return jpype.isJVMStarted()

    def shutdown_vm(self) -> None:
        import jpype

        if jpype.isJVMStarted():
            try:
                jpype.shutdownJVM()
            except RuntimeError:  # pragma: no cover - jpype quirk during interpreter shutdown
                pass

    def jclass(self, name: str) -> Any:
        self.ensure_vm()
        import jpype

        return jpype.JClass(name)

    def class_literal(self, java_class: Any) -> Any:
        return java_class.class_

    def create_proxy(self, interface_name: str, methods: Mapping[str, Callable[..., Any]]) -> Any:
        import jpype

        return jpype.JProxy(interface_name, dict(methods))


register_backend(_JPypeBackend(), activate=True)


PLUGIN_MANAGER.expose("java_backends", JAVA_BACKENDS)
PLUGIN_MANAGER.expose("java_backend_use", use_backend)
PLUGIN_MANAGER.expose("java_backend_active", active_backend_name)
PLUGIN_MANAGER.expose("java_backend_available", lambda: tuple(available_backends()))
