"""Exception hierarchy shared by the library services."""

from __future__ import annotations


class LibraryAPIError(RuntimeError):
    """Base exception for library failures."""


class BridgeUnavailableError(LibraryAPIError):
    """Raised when the JVM bridge package cannot be imported."""


class JVMNotStartedError(LibraryAPIError):
    """Raised when a bridge operation is attempted without an active JVM."""


class ConfigurationError(LibraryAPIError):
    """Raised when a configuration file cannot be read or is misconfigured."""
