"""Settings describing how the library attaches to the game server."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, MutableMapping, Optional

from libraryapi.plugins import PLUGIN_MANAGER

DEFAULT_SETTINGS_FILE = Path.home() / ".libraryapi" / "settings.json"

_TRUE_STRINGS = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class LibrarySettings:
    """Runtime settings for the server bridge and the ambient services."""

    server_jar: Optional[Path] = None
    extra_classpath: List[Path] = field(default_factory=list)
    jvm_args: List[str] = field(default_factory=list)
    log_directory: Optional[Path] = None
    debug: bool = False
    default_locale: str = "en_US"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LibrarySettings":
        if env is None:
            env = os.environ
        jar = env.get("LIBRARYAPI_SERVER_JAR")
        log_dir = env.get("LIBRARYAPI_LOG_DIR")
        extra = [Path(p).expanduser().resolve() for p in env.get("LIBRARYAPI_EXTRA_CLASSPATH", "").split(os.pathsep) if p]
        jvm_args = [arg for arg in env.get("LIBRARYAPI_JVM_ARGS", "").split(" ") if arg]
        return cls(
            server_jar=Path(jar).expanduser().resolve() if jar else None,
            extra_classpath=extra,
            jvm_args=jvm_args,
            log_directory=Path(log_dir).expanduser() if log_dir else None,
            debug=env.get("LIBRARYAPI_DEBUG", "").strip().lower() in _TRUE_STRINGS,
            default_locale=env.get("LIBRARYAPI_LOCALE") or "en_US",
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, str | bool | Iterable[str] | None]) -> "LibrarySettings":
        jar = data.get("server_jar")
        log_dir = data.get("log_directory")
        extra = [Path(str(p)).expanduser().resolve() for p in data.get("extra_classpath", []) or []]
        jvm_args = [str(arg) for arg in data.get("jvm_args", []) or []]
        return cls(
            server_jar=Path(str(jar)).expanduser().resolve() if jar else None,
            extra_classpath=extra,
            jvm_args=jvm_args,
            log_directory=Path(str(log_dir)).expanduser() if log_dir else None,
            debug=bool(data.get("debug", False)),
            default_locale=str(data.get("default_locale") or "en_US"),
        )

    def to_mapping(self) -> MutableMapping[str, object]:
        return {
            "server_jar": str(self.server_jar) if self.server_jar else None,
            "extra_classpath": [str(p) for p in self.extra_classpath],
            "jvm_args": list(self.jvm_args),
            "log_directory": str(self.log_directory) if self.log_directory else None,
            "debug": self.debug,
            "default_locale": self.default_locale,
        }

    def dump(self, destination: Path | None = None) -> None:
        destination = destination or DEFAULT_SETTINGS_FILE
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(json.dumps(self.to_mapping(), indent=2))

    @classmethod
    def load(cls, source: Path | None = None) -> "LibrarySettings":
        source = source or DEFAULT_SETTINGS_FILE
        if not source.exists():
            raise FileNotFoundError(f"Settings file not found: {source}")
        data = json.loads(source.read_text())
        return cls.from_mapping(data)

    def compute_classpath(self) -> List[str]:
        paths = [str(self.server_jar)] if self.server_jar else []
        paths.extend(str(p) for p in self.extra_classpath)
        return paths


PLUGIN_MANAGER.expose("library_settings", LibrarySettings)

__all__ = ["DEFAULT_SETTINGS_FILE", "LibrarySettings"]
