import os
from pathlib import Path

import pytest

from libraryapi.settings import LibrarySettings


def test_from_env_reads_all_variables(tmp_path):
    env = {
        "LIBRARYAPI_SERVER_JAR": str(tmp_path / "sponge.jar"),
        "LIBRARYAPI_EXTRA_CLASSPATH": os.pathsep.join([str(tmp_path / "a.jar"), "", str(tmp_path / "b.jar")]),
        "LIBRARYAPI_JVM_ARGS": "-Xmx2G  -Dfile.encoding=UTF-8",
        "LIBRARYAPI_LOG_DIR": str(tmp_path / "logs"),
        "LIBRARYAPI_DEBUG": "Yes",
        "LIBRARYAPI_LOCALE": "de_DE",
    }

    settings = LibrarySettings.from_env(env)

    assert settings.server_jar == (tmp_path / "sponge.jar").resolve()
    assert settings.extra_classpath == [(tmp_path / "a.jar").resolve(), (tmp_path / "b.jar").resolve()]
    assert settings.jvm_args == ["-Xmx2G", "-Dfile.encoding=UTF-8"]
    assert settings.log_directory == tmp_path / "logs"
    assert settings.debug is True
    assert settings.default_locale == "de_DE"
    assert settings.compute_classpath() == [
        str((tmp_path / "sponge.jar").resolve()),
        str((tmp_path / "a.jar").resolve()),
        str((tmp_path / "b.jar").resolve()),
    ]


def test_defaults_without_server_jar():
    settings = LibrarySettings.from_env({"UNRELATED": "1"})

    assert settings.server_jar is None
    assert settings.compute_classpath() == []
    assert settings.debug is False
    assert settings.default_locale == "en_US"


def test_empty_mapping_does_not_read_process_environment(monkeypatch):
    monkeypatch.setenv("LIBRARYAPI_DEBUG", "1")
    monkeypatch.setenv("LIBRARYAPI_LOCALE", "de_DE")

    settings = LibrarySettings.from_env({})

    assert settings.debug is False
    assert settings.default_locale == "en_US"
    assert LibrarySettings.from_env().debug is True


def test_dump_and_load_round_trip(tmp_path):
    settings = LibrarySettings(
        server_jar=Path(tmp_path / "server.jar").resolve(),
        jvm_args=["-Xmx1G"],
        log_directory=tmp_path / "logs",
        debug=True,
        default_locale="fr_FR",
    )
    destination = tmp_path / "conf" / "settings.json"

    settings.dump(destination)

    assert LibrarySettings.load(destination) == settings


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LibrarySettings.load(tmp_path / "missing.json")
