import logging

import pytest

from mesh2schematic.errors import ConfigError
from mesh2schematic.versions import DATA_VERSIONS, resolve_data_version


@pytest.mark.parametrize("text, expected", [
    ("2586", 2586),
    (" 3465 ", 3465),
    ("1.16.5", 2586),
    ("1.16", 2566),
    ("Java 1.16.5", 2586),
    ("1.12", 1343),
    ("java edition 1.20.1", 3465),
])
def test_resolve(text, expected):
    assert resolve_data_version(text) == expected


def test_release_line_resolves_to_newest_patch(monkeypatch):
    monkeypatch.delitem(DATA_VERSIONS, "1.16")
    assert resolve_data_version("1.16") == DATA_VERSIONS["1.16.5"]


@pytest.mark.parametrize("text", ["banana", "1.99", "2.0", "1.16.x", ""])
def test_unknown_version(text):
    with pytest.raises(ConfigError):
        resolve_data_version(text)


def test_pre_flattening_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="mesh2schematic.versions"):
        assert resolve_data_version("1.12.2") == 1343
    assert "predates" in caplog.text
