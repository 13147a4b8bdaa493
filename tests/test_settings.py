"""Test loading of user settings."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from rawedit.constants import EditorConstants
from rawedit.settings import EditorSettings, default_settings_path, load_settings


@pytest.fixture
def settings_file(tmp_path):
    def write(data):
        path = tmp_path / "settings.json"
        if isinstance(data, str):
            path.write_text(data, encoding='utf-8')
        else:
            path.write_text(json.dumps(data), encoding='utf-8')
        return path
    return write


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "nope.json")
    assert settings == EditorSettings()
    assert settings.read_size == EditorConstants.READ_INPUT_SIZE
    assert settings.read_timeout_deciseconds == 1
    assert settings.line_enlarge_size == 128
    assert settings.abort_on_unsupported_input is False


def test_values_are_read(settings_file):
    path = settings_file({
        "read_size": 32,
        "read_timeout_deciseconds": 2,
        "abort_on_unsupported_input": True,
        "log_level": "DEBUG",
        "log_file": "/tmp/rawedit-test.log",
    })
    settings = load_settings(path)
    assert settings.read_size == 32
    assert settings.read_timeout_deciseconds == 2
    assert settings.abort_on_unsupported_input is True
    assert settings.log_level == "DEBUG"
    assert settings.log_file == "/tmp/rawedit-test.log"


def test_malformed_json_gives_defaults(settings_file, caplog):
    path = settings_file("{not json")
    with caplog.at_level("WARNING", logger="rawedit.settings"):
        assert load_settings(path) == EditorSettings()
    assert "Could not load settings" in caplog.text


def test_non_dict_gives_defaults(settings_file):
    assert load_settings(settings_file([1, 2, 3])) == EditorSettings()


def test_unknown_keys_are_ignored(settings_file, caplog):
    path = settings_file({"colour": "blue", "read_size": 4})
    with caplog.at_level("WARNING", logger="rawedit.settings"):
        settings = load_settings(path)
    assert settings.read_size == 4
    assert "Unknown setting 'colour'" in caplog.text


@pytest.mark.parametrize("key,value", [
    ("read_size", 0),
    ("read_size", "10"),
    ("line_enlarge_size", -1),
    ("read_timeout_deciseconds", 256),
    ("read_timeout_deciseconds", True),
    ("abort_on_unsupported_input", 1),
    ("log_file", 5),
])
def test_invalid_values_fall_back_to_default(settings_file, key, value):
    settings = load_settings(settings_file({key: value}))
    assert getattr(settings, key) == getattr(EditorSettings(), key)


def test_default_path_uses_platform_config_dir(tmp_path):
    with patch('rawedit.settings.platformdirs.user_config_dir', return_value=str(tmp_path)):
        assert default_settings_path() == Path(tmp_path) / "settings.json"


def test_load_without_path_reads_default_location(tmp_path):
    (tmp_path / "settings.json").write_text('{"read_size": 3}', encoding='utf-8')
    with patch('rawedit.settings.platformdirs.user_config_dir', return_value=str(tmp_path)):
        assert load_settings().read_size == 3
