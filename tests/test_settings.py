"""Tests for the hierarchical settings manager."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from elysh.edit.edit import WORD_CHARS
from elysh.settings import (
    CONFIG_DIR_NAME,
    DEFAULT_HISTORY_SIZE,
    SettingsManager,
    deep_merge_settings,
)


def write_settings(directory: Path, settings: object) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "settings.json"
    path.write_text(json.dumps(settings), encoding="utf-8")
    return path


# --- Deep merge ---


def test_deep_merge_simple():
    result = deep_merge_settings({"a": 1, "b": 2}, {"b": 3, "c": 4})
    assert result == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested():
    base = {"keybindings": {"exit": "ctrl+d", "submit": "ctrl+m"}}
    overrides = {"keybindings": {"exit": "ctrl+q"}}
    result = deep_merge_settings(base, overrides)
    assert result == {"keybindings": {"exit": "ctrl+q", "submit": "ctrl+m"}}


def test_deep_merge_none_values_skipped():
    result = deep_merge_settings({"a": 1}, {"a": None, "c": 3})
    assert result == {"a": 1, "c": 3}


def test_deep_merge_list_replacement():
    result = deep_merge_settings({"wordChars": ["/", " "]}, {"wordChars": [" "]})
    assert result == {"wordChars": [" "]}


# --- In-memory settings manager ---


def test_in_memory_defaults():
    mgr = SettingsManager.in_memory()
    assert mgr.get_word_chars() == WORD_CHARS
    assert mgr.get_history_size() == DEFAULT_HISTORY_SIZE
    assert mgr.get_keybindings() == {}
    assert mgr.load_error is None


def test_word_chars_from_string():
    mgr = SettingsManager.in_memory({"wordChars": " /"})
    assert mgr.get_word_chars() == frozenset({" ", "/"})


def test_word_chars_from_list():
    mgr = SettingsManager.in_memory({"wordChars": [" ", ":"]})
    assert mgr.get_word_chars() == frozenset({" ", ":"})


@pytest.mark.parametrize("value", [[1], ["ab"], 5, {"a": 1}])
def test_word_chars_invalid(value):
    mgr = SettingsManager.in_memory({"wordChars": value})
    with pytest.raises(ValueError):
        mgr.get_word_chars()


@pytest.mark.parametrize("value", [-1, True, "10", 1.5])
def test_history_size_invalid(value):
    mgr = SettingsManager.in_memory({"historySize": value})
    with pytest.raises(ValueError):
        mgr.get_history_size()


def test_history_size_zero_allowed():
    mgr = SettingsManager.in_memory({"historySize": 0})
    assert mgr.get_history_size() == 0


def test_keybindings_must_be_object():
    mgr = SettingsManager.in_memory({"keybindings": ["ctrl+q"]})
    with pytest.raises(ValueError):
        mgr.get_keybindings()


def test_apply_overrides():
    mgr = SettingsManager.in_memory({"historySize": 10, "wordChars": " "})
    mgr.apply_overrides({"historySize": 20})
    assert mgr.get_history_size() == 20
    assert mgr.get_word_chars() == frozenset(" ")


# --- File-backed settings manager ---


def test_create_without_files(tmp_path):
    mgr = SettingsManager.create(str(tmp_path / "project"), config_dir=str(tmp_path / "config"))
    assert mgr.settings == {}
    assert mgr.load_error is None


def test_project_overrides_global(tmp_path):
    config_dir = tmp_path / "config"
    project = tmp_path / "project"
    write_settings(config_dir, {"historySize": 5, "wordChars": " "})
    write_settings(project / CONFIG_DIR_NAME, {"historySize": 7})

    mgr = SettingsManager.create(str(project), config_dir=str(config_dir))
    assert mgr.get_history_size() == 7
    assert mgr.get_word_chars() == frozenset(" ")
    assert mgr.get_global_settings() == {"historySize": 5, "wordChars": " "}
    assert mgr.get_project_settings() == {"historySize": 7}


def test_corrupted_global_file(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.json").write_text("{not json", encoding="utf-8")

    mgr = SettingsManager.create(str(tmp_path), config_dir=str(config_dir))
    assert mgr.load_error is not None
    assert mgr.settings == {}
    assert mgr.get_history_size() == DEFAULT_HISTORY_SIZE


def test_non_object_file(tmp_path):
    config_dir = tmp_path / "config"
    write_settings(config_dir, [1, 2])

    mgr = SettingsManager.create(str(tmp_path), config_dir=str(config_dir))
    assert isinstance(mgr.load_error, ValueError)
    assert mgr.settings == {}


def test_reload(tmp_path):
    config_dir = tmp_path / "config"
    write_settings(config_dir, {"historySize": 5})
    mgr = SettingsManager.create(str(tmp_path), config_dir=str(config_dir))
    assert mgr.get_history_size() == 5

    write_settings(config_dir, {"historySize": 9})
    mgr.reload()
    assert mgr.get_history_size() == 9


# --- Line editor construction ---


def test_build_line_editor():
    mgr = SettingsManager.in_memory(
        {"historySize": 1, "wordChars": " ", "keybindings": {"exit": "ctrl+q"}}
    )
    editor = mgr.build_line_editor()
    assert editor.word_chars == frozenset(" ")
    assert editor.keybindings.get_keys("exit") == ["ctrl+q"]

    editor.history.push("a")
    editor.history.push("b")
    assert editor.history.entries == ["b"]
