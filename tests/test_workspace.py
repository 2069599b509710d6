"""Tests for habitcore/workspace.py and habitcore/fileio.py."""

import logging
from pathlib import Path

from habitcore.fileio import read_text, read_yaml, write_text_atomic
from habitcore.workspace import (
    load_settings,
    log_path,
    save_settings,
    settings_path,
    store_dir,
    workspace_root,
)


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()
    assert settings_path() == workspace.resolve() / "settings.yaml"
    assert store_dir() == workspace.resolve() / "store"


def test_workspace_root_default(monkeypatch):
    monkeypatch.delenv("HABITCORE_ROOT", raising=False)
    assert workspace_root() == (Path.home() / ".habitcore").resolve()


def test_load_settings(workspace):
    settings = load_settings(workspace)
    assert settings["timezone"] == "UTC"
    assert len(settings["achievements"]) == 2


def test_load_settings_invalid_yaml(workspace, caplog):
    (workspace / "settings.yaml").write_text("timezone: [unclosed\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="habitcore"):
        assert load_settings(workspace) == {}
    assert "using defaults" in caplog.text


def test_log_path(workspace, tmp_path):
    assert log_path(workspace) == workspace / "logs" / "test.log"
    assert log_path(tmp_path) == tmp_path / "logs" / "habitcore.log"


def test_atomic_text_round_trip(tmp_path):
    path = tmp_path / "nested" / "blob.json"
    assert read_text(path) is None
    write_text_atomic(path, "[]\n")
    assert read_text(path) == "[]\n"


def test_save_settings_round_trip(tmp_path):
    save_settings({"timezone": "Europe/Paris", "achievements": []}, tmp_path)
    assert load_settings(tmp_path) == {"timezone": "Europe/Paris", "achievements": []}


def test_read_yaml_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    assert read_yaml(path) == {}
