"""Tests for configuration loading."""

from pathlib import Path

import pytest

from ask_my_notes.config import NOTES_URL_ENV, AppConfig, load_config


@pytest.fixture(autouse=True)
def no_env_url(monkeypatch):
    monkeypatch.delenv(NOTES_URL_ENV, raising=False)


def test_defaults_when_file_missing(tmp_path):
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg == AppConfig()
    assert cfg.notes_dir == Path("data/notes")
    assert cfg.notes_url is None
    assert cfg.top_k == 5


def test_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("notes_dir: my_notes\ntop_k: 3\nrequest_timeout: 2.5\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.notes_dir == Path("my_notes")
    assert cfg.top_k == 3
    assert cfg.request_timeout == 2.5


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_env_overrides_notes_url(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("notes_url: https://a.example\n", encoding="utf-8")
    monkeypatch.setenv(NOTES_URL_ENV, "https://b.example")
    assert load_config(path).notes_url == "https://b.example"


def test_invalid_config_exits(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("top_k: 0\n", encoding="utf-8")
    with pytest.raises(SystemExit, match="Invalid configuration"):
        load_config(path)


def test_non_mapping_yaml_exits(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(SystemExit, match="Invalid configuration"):
        load_config(path)
