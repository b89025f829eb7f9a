# tests/test_config.py
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from sheettracker.utils import config
from sheettracker.utils.clock import UtcClock, UuidGenerator
from sheettracker.utils.logging_setup import get_logger, setup_logging


def test_load_settings_defaults_when_missing(tmp_path: Path):
    settings = config.load_settings(tmp_path / "nope.json")
    assert settings["logging"]["level"] == "INFO"
    assert settings["database"]["path"].endswith("sheettracker.db")


def test_load_settings_merges_sections(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logging": {"level": "debug"}}))
    settings = config.load_settings(path)
    assert settings["logging"]["level"] == "debug"
    assert "path" in settings["database"]


def test_load_settings_ignores_garbage(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert config.load_settings(path)["logging"]["level"] == "INFO"


def test_save_then_load(tmp_path: Path):
    path = tmp_path / "settings.json"
    config.save_settings({"database": {"path": "/tmp/x.db"}}, path)
    assert config.load_settings(path)["database"]["path"] == "/tmp/x.db"


def test_db_path_env_wins(monkeypatch, tmp_path: Path):
    monkeypatch.setenv(config.DB_ENV_VAR, str(tmp_path / "env.db"))
    assert config.resolve_db_path({"database": {"path": "/ignored.db"}}) == tmp_path / "env.db"


def test_db_path_from_settings(monkeypatch):
    monkeypatch.delenv(config.DB_ENV_VAR, raising=False)
    assert config.resolve_db_path({"database": {"path": "/data/t.db"}}) == Path("/data/t.db")


def test_log_level_resolution(monkeypatch):
    monkeypatch.setenv(config.LOG_LEVEL_ENV_VAR, "warning")
    assert config.resolve_log_level({}) == "WARNING"
    monkeypatch.delenv(config.LOG_LEVEL_ENV_VAR)
    assert config.resolve_log_level({"logging": {"level": "debug"}}) == "DEBUG"


def test_setup_logging_writes_file(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
    root = logging.getLogger()
    before = list(root.handlers)
    level, hook = root.level, sys.excepthook
    try:
        logfile = setup_logging("sheettracker-test", level_name="DEBUG")
        get_logger("test").info("hello")
        for h in root.handlers:
            h.flush()
        assert logfile.parent == tmp_path / "sheettracker-test" / "logs"
        assert "hello" in logfile.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(level)
        sys.excepthook = hook


def test_clock_strictly_increases():
    clock = UtcClock()
    stamps = [clock.now() for _ in range(50)]
    assert all(a < b for a, b in zip(stamps, stamps[1:]))
    assert stamps[0].tzinfo is not None


def test_uuid_generator_prefixes():
    ids = UuidGenerator()
    a, b = ids.new_id("P-"), ids.new_id("P-")
    assert a.startswith("P-") and a != b
