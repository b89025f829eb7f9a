# sheettracker/utils/config.py
from __future__ import annotations
import copy
import json
import os
from pathlib import Path
from typing import Any, Dict

from .paths import CONFIG_DIR, DB_PATH

DB_ENV_VAR = "SHEETTRACKER_DB"
LOG_LEVEL_ENV_VAR = "SHEETTRACKER_LOG_LEVEL"

_DEFAULTS: Dict[str, Any] = {
    "database": {
        "path": str(DB_PATH),
    },
    "logging": {
        "level": "INFO",
    },
}


def settings_file() -> Path:
    return CONFIG_DIR / "settings.json"


def load_settings(path: Path | None = None) -> Dict[str, Any]:
    """Defaults merged section by section with whatever settings.json holds."""
    path = path or settings_file()
    merged = copy.deepcopy(_DEFAULTS)
    if not path.exists():
        return merged
    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return merged
    if not isinstance(stored, dict):
        return merged
    for section, values in stored.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def save_settings(data: Dict[str, Any], path: Path | None = None) -> None:
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def resolve_db_path(settings: Dict[str, Any] | None = None) -> Path:
    # env wins over settings.json
    env = os.environ.get(DB_ENV_VAR)
    if env:
        return Path(env).expanduser()
    settings = settings if settings is not None else load_settings()
    return Path(settings.get("database", {}).get("path", DB_PATH)).expanduser()


def resolve_log_level(settings: Dict[str, Any] | None = None) -> str:
    env = os.environ.get(LOG_LEVEL_ENV_VAR)
    if env:
        return env.upper()
    settings = settings if settings is not None else load_settings()
    return str(settings.get("logging", {}).get("level", "INFO")).upper()
