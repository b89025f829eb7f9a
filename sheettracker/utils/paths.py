# Rev 1.0.0

"""Paths and XDG helpers (Rev 1.0.0)
- Config under the XDG config dir, the default DB under the XDG data dir
- Logs go under XDG state (see logging_setup)
- Migrations ship inside the package (sheettracker/data/migrations)
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "sheettracker"


XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME
DATA_DIR = XDG_DATA_HOME / APP_NAME


# Package-relative locations
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = PACKAGE_ROOT / "data" / "migrations"


DB_PATH = DATA_DIR / "sheettracker.db"
