# File: sheettracker/tools/migrate.py
# Usage examples:
#   sheettracker-migrate up
#   sheettracker-migrate status
#   sheettracker-migrate rebuild --seed
#   sheettracker-migrate up --db /path/to/sheettracker.db
#
# Notes:
# - DB path defaults to env SHEETTRACKER_DB, then settings.json, then $XDG_DATA_HOME/sheettracker
# - Migrations are the packaged sheettracker/data/migrations/*.sql, run by repositories.db.Database
# - --seed runs the demo hierarchy from sheettracker.tools.seed_demo

from __future__ import annotations

import argparse
import sqlite3
import sys
from pathlib import Path
from typing import Optional

from sheettracker.repositories.db import Database
from sheettracker.utils.config import resolve_db_path
from sheettracker.utils.logging_setup import get_logger, setup_logging
from sheettracker.utils.paths import MIGRATIONS_DIR

log = get_logger("migrate")

REQUIRED_TABLES = ("projects", "tasks", "calendar_events", "schema_migrations")
EXPECTED_INDEXES = (
    "idx_projects_parent_id",
    "idx_tasks_parent_id",
    "idx_calendar_events_parent_id",
)


def cmd_status(db_path: Path, migrations_dir: Path) -> int:
    db = Database(db_path)
    try:
        history = db.history()
        pending = db.pending(migrations_dir)
    finally:
        db.close()
    print(f"DB: {db_path}")
    print(f"Migrations dir: {migrations_dir}")
    print(f"Applied count: {len(history)}")
    for name, when in history:
        print(f"  ✔ {name}  ({when})")
    print(f"Pending count: {len(pending)}")
    for name in pending:
        print(f"  ⧗ {name}")
    return 0


def _seed(db_path: Path) -> None:
    from sheettracker.tools.seed_demo import run_seed

    run_seed(db_path)


def cmd_up(db_path: Path, migrations_dir: Path, seed: bool) -> int:
    db = Database(db_path)
    try:
        applied = db.run_migrations(migrations_dir)
    finally:
        db.close()
    for name in applied:
        print(f"→ Applied migration: {name}")
    print("✓ Database is up to date." if applied else "✓ No changes. Database already up to date.")
    if seed:
        _seed(db_path)
    return 0


def cmd_rebuild(db_path: Path, migrations_dir: Path, seed: bool) -> int:
    # WAL sidecars go with the main file
    for path in (db_path, Path(f"{db_path}-wal"), Path(f"{db_path}-shm")):
        if path.exists():
            print(f"⟲ Rebuilding: removing {path}")
            path.unlink()
    rc = cmd_up(db_path, migrations_dir, seed)
    print("✓ Rebuild complete.")
    return rc


def cmd_verify(db_path: Path) -> int:
    if not db_path.exists():
        print(f"❌ Database not found: {db_path}")
        return 2
    conn = sqlite3.connect(db_path)
    try:
        names = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table';")}
        missing = [t for t in REQUIRED_TABLES if t not in names]
        if missing:
            print("❌ Missing tables:", ", ".join(missing))
            return 2

        indexes = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='index';")}
        idx_missing = [i for i in EXPECTED_INDEXES if i not in indexes]
        if idx_missing:
            print("❌ Missing indexes:", ", ".join(idx_missing))
            return 3

        (mode,) = conn.execute("PRAGMA journal_mode;").fetchone()
        if str(mode).lower() != "wal":
            print(f"❌ journal_mode is not WAL (got {mode})")
            return 4

        print("✓ Verification passed.")
        return 0
    finally:
        conn.close()


def parse_args(argv: list[str]) -> argparse.Namespace:
    default_db = resolve_db_path()
    p = argparse.ArgumentParser(prog="sheettracker-migrate", description="SQLite migration runner for sheettracker")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser):
        sp.add_argument("--db", type=Path, default=default_db, help=f"Path to SQLite DB (default: {default_db})")
        sp.add_argument("--migrations-dir", type=Path, default=MIGRATIONS_DIR, help=f"Migrations directory (default: {MIGRATIONS_DIR})")

    s_up = sub.add_parser("up", help="Run pending migrations")
    add_common(s_up)
    s_up.add_argument("--seed", action="store_true", help="Seed the demo hierarchy after applying")

    s_rebuild = sub.add_parser("rebuild", help="Delete the DB and migrate from scratch")
    add_common(s_rebuild)
    s_rebuild.add_argument("--seed", action="store_true", help="Seed the demo hierarchy after rebuild")

    s_status = sub.add_parser("status", help="Show applied and pending migrations")
    add_common(s_status)

    s_verify = sub.add_parser("verify", help="Lightweight structural verification")
    s_verify.add_argument("--db", type=Path, default=default_db, help=f"Path to SQLite DB (default: {default_db})")

    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        if ns.cmd == "status":
            return cmd_status(ns.db, ns.migrations_dir)
        if ns.cmd == "up":
            return cmd_up(ns.db, ns.migrations_dir, ns.seed)
        if ns.cmd == "rebuild":
            return cmd_rebuild(ns.db, ns.migrations_dir, ns.seed)
        if ns.cmd == "verify":
            return cmd_verify(ns.db)
    except FileNotFoundError as e:
        log.error("%s", e)
        print(f"❌ {e}")
        return 1
    raise SystemExit(1)


def run() -> int:
    """Console entry point: configure logging, then dispatch."""
    setup_logging()
    return main()


if __name__ == "__main__":
    raise SystemExit(run())
