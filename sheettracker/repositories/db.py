# Rev 1.0.0

"""SQLite connection & migration runner (Rev 1.0.0)
- WAL mode for file databases
- Applies the packaged SQL migrations in lexical order, one transaction per file
- Tracks applied files in schema_migrations(filename TEXT PRIMARY KEY, applied_at UTC, sha256)
"""
from __future__ import annotations
import hashlib
import sqlite3
from pathlib import Path
from datetime import datetime, timezone

from sheettracker.utils.logging_setup import get_logger
from sheettracker.utils.paths import DB_PATH, MIGRATIONS_DIR

MEMORY = ":memory:"

log = get_logger("Database")


def migration_files(migrations_dir: Path = MIGRATIONS_DIR) -> list[Path]:
    migrations_dir = Path(migrations_dir)
    if not migrations_dir.is_dir():
        raise FileNotFoundError(f"migrations directory not found: {migrations_dir}")
    return sorted(migrations_dir.glob("*.sql"))


class Database:
    def __init__(self, path: Path | str = DB_PATH) -> None:
        self.path = path if path == MEMORY else Path(path)
        if self.path != MEMORY:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.path), isolation_level=None, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        if self.path != MEMORY:
            self.conn.execute("PRAGMA journal_mode=WAL;")
        self.conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL, sha256 TEXT)"
        )
        log.info("SQLite open %s", self.path)

    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error:
            log.warning("SQLite close failed for %s", self.path, exc_info=True)

    def applied(self) -> set[str]:
        rows = self.conn.execute("SELECT filename FROM schema_migrations").fetchall()
        return {r[0] for r in rows}

    def history(self) -> list[tuple[str, str]]:
        """(filename, applied_at) for every recorded migration, by filename."""
        rows = self.conn.execute("SELECT filename, applied_at FROM schema_migrations ORDER BY filename").fetchall()
        return [(r[0], r[1]) for r in rows]

    def pending(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        applied = self.applied()
        return [p.name for p in migration_files(migrations_dir) if p.name not in applied]

    def apply_sql(self, sql: str) -> None:
        # executescript commits anything open first; the body gets its own transaction
        try:
            self.conn.executescript(f"BEGIN;\n{sql}\nCOMMIT;")
        except sqlite3.Error:
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK;")
            raise

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        recorded = {
            r[0]: r[1] for r in self.conn.execute("SELECT filename, sha256 FROM schema_migrations").fetchall()
        }
        applied_now: list[str] = []
        for p in migration_files(migrations_dir):
            sql = p.read_text(encoding="utf-8")
            digest = hashlib.sha256(sql.encode("utf-8")).hexdigest()
            if p.name in recorded:
                if recorded[p.name] and recorded[p.name] != digest:
                    log.warning(
                        "Migration %s was edited after it was applied (recorded=%s, current=%s)",
                        p.name, recorded[p.name], digest,
                    )
                continue
            self.apply_sql(sql)
            self.conn.execute(
                "INSERT INTO schema_migrations(filename, applied_at, sha256) VALUES(?, ?, ?)",
                (p.name, datetime.now(timezone.utc).isoformat(timespec="seconds"), digest),
            )
            log.info("Applied migration %s", p.name)
            applied_now.append(p.name)
        return applied_now
