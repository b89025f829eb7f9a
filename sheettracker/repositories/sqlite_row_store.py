# Rev 1.0.0
# sheettracker – SQLiteRowStore (Rev 1.0.0, schema 0002)
from __future__ import annotations

import sqlite3
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union


class SQLiteRowStore:
    """
    One SQLite table behind the row store contract.
    Natural row order is insertion order (rowid), matching the sheet it replaces.
    Table and column names come from code, never from callers; field names
    passed at runtime are checked against the column list before they reach SQL.
    """

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any], table: str, columns: Iterable[str]):
        self._db_or_conn = db_or_conn
        self.table = table
        self.columns: Tuple[str, ...] = tuple(columns)

    # -------------------------
    # Connection handling
    # -------------------------
    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn
        if hasattr(self._db_or_conn, "conn") and isinstance(self._db_or_conn.conn, sqlite3.Connection):
            return self._db_or_conn.conn
        if hasattr(self._db_or_conn, "connect"):
            maybe = self._db_or_conn.connect()
            if isinstance(maybe, sqlite3.Connection):
                return maybe
        raise RuntimeError(
            f"SQLiteRowStore({self.table}): could not obtain sqlite3.Connection "
            "(expected .conn or .connect() on wrapper, or a raw Connection)."
        )

    def _check_fields(self, names: Iterable[str]) -> None:
        unknown = [n for n in names if n not in self.columns]
        if unknown:
            raise KeyError(f"{self.table}: unknown column(s): {', '.join(unknown)}")

    def _row_to_dict(self, row: Union[sqlite3.Row, Tuple]) -> Dict[str, Any]:
        if isinstance(row, sqlite3.Row):
            return dict(row)
        return {self.columns[i]: row[i] for i in range(len(self.columns))}

    def _select(self, where: str = "", params: tuple = ()) -> List[Dict[str, Any]]:
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table}"
        if where:
            sql += f" WHERE {where}"
        sql += " ORDER BY rowid"
        cur = self._conn().execute(sql, params)
        return [self._row_to_dict(r) for r in cur.fetchall()]

    # -------------------------
    # Contract
    # -------------------------
    def append(self, row: Dict[str, Any]) -> None:
        self._check_fields(row.keys())
        con = self._conn()
        placeholders = ", ".join(["?"] * len(self.columns))
        con.execute(
            f"INSERT INTO {self.table}({', '.join(self.columns)}) VALUES ({placeholders})",
            tuple(row.get(c) for c in self.columns),
        )
        con.commit()

    def find_by_id(self, row_id: str) -> Optional[Dict[str, Any]]:
        rows = self._select("id = ?", (row_id,))
        return rows[0] if rows else None

    def find_all(self) -> List[Dict[str, Any]]:
        return self._select()

    def find_by_field(self, field_name: str, value: Any) -> List[Dict[str, Any]]:
        self._check_fields([field_name])
        if value is None:
            return self._select(f"{field_name} IS NULL")
        return self._select(f"{field_name} = ?", (value,))

    def update_by_id(self, row_id: str, fields: Dict[str, Any]) -> bool:
        self._check_fields(fields.keys())
        if not fields:
            return self.find_by_id(row_id) is not None
        con = self._conn()
        sets = ", ".join(f"{name} = ?" for name in fields)
        cur = con.execute(
            f"UPDATE {self.table} SET {sets} WHERE id = ?",
            (*fields.values(), row_id),
        )
        con.commit()
        return cur.rowcount > 0

    def delete_by_id(self, row_id: str) -> bool:
        con = self._conn()
        cur = con.execute(f"DELETE FROM {self.table} WHERE id = ?", (row_id,))
        con.commit()
        return cur.rowcount > 0
