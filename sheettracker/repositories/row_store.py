# Rev 1.0.0
"""Row store contract consumed by the entity stores.

A row store owns one table of rows keyed by ``id``. Rows go in and come out
as plain dicts; implementations raise on backend failure and leave it to the
entity stores to decide what the caller sees.
"""
from __future__ import annotations
import copy
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

Row = Dict[str, Any]


class RowStore(Protocol):
    def append(self, row: Row) -> None: ...

    def find_by_id(self, row_id: str) -> Optional[Row]: ...

    def find_all(self) -> List[Row]: ...

    def find_by_field(self, field_name: str, value: Any) -> List[Row]: ...

    def update_by_id(self, row_id: str, fields: Row) -> bool: ...

    def delete_by_id(self, row_id: str) -> bool: ...


class InMemoryRowStore:
    """List-backed table; rows keep insertion order like a sheet does."""

    def __init__(self, columns: Iterable[str]):
        self.columns: Tuple[str, ...] = tuple(columns)
        self._rows: List[Row] = []

    def _check_fields(self, names: Iterable[str]) -> None:
        unknown = [n for n in names if n not in self.columns]
        if unknown:
            raise KeyError(f"unknown column(s): {', '.join(unknown)}")

    def _index_of(self, row_id: str) -> int:
        for i, row in enumerate(self._rows):
            if row["id"] == row_id:
                return i
        return -1

    def append(self, row: Row) -> None:
        self._check_fields(row.keys())
        if self._index_of(row["id"]) != -1:
            raise ValueError(f"duplicate id: {row['id']}")
        self._rows.append({c: row.get(c) for c in self.columns})

    def find_by_id(self, row_id: str) -> Optional[Row]:
        i = self._index_of(row_id)
        return copy.deepcopy(self._rows[i]) if i != -1 else None

    def find_all(self) -> List[Row]:
        return copy.deepcopy(self._rows)

    def find_by_field(self, field_name: str, value: Any) -> List[Row]:
        self._check_fields([field_name])
        return [copy.deepcopy(r) for r in self._rows if r[field_name] == value]

    def update_by_id(self, row_id: str, fields: Row) -> bool:
        self._check_fields(fields.keys())
        i = self._index_of(row_id)
        if i == -1:
            return False
        self._rows[i].update(fields)
        return True

    def delete_by_id(self, row_id: str) -> bool:
        i = self._index_of(row_id)
        if i == -1:
            return False
        del self._rows[i]
        return True

    def __len__(self) -> int:
        return len(self._rows)
