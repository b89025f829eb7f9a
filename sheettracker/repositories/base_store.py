# Rev 1.0.0
"""Read/delete primitives shared by the three entity stores.

Nothing raised by the row store gets past these methods: read failures
become ``None`` / ``[]``, write failures become ``None`` / ``False``, and the
traceback goes to the log.
"""
from __future__ import annotations
import math
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from sheettracker.models.refs import is_valid_id
from sheettracker.repositories.row_store import Row, RowStore
from sheettracker.utils.clock import DEFAULT_CLOCK, DEFAULT_IDS, UtcClock, UuidGenerator
from sheettracker.utils.logging_setup import get_logger

E = TypeVar("E")


def is_non_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


MAX_INTEGER = 2**63 - 1  # largest INTEGER a SQLite column can bind


def is_time_amount(value: Any) -> bool:
    """Non-negative finite int or float that fits a SQLite column; bools are rejected."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 <= value <= MAX_INTEGER
    if isinstance(value, float):
        return math.isfinite(value) and value >= 0
    return False


class EntityStore(Generic[E]):
    kind: str = "entity"
    id_prefix: str = ""
    entity_cls: Type[E]

    def __init__(
        self,
        rows: RowStore,
        *,
        clock: Optional[UtcClock] = None,
        ids: Optional[UuidGenerator] = None,
    ):
        self._rows = rows
        self._clock = clock or DEFAULT_CLOCK
        self._ids = ids or DEFAULT_IDS
        self._log = get_logger(type(self).__name__)

    # ---------- reads ----------

    def get_by_id(self, entity_id: Any) -> Optional[E]:
        if not is_valid_id(entity_id):
            return None
        return self._read_one(lambda: self._rows.find_by_id(entity_id), f"get {self.kind} by id")

    def get_all(self) -> List[E]:
        return self._read_many(self._rows.find_all, f"get all {self.kind}s")

    def get_by_parent_id(self, parent_id: Any) -> List[E]:
        if not is_valid_id(parent_id):
            return []
        return self._read_many(
            lambda: self._rows.find_by_field("parent_id", parent_id),
            f"get {self.kind}s by parent id",
        )

    # ---------- delete ----------

    def delete(self, entity_id: Any) -> bool:
        if not is_valid_id(entity_id):
            self._log.warning("Invalid %s id provided for delete: %r", self.kind, entity_id)
            return False
        try:
            deleted = self._rows.delete_by_id(entity_id)
        except Exception:
            self._log.exception("Failed to delete %s %s", self.kind, entity_id)
            return False
        if deleted:
            self._log.info("%s deleted: ID = %s", self.kind.capitalize(), entity_id)
        else:
            self._log.warning("%s with ID '%s' not found.", self.kind.capitalize(), entity_id)
        return deleted

    # ---------- internals ----------

    def _read_one(self, fetch: Callable[[], Optional[Row]], what: str) -> Optional[E]:
        try:
            row = fetch()
            return self.entity_cls.from_row(row) if row else None
        except Exception:
            self._log.exception("Failed to %s", what)
            return None

    def _read_many(self, fetch: Callable[[], List[Row]], what: str) -> List[E]:
        try:
            return [self.entity_cls.from_row(r) for r in fetch()]
        except Exception:
            self._log.exception("Failed to %s", what)
            return []

    def _append(self, entity: E) -> Optional[E]:
        try:
            self._rows.append(entity.to_row())
        except Exception:
            self._log.exception("Failed to add %s", self.kind)
            return None
        return entity

    def _write_changes(self, entity_id: str, changes: Row) -> bool:
        try:
            if self._rows.update_by_id(entity_id, changes):
                return True
            self._log.warning("%s with ID '%s' not found.", self.kind.capitalize(), entity_id)
        except Exception:
            self._log.exception("Failed to update %s %s", self.kind, entity_id)
        return False

    def _check_parent_shape(self, data, action: str) -> bool:
        parent_id = data.get("parent_id")
        if parent_id is not None and not is_valid_id(parent_id):
            self._log.warning(
                "Failed to %s %s: invalid parent_id %r, it must be a non-empty string when provided.",
                action, self.kind, parent_id,
            )
            return False
        return True
