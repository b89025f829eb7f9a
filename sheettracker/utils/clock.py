# sheettracker – clock and id generator collaborators
from __future__ import annotations
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional


class UtcClock:
    """Timezone-aware UTC timestamps, strictly increasing within one process.

    Sorting children by creation time relies on this; the wall clock may
    repeat a value for two rows created back to back, so a repeated reading
    is bumped by one microsecond.
    """

    def __init__(self):
        self._last: Optional[datetime] = None

    def now(self) -> datetime:
        current = datetime.now(timezone.utc)
        if self._last is not None and current <= self._last:
            current = self._last + timedelta(microseconds=1)
        self._last = current
        return current


class UuidGenerator:
    def new_id(self, prefix: str) -> str:
        return f"{prefix}{uuid.uuid4()}"


# shared so rows created through different stores still sort by creation
DEFAULT_CLOCK = UtcClock()
DEFAULT_IDS = UuidGenerator()
