# Rev 1.0.0
"""Tagged entity ids.

Rows carry ids as prefixed strings (``P-…``, ``T-…``, ``CE-…``). Inside the
hierarchy code an id is handled as an ``EntityRef`` so the kind is explicit
instead of being sniffed from the string at every call site.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from .types import EntityKind, ID_PREFIXES


@dataclass(frozen=True)
class EntityRef:
    kind: EntityKind
    id: str

    @classmethod
    def parse(cls, value: Any) -> Optional["EntityRef"]:
        """Classify a prefixed id string; None for non-strings, blanks and unknown prefixes."""
        if not is_valid_id(value):
            return None
        for kind in ("event", "project", "task"):
            if value.startswith(ID_PREFIXES[kind]):
                return cls(kind=kind, id=value)
        return None

    def __str__(self) -> str:
        return self.id


def is_valid_id(value: Any) -> bool:
    """Non-empty, non-blank string."""
    return isinstance(value, str) and value.strip() != ""
