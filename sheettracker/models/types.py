# sheettracker type definitions
# Rev 1.0.0

from __future__ import annotations
from typing import Dict, Literal

# Entity classification: projects and tasks nest freely, events are leaves
EntityKind = Literal["project", "task", "event"]

ID_PREFIXES: Dict[str, str] = {
    "project": "P-",
    "task": "T-",
    "event": "CE-",
}
