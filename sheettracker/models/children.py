# Rev 1.0.0
"""Result value for children / descendant queries."""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from .entities import Project, Task, WorkItem


@dataclass(frozen=True)
class Children:
    projects: Tuple[Project, ...] = ()
    tasks: Tuple[Task, ...] = ()


EMPTY_CHILDREN = Children()


def merged_sorted_by_creation(children: Children) -> List[WorkItem]:
    """Projects and tasks in one list, oldest first."""
    return sorted([*children.projects, *children.tasks], key=lambda item: item.created_at)


def count(children: Children) -> int:
    return len(children.projects) + len(children.tasks)
