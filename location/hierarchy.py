"""In-memory walks over the location forest.

The service loads every non-deleted location once and hands the rows to
``index_locations``; every other helper works on the two maps it returns.
All walks keep a visited set, so a corrupted parent chain terminates instead
of recursing forever.
"""
from __future__ import annotations
from collections import defaultdict, deque
from typing import Callable, Iterable, TypeVar

from .models import Location

T = TypeVar("T")

ById = dict[int, Location]
ByParent = dict[int | None, list[Location]]


# ---------- indexing ----------

def _newest_first(rows: list[Location]) -> list[Location]:
    return sorted(rows, key=lambda r: (r.created_at, r.id), reverse=True)

def index_locations(rows: Iterable[Location]) -> tuple[ById, ByParent]:
    by_id: ById = {}
    grouped: dict[int | None, list[Location]] = defaultdict(list)
    for row in rows:
        by_id[row.id] = row
        grouped[row.parent_location_id].append(row)
    by_parent: ByParent = {pid: _newest_first(children) for pid, children in grouped.items()}
    return by_id, by_parent


# ---------- walks ----------

def roots(by_parent: ByParent) -> list[Location]:
    return list(by_parent.get(None, []))

def descendants(by_parent: ByParent, location_id: int) -> list[Location]:
    """Breadth first, nearest generation first, the start node excluded."""
    out: list[Location] = []
    seen = {location_id}
    queue = deque([location_id])
    while queue:
        current = queue.popleft()
        for child in by_parent.get(current, []):
            if child.id in seen:
                continue
            seen.add(child.id)
            out.append(child)
            queue.append(child.id)
    return out

def ancestors(by_id: ById, location_id: int) -> list[Location]:
    """Immediate parent first, root last, the start node excluded."""
    out: list[Location] = []
    seen = {location_id}
    node = by_id.get(location_id)
    parent_id = node.parent_location_id if node is not None else None
    while parent_id is not None and parent_id not in seen and parent_id in by_id:
        seen.add(parent_id)
        parent = by_id[parent_id]
        out.append(parent)
        parent_id = parent.parent_location_id
    return out

def would_create_cycle(by_id: ById, location_id: int, new_parent_id: int) -> bool:
    """True when ``location_id`` is ``new_parent_id`` or one of its ancestors."""
    if new_parent_id == location_id:
        return True
    return any(a.id == location_id for a in ancestors(by_id, new_parent_id))

def build_forest(by_parent: ByParent, make_node: Callable[[Location, list[T]], T]) -> list[T]:
    """Assemble nested nodes starting from the roots."""
    seen: set[int] = set()

    def _build(row: Location) -> T:
        seen.add(row.id)
        kids = [_build(c) for c in by_parent.get(row.id, []) if c.id not in seen]
        return make_node(row, kids)

    return [_build(r) for r in roots(by_parent)]
