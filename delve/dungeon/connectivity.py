"""
project: Delve
module: connectivity.py
License: MIT

Graph reachability over room connections."""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Set

from .rooms import Room


def reachable_room_ids(rooms: Iterable[Room], start_id: str) -> Set[str]:
    """Breadth-first walk of ``connections`` from ``start_id``.

    Ids that do not resolve to a room are skipped.
    """
    by_id: Dict[str, Room] = {r.id: r for r in rooms}
    if start_id not in by_id:
        return set()
    seen = {start_id}
    q = deque([start_id])
    while q:
        current = by_id[q.popleft()]
        for nid in current.connections:
            if nid in by_id and nid not in seen:
                seen.add(nid)
                q.append(nid)
    return seen


def unreachable_room_ids(rooms: List[Room], start_id: str) -> List[str]:
    seen = reachable_room_ids(rooms, start_id)
    return [r.id for r in rooms if r.id not in seen]


__all__ = ["reachable_room_ids", "unreachable_room_ids"]
