"""
project: Delve
module: movement.py
License: MIT

Caller-side navigation helpers used by the HTTP layer.

The generator itself never moves the player. These helpers cover that side:
- Restoring stored session progress onto a freshly generated map
- Validating and applying a move between connected rooms
- Computing exits and a room description

They never mutate the map they are given except through ``attempt_move``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from ..pipeline import DungeonMap, get_room_by_id
from ..rooms import BOSS, CORRIDOR, ENTRANCE, EVENT, REST, SHOP, TREASURE, Room

ROOM_DESCRIPTIONS = {
    ENTRANCE: "The dungeon entrance. Daylight still reaches the worn steps behind you.",
    CORRIDOR: "A narrow stone passage. Water drips somewhere in the dark.",
    TREASURE: "A vault glittering with forgotten treasure.",
    BOSS: "A vast chamber. Something enormous stirs in the shadows.",
    REST: "A quiet shrine untouched by corruption. A safe place to rest.",
    EVENT: "Strange runes pulse on the walls. Something is about to happen.",
    SHOP: "A wandering merchant has set up shop among the ruins.",
}


def apply_progress(dungeon: DungeonMap, current_room_id: Optional[str], visited_ids: Iterable[str]) -> DungeonMap:
    """Return a copy of ``dungeon`` with stored progress applied.

    Unknown ids are ignored; an unknown current room falls back to the entrance.
    The entrance is always visited.
    """
    state = dungeon.copy()
    visited = set(visited_ids or ())
    for room in state.rooms:
        if room.id in visited:
            room.visited = True
    current = get_room_by_id(state, current_room_id) if current_room_id else None
    if current is None:
        current = state.entrance
    current.visited = True
    state.current_room_id = current.id
    return state


def attempt_move(dungeon: DungeonMap, room_id: str) -> Tuple[Optional[Room], bool]:
    """Move to ``room_id`` if it is the current room or directly connected.

    Returns (target_room, moved). ``target_room`` is None for unknown ids.
    """
    target = get_room_by_id(dungeon, room_id)
    current = dungeon.current_room
    if target is None or current is None:
        return target, False
    if target.id != current.id and target.id not in current.connections:
        return target, False
    dungeon.current_room_id = target.id
    target.visited = True
    return target, target.id != current.id


def exits(dungeon: DungeonMap) -> List[str]:
    current = dungeon.current_room
    if current is None:
        return []
    return [cid for cid in current.connections if get_room_by_id(dungeon, cid) is not None]


def visited_room_ids(dungeon: DungeonMap) -> List[str]:
    return [r.id for r in dungeon.rooms if r.visited]


def describe_room(room: Room) -> str:
    if room.description:
        return room.description
    return ROOM_DESCRIPTIONS.get(room.type, "An unremarkable room.")
