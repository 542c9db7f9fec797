"""
project: Delve
module: features.py
License: MIT

Role assignment: overlay gameplay meaning on carved rooms.

* First room (creation order) is the entrance.
* Last room, when there is more than one, is the boss.
* Up to ``min(floor(n * ratio), cap)`` draws promote a random interior room
  to a special type. Draws are independent, so the same room may be hit twice
  and fewer distinct rooms than the cap may change.
"""
from __future__ import annotations

import math
from typing import List

from .config import DungeonConfig
from .rng import SeededRandom
from .rooms import BOSS, ENTRANCE, EVENT, REST, SHOP, TREASURE, Room

SPECIAL_ROOM_TYPES = (TREASURE, REST, SHOP, EVENT)


def special_room_target(room_count: int, config: DungeonConfig) -> int:
    return min(math.floor(room_count * config.special_room_ratio), config.max_special_rooms)


def assign_room_types(rooms: List[Room], rng: SeededRandom, config: DungeonConfig) -> None:
    if not rooms:
        return
    rooms[0].type = ENTRANCE
    if len(rooms) > 1:
        rooms[-1].type = BOSS
    interior = rooms[1:-1]
    draws = min(special_room_target(len(rooms), config), len(interior))
    for _ in range(draws):
        target = interior[math.floor(rng.random() * len(interior))]
        target.type = SPECIAL_ROOM_TYPES[math.floor(rng.random() * len(SPECIAL_ROOM_TYPES))]


__all__ = ["SPECIAL_ROOM_TYPES", "special_room_target", "assign_room_types"]
