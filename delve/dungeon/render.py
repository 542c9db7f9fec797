"""
project: Delve
module: render.py
License: MIT

Plain-text dump of a dungeon map for the CLI and debugging."""
from __future__ import annotations

from typing import List

from .rooms import BOSS, CORRIDOR, ENTRANCE, EVENT, REST, SHOP, TREASURE

EMPTY = "."
HIDDEN = "?"
PLAYER = "@"
TYPE_CHARS = {
    ENTRANCE: "E",
    CORRIDOR: "#",
    TREASURE: "T",
    BOSS: "B",
    REST: "R",
    EVENT: "!",
    SHOP: "S",
}


def render_ascii(dungeon, fog: bool = False) -> str:
    """Return one text row per grid row, top to bottom.

    With ``fog`` set, unvisited rooms render as ``?``.
    """
    rows: List[List[str]] = [[EMPTY] * dungeon.width for _ in range(dungeon.height)]
    for room in dungeon.rooms:
        ch = HIDDEN if fog and not room.visited else TYPE_CHARS.get(room.type, HIDDEN)
        for x, y in room.cells():
            rows[y][x] = ch
    current = dungeon.current_room
    if current is not None:
        cx, cy = current.center
        rows[cy][cx] = PLAYER
    return "\n".join("".join(r) for r in rows)


__all__ = ["TYPE_CHARS", "render_ascii"]
