"""
project: Delve
module: rooms.py
License: MIT
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .partition import Partition, Rect

ENTRANCE = "entrance"
CORRIDOR = "corridor"
TREASURE = "treasure"
BOSS = "boss"
REST = "rest"
EVENT = "event"
SHOP = "shop"

ROOM_TYPES = (ENTRANCE, CORRIDOR, TREASURE, BOSS, REST, EVENT, SHOP)

MIN_ROOM = 2
ADJACENCY_TOLERANCE = 1


@dataclass
class Room:
    id: str
    x: int
    y: int
    width: int
    height: int
    type: str = CORRIDOR
    connections: List[str] = field(default_factory=list)
    visited: bool = False
    description: Optional[str] = None

    def cells(self):
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "type": self.type,
            "connections": list(self.connections),
            "visited": self.visited,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Room":
        return cls(
            id=data["id"],
            x=int(data["x"]),
            y=int(data["y"]),
            width=int(data["width"]),
            height=int(data["height"]),
            type=data.get("type", CORRIDOR),
            connections=list(data.get("connections", [])),
            visited=bool(data.get("visited", False)),
            description=data.get("description"),
        )


def _carve_extent(extent: int, padding: int) -> Tuple[int, int]:
    """Return (offset, size) of a room side carved from a leaf side.

    Leaves wide enough keep ``padding`` cells on both ends; narrower leaves
    shrink the margin so the room never leaves its partition.
    """
    size = min(extent, max(MIN_ROOM, extent - 2 * padding))
    return (extent - size) // 2, size


def carve_room(leaf: Partition, index: int, padding: int) -> Room:
    ox, width = _carve_extent(leaf.width, padding)
    oy, height = _carve_extent(leaf.height, padding)
    return Room(id=f"room_{index}", x=leaf.x + ox, y=leaf.y + oy, width=width, height=height)


def carve_rooms(leaves: Sequence[Partition], padding: int) -> Tuple[List[Room], List[Rect]]:
    """Carve one room per leaf, in leaf order.

    Returns the rooms plus the footprint (the owning leaf rectangle) of each.
    """
    rooms: List[Room] = []
    footprints: List[Rect] = []
    for leaf in leaves:
        rooms.append(carve_room(leaf, len(rooms), padding))
        footprints.append(leaf.rect)
    return rooms, footprints


def _overlaps_x(a: Rect, b: Rect) -> bool:
    return a.x < b.x + b.w and a.x + a.w > b.x


def _overlaps_y(a: Rect, b: Rect) -> bool:
    return a.y < b.y + b.h and a.y + a.h > b.y


def is_adjacent(a: Rect, b: Rect, tolerance: int = ADJACENCY_TOLERANCE) -> bool:
    return (
        (abs(a.x - (b.x + b.w)) <= tolerance and _overlaps_y(a, b))
        or (abs((a.x + a.w) - b.x) <= tolerance and _overlaps_y(a, b))
        or (abs(a.y - (b.y + b.h)) <= tolerance and _overlaps_x(a, b))
        or (abs((a.y + a.h) - b.y) <= tolerance and _overlaps_x(a, b))
    )


def connect_rooms(rooms: Sequence[Room], footprints: Sequence[Rect]) -> int:
    """Link rooms whose footprints share a boundary; returns undirected edge count.

    Footprints are the BSP leaves, which tile the grid, so every split line is
    covered on both sides and the resulting graph is connected.
    """
    edges = 0
    for i, room in enumerate(rooms):
        for j, other in enumerate(rooms):
            if i == j:
                continue
            if is_adjacent(footprints[i], footprints[j]) and other.id not in room.connections:
                room.connections.append(other.id)
                if i < j:
                    edges += 1
    return edges


__all__ = [
    "ENTRANCE",
    "CORRIDOR",
    "TREASURE",
    "BOSS",
    "REST",
    "EVENT",
    "SHOP",
    "ROOM_TYPES",
    "Room",
    "carve_room",
    "carve_rooms",
    "is_adjacent",
    "connect_rooms",
]
