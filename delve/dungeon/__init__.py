"""
project: Delve
module: __init__.py
License: MIT

Public dungeon package interface."""

from .config import DungeonConfig, DungeonConfigError
from .pipeline import DungeonMap, generate_dungeon, get_connected_rooms, get_room_by_id
from .rng import SeededRandom
from .rooms import (
    BOSS,
    CORRIDOR,
    ENTRANCE,
    EVENT,
    REST,
    ROOM_TYPES,
    SHOP,
    TREASURE,
    Room,
)  # noqa: F401

__all__ = [
    "DungeonConfig",
    "DungeonConfigError",
    "DungeonMap",
    "Room",
    "SeededRandom",
    "generate_dungeon",
    "get_room_by_id",
    "get_connected_rooms",
    "ROOM_TYPES",
    "ENTRANCE",
    "CORRIDOR",
    "TREASURE",
    "BOSS",
    "REST",
    "EVENT",
    "SHOP",
]
