"""
project: Delve
module: pipeline.py
License: MIT

Pipeline orchestration for dungeon generation.

``generate_dungeon`` runs the ordered phases (partition, carve, connect,
assign roles) against a single ``SeededRandom`` and returns a ``DungeonMap``.
The same (seed, grid size, policy) always yields an equal map. After
generation only callers touch the map, and only ``visited`` flags and
``current_room_id``.
"""
from __future__ import annotations

import copy
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .config import DungeonConfig, DungeonConfigError
from .connectivity import unreachable_room_ids
from .features import SPECIAL_ROOM_TYPES, assign_room_types
from .metrics import init_metrics
from .partition import build_partition_tree, iter_leaves
from .rng import SeededRandom
from .rooms import Room, carve_rooms, connect_rooms

_log = get_logger("dungeon")


@dataclass
class DungeonMap:
    width: int
    height: int
    rooms: List[Room]
    current_room_id: str
    seed: int
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def entrance(self) -> Room:
        return self.rooms[0]

    @property
    def current_room(self) -> Optional[Room]:
        return get_room_by_id(self, self.current_room_id)

    def copy(self) -> "DungeonMap":
        """Deep copy, so caller-side mutation never reaches a cached template."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "rooms": [r.to_dict() for r in self.rooms],
            "currentRoomId": self.current_room_id,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DungeonMap":
        return cls(
            width=int(data["width"]),
            height=int(data["height"]),
            rooms=[Room.from_dict(r) for r in data.get("rooms", [])],
            current_room_id=data.get("currentRoomId", ""),
            seed=int(data["seed"]),
        )


def generate_dungeon(seed: int, grid_size: Optional[int] = None, config: Optional[DungeonConfig] = None) -> DungeonMap:
    """Generate a dungeon map on a ``grid_size`` x ``grid_size`` grid.

    ``grid_size`` overrides ``config.grid_size`` when given. Raises
    ``DungeonConfigError`` for a non-integer seed or a grid size below 1.
    """
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise DungeonConfigError(f"seed must be an integer (got {seed!r})")
    config = config or DungeonConfig()
    if grid_size is not None:
        config = replace(config, grid_size=grid_size)

    phase_times: Dict[str, float] = {}

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = round((time.perf_counter() - ps) * 1000, 3)
        return r

    start = time.perf_counter()
    rng = SeededRandom(seed)
    size = config.grid_size
    root = _phase("partition", build_partition_tree, size, config.max_depth, rng)
    leaves = list(iter_leaves(root))
    rooms, footprints = _phase("carve", carve_rooms, leaves, config.padding)
    edges = _phase("connect", connect_rooms, rooms, footprints)
    _phase("assign_types", assign_room_types, rooms, rng, config)
    rooms[0].visited = True

    dungeon = DungeonMap(width=size, height=size, rooms=rooms, current_room_id=rooms[0].id, seed=seed)
    runtime_ms = round((time.perf_counter() - start) * 1000, 3)
    if config.enable_metrics:
        metrics = init_metrics()
        metrics["rooms"] = len(rooms)
        metrics["connections"] = edges
        metrics["max_depth"] = _tree_depth(root)
        metrics["unreachable_rooms"] = len(unreachable_room_ids(rooms, rooms[0].id))
        for r in rooms:
            metrics[f"rooms_{r.type}"] += 1
            if r.type in SPECIAL_ROOM_TYPES:
                metrics["special_rooms"] += 1
        metrics["runtime_ms"] = runtime_ms
        metrics["phase_ms"] = phase_times
        dungeon.metrics = metrics
    _log.debug(event="dungeon_generated", seed=seed, grid_size=size, rooms=len(rooms), runtime_ms=runtime_ms)
    return dungeon


def _tree_depth(part) -> int:
    if part.children is None:
        return 0
    return 1 + max(_tree_depth(c) for c in part.children)


def get_room_by_id(dungeon: DungeonMap, room_id: str) -> Optional[Room]:
    for room in dungeon.rooms:
        if room.id == room_id:
            return room
    return None


def get_connected_rooms(dungeon: DungeonMap, room_id: str) -> List[Room]:
    """Resolve a room's connections in stored order, dropping unknown ids."""
    room = get_room_by_id(dungeon, room_id)
    if room is None:
        return []
    resolved = (get_room_by_id(dungeon, cid) for cid in room.connections)
    return [r for r in resolved if r is not None]


__all__ = ["DungeonMap", "generate_dungeon", "get_room_by_id", "get_connected_rooms"]
