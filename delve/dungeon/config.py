"""
project: Delve
module: config.py
License: MIT
"""
from dataclasses import dataclass


class DungeonConfigError(ValueError):
    """Raised when a generation request violates the caller contract."""


@dataclass
class DungeonConfig:
    grid_size: int = 10
    max_depth: int = 4
    padding: int = 1
    special_room_ratio: float = 0.3
    max_special_rooms: int = 5
    enable_metrics: bool = True

    def __post_init__(self):
        _require_int("grid_size", self.grid_size)
        _require_int("max_depth", self.max_depth)
        _require_int("padding", self.padding)
        _require_int("max_special_rooms", self.max_special_rooms)
        if self.grid_size < 1:
            raise DungeonConfigError(f"grid_size must be >= 1 (got {self.grid_size})")
        if self.max_depth < 0:
            raise DungeonConfigError(f"max_depth must be >= 0 (got {self.max_depth})")
        if self.padding < 0:
            raise DungeonConfigError(f"padding must be >= 0 (got {self.padding})")
        if not 0.0 <= self.special_room_ratio <= 1.0:
            raise DungeonConfigError(f"special_room_ratio must be within [0, 1] (got {self.special_room_ratio})")
        if self.max_special_rooms < 0:
            raise DungeonConfigError(f"max_special_rooms must be >= 0 (got {self.max_special_rooms})")

    @property
    def policy_key(self):
        return (self.max_depth, self.padding, self.special_room_ratio, self.max_special_rooms)


def _require_int(name: str, value) -> None:
    # bool is an int subclass; True is not a grid size
    if isinstance(value, bool) or not isinstance(value, int):
        raise DungeonConfigError(f"{name} must be an integer (got {value!r})")


__all__ = ["DungeonConfig", "DungeonConfigError"]
