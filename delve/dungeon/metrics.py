"""
project: Delve
module: metrics.py
License: MIT
"""
from typing import Dict

from .rooms import ROOM_TYPES


def init_metrics() -> Dict[str, int | float]:
    metrics: Dict[str, int | float] = {
        'rooms': 0,
        'connections': 0,
        'special_rooms': 0,
        'unreachable_rooms': 0,
        'max_depth': 0,
        'runtime_ms': 0.0,
    }
    for room_type in ROOM_TYPES:
        metrics[f'rooms_{room_type}'] = 0
    return metrics
