"""
project: Delve
module: dungeon_api.py
License: MIT

Dungeon map, state and movement API routes.

Generation is deterministic, so the session cookie only stores the seed,
grid size and the player's progress (current room, visited rooms). Each
request rebuilds the map from a small in-process cache and re-applies that
progress.
"""

import random
import threading

from flask import Blueprint, current_app, jsonify, request, session

from delve.dungeon import DungeonConfig, DungeonConfigError, DungeonMap, generate_dungeon, get_connected_rooms, get_room_by_id
from delve.dungeon.api_helpers.movement import apply_progress, attempt_move, describe_room, exits, visited_room_ids
from delve.logging_utils import get_logger

_log = get_logger("dungeon_api")

SESSION_SEED = "dungeon_seed"
SESSION_GRID_SIZE = "dungeon_grid_size"
SESSION_CURRENT = "dungeon_current_room"
SESSION_VISITED = "dungeon_visited"

# (seed, grid_size, policy, metrics) -> DungeonMap template. Callers copy before mutating.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


def new_random_seed() -> int:
    return random.randint(1, 1_000_000)


def dungeon_config(grid_size: int) -> DungeonConfig:
    return DungeonConfig(
        grid_size=grid_size,
        enable_metrics=bool(current_app.config.get("DUNGEON_ENABLE_GENERATION_METRICS", True)),
    )


def get_cached_dungeon(seed: int, config: DungeonConfig) -> DungeonMap:
    if current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return generate_dungeon(seed, config=config)
    key = (seed, config.grid_size, config.policy_key, config.enable_metrics)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    with _log.timed(event="dungeon_cache_miss", seed=seed, grid_size=config.grid_size) as rec:
        dungeon = generate_dungeon(seed, config=config)
        rec["rooms"] = len(dungeon.rooms)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def coerce_grid_size(value) -> int:
    """Validate a caller-supplied grid size against DELVE_MAX_GRID_SIZE."""
    default = current_app.config.get("DELVE_GRID_SIZE", 10)
    if value is None:
        return default
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int):
        raise DungeonConfigError(f"grid_size must be an integer (got {value!r})")
    upper = current_app.config.get("DELVE_MAX_GRID_SIZE", 64)
    if not 1 <= value <= upper:
        raise DungeonConfigError(f"grid_size must be between 1 and {upper} (got {value})")
    return value


def reset_session_dungeon(seed: int, grid_size: int) -> None:
    session[SESSION_SEED] = seed
    session[SESSION_GRID_SIZE] = grid_size
    session.pop(SESSION_CURRENT, None)
    session[SESSION_VISITED] = []


def load_session_dungeon() -> DungeonMap:
    """Return this session's map with its progress applied, creating a seed if missing."""
    if session.get(SESSION_SEED) is None:
        reset_session_dungeon(new_random_seed(), current_app.config.get("DELVE_GRID_SIZE", 10))
        _log.info(event="session_seed_created", seed=session[SESSION_SEED])
    template = get_cached_dungeon(session[SESSION_SEED], dungeon_config(session[SESSION_GRID_SIZE]))
    state = apply_progress(template, session.get(SESSION_CURRENT), session.get(SESSION_VISITED, []))
    save_session_progress(state)
    return state


def save_session_progress(dungeon: DungeonMap) -> None:
    session[SESSION_CURRENT] = dungeon.current_room_id
    session[SESSION_VISITED] = visited_room_ids(dungeon)


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.errorhandler(DungeonConfigError)
def _bad_request(e):
    return jsonify({"error": str(e)}), 400


@bp_dungeon.route("/api/dungeon/map")
def dungeon_map():
    """
    Return the session's dungeon map with progress applied.
    Response: { width, height, rooms, currentRoomId, seed, exits }
    """
    dungeon = load_session_dungeon()
    data = dungeon.to_dict()
    data["exits"] = exits(dungeon)
    return jsonify(data)


@bp_dungeon.route("/api/dungeon/state")
def dungeon_state():
    dungeon = load_session_dungeon()
    room = dungeon.current_room
    return jsonify(
        {
            "currentRoomId": dungeon.current_room_id,
            "room": room.to_dict(),
            "desc": describe_room(room),
            "exits": exits(dungeon),
        }
    )


@bp_dungeon.route("/api/dungeon/move", methods=["POST"])
def dungeon_move():
    """Move to a connected room.

    Body JSON: { "room_id": "room_3" }
    Response: { moved, currentRoomId, desc, exits }
    """
    data = request.get_json(silent=True) or {}
    room_id = data.get("room_id")
    if not isinstance(room_id, str) or not room_id:
        return jsonify({"error": "room_id is required"}), 400
    dungeon = load_session_dungeon()
    target, moved = attempt_move(dungeon, room_id)
    if target is None:
        return jsonify({"error": "room not found"}), 404
    if moved:
        save_session_progress(dungeon)
        _log.debug(event="player_moved", seed=dungeon.seed, room=dungeon.current_room_id)
    room = dungeon.current_room
    return jsonify(
        {
            "moved": moved,
            "currentRoomId": dungeon.current_room_id,
            "desc": describe_room(room),
            "exits": exits(dungeon),
        }
    )


@bp_dungeon.route("/api/dungeon/rooms/<room_id>")
def dungeon_room(room_id):
    dungeon = load_session_dungeon()
    room = get_room_by_id(dungeon, room_id)
    if room is None:
        return jsonify({"error": "room not found"}), 404
    return jsonify(
        {
            "room": room.to_dict(),
            "desc": describe_room(room),
            "connected": [r.to_dict() for r in get_connected_rooms(dungeon, room_id)],
        }
    )


@bp_dungeon.route("/api/dungeon/gen/metrics")
def generation_metrics():
    dungeon = load_session_dungeon()
    return jsonify({"seed": dungeon.seed, "metrics": dungeon.metrics})
