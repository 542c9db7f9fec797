"""
project: Delve
module: seed_api.py
License: MIT

Seed management API routes.

Provides a centralized endpoint to create/update the active dungeon seed
(and optionally grid size) for the current session.
"""
import hashlib

from flask import Blueprint, jsonify, request

from delve.dungeon import DungeonConfigError
from delve.dungeon.rng import SEED_LIMIT
from delve.logging_utils import get_logger
from delve.routes.dungeon_api import coerce_grid_size, new_random_seed, reset_session_dungeon

bp_seed = Blueprint('seed_api', __name__)
_log = get_logger('seed_api')

MAX_SEED = SEED_LIMIT - 1


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None or isinstance(payload_seed, bool):
        return new_random_seed()
    if isinstance(payload_seed, int):
        return payload_seed % MAX_SEED
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return new_random_seed()
        if s.isascii() and s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode('utf-8')).digest()
        return int.from_bytes(h[:8], 'big') % MAX_SEED
    return new_random_seed()


@bp_seed.errorhandler(DungeonConfigError)
def _bad_request(e):
    return jsonify({"error": str(e)}), 400


@bp_seed.route('/api/dungeon/seed', methods=['POST'])
def set_seed():
    """Set (or generate) the dungeon seed and reset progress.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool>, "grid_size": <int> }
    - If seed omitted or null and regenerate true => random seed.
    - If seed provided (int or string) => deterministic hashing.

    Response: { "seed": <int>, "grid_size": <int> }
    """
    data = request.get_json(silent=True) or {}
    grid_size = coerce_grid_size(data.get('grid_size'))
    provided = data.get('seed', None)
    if data.get('regenerate') and provided is None:
        seed = new_random_seed()
    else:
        seed = _coerce_seed(provided)
    reset_session_dungeon(seed, grid_size)
    _log.info(event='seed_set', seed=seed, grid_size=grid_size)
    return jsonify({"seed": seed, "grid_size": grid_size})
