"""
project: Delve
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (a local .env is loaded
first) with reasonable defaults for development, then from the optional
``overrides`` mapping passed by callers such as the test suite.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so SECRET_KEY, DELVE_GRID_SIZE etc. can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(overrides=None) -> Flask:
    """Build a fresh Flask app with the dungeon blueprints registered."""
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # read-only installs still serve requests; only file logging needs it
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DELVE_GRID_SIZE=int(os.getenv("DELVE_GRID_SIZE", "10")),
        DELVE_MAX_GRID_SIZE=int(os.getenv("DELVE_MAX_GRID_SIZE", "64")),
        DUNGEON_ENABLE_GENERATION_METRICS=_env_flag("DUNGEON_ENABLE_GENERATION_METRICS", "1"),
        DUNGEON_DISABLE_CACHE=_env_flag("DUNGEON_DISABLE_CACHE", "0"),
    )
    if overrides:
        app.config.update(overrides)

    from delve.routes.dungeon_api import bp_dungeon
    from delve.routes.seed_api import bp_seed

    app.register_blueprint(bp_dungeon)
    app.register_blueprint(bp_seed)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.getLogger(__name__).error("Unhandled exception (id=%s): %s", error_id, e)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
