import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve import create_app  # noqa: E402
from delve.routes import dungeon_api  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True, "SECRET_KEY": "test-secret", "DELVE_GRID_SIZE": 10})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    """Cached templates must not leak between tests that flip metrics flags."""
    with dungeon_api._dungeon_cache_lock:
        dungeon_api._dungeon_cache.clear()
    yield
