import json
import logging

import pytest

from delve import logging_utils
from delve.dungeon import generate_dungeon
from delve.server import _HANDLER_TAG, _configure_logging


def test_generation_emits_debug_event(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    generate_dungeon(42, 10)
    out = capsys.readouterr().out
    assert "event=dungeon_generated" in out
    assert "seed=42" in out
    assert "logger=dungeon" in out


def test_debug_suppressed_at_info(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    generate_dungeon(42, 10)
    assert "dungeon_generated" not in capsys.readouterr().out


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    logging_utils.get_logger("unit").info(event="ping", value=3, skipped=None)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["event"] == "ping" and rec["value"] == 3
    assert rec["level"] == "info" and rec["logger"] == "unit"
    assert "skipped" not in rec


def test_errors_go_to_stderr(capsys):
    logging_utils.get_logger("unit").error(event="boom", detail="two words")
    captured = capsys.readouterr()
    assert "event=boom" in captured.err
    assert "detail=two_words" in captured.err
    assert captured.out == ""


def test_configure_logging_idempotent(tmp_path, monkeypatch, test_app):
    monkeypatch.setattr(test_app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    try:
        _configure_logging(test_app)
        _configure_logging(test_app)
        tagged = [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]
        assert len(tagged) == 2
        logging.getLogger("delve.test").info("hello")
        assert (tmp_path / "app.log").exists()
    finally:
        for h in list(root.handlers):
            if getattr(h, _HANDLER_TAG, False):
                root.removeHandler(h)
                h.close()


def test_timed_reports_elapsed_and_extra_fields(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    with logging_utils.get_logger("unit").timed(event="carve", seed=7) as rec:
        rec["rooms"] = 5
    out = capsys.readouterr().out
    assert "event=carve" in out and "seed=7" in out and "rooms=5" in out
    assert "elapsed_ms=" in out
    assert "failed=" not in out


def test_timed_marks_failure_and_reraises(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    with pytest.raises(ValueError):
        with logging_utils.get_logger("unit").timed(event="carve"):
            raise ValueError("bad leaf")
    out = capsys.readouterr().out
    assert "event=carve" in out
    assert "failed=True" in out


def test_map_cache_miss_logged_once(monkeypatch, capsys, client):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    client.post("/api/dungeon/seed", json={"seed": 31, "grid_size": 12})
    client.get("/api/dungeon/map")
    client.get("/api/dungeon/map")
    out = capsys.readouterr().out
    assert out.count("event=dungeon_cache_miss") == 1
    assert "grid_size=12" in out
