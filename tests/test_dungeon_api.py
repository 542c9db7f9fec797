from delve.dungeon import generate_dungeon


def _seed(client, seed=42, grid_size=16):
    r = client.post("/api/dungeon/seed", json={"seed": seed, "grid_size": grid_size})
    assert r.status_code == 200
    return r.get_json()


def test_map_without_seed_creates_one(client):
    r = client.get("/api/dungeon/map")
    assert r.status_code == 200
    data = r.get_json()
    assert isinstance(data["seed"], int) and data["seed"] > 0
    assert data["width"] == data["height"] == 10
    assert data["currentRoomId"] == data["rooms"][0]["id"]
    # Same session, same map
    again = client.get("/api/dungeon/map").get_json()
    assert again["seed"] == data["seed"]
    assert again["rooms"] == data["rooms"]


def test_map_matches_direct_generation(client):
    _seed(client, 42, 16)
    data = client.get("/api/dungeon/map").get_json()
    expected = generate_dungeon(42, 16).to_dict()
    assert data["rooms"] == expected["rooms"]
    assert data["exits"] == expected["rooms"][0]["connections"]


def test_move_and_state(client):
    _seed(client, 42, 16)
    exits = client.get("/api/dungeon/map").get_json()["exits"]
    target = exits[0]
    mv = client.post("/api/dungeon/move", json={"room_id": target})
    assert mv.status_code == 200
    body = mv.get_json()
    assert set(body.keys()) == {"moved", "currentRoomId", "desc", "exits"}
    assert body["moved"] is True
    assert body["currentRoomId"] == target
    st = client.get("/api/dungeon/state").get_json()
    assert st["currentRoomId"] == target
    assert st["room"]["visited"] is True
    rooms = {r["id"]: r for r in client.get("/api/dungeon/map").get_json()["rooms"]}
    assert rooms[target]["visited"] is True


def test_move_refused_for_unconnected_room(client):
    _seed(client, 42, 24)
    data = client.get("/api/dungeon/map").get_json()
    current = data["currentRoomId"]
    far = [r["id"] for r in data["rooms"] if r["id"] != current and r["id"] not in data["exits"]]
    if not far:
        return
    body = client.post("/api/dungeon/move", json={"room_id": far[0]}).get_json()
    assert body["moved"] is False
    assert body["currentRoomId"] == current


def test_move_validation_errors(client):
    _seed(client)
    assert client.post("/api/dungeon/move", json={}).status_code == 400
    assert client.post("/api/dungeon/move", json={"room_id": 3}).status_code == 400
    r = client.post("/api/dungeon/move", json={"room_id": "room_999"})
    assert r.status_code == 404
    assert r.get_json()["error"] == "room not found"


def test_room_lookup(client):
    _seed(client, 42, 16)
    r = client.get("/api/dungeon/rooms/room_0")
    assert r.status_code == 200
    data = r.get_json()
    assert data["room"]["type"] == "entrance"
    assert [c["id"] for c in data["connected"]] == data["room"]["connections"]
    assert client.get("/api/dungeon/rooms/room_999").status_code == 404


def test_generation_metrics_endpoint(client):
    _seed(client, 12345, 20)
    r = client.get("/api/dungeon/gen/metrics")
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 12345
    for k in ["rooms", "connections", "special_rooms", "unreachable_rooms", "runtime_ms", "phase_ms"]:
        assert k in data["metrics"]
    assert data["metrics"]["unreachable_rooms"] == 0


def test_metrics_disabled(test_app):
    test_app.config["DUNGEON_ENABLE_GENERATION_METRICS"] = False
    c = test_app.test_client()
    c.post("/api/dungeon/seed", json={"seed": 5})
    assert c.get("/api/dungeon/gen/metrics").get_json()["metrics"] == {}


def test_cache_disabled_still_deterministic(test_app):
    test_app.config["DUNGEON_DISABLE_CACHE"] = True
    c = test_app.test_client()
    c.post("/api/dungeon/seed", json={"seed": 77, "grid_size": 12})
    a = c.get("/api/dungeon/map").get_json()
    b = c.get("/api/dungeon/map").get_json()
    assert a == b
