import pytest

from delve.dungeon import SeededRandom
from delve.dungeon.rng import SEED_LIMIT


def test_set_numeric_seed(client):
    resp = client.post("/api/dungeon/seed", json={"seed": 12345})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data == {"seed": 12345, "grid_size": 10}
    assert client.get("/api/dungeon/map").get_json()["seed"] == 12345


def test_string_seeds(client):
    assert client.post("/api/dungeon/seed", json={"seed": "12345"}).get_json()["seed"] == 12345
    s1 = client.post("/api/dungeon/seed", json={"seed": "AlphaSeed"}).get_json()["seed"]
    s2 = client.post("/api/dungeon/seed", json={"seed": "AlphaSeed"}).get_json()["seed"]
    assert isinstance(s1, int) and s1 == s2


def test_random_seeds(client):
    for payload in ({"regenerate": True}, {"seed": ""}, {}):
        seed = client.post("/api/dungeon/seed", json=payload).get_json()["seed"]
        assert isinstance(seed, int) and 1 <= seed <= 1_000_000


def test_negative_seed_is_bounded(client):
    seed = client.post("/api/dungeon/seed", json={"seed": -7}).get_json()["seed"]
    assert seed >= 0


def test_grid_size_stored(client):
    client.post("/api/dungeon/seed", json={"seed": 9, "grid_size": "24"})
    data = client.get("/api/dungeon/map").get_json()
    assert data["width"] == 24


@pytest.mark.parametrize("bad", [0, -1, 65, "abc", 2.5, True, "²", "٣"])
def test_bad_grid_size_rejected(client, bad):
    r = client.post("/api/dungeon/seed", json={"seed": 1, "grid_size": bad})
    assert r.status_code == 400
    assert "grid_size" in r.get_json()["error"]


def test_seed_resets_progress(client):
    client.post("/api/dungeon/seed", json={"seed": 999, "grid_size": 16})
    exits = client.get("/api/dungeon/map").get_json()["exits"]
    client.post("/api/dungeon/move", json={"room_id": exits[0]})
    client.post("/api/dungeon/seed", json={"seed": 999, "grid_size": 16})
    data = client.get("/api/dungeon/map").get_json()
    assert data["currentRoomId"] == data["rooms"][0]["id"]
    assert [r["id"] for r in data["rooms"] if r["visited"]] == [data["rooms"][0]["id"]]


def test_hashed_string_seed_keeps_rng_varied(client):
    seed = client.post("/api/dungeon/seed", json={"seed": "AlphaSeed"}).get_json()["seed"]
    assert 0 <= seed < SEED_LIMIT
    rng = SeededRandom(seed)
    assert len({rng.random() for _ in range(20)}) > 10


def test_large_numeric_seed_is_bounded(client):
    seed = client.post("/api/dungeon/seed", json={"seed": 10**30}).get_json()["seed"]
    assert 0 <= seed < SEED_LIMIT
    assert client.get("/api/dungeon/map").status_code == 200


@pytest.mark.parametrize("raw", ["²", "١٢٣"])
def test_non_ascii_digit_seed_is_hashed(client, raw):
    r = client.post("/api/dungeon/seed", json={"seed": raw})
    assert r.status_code == 200
    seed = r.get_json()["seed"]
    assert isinstance(seed, int) and 0 <= seed < SEED_LIMIT
    assert client.get("/api/dungeon/map").status_code == 200
