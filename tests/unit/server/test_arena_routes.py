# tests/unit/server/test_arena_routes.py
"""Tests for the arena harness endpoints."""

import numpy as np
import pytest
from fastapi.testclient import TestClient

from grenadeflag.constants import VAR_GRENADE_ACCURACY
from grenadeflag.server import create_app
from grenadeflag.sim.arena import ArenaHost


@pytest.fixture
def client():
    """Harness around a seeded arena with perfect accuracy."""
    host = ArenaHost(rng=np.random.default_rng(0))
    app = create_app(host=host)
    host.set_variable(VAR_GRENADE_ACCURACY, 0.0)
    return TestClient(app)


def _join(client, player_id, team="blue", flag="GN", **extra):
    response = client.post("/players", json={"player_id": player_id, "team": team, "flag": flag, **extra})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["players"] == 0
    assert data["armed"] == 0


def test_launch_then_detonate(client):
    _join(client, 1)

    response = client.post("/players/1/fire")
    assert response.status_code == 200
    data = response.json()
    assert data["armed"] is True
    assert [s["kind"] for s in data["shots"]] == ["PZ", "PZ"]
    assert data["shots"][0]["pos"] == pytest.approx([4.42, 2.0, 1.57])

    grenade = client.get("/players/1/grenade").json()
    assert grenade["active"] is True
    assert grenade["expired"] is False
    assert grenade["origin"] == pytest.approx([4.42, 0.0, 1.57])

    assert client.post("/clock/advance", json={"dt": 1.0}).json()["time_s"] == pytest.approx(1.0)

    data = client.post("/players/1/fire").json()
    assert data["armed"] is False
    assert len(data["shots"]) == 1
    blast = data["shots"][0]
    assert blast["kind"] == "SW"
    assert blast["owner"] == 1
    assert blast["pos"] == pytest.approx([404.42, 0.0, 1.57])


def test_death_attribution(client):
    _join(client, 1, team="blue")
    _join(client, 2, team="red", flag=None)
    client.post("/players/1/fire")
    blast = client.post("/players/1/fire").json()["shots"][0]

    response = client.post("/deaths", json={"victim_id": 2, "killer_id": 2, "shot_guid": blast["guid"]})
    assert response.status_code == 200
    assert response.json() == {"victim_id": 2, "killer_id": 1, "killer_team": "blue"}

    events = client.get("/events", params={"limit": 1}).json()
    assert events[-1]["type"] == "kill"
    assert events[-1]["shooter"] == 1


def test_pose_update_and_flag_drop(client):
    _join(client, 1)
    response = client.put("/players/1/pose", json={"pos": [10.0, 0.0, 0.0], "yaw": 0.0, "drop_flag": True})
    assert response.status_code == 200
    assert response.json()["flag"] is None
    assert client.post("/players/1/fire").json()["shots"] == []


def test_part_forgets_grenade(client):
    _join(client, 1)
    client.post("/players/1/fire")
    assert client.delete("/players/1").status_code == 200

    grenade = client.get("/players/1/grenade").json()
    assert grenade == {
        "player_id": 1,
        "tracked": False,
        "active": False,
        "expired": False,
        "origin": None,
        "velocity": None,
        "launch_time": None,
        "position": None,
    }


def test_unknown_player_is_404(client):
    assert client.post("/players/9/fire").status_code == 404
    assert client.delete("/players/9").status_code == 404
    assert client.put("/players/9/pose", json={"yaw": 1.0}).status_code == 404
    assert client.post("/deaths", json={"victim_id": 9}).status_code == 404


def test_invalid_payloads_rejected(client):
    assert client.post("/players", json={"player_id": 1, "team": "blue", "pos": [0.0, 0.0]}).status_code == 422
    assert client.post("/clock/advance", json={"dt": 0.0}).status_code == 422


def test_list_shots(client):
    _join(client, 1)
    client.post("/players/1/fire")
    shots = client.get("/shots").json()
    assert len(shots) == 2
    assert all(s["owner"] is None for s in shots)


def test_dead_player_fire_and_respawn(client):
    _join(client, 1)
    _join(client, 2, team="red", flag=None)
    client.post("/deaths", json={"victim_id": 1, "killer_id": 2})

    response = client.post("/players/1/fire")
    assert response.status_code == 200
    assert response.json()["shots"] == []

    assert client.post("/players/1/spawn").json() == {"player_id": 1, "alive": True}
    assert len(client.post("/players/1/fire").json()["shots"]) == 2
    assert client.post("/players/9/spawn").status_code == 404


def test_shots_swept_when_clock_advances(client):
    _join(client, 1)
    client.post("/players/1/fire")
    client.post("/clock/advance", json={"dt": 100.0})
    assert client.get("/shots").json() == []
    assert client.get("/events", params={"limit": 2}).json()[-1]["type"] == "server_shot"
