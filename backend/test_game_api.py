import json
import threading
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from bst_quest.core.game.registry import get_game, reset_registry
from bst_quest.core.settings import GameSettings
from bst_quest.main import app


@pytest.fixture()
def client(tmp_path: Path):
    settings = GameSettings(
        challenge_threshold=2,
        walk_step_delay=0.0,
        high_score_path=tmp_path / "high_score.json",
    )
    reset_registry(settings)
    with TestClient(app) as test_client:
        yield test_client
    reset_registry()


def _state(resp):
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    return body["state"]


def test_health_and_home(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.json()["status"] == "ok"

    home = client.get("/").json()
    assert home["status"] == "running"
    assert "/game/insert" in home["routes"]
    assert home["operator"] == "GUEST_USER"


def test_session_defaults_to_guest(client: TestClient) -> None:
    state = _state(client.post("/game/session", json={"name": "   "}))
    assert state["operator"] == "GUEST_USER"
    assert state["lives"] == 5
    assert state["mode"] == "normal"
    assert state["marker"] == {"x": 480.0, "y": 80.0}


def test_session_uses_viewport_width(client: TestClient) -> None:
    state = _state(client.post("/game/session", json={"name": "neo", "viewport_width": 1920}))
    assert state["operator"] == "neo"
    assert state["marker"]["x"] == 800.0


def test_full_round(client: TestClient, tmp_path: Path) -> None:
    client.post("/game/session", json={"name": "neo"})

    state = _state(client.post("/game/insert", json={"value": "abc"}))
    assert state["tree"]["nodes"] == []

    _state(client.post("/game/insert", json={"value": "10"}))
    state = _state(client.post("/game/insert", json={"value": 5}))
    assert [n["value"] for n in state["tree"]["nodes"]] == [10, 5]

    state = _state(client.post("/game/insert", json={"value": "20"}))
    assert state["mode"] == "awaiting_answer"
    assert state["pending_value"] == 20
    assert state["status"] == "CHALLENGE: neo, WHERE DOES 20 GO?"

    blocked = client.post("/game/insert", json={"value": "30"})
    assert blocked.status_code == 409
    assert blocked.json()["status"] == "error"

    state = _state(client.post("/game/answer", json={"direction": "right"}))
    assert state["score"] == 1
    assert state["xp"] == 100
    assert state["high_score"] == 100
    assert [n["value"] for n in state["tree"]["nodes"]] == [10, 5, 20]
    assert json.loads((tmp_path / "high_score.json").read_text(encoding="utf-8")) == {
        "bst_high_score": 100
    }

    again = client.post("/game/answer", json={"direction": "left"})
    assert again.status_code == 409

    state = _state(client.post("/game/reset"))
    assert state["tree"]["nodes"] == []
    assert state["high_score"] == 100
    assert state["status"] == "SYSTEM_REBOOTED // MEMORY_PURGED"


def test_answer_with_bad_direction_is_validation_error(client: TestClient) -> None:
    resp = client.post("/game/answer", json={"direction": "up"})
    assert resp.status_code == 422


def test_tree_routes(client: TestClient) -> None:
    for value in ("10", "5"):
        client.post("/game/insert", json={"value": value})

    tree = client.get("/tree/state").json()
    assert [n["value"] for n in tree["nodes"]] == [10, 5]
    assert tree["edges"] == [
        {"from": {"x": 480.0, "y": 80.0}, "to": {"x": 280.0, "y": 135.0}}
    ]

    preview = client.get("/tree/path/7").json()
    assert preview["first_branch"] == "left"
    assert preview["path"] == [
        {"x": 480.0, "y": 80.0},
        {"x": 480.0, "y": 80.0},
        {"x": 280.0, "y": 135.0},
    ]
    assert get_game().tree.count() == 2


def test_empty_tree_preview_has_no_branch(client: TestClient) -> None:
    preview = client.get("/tree/path/3").json()
    assert preview["first_branch"] is None
    assert len(preview["path"]) == 1


def test_viewport_update(client: TestClient) -> None:
    client.post("/game/insert", json={"value": "10"})
    state = _state(client.post("/game/viewport", json={"viewport_width": 720}))
    assert state["tree"]["nodes"][0]["x"] == 200.0
    bad = client.post("/game/viewport", json={"viewport_width": 0})
    assert bad.status_code == 422


def test_walk_and_reset_run_on_the_same_thread(client: TestClient) -> None:
    client.post("/game/session", json={"name": "neo"})
    seen = {}

    def record(payload):
        seen.setdefault(payload["type"], set()).add(threading.get_ident())

    get_game().events.subscribe(record)
    client.post("/game/insert", json={"value": "10"})
    client.post("/game/viewport", json={"viewport_width": 1000})
    client.post("/game/reset")
    client.get("/game/state")

    assert seen["inserted"] == seen["reset"]
    assert len(seen["inserted"]) == 1
