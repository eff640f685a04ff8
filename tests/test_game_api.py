import pytest

from delve import app, socketio
from delve.models.game_state import GameState
from delve.routes import game_api
from delve.websockets import game as ws_game


def _new(client, seed=5):
    r = client.post("/api/game/new", json={"seed": seed})
    assert r.status_code == 200
    return r.get_json()


def test_state_without_game_is_404(client):
    r = client.get("/api/game/state")
    assert r.status_code == 404
    assert r.get_json() == {"error": "no_game"}


def test_actions_without_game_are_404(client):
    assert client.post("/api/game/move", json={"dir": "n"}).status_code == 404
    assert client.post("/api/game/shop/buy", json={"index": 0}).status_code == 404
    assert client.post("/api/game/restart").status_code == 404


def test_new_game_returns_snapshot(client):
    data = _new(client)
    assert data["ok"]
    state = data["state"]
    assert state["phase"] == "exploring"
    assert state["floor"] == 1
    assert state["seed"] == 5
    assert len(state["map"]) == state["height"]
    assert any("@" in row for row in state["map"])
    again = client.get("/api/game/state").get_json()
    assert again["game_id"] == data["game_id"]
    assert again["state"] == state


def test_wait_advances_turn(client):
    _new(client)
    r = client.post("/api/game/move", json={"dir": "wait"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["accepted"]
    assert body["state"]["turn"] == 1


def test_move_by_delta(client):
    _new(client)
    r = client.post("/api/game/move", json={"dx": 0, "dy": 0})
    assert r.get_json()["state"]["turn"] == 1


@pytest.mark.parametrize(
    "payload,field,code",
    [
        ({"dir": "up"}, "dir", "choices"),
        ({"dir": 3}, "dir", "type"),
        ({"dx": 1}, "dy", "required"),
        ({"dx": True, "dy": 0}, "dx", "type"),
        ({"dx": 2, "dy": 0}, "dx", "max"),
        ({"dx": 1, "dy": 1}, "dx", "direction"),
    ],
)
def test_bad_move_payloads(client, payload, field, code):
    _new(client)
    r = client.post("/api/game/move", json=payload)
    assert r.status_code == 400
    body = r.get_json()
    assert body["field"] == field
    assert body["code"] == code


def test_bad_index_payload(client):
    _new(client)
    r = client.post("/api/game/potion/use", json={"index": -1})
    assert r.status_code == 400
    assert r.get_json()["code"] == "min"


def test_shop_buy_outside_shop_not_accepted(client):
    _new(client)
    r = client.post("/api/game/shop/buy", json={"index": 0})
    assert r.status_code == 200
    assert r.get_json()["accepted"] is False


def test_restart_and_start(client):
    _new(client)
    r = client.post("/api/game/restart")
    assert r.get_json()["state"]["phase"] == "idle"
    assert r.get_json()["state"]["map"] == []
    r = client.post("/api/game/start")
    assert r.get_json()["state"]["phase"] == "exploring"


def test_rule_overrides_from_config(client):
    app.config["DELVE_RULES"] = {"start_health": 150}
    try:
        data = _new(client)
    finally:
        app.config["DELVE_RULES"] = None
    assert data["state"]["player"]["max_health"] == 150


def test_socket_join_receives_snapshots(client):
    game_id = _new(client)["game_id"]
    ws = socketio.test_client(app, namespace="/delve", flask_test_client=client)
    try:
        ws.emit("join_game", {"game_id": game_id}, namespace="/delve")
        received = ws.get_received("/delve")
        names = [p["name"] for p in received]
        assert "status" in names and "game_state" in names
        client.post("/api/game/move", json={"dir": "wait"})
        pushed = [p["args"][0] for p in ws.get_received("/delve") if p["name"] == "game_state"]
        assert pushed and pushed[-1]["turn"] == 1
    finally:
        ws.disconnect(namespace="/delve")


def test_socket_join_unknown_game():
    ws = socketio.test_client(app, namespace="/delve")
    try:
        ws.emit("join_game", {"game_id": "nope"}, namespace="/delve")
        errors = [p["args"][0] for p in ws.get_received("/delve") if p["name"] == "error"]
        assert errors and errors[0]["code"] == "no_game"
    finally:
        ws.disconnect(namespace="/delve")


def test_snapshots_are_taken_under_the_games_lock(client, monkeypatch):
    _new(client)
    original = GameState.to_dict
    held = []

    def checked(self):
        held.append(game_api._games_lock.locked())
        return original(self)

    monkeypatch.setattr(GameState, "to_dict", checked)
    client.post("/api/game/move", json={"dir": "wait"})
    client.post("/api/game/potion/use", json={"index": 0})
    client.get("/api/game/state")
    assert held and all(held)


def test_non_finite_rule_override_still_creates_game(client):
    app.config["DELVE_RULES"] = '{"start_health": Infinity}'
    try:
        data = _new(client)
    finally:
        app.config["DELVE_RULES"] = None
    assert data["state"]["player"]["max_health"] == 100


def test_socket_disconnect_forgets_membership(client):
    game_id = _new(client)["game_id"]
    ws = socketio.test_client(app, namespace="/delve", flask_test_client=client)
    ws.emit("join_game", {"game_id": game_id}, namespace="/delve")
    assert game_id in ws_game.active_games
    ws.disconnect(namespace="/delve")
    assert game_id not in ws_game.active_games
