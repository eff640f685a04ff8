"""Game API blueprint.

Maps HTTP input to turn coordinator actions. Games are kept in process memory
keyed by an id stored in the Flask session cookie; every endpoint returns the
post-action snapshot and also pushes it to Socket.IO room ``<game_id>`` on the
``/delve`` namespace. Business logic stays in ``delve.services.turn_service``.

Endpoints (JSON):
    POST /api/game/new          {"seed"?}            -> start a fresh game
    GET  /api/game/state                             -> current snapshot
    POST /api/game/move         {"dir"} | {"dx","dy"}
    POST /api/game/shop/buy     {"index"}
    POST /api/game/shop/exit
    POST /api/game/potion/use   {"index"}
    POST /api/game/restart                           -> back to idle
    POST /api/game/start                             -> idle -> exploring
"""

from __future__ import annotations

import threading
import uuid
from typing import Callable, Dict, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request, session

from delve import socketio
from delve.config import load_rules
from delve.logging_utils import get_logger
from delve.models.game_state import GameState
from delve.services import turn_service
from delve.websockets.validation import INDEXED, MOVE_DELTA, MOVE_NAMED, NEW_GAME, validate

bp_game = Blueprint("game", __name__)
log = get_logger("delve.api")

NAMESPACE = "/delve"

_games: Dict[str, GameState] = {}
_games_lock = threading.Lock()


def get_game(game_id: Optional[str]) -> Optional[GameState]:
    if not game_id:
        return None
    with _games_lock:
        return _games.get(game_id)


def _store(game_id: str, state: GameState) -> None:
    with _games_lock:
        _games[game_id] = state


def _current() -> Tuple[Optional[str], Optional[GameState]]:
    game_id = session.get("game_id")
    return game_id, get_game(game_id)


def _no_game():
    return jsonify({"error": "no_game"}), 404


def _bad_request(err: Dict[str, str]):
    log.warn(event="bad_payload", path=request.path, field=err.get("field"), code=err.get("code"))
    return jsonify({"error": err["error"], "field": err["field"], "code": err["code"]}), 400


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def snapshot_of(state: GameState) -> dict:
    """Read-only snapshot taken while no action can be mid-turn."""
    with _games_lock:
        return state.to_dict()


def _apply(state: GameState, action: Callable[..., bool], *args) -> Tuple[bool, dict]:
    # The snapshot is taken before the lock is released; emitting happens after.
    with _games_lock:
        accepted = action(state, *args)
        return accepted, state.to_dict()


def push_state(game_id: str, snapshot: dict) -> dict:
    socketio.emit("game_state", snapshot, to=game_id, namespace=NAMESPACE)
    return snapshot


def _respond(game_id: str, accepted: bool, snapshot: dict):
    return jsonify({"ok": True, "accepted": accepted, "game_id": game_id, "state": push_state(game_id, snapshot)})


@bp_game.route("/api/game/new", methods=["POST"])
def game_new():
    ok, data = validate(_payload(), NEW_GAME)
    if not ok:
        return _bad_request(data)
    seed = data.get("seed")
    if seed is None and current_app.config.get("DELVE_SEED"):
        try:
            seed = int(current_app.config["DELVE_SEED"])
        except (TypeError, ValueError):
            seed = None
    rules = load_rules(current_app.config.get("DELVE_RULES"))
    state = turn_service.new_game(seed=seed, rules=rules)
    game_id = uuid.uuid4().hex
    _store(game_id, state)
    session["game_id"] = game_id
    log.info(event="game_created", game_id=game_id, seed=state.rng.initial_seed)
    return _respond(game_id, True, snapshot_of(state))


@bp_game.route("/api/game/state", methods=["GET"])
def game_state():
    game_id, state = _current()
    if state is None:
        return _no_game()
    return jsonify({"ok": True, "game_id": game_id, "state": snapshot_of(state)})


@bp_game.route("/api/game/move", methods=["POST"])
def game_move():
    game_id, state = _current()
    if state is None:
        return _no_game()
    payload = _payload()
    if "dir" in payload:
        ok, data = validate(payload, MOVE_NAMED)
        if not ok:
            return _bad_request(data)
        step = turn_service.DIRECTIONS[data["dir"]]
    else:
        ok, data = validate(payload, MOVE_DELTA)
        if not ok:
            return _bad_request(data)
        step = (data["dx"], data["dy"])
    if step not in turn_service.VALID_STEPS:
        return _bad_request({"field": "dx", "error": "diagonal moves are not allowed", "code": "direction"})
    accepted, snapshot = _apply(state, turn_service.handle_directional_input, *step)
    return _respond(game_id, accepted, snapshot)


@bp_game.route("/api/game/shop/buy", methods=["POST"])
def game_shop_buy():
    game_id, state = _current()
    if state is None:
        return _no_game()
    ok, data = validate(_payload(), INDEXED)
    if not ok:
        return _bad_request(data)
    accepted, snapshot = _apply(state, turn_service.handle_shop_purchase, data["index"])
    return _respond(game_id, accepted, snapshot)


@bp_game.route("/api/game/shop/exit", methods=["POST"])
def game_shop_exit():
    game_id, state = _current()
    if state is None:
        return _no_game()
    accepted, snapshot = _apply(state, turn_service.handle_shop_exit)
    return _respond(game_id, accepted, snapshot)


@bp_game.route("/api/game/potion/use", methods=["POST"])
def game_potion_use():
    game_id, state = _current()
    if state is None:
        return _no_game()
    ok, data = validate(_payload(), INDEXED)
    if not ok:
        return _bad_request(data)
    accepted, snapshot = _apply(state, turn_service.handle_potion_use, data["index"])
    return _respond(game_id, accepted, snapshot)


@bp_game.route("/api/game/restart", methods=["POST"])
def game_restart():
    game_id, state = _current()
    if state is None:
        return _no_game()
    accepted, snapshot = _apply(state, turn_service.restart)
    return _respond(game_id, accepted, snapshot)


@bp_game.route("/api/game/start", methods=["POST"])
def game_start():
    game_id, state = _current()
    if state is None:
        return _no_game()
    accepted, snapshot = _apply(state, turn_service.start_game)
    return _respond(game_id, accepted, snapshot)


__all__ = ["bp_game", "get_game", "snapshot_of", "push_state", "NAMESPACE"]
