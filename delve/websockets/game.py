"""Socket.IO game namespace handlers (``/delve``).

Events:
    - join_game: Join a game's room; payload { game_id }. Replies with the
      current snapshot so a late subscriber does not wait for the next turn.
    - leave_game: Leave a game's room; payload { game_id }
    - disconnect: Drops the sid from every game it had joined

Emits:
    - game_state: Post-turn snapshot (also pushed by the HTTP API)
    - status: Join/leave acknowledgements
    - error: Validation failures { message, field, code }

Actions are submitted over HTTP only; this namespace is a read-only feed.
"""

import time

from flask import request
from flask_socketio import emit, join_room, leave_room

from delve import socketio
from delve.logging_utils import get_logger
from delve.routes.game_api import NAMESPACE, get_game, snapshot_of

from .validation import JOIN_GAME, LEAVE_GAME, validate

_log = get_logger("delve.ws")

# { game_id: { 'members': set([sid,...]), 'created': timestamp } }
active_games = {}


def _drop_member(game_id, sid):
    """Remove ``sid`` from a game's members; returns how many remain."""
    info = active_games.get(game_id)
    if not info:
        return 0
    info["members"].discard(sid)
    if not info["members"]:
        active_games.pop(game_id, None)
    return len(info["members"])


@socketio.on("join_game", namespace=NAMESPACE)
def handle_join_game(data):
    ok, result = validate(data or {}, JOIN_GAME)
    if not ok:
        emit("error", {"message": f"Invalid join_game: {result['error']}", "field": result["field"], "code": result["code"]})
        return
    game_id = result["game_id"]
    state = get_game(game_id)
    if state is None:
        emit("error", {"message": "Unknown game", "field": "game_id", "code": "no_game"})
        return
    join_room(game_id)
    info = active_games.setdefault(game_id, {"members": set(), "created": time.time()})
    info["members"].add(request.sid)
    emit("status", {"msg": "joined", "game_id": game_id})
    emit("game_state", snapshot_of(state))
    _log.info(event="join_game", game_id=game_id, members=len(info["members"]))


@socketio.on("leave_game", namespace=NAMESPACE)
def handle_leave_game(data):
    ok, result = validate(data or {}, LEAVE_GAME)
    if not ok:
        emit("error", {"message": f"Invalid leave_game: {result['error']}", "field": result["field"], "code": result["code"]})
        return
    game_id = result["game_id"]
    leave_room(game_id)
    remaining = _drop_member(game_id, request.sid)
    emit("status", {"msg": "left", "game_id": game_id})
    _log.info(event="leave_game", game_id=game_id, remaining=remaining)


@socketio.on("disconnect", namespace=NAMESPACE)
def handle_disconnect(reason=None):
    sid = request.sid
    for game_id in [g for g, info in active_games.items() if sid in info["members"]]:
        _drop_member(game_id, sid)
        _log.info(event="disconnect_game", game_id=game_id)
