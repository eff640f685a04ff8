"""
project: Delve
module: __init__.py
License: MIT

Flask application and core extensions setup.

This module wires together the Flask app and Flask-SocketIO for the Delve
turn engine. Configuration is sourced from environment variables with
reasonable defaults for development; games live in process memory, so there
is no database to configure.
"""

import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_socketio import SocketIO

from delve.logging_utils import get_logger

# Load .env if present so `SECRET_KEY`, `DELVE_SEED`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

log = get_logger("delve.app")

app = Flask(__name__)

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    # Rule overrides (JSON object) applied to every new game; None -> DELVE_RULES env
    DELVE_RULES=os.getenv("DELVE_RULES") or None,
    DELVE_SEED=os.getenv("DELVE_SEED") or None,
)

# Let Flask-SocketIO select best async_mode based on installed deps (eventlet/gevent/threading)
socketio = SocketIO(
    app,
    async_mode=os.getenv("SOCKETIO_ASYNC_MODE") or None,
    cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    ping_interval=20,
    ping_timeout=10,
)

# Register HTTP blueprints (import after app/socketio created)
from delve.routes.game_api import bp_game  # noqa: E402

app.register_blueprint(bp_game)

# Import websocket handlers so their event decorators register with Socket.IO (side-effect)
from delve.websockets import game as _ws_game  # noqa: F401,E402


def create_app():
    """Return the Flask app instance (module-level singleton)."""
    return app


# Error handling: log details under a short id and return it to the client
@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    log.error(event="unhandled_exception", error_id=error_id, error=repr(getattr(e, "original_exception", e)))
    return jsonify({"error": "internal_error", "error_id": error_id}), 500


__all__ = ["app", "socketio", "create_app"]
