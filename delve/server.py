"""
project: Delve
module: server.py
License: MIT

Server bootstrap.

Exposes the helper that starts the Socket.IO server for the JSON game API.
"""

import sys

from delve import app, socketio
from delve.logging_utils import get_logger

log = get_logger("delve.server")


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Start the Socket.IO server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    """
    try:
        log.info(event="server_start", host=host, port=port, async_mode=socketio.async_mode)
        # Let Flask-SocketIO choose appropriate server (eventlet/gevent/werkzeug)
        socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)
