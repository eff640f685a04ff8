"""Delve CLI entry point.

Provides subcommands for running the Socket.IO game server and for playing
headless seeded games with a simple bot (balance checks). Accepts
configuration via flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

VERSION_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")


def _load_version() -> str:
    try:
        with open(VERSION_FILE, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delve - ASCII dungeon crawler turn engine

    Run the Flask-SocketIO game server or simulate seeded games headlessly.
    Configuration can be provided via CLI flags or environment variables. If
    both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST              Bind address for the web server (default: 0.0.0.0)
          PORT              Port for the web server (default: 5000)
          DELVE_SEED        Fixed seed for every new game
          DELVE_RULES       JSON object overriding rule constants
          DELVE_LOG_LEVEL   debug | info | warn | error (default: info)
          DELVE_LOG_JSON    1 to emit JSON log lines

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run the server on a custom port
          python run.py server --port 8080

          # Play seed 42 for up to 300 turns and print the final map
          python run.py simulate --seed 42 --turns 300 --show-map

          # Load variables from .env then run the server
          python run.py --env-file .env server
        """
    )

    parser = argparse.ArgumentParser(
        prog="Delve",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Delve {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the Socket.IO web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the real-time Flask/Socket.IO server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # simulate subcommand
    sim_parser = subparsers.add_parser(
        "simulate",
        help="Play a seeded game with the built-in bot",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Headless balance check: play until game over or the turn limit.",
    )
    sim_parser.add_argument("--seed", type=int, default=None, help="Game seed (default: env DELVE_SEED or random)")
    sim_parser.add_argument("--turns", type=int, default=500, help="Maximum turns to play (default: 500)")
    sim_parser.add_argument("--show-map", action="store_true", help="Print the final map")
    sim_parser.set_defaults(command="simulate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _paint(color: str, text) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else str(text)


def _banner(mode: str, rows) -> None:
    title = _paint(Fore.CYAN + Style.BRIGHT, "Delve Bootup")
    divider = _paint(Fore.MAGENTA, "=" * 40)
    lines = [divider, f"  {title}", divider, f"  {_paint(Fore.YELLOW, 'Mode:'):12} {_paint(Fore.GREEN, mode.upper())}"]
    for label, value in rows:
        lines.append(f"  {_paint(Fore.YELLOW, label):12} {_paint(Fore.GREEN, value)}")
    lines.extend([divider, ""])
    print("\n".join(lines))


def run_simulation(seed, turns: int, show_map: bool) -> int:
    from delve.simulate import play

    if seed is None and os.getenv("DELVE_SEED"):
        seed = int(os.getenv("DELVE_SEED"))
    state, summary = play(seed, max_turns=turns)
    summary["seed"] = state.rng.initial_seed
    _banner("simulate", [(f"{k}:", v) for k, v in summary.items()])
    if show_map:
        print("\n".join(state.render_rows()))
    for msg in state.messages:
        print(f"  {msg}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "simulate":
        return run_simulation(args.seed, args.turns, args.show_map)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from delve.logging_utils import log
    from delve.server import start_server

    _banner(
        mode,
        [
            ("Host:", host),
            ("Port:", port),
            ("Seed:", os.getenv("DELVE_SEED") or "random"),
            ("WebSockets:", "enabled"),
        ],
    )
    log.info(event="startup", mode=mode, host=host, port=port, debug=debug)
    print(f"{_paint(Fore.CYAN, '[INFO]')} Listening for connections... Press Ctrl+C to stop.")
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
