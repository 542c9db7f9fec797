"""
project: Delve
module: run.py
License: MIT

Delve CLI entry point.

Provides subcommands for running the HTTP server and for generating a
dungeon map offline. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
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


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Delve Dungeon Server

    Serve the dungeon map API, or generate a single map offline. Configuration
    can be provided via CLI flags or environment variables. If both are
    present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST              Bind address for the web server (default: 0.0.0.0)
          PORT              Port for the web server (default: 5000)
          DELVE_GRID_SIZE   Default grid size for new maps (default: 10)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print the map for seed 42 on a 16x16 grid
          python run.py generate --seed 42 --size 16 --ascii

          # Same map as JSON
          python run.py generate --seed 42 --size 16 --json
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
        version=f"Delve Dungeon Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon API server",
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

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon map and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a dungeon map offline (no server needed).",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Integer seed (default: random)")
    gen_parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Grid size (default: env DELVE_GRID_SIZE or 10)",
    )
    fmt = gen_parser.add_mutually_exclusive_group()
    fmt.add_argument("--json", dest="output", action="store_const", const="json", help="Print map JSON")
    fmt.add_argument("--ascii", dest="output", action="store_const", const="ascii", help="Print text grid (default)")
    gen_parser.add_argument("--fog", action="store_true", help="Hide unvisited rooms in the text grid")
    gen_parser.set_defaults(command="generate", output="ascii")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _generate(args) -> int:
    import random

    from delve.dungeon import DungeonConfigError, generate_dungeon
    from delve.dungeon.render import render_ascii

    seed = args.seed if args.seed is not None else random.randint(1, 1_000_000)
    size = args.size if args.size is not None else int(os.getenv("DELVE_GRID_SIZE", "10"))
    try:
        dungeon = generate_dungeon(seed, size)
    except DungeonConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if args.output == "json":
        print(json.dumps(dungeon.to_dict(), indent=2))
    else:
        print(f"seed={dungeon.seed} size={dungeon.width} rooms={len(dungeon.rooms)}")
        print(render_ascii(dungeon, fog=args.fog))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from delve.server import start_server

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}Delve Server Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Delve Server Bootup"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Grid size:'):12} {value(os.getenv('DELVE_GRID_SIZE', '10'))}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))

    from delve.logging_utils import log

    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
