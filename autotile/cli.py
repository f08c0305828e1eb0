"""
Command Line Interface

Sends tiling commands to a running autotile instance over IPC, or serves
the IPC socket itself with --serve.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import TilingConfig
from .errors import AutotileError
from .ipc import IPCClient

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autotile", description="Control automatic window tiling"
    )
    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument(
        "--enable-tiling", action="store_const", dest="command", const="enable",
        help="Enable automatic tiling",
    )
    actions.add_argument(
        "--disable-tiling", action="store_const", dest="command", const="disable",
        help="Disable automatic tiling",
    )
    actions.add_argument(
        "--toggle-tiling", action="store_const", dest="command", const="toggle",
        help="Toggle automatic tiling",
    )
    actions.add_argument(
        "--tiling-grid-mode", choices=("on", "off", "toggle"), metavar="{on,off,toggle}",
        help="Set grid snapping mode (on=simple grid, off=smart resize preservation)",
    )
    actions.add_argument(
        "--recalculate-tiling", action="store_const", dest="command", const="recalculate",
        help="Recalculate the tiling layout",
    )
    actions.add_argument(
        "--tiling-status", action="store_const", dest="command", const="status",
        help="Print the tiling status (stacking, grid or smart)",
    )
    actions.add_argument(
        "--tiling-state", action="store_true",
        help="Print the tiling state (mode, gap, resized view) as JSON",
    )
    actions.add_argument(
        "--serve", action="store_true", help="Run the IPC server in the foreground",
    )
    parser.add_argument(
        "--socket", help="IPC socket path (default: $XDG_RUNTIME_DIR/autotile-$WAYLAND_DISPLAY.sock)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run_command(socket_path: str, command: str) -> int:
    """Send one command and print the reply. Returns the exit status."""
    with IPCClient(socket_path) as client:
        results = client.command(command)

    failed = [result for result in results if not result.get("success")]
    for result in failed:
        print(f"autotile: {result.get('error', 'command failed')}", file=sys.stderr)
    if failed:
        return 1

    if command == "status":
        print(results[-1]["status"])
    else:
        log.info("%s", json.dumps(results))
    return 0


def print_state(socket_path: str) -> int:
    with IPCClient(socket_path) as client:
        state = client.tiling_state()
    print(json.dumps(state, indent=2, sort_keys=True))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.serve:
            from .service import AutotileService

            overrides = {"socket_path": args.socket} if args.socket else {}
            return AutotileService(TilingConfig.from_env(**overrides)).run()

        socket_path = args.socket or TilingConfig.from_env().socket_path
        if args.tiling_state:
            return print_state(socket_path)

        command = args.command
        if args.tiling_grid_mode:
            command = f"grid-mode {args.tiling_grid_mode}"
        return run_command(socket_path, command)
    except AutotileError as e:
        print(f"autotile: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
