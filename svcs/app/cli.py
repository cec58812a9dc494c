"""SVCS command-line interface.

One command per invocation: config, add, log, commit, checkout.
Normal output goes to stdout; error lines go to stderr with exit code 1.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any

from .. import __version__
from ..core.engine import Engine
from ..utils.env import is_debug_mode
from ..utils.log import log_debug

HELP_TEXT = (
    "These are SVCS commands:\n"
    "config     Get and set a username.\n"
    "add        Add a file to the index.\n"
    "log        Show commit logs.\n"
    "commit     Save changes.\n"
    "checkout   Restore a file."
)

COMMANDS = ("config", "add", "log", "commit", "checkout")
GLOBAL_FLAGS = ("--help", "-h", "--version", "-v", "--debug")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svcs",
        description="SVCS - a minimal local version-control system",
        add_help=False,
    )
    parser.add_argument(
        "--help",
        "-h",
        action="store_true",
        help="Show the command summary",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )

    subparsers = parser.add_subparsers(dest="command")

    config = subparsers.add_parser("config", help="Get and set a username")
    config.add_argument("username", nargs="?", help="New username")

    add = subparsers.add_parser("add", help="Add a file to the index")
    add.add_argument("path", nargs="?", help="File to track")

    subparsers.add_parser("log", help="Show commit logs")

    commit = subparsers.add_parser("commit", help="Save changes")
    commit.add_argument("message", nargs="?", help="Commit message")

    checkout = subparsers.add_parser("checkout", help="Restore a file")
    checkout.add_argument("commit_id", nargs="?", help="Commit to restore")

    return parser


def main(args: list[str] | None = None) -> int:
    argv = sys.argv[1:] if args is None else list(args)

    unknown = _unknown_command(argv)
    if unknown is not None:
        print(f"'{unknown}' is not a SVCS command.", file=sys.stderr)
        return 1

    parser = create_parser()
    parsed = parser.parse_args(argv)

    if parsed.debug:
        os.environ["SVCS_DEBUG"] = "1"

    if parsed.help or not parsed.command:
        print(HELP_TEXT)
        return 0

    engine = Engine.open()
    if is_debug_mode():
        status = engine.status()
        log_debug(
            f"root={status.get('workRoot')} tracked={status.get('trackedCount')} "
            f"commits={status.get('commitCount')} latest={status.get('latestCommit')} "
            f"detection={status.get('changeDetection')}"
        )

    if parsed.command == "config":
        return _print_result(engine.config(parsed.username))
    if parsed.command == "add":
        return _print_result(engine.add(parsed.path))
    if parsed.command == "log":
        return _print_result(engine.show_log())
    if parsed.command == "commit":
        return _print_result(engine.commit(parsed.message))
    if parsed.command == "checkout":
        return _print_result(engine.checkout(parsed.commit_id))

    print(HELP_TEXT)
    return 1


def _unknown_command(argv: list[str]) -> str | None:
    """Return the first leading token that is neither a global flag nor a command."""
    for arg in argv:
        if arg in GLOBAL_FLAGS:
            continue
        return None if arg in COMMANDS else arg
    return None


def _print_result(result: dict[str, Any]) -> int:
    if not result.get("success"):
        print(result.get("error", "Unknown error"), file=sys.stderr)
        return 1

    for line in result.get("lines", []):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
