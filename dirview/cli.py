"""Command line entry point for Dirview.

``dirview run [PATH]`` opens the browser window, ``dirview ls PATH`` prints
the same sorted listing the window shows without starting a GUI.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

from .dispatcher import Dispatcher
from .serializer import dumps


def format_size(size: int) -> str:
    for unit in ("B", "K", "M", "G", "T"):
        if size < 1024 or unit == "T":
            return f"{size}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size}B"


def format_entry(entry) -> str:
    mtime = entry.modified_time.astimezone().strftime("%Y-%m-%d %H:%M")
    name = entry.name + ("/" if entry.is_dir else "")
    return f"{entry.type.value:<16} {format_size(entry.size):>8}  {mtime}  {name}"


def cmd_ls(args: argparse.Namespace) -> int:
    dispatcher = Dispatcher(resolve_symlinks=args.resolve_symlinks)
    response = dispatcher.read_path(os.path.abspath(args.path))

    if args.json:
        print(dumps(response, indent=2))
        return 0 if response.ok else 1

    if not response.ok:
        print(f"dirview: {response.error}", file=sys.stderr)
        return 1

    for entry in response.entries:
        if not args.all and entry.is_hidden:
            continue
        print(format_entry(entry))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    from .application import App
    from .exceptions import DirviewError

    overrides = {}
    if args.debug:
        overrides["debug"] = True
    try:
        app = App(config_file=args.settings, **overrides)
    except DirviewError as e:
        print(f"dirview: {e}", file=sys.stderr)
        return 1
    if args.debug:
        app.logger.setLevel(logging.DEBUG)
    app.run(path=args.path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dirview", description="Desktop file browser")
    sub = parser.add_subparsers(dest="command")

    p_run = sub.add_parser("run", help="Open the file browser window")
    p_run.add_argument("path", nargs="?", help="Directory to open (default: last opened)")
    p_run.add_argument("--settings", default="settings.json", help="Settings file")
    p_run.add_argument("--debug", action="store_true", help="Enable debug logging")
    p_run.set_defaults(func=cmd_run)

    p_ls = sub.add_parser("ls", help="Print a directory listing")
    p_ls.add_argument("path", nargs="?", default=".", help="Directory to list")
    p_ls.add_argument("-a", "--all", action="store_true", help="Show hidden files")
    p_ls.add_argument("--json", action="store_true", help="Print the raw response as JSON")
    p_ls.add_argument(
        "--resolve-symlinks",
        action="store_true",
        help="Report symlinks as the type of their target",
    )
    p_ls.set_defaults(func=cmd_ls)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
