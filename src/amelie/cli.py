"""Command-line interface entry point for amelie."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Any

from amelie import __version__, pipelines
from amelie.errors import AmelieError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amelie", description="Amelie markdown blog server"
    )
    parser.add_argument("--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command")

    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "--config-path", dest="config_path", help="Override path to config file"
    )
    shared.add_argument(
        "--content-root",
        dest="content_root",
        help="Directory holding config/, blog/, page/ and static/",
    )
    shared.add_argument(
        "--verbose",
        dest="verbose_logging",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )

    serve = subparsers.add_parser("serve", parents=[shared], help="Run the web server")
    serve.add_argument("--host", dest="host", help="Interface to bind")
    serve.add_argument("--port", dest="port", type=int, help="Port to listen on")

    subparsers.add_parser(
        "check", parents=[shared], help="Validate the manifest, posts and config files"
    )
    return parser


def _normalize_cli_options(namespace: argparse.Namespace) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(namespace).items()
        if key != "command" and value is not None
    }


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if not args.command:
        parser.print_help()
        return

    handlers: dict[str, Any] = {
        "serve": pipelines.run_serve,
        "check": pipelines.run_check,
    }
    cli_options = _normalize_cli_options(args)

    try:
        exit_code = handlers[args.command](cli_options)
    except AmelieError as exc:
        print(f"amelie: error: {exc.message}", file=sys.stderr)
        if exc.hint:
            print(f"amelie: hint: {exc.hint}", file=sys.stderr)
        sys.exit(1)
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
