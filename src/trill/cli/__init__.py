"""Trill CLI — serve a directory of templates.

Entry point registered as ``trill`` in ``pyproject.toml``::

    [project.scripts]
    trill = "trill.cli:main"
"""

import argparse
import sys

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trill",
        description="Trill — a template hypertext preprocessor.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trill serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a document root")
    serve_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Document root for the server (default: current directory)",
    )
    serve_parser.add_argument("--include", default=None, help="Include root for the server")
    serve_parser.add_argument(
        "--data",
        default=None,
        help="Root of JSON .data side files (default: the document root)",
    )
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument("--cert", default=None, help="TLS certificate file")
    serve_parser.add_argument("--key", default=None, help="TLS key file")
    serve_parser.add_argument(
        "--index",
        default="index.html",
        help="Index file served for directories (default: index.html)",
    )
    serve_parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Logging verbosity (default: info)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trill`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        if bool(args.cert) != bool(args.key):
            parser.error("tls: must provide both --cert and --key")

        from trill.cli._serve import serve

        serve(args)
