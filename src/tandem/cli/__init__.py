"""Tandem CLI — serve an app or inspect its route table.

Entry point registered as ``tandem`` in ``pyproject.toml``::

    [project.scripts]
    tandem = "tandem.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tandem`` command."""
    parser = argparse.ArgumentParser(
        prog="tandem",
        description="Tandem: one route table, served locally or from a serverless gateway.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- tandem run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the app in its configured mode")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--log-level",
        default=None,
        help="Override the app's log level (debug, info, warning, error)",
    )

    # -- tandem routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from tandem.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from tandem.cli._routes import run_routes

        run_routes(args)
