"""``tandem run`` — start the app in its configured mode."""

import argparse
import sys
from dataclasses import replace

from tandem.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and call ``serve()``.

    ``--log-level`` replaces the app's configured level before serving.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.log_level:
        app.config = replace(app.config, log_level=args.log_level)

    app.serve(port=args.port, host=args.host)
