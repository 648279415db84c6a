"""``describer routes`` — list the routes an OPTIONS request would describe.

Resolves an import string to an App, freezes it, and prints the routes
at or below ``--scope`` as a table sorted by path, or as JSON.
"""

import argparse
import sys

from describer.cli._resolve import resolve_app
from describer.describe.render import render_json
from describer.describe.scope import resolve_routes


def run_routes(args: argparse.Namespace) -> None:
    """Print the described routes for ``args.app`` under ``args.scope``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = resolve_routes(app.router, args.scope).sorted()

    if args.json:
        print(render_json(routes).decode("utf-8"))
        return

    if not routes:
        print("No routes registered.")
        return

    max_method = max(6, *(len(info.method) for info in routes))  # "METHOD" header
    fmt = f"{{:<{max_method}}}  {{}}"
    print(fmt.format("METHOD", "PATH"))
    width = max_method + 2 + max(4, *(len(info.path) for info in routes))
    print("-" * min(width, 80))
    for info in routes:
        print(fmt.format(info.method, info.path))
