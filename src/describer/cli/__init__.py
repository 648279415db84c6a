"""describer CLI — inspect the route surface of an app.

Entry point registered as ``describer`` in ``pyproject.toml``::

    [project.scripts]
    describer = "describer.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``describer`` command."""
    parser = argparse.ArgumentParser(
        prog="describer",
        description="describer — routes that describe themselves.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- describer routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    routes_parser.add_argument(
        "--scope",
        default="/",
        help="Only list routes at or below this path, relative to it (default: /)",
    )
    routes_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the JSON description an OPTIONS request would return",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from describer.cli._routes import run_routes

        run_routes(args)
