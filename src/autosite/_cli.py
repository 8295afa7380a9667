"""autosite CLI — autosite dev / autosite serve / autosite routes.

Entry point for the ``autosite`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys

from autosite._errors import AutositeError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the autosite CLI."""
    parser = argparse.ArgumentParser(
        prog="autosite",
        description="Serve a site whose routes come from its template files.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # autosite dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Serve pages on bare URIs for local development",
    )
    dev_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    dev_parser.add_argument("--host", default=None, help="Bind address (default: 127.0.0.1)")
    dev_parser.add_argument("--port", type=int, default=None, help="Bind port (default: 8000)")

    # autosite serve
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve pages under the live domain",
    )
    serve_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: 8000)")

    # autosite routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="List the handler patterns the site would register",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    routes_parser.add_argument(
        "--live", action="store_true", help="Show live-domain patterns",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from autosite import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from autosite.app import dev, routes, serve

    try:
        if args.command == "dev":
            dev(root=args.root, host=args.host, port=args.port)
        elif args.command == "serve":
            serve(root=args.root, host=args.host, port=args.port)
        elif args.command == "routes":
            rows = routes(root=args.root, mode="live" if args.live else "dev")
            width = max((len(pattern) for pattern, _ in rows), default=0)
            for pattern, page in rows:
                print(f"{pattern:<{width}}  {page}")
    except AutositeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
