"""Tern CLI — inspect media types, build asset URLs, try negotiation.

Entry point registered as ``tern`` in ``pyproject.toml``::

    [project.scripts]
    tern = "tern.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tern`` command."""
    parser = argparse.ArgumentParser(
        prog="tern",
        description="Tern — media types, content negotiation, and asset URLs.",
    )
    parser.add_argument(
        "--app-path",
        default=".",
        help="Application directory (its webroot/ holds the assets)",
    )
    parser.add_argument("--env", default=None, help="Environment name (default: $TERN_ENV)")
    subparsers = parser.add_subparsers(dest="command")

    # -- tern types -------------------------------------------------------
    types_parser = subparsers.add_parser("types", help="List registered media types")
    types_parser.add_argument(
        "mime",
        nargs="?",
        default=None,
        help="Only show types serving this MIME type",
    )

    # -- tern asset -------------------------------------------------------
    asset_parser = subparsers.add_parser("asset", help="Print the public URL of an asset")
    asset_parser.add_argument("path", help="Asset path (e.g. style, /img/logo.png)")
    asset_parser.add_argument("type", help="Asset type (js, css, image, generic)")
    asset_parser.add_argument("--base", default=None, help="Base path to prepend")
    asset_parser.add_argument(
        "--check",
        action="store_true",
        help="Fail unless the file exists in the webroot",
    )
    asset_parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Append the file modification time",
    )

    # -- tern negotiate ---------------------------------------------------
    negotiate_parser = subparsers.add_parser(
        "negotiate", help="Show which media type an Accept header selects"
    )
    negotiate_parser.add_argument("accept", help="Accept header value")
    negotiate_parser.add_argument("--user-agent", default="", help="User-Agent header value")
    negotiate_parser.add_argument("--type", default=None, help="Route-declared type")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from tern.cli._commands import run_asset, run_negotiate, run_types

    if args.command == "types":
        run_types(args)
    elif args.command == "asset":
        run_asset(args)
    elif args.command == "negotiate":
        run_negotiate(args)
