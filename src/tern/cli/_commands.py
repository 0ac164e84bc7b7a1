"""Implementations of the ``tern`` subcommands."""

import argparse
import sys

from tern.config import MediaConfig
from tern.http.headers import Headers
from tern.http.request import Request
from tern.media import Media


def _media(args: argparse.Namespace) -> Media:
    return Media(MediaConfig(app_path=args.app_path, environment=args.env))


def run_types(args: argparse.Namespace) -> None:
    """Print ``name  mime, mime`` per registered type."""
    media = _media(args)
    names = media.types_for(args.mime) if args.mime else media.types()
    for name in names:
        media_type = media.type(name)
        if media_type is None:
            continue
        label = name if media_type.name == name else f"{name} -> {media_type.name}"
        print(f"{label:<16} {', '.join(media_type.content)}")


def run_asset(args: argparse.Namespace) -> None:
    """Print an asset URL; exit 1 when ``--check`` finds no file."""
    media = _media(args)
    url = media.asset(
        args.path,
        args.type,
        base=args.base,
        check=args.check,
        timestamp=args.timestamp,
    )
    if url is None:
        print(f"Asset not found: {args.path} ({args.type})", file=sys.stderr)
        sys.exit(1)
    print(url)


def run_negotiate(args: argparse.Namespace) -> None:
    """Print the negotiated type; exit 1 when nothing is acceptable."""
    media = _media(args)
    request = Request(
        headers=Headers.from_mapping({"Accept": args.accept, "User-Agent": args.user_agent}),
        params={"type": args.type} if args.type else {},
    )
    name = media.negotiate(request)
    if name is None:
        print("No acceptable media type", file=sys.stderr)
        sys.exit(1)
    print(name)
