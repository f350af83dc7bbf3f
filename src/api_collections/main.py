"""CLI entry point for listing remote collections."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, List, Optional, TextIO, Tuple

from .client import ApiClient
from .collection import Collection
from .config import get_settings
from .logging import configure_logging
from .resource import make_resource_type


def _parse_pair(pair: str) -> Tuple[str, str]:
    key, sep, value = pair.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected key=value, got {pair!r}")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List resources from a paginated API collection")
    parser.add_argument("resource", help="Resource name, e.g. tickets")
    parser.add_argument("--path", default=None, help="Explicit collection path")
    parser.add_argument("--page", type=int, default=None)
    parser.add_argument("--per-page", type=int, default=None)
    parser.add_argument("--include", action="append", default=[], help="Side-load a relation")
    parser.add_argument(
        "--param",
        action="append",
        type=_parse_pair,
        default=[],
        help="Extra key=value parameter",
    )
    parser.add_argument("--all", action="store_true", help="Walk every page")
    return parser


def run(args: argparse.Namespace, client: ApiClient, out: TextIO) -> int:
    resource_class = make_resource_type(args.resource)
    collection = Collection(
        client,
        resource_class,
        path=args.path,
        page=args.page,
        per_page=args.per_page or get_settings().api_default_per_page,
        include=args.include,
        params=dict(args.param),
    )

    def emit(resource: Any, page: int = 1) -> None:
        out.write(json.dumps(resource.to_dict(), default=str) + "\n")

    if args.all:
        collection.each_page(emit)
    else:
        for resource in collection:
            emit(resource)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.api_log_level)

    with ApiClient.from_settings(settings) as client:
        sys.exit(run(args, client, sys.stdout))


if __name__ == "__main__":
    main()
