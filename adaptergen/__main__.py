"""Entry point: python -m adaptergen SLUG

Fetches the provider's OpenAPI spec, generates the adapter and writes
{output_dir}/{slug}/adapter.json and manifest.json.

Exit codes:
    0 - Adapter generated
    1 - Generation failed (fetch error, empty spec, write error)
    2 - Invalid arguments
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .assembler import generate_adapter
from .errors import GeneratorError
from .events import KNOWN_EVENTS, OPENAPI_SOURCES, PROVIDER_NAMES, load_events_file
from .writer import DEFAULT_OUTPUT_DIR

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m adaptergen",
        description="Generate a registry adapter from a provider's OpenAPI spec.",
    )
    parser.add_argument("slug", help="Adapter slug, e.g. stripe.")
    parser.add_argument(
        "--name",
        default=None,
        help="Provider display name (default: built-in name or the capitalized slug).",
    )
    parser.add_argument(
        "--spec",
        default=None,
        help="OpenAPI spec URL or local path (default: built-in source for the slug).",
    )
    parser.add_argument(
        "--events-file",
        type=Path,
        default=None,
        help="Known webhook events, as a JSON array or one event per line.",
    )
    parser.add_argument(
        "--no-known-events",
        action="store_true",
        default=False,
        help="Don't merge the built-in known-event catalog for the slug.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Registry root directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    source = args.spec or OPENAPI_SOURCES.get(args.slug)
    if not source:
        parser.error(f"no built-in spec source for '{args.slug}'; pass --spec")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    name = args.name or PROVIDER_NAMES.get(args.slug, args.slug.capitalize())

    try:
        known_events: list[str] = []
        if not args.no_known_events:
            known_events.extend(KNOWN_EVENTS.get(args.slug, ()))
        if args.events_file:
            known_events.extend(load_events_file(args.events_file))

        adapter = generate_adapter(
            args.slug,
            name,
            source,
            known_events=known_events,
            output_dir=args.output_dir,
        )
    except GeneratorError as exc:
        logger.error("%s", exc)
        return 1

    stats = adapter.stats
    print(f"Generated {name} adapter in {adapter.output_dir}")
    print(f"  - {stats['actions']} actions")
    print(f"  - {stats['triggers']} triggers")
    print(f"  - {stats['tools']} tools")
    print(f"  - {len(stats['categories'])} categories")
    skipped = len(adapter.diagnostics.skipped_operations)
    if skipped:
        print(f"  - {skipped} operations skipped (see warnings)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
