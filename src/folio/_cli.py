"""Folio CLI — folio / folio --watch.

Entry point for the ``folio`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the folio CLI."""
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Build a static HTML site from a tree of markdown files.",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Build, then rebuild whenever content, templates, or assets change",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from folio.app import build, watch
    from folio.banner import print_error

    try:
        if args.watch:
            status = watch(".")
        else:
            build(".")
            status = 0
    except KeyboardInterrupt:
        if not args.watch:
            raise
        # Interrupted before the event loop's SIGINT handler was installed.
        print("\n[watch] stopping", file=sys.stderr)
        status = 0
    except Exception as exc:
        print_error(exc)
        status = 1

    sys.exit(status)


if __name__ == "__main__":
    main()
