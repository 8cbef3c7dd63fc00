#!/usr/bin/env python3
"""
uasset-index CLI

Generates a browsable, cross-linked HTML site for each asset package found
in the given files and directories.
"""

import argparse
import logging
import sys
from pathlib import Path

from scanner.config import DEFAULT_CONFIG
from scanner.discovery import IndexSummary, index_path


def print_usage():
    """Print usage to stderr."""
    print("Please pass in at least one uasset. Example:", file=sys.stderr)
    print("> ./uasset-index path/to/my_uasset.uasset", file=sys.stderr)


def parse_args(args=None):
    """
    Parse command line arguments.

    There are no options: every argument, including one starting with a dash,
    is a path.
    """
    if args is None:
        args = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="uasset-index",
        add_help=False,
        description="Generate linked HTML pages for the exports and imports of asset packages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uasset-index path/to/Hero.uasset    # Writes path/to/Hero/index.html and friends
  uasset-index Content/                # Indexes every .uasset and .umap below Content/
        """,
    )

    parser.add_argument(
        "paths",
        nargs="*",
        help="Asset files or directories to index",
    )

    return parser.parse_args(["--"] + list(args))


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    if not parsed.paths:
        print_usage()
        return 0

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", stream=sys.stderr)

    summary = IndexSummary()
    for path in parsed.paths:
        index_path(Path(path), DEFAULT_CONFIG, summary=summary)

    if not summary.ok:
        print(
            f"Indexed {len(summary.indexed)} file(s); "
            f"{len(summary.failed)} failed, {len(summary.incomplete)} incomplete",
            file=sys.stderr,
        )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
