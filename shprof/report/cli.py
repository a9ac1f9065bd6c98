"""The ``shprof-report`` command."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..cli import configure
from ..utils.logging import logger
from .stats_table import FORMATS, SORT_KEYS, collect_stats, render, stats_table


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shprof-report", description="Summarise shell function timings collected by shprof."
    )
    parser.add_argument("directory", help="Directory holding the .sta records")
    parser.add_argument("--sort", choices=SORT_KEYS, default="total", help="Column to sort by (default: total)")
    parser.add_argument("--ascending", action="store_true", help="Smallest values first")
    parser.add_argument("--limit", type=int, default=None, help="Show only the first N functions")
    parser.add_argument("--format", choices=FORMATS, default="text", help="Output format (default: text)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    configure()

    directory = Path(args.directory)
    if not directory.is_dir():
        logger.error("not a directory: {}", directory)
        return 1

    df = stats_table(collect_stats(directory), sort_by=args.sort, descending=not args.ascending, limit=args.limit)
    sys.stdout.write(render(df, args.format))
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
