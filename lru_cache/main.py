# Demo host
# Fills a small cache past its capacity, prints what survived, then tears it down.

import argparse
import logging
from typing import List, Optional

from . import config
from .api import LRUCache


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lru-cache-demo",
        description="Insert keys 0..count-1 into an LRU cache and print the values that remain.",
    )
    parser.add_argument("--capacity", type=int, default=config.DEFAULT_CAPACITY,
                        help="Cache capacity (default: %(default)s)")
    parser.add_argument("--count", type=int, default=config.DEMO_COUNT,
                        help="Number of keys to insert (default: %(default)s)")
    parser.add_argument("--log-level", type=str.upper, choices=config.LOG_LEVELS,
                        default=config.LOG_LEVEL,
                        help="Logging level (default: %(default)s)")
    return parser


def run_demo(capacity: int, count: int) -> List[int]:
    """Runs the demo and returns the surviving values in lookup order."""
    with LRUCache(capacity) as cache:
        for i in range(count):
            cache.insert_or_assign(i, i)

        survivors = [value for _, value in cache]
        for value in survivors:
            print(value)

        logging.getLogger(__name__).info(
            f"Demo finished: {cache.stats().evictions} evictions, {len(survivors)} entries kept"
        )
    return survivors


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # choices only covers the command line, not a default taken from the environment
    if args.log_level not in config.LOG_LEVELS:
        parser.error(f"invalid log level: {args.log_level!r} (choose from {', '.join(config.LOG_LEVELS)})")
    logging.basicConfig(level=args.log_level, format=config.LOG_FORMAT)

    try:
        run_demo(args.capacity, args.count)
    except ValueError as e:
        logging.error(f"Invalid demo arguments: {e}")
        return 2
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
