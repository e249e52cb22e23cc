"""
Top-level CLI dispatcher: token-watch <command> [args...].
All commands dispatch to package CLI modules.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="token-watch",
        description="Token market metrics: on-demand snapshots and a rotating price status",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="command")
    subparsers.add_parser("snapshot", help="Fetch and print one token snapshot")
    subparsers.add_parser("status", help="Run the rotating price status loop")

    args, rest = parser.parse_known_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    if args.command == "snapshot":
        from token_watch.cli import snapshot as mod

        return mod.main(rest)
    if args.command == "status":
        from token_watch.cli import status as mod

        return mod.main(rest)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
