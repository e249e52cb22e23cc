"""
Run the rotating status loop against a console presentation host.
Use: token-watch status [--interval 60] [--once]

Each update is logged as it would be pushed to a chat workspace: a display
name ("$0.0123") and an activity text ("LABS Price"). Stop with Ctrl+C.
"""

from __future__ import annotations

import argparse
import time
from typing import List, Optional

from token_watch import config as cfg_mod
from token_watch.core.errors import ConfigError
from token_watch.defaults import build_scheduler


class ConsoleTarget:
    """Presentation target that prints updates instead of calling a chat API."""

    def __init__(self, name: str = "console"):
        self.name = name
        self.display_name: Optional[str] = None
        self.activity_text: Optional[str] = None

    def set_display_name(self, text: str) -> None:
        self.display_name = text
        print(f"[{self.name}] display name -> {text}", flush=True)

    def set_activity_text(self, text: str) -> None:
        self.activity_text = text
        print(f"[{self.name}] watching -> {text}", flush=True)


class ConsoleHost:
    def __init__(self) -> None:
        self._targets = [ConsoleTarget()]

    def is_ready(self) -> bool:
        return True

    def targets(self) -> List[ConsoleTarget]:
        return list(self._targets)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="token-watch status", description="Rotate token prices into a status display")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between updates (default: config update_interval)")
    parser.add_argument("--once", action="store_true", help="Run one update for the first rotation entry and exit")
    args = parser.parse_args(argv)

    cfg = cfg_mod.get_config()
    try:
        scheduler = build_scheduler(ConsoleHost(), cfg, interval_seconds=args.interval)
    except ConfigError as exc:
        print(f"[FAIL] {exc}")
        return 2

    if args.once:
        update = scheduler.update_status(scheduler.rotation.current)
        return 0 if update is not None else 1

    scheduler.start()
    print(f"Rotation: {scheduler.rotation.entries}. Every {scheduler.interval_seconds}s. Stop with Ctrl+C.", flush=True)
    try:
        while scheduler.is_running:
            time.sleep(1.0)
    except KeyboardInterrupt:
        print("\nStopped.", flush=True)
    finally:
        scheduler.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
