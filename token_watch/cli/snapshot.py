"""
One on-demand snapshot for a configured token key or a raw token address.
Use: token-watch snapshot LABS [--json]
"""

from __future__ import annotations

import argparse
import json
from typing import List, Optional

from token_watch import config as cfg_mod
from token_watch.aggregator import NotDisplayable
from token_watch.core.errors import ConfigError
from token_watch.defaults import build_aggregator
from token_watch.render import render_snapshot


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="token-watch snapshot", description="Fetch one metrics snapshot")
    parser.add_argument("token", help="Configured token key (e.g. LABS) or token address")
    parser.add_argument("--label", default=None, help="Display label (default: configured label)")
    parser.add_argument("--json", action="store_true", help="Print the snapshot as JSON")
    args = parser.parse_args(argv)

    cfg = cfg_mod.get_config()
    try:
        token = cfg_mod.resolve_token(args.token, cfg)
    except ConfigError as exc:
        print(f"[FAIL] {exc}")
        return 2

    try:
        aggregator = build_aggregator(cfg)
    except ConfigError as exc:
        print(f"[FAIL] {exc}")
        return 2

    result = aggregator.get_snapshot(token.address, args.label or token.label)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_snapshot(result, cfg_mod.price_decimal_places(cfg)))
    return 1 if isinstance(result, NotDisplayable) else 0


if __name__ == "__main__":
    raise SystemExit(main())
