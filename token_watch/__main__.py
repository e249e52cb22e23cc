"""Allow python -m token_watch to print help."""
from __future__ import annotations

from . import __version__

_HELP = f"""\
token-watch {__version__}

Available CLI commands:
  token-watch snapshot LABS          Price, liquidity, market cap, holders, changes, volume
  token-watch snapshot LABS --json   Same snapshot as JSON
  token-watch status                 Rotate token prices into a status display (Ctrl+C to stop)
  token-watch status --once          One status update for the first rotation entry

Configuration: config.yaml at repo root (or TOKEN_WATCH_CONFIG), env overrides
  BIRDEYE_API_KEY, TOKEN_WATCH_UPDATE_INTERVAL, TOKEN_WATCH_PRICE_DECIMALS.

  python -m pytest -q                Run test suite
"""


def main() -> int:
    print(_HELP)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
