"""
Load config from config.yaml with optional env overrides.
Single source of truth for tokens, rotation, intervals, provider endpoints and credentials.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .core.errors import ConfigError

LABS_ADDRESS = "LABSh5DTebUcUbEoLzXKCiXFJLecDFiDWiBGUU1GpxR"
SOL_ADDRESS = "So11111111111111111111111111111111111111112"

# Defaults if no YAML or env
_DEFAULTS = {
    "update_interval": 60,
    "price_decimal_places": 2,
    "status_price_decimals": 4,
    "chain": "solana",
    "reference_token": "SOL",
    "tokens": {
        "LABS": {"address": LABS_ADDRESS, "label": "Labs"},
        "SOL": {"address": SOL_ADDRESS, "label": "SOL"},
    },
    "rotation": ["LABS", "SOL"],
    "history": {"interval": "1D", "window_days": 31},
    "http": {"timeout_seconds": 15.0},
    "jupiter": {"base_url": "https://lite-api.jup.ag"},
    "birdeye": {"base_url": "https://public-api.birdeye.so", "api_key": None},
}


@dataclass(frozen=True)
class KnownToken:
    """A configured token: rotation/command key, on-chain address, display label."""

    key: str
    address: str
    label: str


def _config_yaml_path() -> Path:
    """Config.yaml lives at repo root (parent of package dir) unless TOKEN_WATCH_CONFIG is set."""
    override = os.environ.get("TOKEN_WATCH_CONFIG")
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml(path: Optional[Path] = None) -> dict:
    config_path = path or _config_yaml_path()
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides() -> dict:
    overrides: dict = {}
    interval = os.environ.get("TOKEN_WATCH_UPDATE_INTERVAL")
    if interval:
        overrides["update_interval"] = interval
    decimals = os.environ.get("TOKEN_WATCH_PRICE_DECIMALS")
    if decimals:
        overrides["price_decimal_places"] = decimals
    api_key = os.environ.get("BIRDEYE_API_KEY")
    if api_key:
        overrides.setdefault("birdeye", {})["api_key"] = api_key
    return overrides


def get_config(path: Optional[Path] = None) -> dict:
    """Return merged config: defaults <- config.yaml <- env."""
    merged = _deep_merge(_DEFAULTS, _load_yaml(path))
    merged = _deep_merge(merged, _env_overrides())
    return merged


# Convenience accessors
def update_interval(cfg: Optional[dict] = None) -> float:
    cfg = cfg or get_config()
    try:
        seconds = float(cfg["update_interval"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"update_interval must be a number: {cfg['update_interval']!r}") from exc
    if seconds <= 0:
        raise ConfigError(f"update_interval must be positive, got {seconds}")
    return seconds


def price_decimal_places(cfg: Optional[dict] = None) -> int:
    cfg = cfg or get_config()
    return int(cfg["price_decimal_places"])


def status_price_decimals(cfg: Optional[dict] = None) -> int:
    cfg = cfg or get_config()
    return int(cfg["status_price_decimals"])


def chain(cfg: Optional[dict] = None) -> str:
    cfg = cfg or get_config()
    return str(cfg["chain"])


def birdeye_api_key(cfg: Optional[dict] = None) -> Optional[str]:
    cfg = cfg or get_config()
    key = (cfg.get("birdeye") or {}).get("api_key")
    return str(key) if key else None


def http_timeout_seconds(cfg: Optional[dict] = None) -> float:
    cfg = cfg or get_config()
    return float(cfg["http"]["timeout_seconds"])


def known_tokens(cfg: Optional[dict] = None) -> Dict[str, KnownToken]:
    """Configured tokens in declaration order. Entries without an address are skipped."""
    cfg = cfg or get_config()
    out: Dict[str, KnownToken] = {}
    for key, entry in (cfg.get("tokens") or {}).items():
        if not isinstance(entry, dict) or not entry.get("address"):
            continue
        name = str(key).upper()
        out[name] = KnownToken(
            key=name,
            address=str(entry["address"]).strip(),
            label=str(entry.get("label") or name),
        )
    return out


def reference_token(cfg: Optional[dict] = None) -> KnownToken:
    cfg = cfg or get_config()
    key = str(cfg["reference_token"]).upper()
    tokens = known_tokens(cfg)
    if key not in tokens:
        raise ConfigError(f"reference_token {key!r} is not a configured token. Available: {list(tokens)}")
    return tokens[key]


def rotation(cfg: Optional[dict] = None) -> List[str]:
    cfg = cfg or get_config()
    return [str(k).upper() for k in (cfg.get("rotation") or [])]


def resolve_token(key_or_address: str, cfg: Optional[dict] = None) -> KnownToken:
    """Look up a configured token by key; anything else that looks like an address is taken as-is."""
    tokens = known_tokens(cfg)
    wanted = key_or_address.strip()
    if wanted.upper() in tokens:
        return tokens[wanted.upper()]
    for token in tokens.values():
        if token.address == wanted:
            return token
    if len(wanted) >= 32:
        return KnownToken(key=wanted[:8], address=wanted, label=wanted[:8])
    raise ConfigError(f"Unknown token {key_or_address!r}. Available: {list(tokens)}")
