"""
Shared exception types for token_watch.
Provider failures never raise; these cover configuration and host lifecycle only.
"""

from __future__ import annotations


class TokenWatchError(Exception):
    """Base exception for token_watch; catch this for any package-raised error."""

    pass


class ConfigError(TokenWatchError):
    """Invalid configuration value or unknown token key."""

    pass


class ClientNotReadyError(TokenWatchError):
    """Presentation host used before it finished connecting. Not retried."""

    pass


__all__ = ["TokenWatchError", "ConfigError", "ClientNotReadyError"]
