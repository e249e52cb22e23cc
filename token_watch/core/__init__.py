"""
Stable facade: shared error types. Do not add exports without updating __all__.
"""

from __future__ import annotations

from .errors import ClientNotReadyError, ConfigError, TokenWatchError

# Do not add exports without updating __all__.
__all__ = ["ClientNotReadyError", "ConfigError", "TokenWatchError"]
