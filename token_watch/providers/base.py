"""
Provider interfaces and data contracts.

Every provider call returns a FetchResult: either a typed value or an explicit
absence marker. Failures (missing credential, transport error, HTTP status,
payload flag, malformed JSON) all collapse to the same absence value; the cause
is logged and recorded on the provider's ProviderHealth, never raised.

Values are frozen dataclasses for immutability and type safety.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


class ProviderStatus(enum.Enum):
    """Health status of a data provider."""

    OK = "OK"
    DEGRADED = "DEGRADED"
    DOWN = "DOWN"


class VolumeWindow(enum.Enum):
    """Window sizes accepted by the price/volume provider."""

    H1 = "1h"
    H24 = "24h"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one provider call. value is None when the data is absent."""

    provider_name: str
    value: Optional[T] = None

    @property
    def is_absent(self) -> bool:
        return self.value is None

    @classmethod
    def absent(cls, provider_name: str) -> "FetchResult[T]":
        return cls(provider_name=provider_name)

    @classmethod
    def of(cls, provider_name: str, value: T) -> "FetchResult[T]":
        return cls(provider_name=provider_name, value=value)


@dataclass(frozen=True)
class TokenOverview:
    """Market overview for one token. Any field may be missing from the payload."""

    market_cap: Optional[float] = None
    price_change_24h_percent: Optional[float] = None
    holders: Optional[int] = None
    liquidity: Optional[float] = None


@dataclass(frozen=True)
class HistoricalChange:
    """Percentage change against the samples nearest to one week and one month ago."""

    change_1w: Optional[float] = None
    change_1m: Optional[float] = None


@dataclass(frozen=True)
class PriceVolume:
    """Price and volume figures for one VolumeWindow."""

    window: VolumeWindow
    price: Optional[float] = None
    price_change_percent: Optional[float] = None
    volume_usd: Optional[float] = None
    volume_change_percent: Optional[float] = None


@dataclass
class ProviderHealth:
    """Mutable health state for a single provider instance."""

    provider_name: str
    status: ProviderStatus = ProviderStatus.OK
    last_ok_at: Optional[str] = None
    fail_count: int = 0
    last_error: Optional[str] = None

    def record_success(self) -> None:
        self.status = ProviderStatus.OK
        self.fail_count = 0
        self.last_ok_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
        self.last_error = None

    def record_failure(self, error: str) -> None:
        self.fail_count += 1
        self.last_error = error[:500]
        if self.fail_count >= 5:
            self.status = ProviderStatus.DOWN
        elif self.fail_count >= 2:
            self.status = ProviderStatus.DEGRADED


@runtime_checkable
class SpotPriceProvider(Protocol):
    """Protocol for spot price providers keyed by token address."""

    @property
    def provider_name(self) -> str: ...

    def get_price(self, token_address: str) -> FetchResult[float]:
        """Fetch the current USD price for a token address."""
        ...


@runtime_checkable
class TokenOverviewProvider(Protocol):
    @property
    def provider_name(self) -> str: ...

    def get_overview(self, token_address: str) -> FetchResult[TokenOverview]: ...


@runtime_checkable
class HistoricalChangeProvider(Protocol):
    @property
    def provider_name(self) -> str: ...

    def get_changes(
        self, token_address: str, current_price: Optional[float]
    ) -> FetchResult[HistoricalChange]: ...


@runtime_checkable
class PriceVolumeProvider(Protocol):
    @property
    def provider_name(self) -> str: ...

    def get_price_volume(
        self, token_address: str, window: VolumeWindow
    ) -> FetchResult[PriceVolume]: ...
