"""Bar (OHLCV) and BarSeries data models."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from intradayvol.numeric import is_missing

DEFAULT_TIMEZONE = "America/New_York"


@dataclass(frozen=True)
class Bar:
    """Single price bar (OHLCV + optional provider vwap and trade count).

    Price and volume fields may be ``None`` (or NaN) for incomplete bars
    delivered by a provider; the preprocessor drops those.

    Attributes:
        timestamp: Bar timestamp (start of period, exchange-local).
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
        vwap: Volume-weighted average price (provider-supplied).
        num_trades: Number of transactions in this bar.
    """

    timestamp: datetime
    open: float | None
    high: float | None
    low: float | None
    close: float | None
    volume: float | None
    vwap: float | None = None
    num_trades: int | None = None

    @property
    def is_complete(self) -> bool:
        """True when none of open/high/low/close/volume is missing."""
        return not any(
            is_missing(v) for v in (self.open, self.high, self.low, self.close, self.volume)
        )


@dataclass(frozen=True)
class BarSeries:
    """Ordered, immutable sequence of bars for one symbol.

    Timestamps are expected to be strictly increasing; that invariant is
    checked by ``intradayvol.quality.validate_bars`` when the series enters
    the preprocessor rather than on construction, so raw provider output can
    always be wrapped and inspected.

    Attributes:
        bars: Bars in time order.
        symbol: Ticker symbol.
        timezone: IANA timezone used for calendar-date and hour grouping.
        timeframe: Bar size, e.g. "5min".
    """

    bars: tuple[Bar, ...] = ()
    symbol: str = ""
    timezone: str = DEFAULT_TIMEZONE
    timeframe: str = "5min"

    @classmethod
    def from_bars(
        cls,
        bars: Iterable[Bar],
        symbol: str = "",
        timezone: str = DEFAULT_TIMEZONE,
        timeframe: str = "5min",
    ) -> BarSeries:
        """Build a series, collapsing exact duplicates of the same bar.

        Two bars sharing a timestamp but differing in any value are kept,
        so the conflict surfaces as a timestamp-order validation failure.
        """
        seen: dict[datetime, Bar] = {}
        kept: list[Bar] = []
        for bar in bars:
            if seen.get(bar.timestamp) == bar:
                continue
            seen[bar.timestamp] = bar
            kept.append(bar)
        return cls(tuple(kept), symbol.upper(), timezone, timeframe)

    # ---- sequence protocol ----

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self.bars)

    def __getitem__(self, index: int) -> Bar:
        return self.bars[index]

    # ---- column views ----

    @property
    def timestamps(self) -> tuple[datetime, ...]:
        return tuple(b.timestamp for b in self.bars)

    @property
    def closes(self) -> tuple[float | None, ...]:
        return tuple(b.close for b in self.bars)

    @property
    def volumes(self) -> tuple[float | None, ...]:
        return tuple(b.volume for b in self.bars)

    # ---- exchange-local time ----

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def local_timestamp(self, index: int) -> datetime:
        """Timestamp of bar ``index`` in the series timezone.

        Naive timestamps are taken to already be exchange-local.
        """
        ts = self.bars[index].timestamp
        if ts.tzinfo is None:
            return ts.replace(tzinfo=self.zone)
        return ts.astimezone(self.zone)

    def local_date(self, index: int) -> date:
        return self.local_timestamp(index).date()

    def local_hour(self, index: int) -> int:
        return self.local_timestamp(index).hour

    def group_by_date(self) -> dict[date, list[int]]:
        """Bar indices bucketed by local calendar date, in first-seen order."""
        groups: dict[date, list[int]] = {}
        for i in range(len(self.bars)):
            groups.setdefault(self.local_date(i), []).append(i)
        return groups

    def group_by_hour(self) -> dict[int, list[int]]:
        """Bar indices bucketed by local hour of day, in first-seen order."""
        groups: dict[int, list[int]] = {}
        for i in range(len(self.bars)):
            groups.setdefault(self.local_hour(i), []).append(i)
        return groups

    def take(self, indices: Sequence[int]) -> BarSeries:
        """New series holding the bars at ``indices``, in the given order."""
        return BarSeries(
            tuple(self.bars[i] for i in indices),
            self.symbol,
            self.timezone,
            self.timeframe,
        )
