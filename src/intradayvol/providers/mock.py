"""Mock provider for tests and offline runs — no API keys required."""

from __future__ import annotations

import logging
import math
import zlib
from datetime import date

import numpy as np

from intradayvol.calendar import EXCHANGE_TZ, get_trading_dates, session_timestamps
from intradayvol.models.bar import Bar
from intradayvol.providers.base import BaseBarProvider

logger = logging.getLogger(__name__)


class MockProvider(BaseBarProvider):
    """In-memory provider returning preset bars or a synthetic random walk.

    Synthetic bars follow NYSE sessions in exchange time with a U-shaped
    intraday volume profile. The walk is seeded from ``seed`` and the
    symbol, so repeated calls return identical data.
    """

    def __init__(
        self,
        seed: int = 7,
        base_price: float = 150.0,
        bar_volatility: float = 0.0015,
        base_volume: float = 20000.0,
    ) -> None:
        self.seed = seed
        self.base_price = base_price
        self.bar_volatility = bar_volatility
        self.base_volume = base_volume
        self._bars: dict[str, list[Bar]] = {}

    def set_bars(self, symbol: str, bars: list[Bar]) -> None:
        self._bars[symbol.upper()] = bars

    def get_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        timeframe: str = "5min",
    ) -> list[Bar]:
        key = symbol.upper()
        if key in self._bars:
            return [b for b in self._bars[key] if start <= _exchange_date(b) <= end]
        bars = self._generate_bars(key, start, end, timeframe)
        logger.debug("Generated %d synthetic %s bars for %s", len(bars), timeframe, key)
        return bars

    def _generate_bars(
        self, symbol: str, start: date, end: date, timeframe: str,
    ) -> list[Bar]:
        rng = np.random.default_rng([self.seed, zlib.crc32(symbol.encode())])
        bars: list[Bar] = []
        price = self.base_price

        for day in get_trading_dates(start, end):
            stamps = session_timestamps(day, timeframe)
            n = len(stamps)
            for i, ts in enumerate(stamps):
                o = price
                c = o * math.exp(rng.normal(0.0, self.bar_volatility))
                wick = abs(rng.normal(0.0, self.bar_volatility / 2)) * o
                h = max(o, c) + wick
                l = min(o, c) - wick  # noqa: E741
                # Heavier trading near the open and the close.
                u = (i - (n - 1) / 2) / max((n - 1) / 2, 1)
                volume = self.base_volume * (1.0 + 1.5 * u * u) * rng.uniform(0.7, 1.3)
                bars.append(Bar(
                    timestamp=ts,
                    open=round(o, 4),
                    high=round(h, 4),
                    low=round(l, 4),
                    close=round(c, 4),
                    volume=float(round(volume)),
                    vwap=round((o + h + l + c) / 4, 4),
                ))
                price = c

        return bars


def _exchange_date(bar: Bar) -> date:
    ts = bar.timestamp
    return (ts if ts.tzinfo is None else ts.astimezone(EXCHANGE_TZ)).date()
