"""IndicatorEngine — rolling volatility, moving averages, and session VWAP."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.models.bar import BarSeries
from intradayvol.models.derived import DerivedSeries
from intradayvol.numeric import mean, sample_std
from intradayvol.preprocess import CleanedSeries


def _check_window(name: str, window: int) -> None:
    if window < 1:
        raise AnalysisError(
            f"{name} window must be >= 1, got {window}",
            code=AnalysisErrorCode.INVALID_CONFIG,
        )


@dataclass(frozen=True)
class IndicatorSet:
    """Per-bar indicators aligned to a cleaned series.

    Attributes:
        volatility: Annualized rolling volatility of returns.
        vwap: Session-reset volume-weighted average close.
        moving_averages: Simple moving averages of close keyed by window.
    """

    volatility: DerivedSeries
    vwap: DerivedSeries
    moving_averages: dict[int, DerivedSeries] = field(default_factory=dict)

    def all_series(self) -> list[DerivedSeries]:
        return [self.volatility, self.vwap, *self.moving_averages.values()]


class IndicatorEngine:
    """Compute derived per-bar series. Each indicator is independent."""

    def __init__(
        self,
        volatility_window: int = 10,
        ma_windows: Iterable[int] = (20, 50),
        bars_per_day: int = 78,
        trading_days_per_year: int = 252,
    ) -> None:
        _check_window("volatility", volatility_window)
        self.ma_windows = tuple(ma_windows)
        for k in self.ma_windows:
            _check_window("moving average", k)
        self.volatility_window = volatility_window
        self.annual_factor = math.sqrt(bars_per_day * trading_days_per_year)

    def rolling_volatility(
        self, cleaned: CleanedSeries, window: int | None = None,
    ) -> DerivedSeries:
        """Trailing-window stddev of returns, annualized.

        Position i uses returns[i - window + 1 .. i]; the first
        ``window - 1`` positions are undefined. Each window is recomputed
        from scratch.
        """
        window = self.volatility_window if window is None else window
        _check_window("volatility", window)
        returns = cleaned.returns.values
        values: list[float | None] = []
        for i in range(len(returns)):
            if i < window - 1:
                values.append(None)
                continue
            std = sample_std(returns[i - window + 1:i + 1])
            values.append(None if std is None else std * self.annual_factor)
        return DerivedSeries.build("volatility", cleaned.bars.timestamps, values)

    def vwap(self, series: BarSeries | CleanedSeries) -> DerivedSeries:
        """Cumulative close*volume / volume, reset at each calendar date.

        Undefined while the day's cumulative volume is zero.
        """
        bars = series.bars if isinstance(series, CleanedSeries) else series
        values: list[float | None] = [None] * len(bars)
        for idx in bars.group_by_date().values():
            pv = vol = 0.0
            for i in idx:
                bar = bars[i]
                pv += bar.close * bar.volume
                vol += bar.volume
                values[i] = pv / vol if vol > 0 else None
        return DerivedSeries.build("vwap", bars.timestamps, values)

    def moving_average(self, series: BarSeries | CleanedSeries, k: int) -> DerivedSeries:
        """Trailing simple mean of close over ``k`` bars; first k-1 undefined."""
        _check_window("moving average", k)
        bars = series.bars if isinstance(series, CleanedSeries) else series
        closes = bars.closes
        values = [
            None if i < k - 1 else mean(closes[i - k + 1:i + 1])
            for i in range(len(closes))
        ]
        return DerivedSeries.build(f"ma{k}", bars.timestamps, values)

    def compute_all(self, cleaned: CleanedSeries) -> IndicatorSet:
        return IndicatorSet(
            volatility=self.rolling_volatility(cleaned),
            vwap=self.vwap(cleaned),
            moving_averages={k: self.moving_average(cleaned, k) for k in self.ma_windows},
        )
