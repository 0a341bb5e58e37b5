"""StatisticsEngine — per-day and whole-series return statistics."""

from __future__ import annotations

import math

from intradayvol.models.records import DailyStat, SummaryStat
from intradayvol.numeric import mean, sample_std, skewness, total
from intradayvol.preprocess import CleanedSeries


def _scaled(std: float | None, factor: float) -> float | None:
    return None if std is None else std * factor


class StatisticsEngine:
    """Aggregate statistics over a cleaned series.

    Daily volatility is scaled by ``sqrt(bars_per_day)``; summary volatility
    by ``sqrt(bars_per_day * trading_days_per_year)``. Standard deviations
    are sample (n-1); skewness is Fisher-Pearson g1 and undefined below
    three returns or at zero variance.
    """

    def __init__(self, bars_per_day: int = 78, trading_days_per_year: int = 252) -> None:
        self.bars_per_day = bars_per_day
        self.trading_days_per_year = trading_days_per_year

    @property
    def daily_factor(self) -> float:
        return math.sqrt(self.bars_per_day)

    @property
    def annual_factor(self) -> float:
        return math.sqrt(self.bars_per_day * self.trading_days_per_year)

    def daily_statistics(self, cleaned: CleanedSeries) -> list[DailyStat]:
        """One DailyStat per calendar date present, in date order."""
        bars, returns = cleaned.bars, cleaned.returns
        stats: list[DailyStat] = []
        for day, idx in bars.group_by_date().items():
            rets = [returns[i] for i in idx]
            volumes = [bars[i].volume for i in idx]
            highs = [bars[i].high for i in idx]
            lows = [bars[i].low for i in idx]
            stats.append(DailyStat(
                date=day,
                bar_count=len(idx),
                daily_return=total(rets),
                volatility=_scaled(sample_std(rets), self.daily_factor),
                skewness=skewness(rets),
                volume_total=total(volumes) or 0.0,
                volume_average=mean(volumes),
                average_close=mean(bars[i].close for i in idx),
                price_range=max(highs) - min(lows),
            ))
        stats.sort(key=lambda s: s.date)
        return stats

    def summary_statistics(self, cleaned: CleanedSeries) -> SummaryStat:
        """Whole-series SummaryStat; all-None fields for an empty series."""
        bars, returns = cleaned.bars, cleaned.returns
        if cleaned.is_empty:
            return SummaryStat(bar_count=0)
        return SummaryStat(
            bar_count=len(bars),
            start=bars[0].timestamp,
            end=bars[-1].timestamp,
            mean_return=mean(returns),
            volatility=_scaled(sample_std(returns), self.annual_factor),
            skewness=skewness(returns),
            mean_volume=mean(bars.volumes),
        )
