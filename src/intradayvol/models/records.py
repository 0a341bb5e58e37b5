"""Aggregate result records: daily, summary, anomaly, and hourly."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DailyStat:
    """Statistics for one calendar date (series timezone).

    Attributes:
        date: Calendar date.
        bar_count: Bars on this date.
        daily_return: Sum of log returns.
        volatility: Sample stddev of returns scaled by sqrt(bars per day).
        skewness: Fisher-Pearson skewness of returns (None below 3 returns).
        volume_total: Total volume.
        volume_average: Mean volume per bar.
        average_close: Mean close price.
        price_range: max(high) - min(low) over the date.
    """

    date: date
    bar_count: int
    daily_return: float | None
    volatility: float | None
    skewness: float | None
    volume_total: float
    volume_average: float | None
    average_close: float | None
    price_range: float | None


@dataclass(frozen=True)
class SummaryStat:
    """Whole-series statistics.

    Attributes:
        bar_count: Bars in the cleaned series.
        start: First bar timestamp.
        end: Last bar timestamp.
        mean_return: Mean log return per bar.
        volatility: Annualized volatility of returns.
        skewness: Fisher-Pearson skewness of returns.
        mean_volume: Mean volume per bar.
    """

    bar_count: int
    start: datetime | None = None
    end: datetime | None = None
    mean_return: float | None = None
    volatility: float | None = None
    skewness: float | None = None
    mean_volume: float | None = None


@dataclass(frozen=True)
class AnomalyRecord:
    """Reference to a bar whose return z-score exceeded the threshold.

    Attributes:
        index: Position in the cleaned series.
        timestamp: Timestamp of that bar.
        zscore: Standardized return.
    """

    index: int
    timestamp: datetime
    zscore: float

    @property
    def direction(self) -> str:
        return "up" if self.zscore > 0 else "down"


@dataclass(frozen=True)
class HourlyBucket:
    """Averages for one hour of the trading day.

    Attributes:
        hour: Hour of day (0-23) in the series timezone.
        bar_count: Bars falling in this hour.
        average_volatility: Mean rolling volatility (None if never defined).
        average_volume: Mean volume.
        average_close: Mean close price.
    """

    hour: int
    bar_count: int
    average_volatility: float | None
    average_volume: float | None
    average_close: float | None
