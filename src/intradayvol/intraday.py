"""IntradayAggregator — hour-of-day profile of volatility, volume, and price."""

from __future__ import annotations

from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.models.bar import BarSeries
from intradayvol.models.derived import DerivedSeries
from intradayvol.models.records import HourlyBucket
from intradayvol.numeric import mean
from intradayvol.preprocess import CleanedSeries


class IntradayAggregator:
    """Bucket bars by local hour and average each bucket.

    Only hours present in the data are returned; empty hours are not
    synthesized.
    """

    def aggregate(
        self, series: BarSeries | CleanedSeries, volatility: DerivedSeries,
    ) -> list[HourlyBucket]:
        bars = series.bars if isinstance(series, CleanedSeries) else series
        if len(volatility) != len(bars):
            raise AnalysisError(
                f"volatility has {len(volatility)} values for {len(bars)} bars",
                code=AnalysisErrorCode.INVALID_SERIES,
            )
        buckets = [
            HourlyBucket(
                hour=hour,
                bar_count=len(idx),
                average_volatility=mean(volatility[i] for i in idx),
                average_volume=mean(bars[i].volume for i in idx),
                average_close=mean(bars[i].close for i in idx),
            )
            for hour, idx in bars.group_by_hour().items()
        ]
        return sorted(buckets, key=lambda b: b.hour)
