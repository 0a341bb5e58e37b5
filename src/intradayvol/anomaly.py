"""AnomalyDetector — whole-series return z-scores and threshold selection."""

from __future__ import annotations

from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.models.derived import DerivedSeries
from intradayvol.models.records import AnomalyRecord
from intradayvol.numeric import mean, sample_std


def _check_threshold(threshold: float) -> None:
    if threshold < 0:
        raise AnalysisError(
            f"z-score threshold must be >= 0, got {threshold}",
            code=AnalysisErrorCode.INVALID_CONFIG,
        )


class AnomalyDetector:
    """Flag returns far from the series mean.

    Mean and sample stddev are fixed once over all defined returns, not
    rolling. A series with fewer than two returns, or no spread, has no
    z-scores and therefore no anomalies.
    """

    def __init__(self, threshold: float = 2.0) -> None:
        _check_threshold(threshold)
        self.threshold = threshold

    def zscores(self, returns: DerivedSeries) -> DerivedSeries:
        mu = mean(returns)
        sigma = sample_std(returns)
        if mu is None or not sigma:
            values = [None] * len(returns)
        else:
            values = [None if r is None else (r - mu) / sigma for r in returns]
        return DerivedSeries.build("zscore", returns.timestamps, values)

    def detect(
        self, returns: DerivedSeries, threshold: float | None = None,
    ) -> list[AnomalyRecord]:
        """Bars whose ``|z| > threshold``, in time order."""
        threshold = self.threshold if threshold is None else threshold
        _check_threshold(threshold)
        z = self.zscores(returns)
        return [
            AnomalyRecord(index=i, timestamp=z.timestamps[i], zscore=v)
            for i, v in z.defined()
            if abs(v) > threshold
        ]
