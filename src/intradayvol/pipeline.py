"""IntradayAnalyzer — fetch -> clean -> statistics/indicators -> anomalies/intraday."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from zoneinfo import ZoneInfo

import pandas as pd

from intradayvol.anomaly import AnomalyDetector
from intradayvol.config import AnalysisConfig, ProviderType
from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.frames import result_frames
from intradayvol.indicators import IndicatorEngine, IndicatorSet
from intradayvol.intraday import IntradayAggregator
from intradayvol.models.bar import BarSeries
from intradayvol.models.records import AnomalyRecord, DailyStat, HourlyBucket, SummaryStat
from intradayvol.preprocess import CleanedSeries, Preprocessor
from intradayvol.providers import create_provider
from intradayvol.providers.base import BaseBarProvider
from intradayvol.stats import StatisticsEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one analysis run produces, ready for rendering.

    Attributes:
        cleaned: Cleaned bars with their returns.
        indicators: Rolling volatility, VWAP, and moving averages.
        daily: Per-date statistics.
        summary: Whole-series statistics.
        anomalies: Bars with unusual returns.
        intraday: Hour-of-day profile.
    """

    cleaned: CleanedSeries
    indicators: IndicatorSet
    daily: list[DailyStat]
    summary: SummaryStat
    anomalies: list[AnomalyRecord]
    intraday: list[HourlyBucket]

    def to_frames(self) -> dict[str, pd.DataFrame]:
        """DataFrames keyed "bars", "daily", "summary", "anomalies", "intraday"."""
        return result_frames(
            self.cleaned, self.indicators, self.daily, self.summary,
            self.anomalies, self.intraday,
        )


class IntradayAnalyzer:
    """Central orchestrator for a single-symbol analysis run.

    Usage::

        from intradayvol import create_analyzer_from_env
        result = create_analyzer_from_env().run()
        frames = result.to_frames()
    """

    def __init__(
        self,
        config: AnalysisConfig,
        provider: BaseBarProvider | None = None,
    ) -> None:
        self.config = config
        self.provider = provider or self._build_provider(config)

        self.preprocessor = Preprocessor(config.iqr_multiplier)
        self.statistics = StatisticsEngine(config.bars_per_day, config.trading_days_per_year)
        self.indicators = IndicatorEngine(
            volatility_window=config.volatility_window,
            ma_windows=config.ma_windows,
            bars_per_day=config.bars_per_day,
            trading_days_per_year=config.trading_days_per_year,
        )
        self.detector = AnomalyDetector(config.zscore_threshold)
        self.aggregator = IntradayAggregator()

    @staticmethod
    def _build_provider(config: AnalysisConfig) -> BaseBarProvider:
        kwargs: dict[str, Any] = {}
        if config.provider == ProviderType.POLYGON:
            kwargs["api_key"] = config.polygon_api_key
            kwargs["timezone"] = ZoneInfo(config.timezone)
        return create_provider(config.provider, **kwargs)

    # ---------------------------------------------------------------- fetch

    def fetch(self) -> BarSeries:
        """Fetch the configured symbol and date range as a BarSeries."""
        cfg = self.config
        bars = self.provider.get_bars(cfg.symbol, cfg.start, cfg.end, cfg.timeframe)
        if not bars:
            raise AnalysisError(
                f"No {cfg.timeframe} bars for {cfg.symbol} between {cfg.start} and {cfg.end}",
                code=AnalysisErrorCode.NO_DATA,
            )
        logger.info("Fetched %d %s bars for %s", len(bars), cfg.timeframe, cfg.symbol)
        return BarSeries.from_bars(bars, cfg.symbol, cfg.timezone, cfg.timeframe)

    # -------------------------------------------------------------- analyze

    def analyze(self, series: BarSeries) -> AnalysisResult:
        """Run every analytical component over one raw series.

        Raises:
            AnalysisError: VALIDATION_FAILED for malformed bars.
        """
        cleaned = self.preprocessor.clean(series)
        indicators = self.indicators.compute_all(cleaned)
        result = AnalysisResult(
            cleaned=cleaned,
            indicators=indicators,
            daily=self.statistics.daily_statistics(cleaned),
            summary=self.statistics.summary_statistics(cleaned),
            anomalies=self.detector.detect(cleaned.returns),
            intraday=self.aggregator.aggregate(cleaned, indicators.volatility),
        )
        logger.info(
            "%s: %d bars analysed over %d days, %d anomalies at |z| > %g",
            series.symbol or "series", len(cleaned), len(result.daily),
            len(result.anomalies), self.detector.threshold,
        )
        return result

    def run(self) -> AnalysisResult:
        return self.analyze(self.fetch())
