"""intradayvol — intraday volatility and liquidity analytics for one equity.

Outlier-robust log returns, rolling volatility, moving averages, session
VWAP, daily and hour-of-day aggregates, and z-score anomaly flags over a
5-minute (or any fixed-periodicity) bar series.

Quick start::

    from intradayvol import create_analyzer_from_env
    result = create_analyzer_from_env(symbol="AAPL").run()
    frames = result.to_frames()
"""

from __future__ import annotations

from intradayvol.anomaly import AnomalyDetector
from intradayvol.config import AnalysisConfig, ProviderType, config_from_env
from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.indicators import IndicatorEngine, IndicatorSet
from intradayvol.intraday import IntradayAggregator
from intradayvol.models.bar import Bar, BarSeries
from intradayvol.models.derived import DerivedSeries
from intradayvol.models.records import AnomalyRecord, DailyStat, HourlyBucket, SummaryStat
from intradayvol.pipeline import AnalysisResult, IntradayAnalyzer
from intradayvol.preprocess import CleanedSeries, Fence, Preprocessor
from intradayvol.quality import ValidationCheck, ValidationResult, validate_bars
from intradayvol.stats import StatisticsEngine

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "IntradayAnalyzer",
    "AnalysisResult",
    "create_analyzer_from_env",
    # Components
    "Preprocessor",
    "CleanedSeries",
    "Fence",
    "StatisticsEngine",
    "IndicatorEngine",
    "IndicatorSet",
    "AnomalyDetector",
    "IntradayAggregator",
    # Validation
    "validate_bars",
    "ValidationCheck",
    "ValidationResult",
    # Config
    "AnalysisConfig",
    "ProviderType",
    "config_from_env",
    # Errors
    "AnalysisError",
    "AnalysisErrorCode",
    # Models
    "Bar",
    "BarSeries",
    "DerivedSeries",
    "DailyStat",
    "SummaryStat",
    "AnomalyRecord",
    "HourlyBucket",
]


def create_analyzer_from_env(**overrides) -> IntradayAnalyzer:
    """Zero-config factory — reads settings from ``INTRADAYVOL_*`` env vars.

    See ``intradayvol.config.config_from_env`` for the variable list.
    Keyword overrides win over the environment.
    """
    return IntradayAnalyzer(config_from_env(**overrides))
