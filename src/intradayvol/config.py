"""Analysis configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from intradayvol.calendar import bars_per_session
from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.models.bar import DEFAULT_TIMEZONE


class ProviderType(Enum):
    """Supported bar data backends."""

    POLYGON = "polygon"
    MOCK = "mock"


def _default_end() -> date:
    return date.today() - timedelta(days=1)


def _default_start() -> date:
    return date.today() - timedelta(days=30)


@dataclass
class AnalysisConfig:
    """Configuration for IntradayAnalyzer.

    Attributes:
        symbol: Ticker symbol.
        start: First calendar date to fetch (inclusive).
        end: Last calendar date to fetch (inclusive).
        timeframe: Bar size — "1min", "5min", "15min", "1hour".
        timezone: Exchange timezone for date and hour grouping.
        provider: Bar data backend.
        polygon_api_key: Polygon.io API key.
        iqr_multiplier: Outlier fence width in interquartile ranges.
        volatility_window: Bars per rolling volatility window.
        ma_windows: Moving-average lengths in bars.
        zscore_threshold: Absolute z-score above which a return is anomalous.
        bars_per_day: Bars per trading day (annualization); defaults to the
            number of bars in a regular session for ``timeframe``.
        trading_days_per_year: Trading days per year (annualization).
    """

    symbol: str = "SPY"
    start: date = field(default_factory=_default_start)
    end: date = field(default_factory=_default_end)
    timeframe: str = "5min"
    timezone: str = DEFAULT_TIMEZONE
    provider: ProviderType = ProviderType.MOCK
    polygon_api_key: str | None = None

    iqr_multiplier: float = 1.5
    volatility_window: int = 10
    ma_windows: tuple[int, ...] = (20, 50)
    zscore_threshold: float = 2.0
    bars_per_day: int | None = None
    trading_days_per_year: int = 252

    def __post_init__(self) -> None:
        problems: list[str] = []
        if not self.symbol:
            problems.append("symbol is empty")
        if self.start > self.end:
            problems.append(f"start {self.start} is after end {self.end}")
        try:
            session_bars = bars_per_session(self.timeframe)
        except AnalysisError as exc:
            problems.append(exc.message)
            session_bars = 1
        if self.bars_per_day is None:
            self.bars_per_day = session_bars
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            problems.append(f"unknown timezone {self.timezone!r}")
        if self.iqr_multiplier < 0:
            problems.append("iqr_multiplier must be >= 0")
        if self.volatility_window < 1:
            problems.append("volatility_window must be >= 1")
        if any(k < 1 for k in self.ma_windows):
            problems.append("ma_windows must all be >= 1")
        if self.zscore_threshold < 0:
            problems.append("zscore_threshold must be >= 0")
        if self.bars_per_day < 1 or self.trading_days_per_year < 1:
            problems.append("annualization constants must be >= 1")
        if problems:
            raise AnalysisError(
                "Invalid configuration: " + "; ".join(problems),
                code=AnalysisErrorCode.INVALID_CONFIG,
            )
        self.symbol = self.symbol.upper()
        self.ma_windows = tuple(self.ma_windows)


def config_from_env(**overrides) -> AnalysisConfig:
    """Build an AnalysisConfig from environment variables.

    Environment variables:
        INTRADAYVOL_SYMBOL: Ticker symbol (default: "SPY").
        INTRADAYVOL_START / INTRADAYVOL_END: ISO dates (default: last 30 days).
        INTRADAYVOL_TIMEFRAME: Bar size (default: "5min").
        INTRADAYVOL_TIMEZONE: Exchange timezone (default: "America/New_York").
        INTRADAYVOL_PROVIDER: "polygon" or "mock" (default: "mock").
        INTRADAYVOL_IQR_MULTIPLIER: Fence width (default: 1.5).
        INTRADAYVOL_VOL_WINDOW: Rolling volatility window (default: 10).
        INTRADAYVOL_MA_WINDOWS: Comma-separated MA lengths (default: "20,50").
        INTRADAYVOL_ZSCORE_THRESHOLD: Anomaly threshold (default: 2.0).
        INTRADAYVOL_BARS_PER_DAY: Bars per trading day (default: bars in
            one regular session for the timeframe, 78 for "5min").
        INTRADAYVOL_TRADING_DAYS: Trading days per year (default: 252).
        POLYGON_API_KEY: Polygon.io API key.

    Keyword ``overrides`` take precedence over the environment.

    Raises:
        AnalysisError: INVALID_CONFIG for unparseable values or an unknown
            provider name.
    """
    try:
        kwargs: dict = {
            "symbol": os.getenv("INTRADAYVOL_SYMBOL", "SPY"),
            "timeframe": os.getenv("INTRADAYVOL_TIMEFRAME", "5min"),
            "timezone": os.getenv("INTRADAYVOL_TIMEZONE", DEFAULT_TIMEZONE),
            "provider": ProviderType(os.getenv("INTRADAYVOL_PROVIDER", "mock").strip().lower()),
            "polygon_api_key": os.getenv("POLYGON_API_KEY"),
            "iqr_multiplier": float(os.getenv("INTRADAYVOL_IQR_MULTIPLIER", "1.5")),
            "volatility_window": int(os.getenv("INTRADAYVOL_VOL_WINDOW", "10")),
            "ma_windows": tuple(
                int(w) for w in os.getenv("INTRADAYVOL_MA_WINDOWS", "20,50").split(",") if w.strip()
            ),
            "zscore_threshold": float(os.getenv("INTRADAYVOL_ZSCORE_THRESHOLD", "2.0")),
            "trading_days_per_year": int(os.getenv("INTRADAYVOL_TRADING_DAYS", "252")),
        }
        if os.getenv("INTRADAYVOL_BARS_PER_DAY"):
            kwargs["bars_per_day"] = int(os.environ["INTRADAYVOL_BARS_PER_DAY"])
        if os.getenv("INTRADAYVOL_START"):
            kwargs["start"] = date.fromisoformat(os.environ["INTRADAYVOL_START"])
        if os.getenv("INTRADAYVOL_END"):
            kwargs["end"] = date.fromisoformat(os.environ["INTRADAYVOL_END"])
    except ValueError as exc:
        raise AnalysisError(
            f"Invalid configuration in environment: {exc}",
            code=AnalysisErrorCode.INVALID_CONFIG,
        ) from exc
    kwargs.update(overrides)
    return AnalysisConfig(**kwargs)
