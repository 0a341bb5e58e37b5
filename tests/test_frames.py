"""Tests for DataFrame views handed to rendering."""

from datetime import date

import pandas as pd

from intradayvol.config import AnalysisConfig
from intradayvol.frames import anomalies_frame, bars_frame, daily_frame, intraday_frame
from intradayvol.indicators import IndicatorEngine
from intradayvol.models.bar import BarSeries
from intradayvol.pipeline import IntradayAnalyzer
from intradayvol.preprocess import Preprocessor
from intradayvol.providers.mock import MockProvider


class TestResultFrames:
    def test_keys_and_rows(self):
        cfg = AnalysisConfig(symbol="AAPL", start=date(2024, 1, 16), end=date(2024, 1, 17))
        result = IntradayAnalyzer(cfg, MockProvider()).run()
        frames = result.to_frames()

        assert set(frames) == {"bars", "daily", "summary", "anomalies", "intraday"}
        assert len(frames["bars"]) == len(result.cleaned)
        assert len(frames["daily"]) == len(result.daily)
        assert len(frames["summary"]) == 1
        assert len(frames["anomalies"]) == len(result.anomalies)
        assert len(frames["intraday"]) == len(result.intraday)

    def test_bars_columns(self, mock_provider):
        bars = mock_provider.get_bars("AAPL", date(2024, 1, 16), date(2024, 1, 16))
        cleaned = Preprocessor().clean(BarSeries.from_bars(bars))
        indicators = IndicatorEngine().compute_all(cleaned)
        df = bars_frame(cleaned, indicators)

        assert list(df.columns) == [
            "timestamp", "open", "high", "low", "close", "volume", "return",
            "volatility", "vwap", "ma20", "ma50",
        ]
        assert df["volatility"].iloc[:9].isna().all()
        assert df["ma50"].iloc[:49].isna().all()
        assert df["return"].notna().all()
        assert df["return"].dtype == "float64"

    def test_empty_frames_keep_columns(self):
        assert "price_range" in daily_frame([]).columns
        assert list(anomalies_frame([]).columns) == ["index", "timestamp", "zscore", "direction"]
        assert "average_volatility" in intraday_frame([]).columns
        empty = bars_frame(Preprocessor().clean(BarSeries()))
        assert isinstance(empty, pd.DataFrame)
        assert len(empty) == 0
