"""Tests for StatisticsEngine — daily and summary aggregates."""

import math
from datetime import date, datetime, timedelta

import numpy as np
import pytest

from intradayvol.models.bar import Bar, BarSeries
from intradayvol.models.derived import DerivedSeries
from intradayvol.preprocess import CleanedSeries, Preprocessor
from intradayvol.stats import StatisticsEngine

from conftest import ET


def _cleaned(rows) -> CleanedSeries:
    """rows: (timestamp, close, high, low, volume, ret)."""
    bars = BarSeries.from_bars(
        [Bar(ts, c, h, l, c, v) for ts, c, h, l, v, _ in rows], "TEST",
    )
    returns = DerivedSeries.build("return", bars.timestamps, [r[5] for r in rows])
    return CleanedSeries(bars, returns, None, None, len(rows))


def _day(day: int, closes, returns, volume=100.0):
    base = datetime(2024, 1, day, 10, 0, tzinfo=ET)
    return [
        (base + timedelta(minutes=5 * i), c, c + 1.0, c - 1.0, volume, r)
        for i, (c, r) in enumerate(zip(closes, returns))
    ]


class TestDailyStatistics:
    def test_one_record_per_date_in_order(self, two_day_series):
        cleaned = Preprocessor(iqr_multiplier=100).clean(two_day_series)
        daily = StatisticsEngine().daily_statistics(cleaned)
        assert [d.date for d in daily] == [date(2024, 1, 16), date(2024, 1, 17)]
        assert sum(d.bar_count for d in daily) == len(cleaned)

    def test_values(self):
        rets = [0.01, -0.02, 0.005, 0.03]
        closes = [100.0, 98.0, 99.0, 102.0]
        cleaned = _cleaned(_day(16, closes, rets, volume=50.0))
        (stat,) = StatisticsEngine().daily_statistics(cleaned)

        assert stat.bar_count == 4
        assert stat.daily_return == pytest.approx(sum(rets))
        expected_vol = np.std(rets, ddof=1) * math.sqrt(78)
        assert stat.volatility == pytest.approx(expected_vol, rel=1e-12)
        assert stat.volume_total == 200.0
        assert stat.volume_average == 50.0
        assert stat.average_close == pytest.approx(99.75)
        # max(high) - min(low) = 103 - 97
        assert stat.price_range == pytest.approx(6.0)

    def test_skewness_formula(self):
        rets = [0.01, -0.02, 0.005, 0.03]
        cleaned = _cleaned(_day(16, [100.0] * 4, rets))
        (stat,) = StatisticsEngine().daily_statistics(cleaned)
        x = np.array(rets)
        d = x - x.mean()
        g1 = np.mean(d ** 3) / np.mean(d ** 2) ** 1.5
        assert stat.skewness == pytest.approx(g1, rel=1e-12)

    def test_small_groups(self):
        rows = _day(16, [100.0, 101.0], [0.01, -0.01]) + _day(17, [102.0], [0.02])
        daily = StatisticsEngine().daily_statistics(_cleaned(rows))
        two, one = daily
        assert two.skewness is None
        assert two.volatility is not None
        assert one.volatility is None
        assert one.skewness is None
        assert one.daily_return == pytest.approx(0.02)

    def test_custom_bars_per_day(self):
        rets = [0.01, -0.01, 0.02]
        cleaned = _cleaned(_day(16, [100.0] * 3, rets))
        (stat,) = StatisticsEngine(bars_per_day=390).daily_statistics(cleaned)
        assert stat.volatility == pytest.approx(np.std(rets, ddof=1) * math.sqrt(390))

    def test_empty(self):
        cleaned = Preprocessor().clean(BarSeries())
        assert StatisticsEngine().daily_statistics(cleaned) == []


class TestSummaryStatistics:
    def test_values(self, two_day_series):
        cleaned = Preprocessor(iqr_multiplier=100).clean(two_day_series)
        summary = StatisticsEngine().summary_statistics(cleaned)
        rets = np.array(cleaned.returns.values, dtype=float)

        assert summary.bar_count == len(cleaned)
        assert summary.start == cleaned.bars[0].timestamp
        assert summary.end == cleaned.bars[-1].timestamp
        assert summary.mean_return == pytest.approx(rets.mean())
        assert summary.volatility == pytest.approx(
            rets.std(ddof=1) * math.sqrt(252 * 78), rel=1e-12,
        )
        assert summary.mean_volume == pytest.approx(
            np.mean([b.volume for b in cleaned.bars]),
        )

    def test_constant_zero_returns(self):
        bars = [
            Bar(datetime(2024, 1, 16, 9, 30, tzinfo=ET) + timedelta(minutes=5 * i),
                50.0, 50.5, 49.5, 50.0, 100.0)
            for i in range(20)
        ]
        cleaned = Preprocessor().clean(BarSeries.from_bars(bars))
        summary = StatisticsEngine().summary_statistics(cleaned)
        assert summary.bar_count == 19
        assert summary.mean_return == 0.0
        assert summary.volatility == 0.0
        assert summary.skewness is None

    def test_empty(self):
        summary = StatisticsEngine().summary_statistics(Preprocessor().clean(BarSeries()))
        assert summary.bar_count == 0
        assert summary.mean_return is None
        assert summary.volatility is None
        assert summary.skewness is None
        assert summary.mean_volume is None
