"""DataFrame views of analysis output for plotting and reporting.

Each function returns a frame that needs no further computation to plot;
undefined values become NaN.
"""

from __future__ import annotations

from dataclasses import asdict, fields

import pandas as pd

from intradayvol.indicators import IndicatorSet
from intradayvol.models.records import AnomalyRecord, DailyStat, HourlyBucket, SummaryStat
from intradayvol.preprocess import CleanedSeries

BAR_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume", "return"]


def _records_frame(records: list, record_type: type) -> pd.DataFrame:
    columns = [f.name for f in fields(record_type)]
    return pd.DataFrame([asdict(r) for r in records], columns=columns)


def bars_frame(cleaned: CleanedSeries, indicators: IndicatorSet | None = None) -> pd.DataFrame:
    """Cleaned bars with return and, if given, one column per indicator."""
    records = [
        {
            "timestamp": cleaned.bars.local_timestamp(i),
            "open": float(b.open),
            "high": float(b.high),
            "low": float(b.low),
            "close": float(b.close),
            "volume": float(b.volume),
            "return": cleaned.returns[i],
        }
        for i, b in enumerate(cleaned.bars)
    ]
    df = pd.DataFrame(records, columns=BAR_COLUMNS)
    if indicators is not None:
        for series in indicators.all_series():
            df[series.name] = pd.Series(series.values, index=df.index, dtype="float64")
    df["return"] = df["return"].astype("float64")
    return df


def daily_frame(daily: list[DailyStat]) -> pd.DataFrame:
    return _records_frame(daily, DailyStat)


def summary_frame(summary: SummaryStat) -> pd.DataFrame:
    """Single-row frame."""
    return _records_frame([summary], SummaryStat)


def anomalies_frame(anomalies: list[AnomalyRecord]) -> pd.DataFrame:
    df = _records_frame(anomalies, AnomalyRecord)
    df["direction"] = [a.direction for a in anomalies]
    return df


def intraday_frame(intraday: list[HourlyBucket]) -> pd.DataFrame:
    return _records_frame(intraday, HourlyBucket)


def result_frames(
    cleaned: CleanedSeries,
    indicators: IndicatorSet,
    daily: list[DailyStat],
    summary: SummaryStat,
    anomalies: list[AnomalyRecord],
    intraday: list[HourlyBucket],
) -> dict[str, pd.DataFrame]:
    return {
        "bars": bars_frame(cleaned, indicators),
        "daily": daily_frame(daily),
        "summary": summary_frame(summary),
        "anomalies": anomalies_frame(anomalies),
        "intraday": intraday_frame(intraday),
    }
