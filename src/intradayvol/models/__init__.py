"""Analysis data models."""

from intradayvol.models.bar import DEFAULT_TIMEZONE, Bar, BarSeries
from intradayvol.models.derived import DerivedSeries
from intradayvol.models.records import AnomalyRecord, DailyStat, HourlyBucket, SummaryStat

__all__ = [
    "DEFAULT_TIMEZONE",
    "Bar",
    "BarSeries",
    "DerivedSeries",
    "DailyStat",
    "SummaryStat",
    "AnomalyRecord",
    "HourlyBucket",
]
