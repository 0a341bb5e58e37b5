"""Data quality validation for raw bar series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from intradayvol.calendar import timeframe_minutes
from intradayvol.models.bar import Bar, BarSeries

MAX_SAME_DAY_GAPS = 10
EXTREME_MOVE = 0.10


@dataclass
class ValidationCheck:
    """Single validation check result.

    Fatal checks reject the series; the rest are advisory.
    """

    name: str
    passed: bool
    message: str = ""
    fatal: bool = False


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    @property
    def errors(self) -> list[ValidationCheck]:
        return [c for c in self.checks if c.fatal and not c.passed]

    @property
    def warnings(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.fatal and not c.passed]

    def add(self, name: str, bad: int, message: str, *, fatal: bool) -> None:
        self.checks.append(ValidationCheck(name, bad == 0, message if bad else "", fatal))


def _ohlc_inconsistent(b: Bar) -> bool:
    return b.low > b.high or not (b.low <= b.open <= b.high and b.low <= b.close <= b.high)


def _is_naive(ts: datetime) -> bool:
    return ts.tzinfo is None or ts.utcoffset() is None


def validate_bars(series: BarSeries) -> ValidationResult:
    """Run all quality checks on a bar series.

    Fatal (malformed input):
        1. OHLC consistency (low <= open, close <= high)
        2. Positive prices
        3. Volume sanity (non-negative)
        4. Timestamp kinds (all timezone-aware or all naive)
        5. Timestamp ordering (strictly increasing)

    Advisory:
        6. Not empty
        7. No missing OHLCV fields (incomplete bars get dropped)
        8. Price sanity (no >10% single-bar close moves)
        9. Gap detection (more than 10 same-day gaps wider than one bar)

    Price and volume checks only look at complete bars. Ordering and gap
    checks are skipped when timestamp kinds are mixed.
    """
    result = ValidationResult()
    bars = series.bars
    complete = [b for b in bars if b.is_complete]

    # 1. OHLC consistency
    inconsistent = sum(1 for b in complete if _ohlc_inconsistent(b))
    result.add(
        "ohlc_consistency", inconsistent,
        f"{inconsistent} bars with low > high or open/close outside [low, high]",
        fatal=True,
    )

    # 2. Positive prices: log returns need close > 0
    non_positive = sum(
        1 for b in complete if min(b.open, b.high, b.low, b.close) <= 0
    )
    result.add(
        "price_positive", non_positive,
        f"{non_positive} bars with non-positive prices",
        fatal=True,
    )

    # 3. Volume sanity
    neg_vol = sum(1 for b in complete if b.volume < 0)
    result.add(
        "volume_sanity", neg_vol, f"{neg_vol} bars with negative volume", fatal=True,
    )

    # 4. Timestamp kinds: naive and aware datetimes do not compare
    naive = sum(1 for b in bars if _is_naive(b.timestamp))
    mixed = 0 < naive < len(bars)
    result.add(
        "timestamp_tz_consistency", int(mixed),
        f"{naive} naive and {len(bars) - naive} timezone-aware timestamps",
        fatal=True,
    )

    # 5. Timestamp ordering
    out_of_order = [] if mixed else [
        bars[i].timestamp
        for i in range(1, len(bars))
        if bars[i].timestamp <= bars[i - 1].timestamp
    ]
    result.add(
        "timestamp_order", len(out_of_order),
        f"{len(out_of_order)} non-increasing timestamps"
        + (f" (first at {out_of_order[0].isoformat()})" if out_of_order else ""),
        fatal=True,
    )

    # 6. Not empty
    result.add("not_empty", 0 if bars else 1, "No bars provided", fatal=False)

    # 7. Missing fields
    incomplete = len(bars) - len(complete)
    result.add(
        "no_nulls", incomplete, f"{incomplete} bars with missing OHLCV fields", fatal=False,
    )

    # 8. Price sanity: close-to-close moves over 10%
    extreme = sum(
        1
        for prev, cur in zip(complete, complete[1:])
        if prev.close > 0 and abs(cur.close - prev.close) / prev.close > EXTREME_MOVE
    )
    result.add(
        "price_sanity", extreme, f"{extreme} bars with >10% move", fatal=False,
    )

    # 9. Gap detection: overnight gaps are normal
    step = timedelta(minutes=timeframe_minutes(series.timeframe))
    large_gaps = 0 if mixed else sum(
        1
        for i in range(1, len(bars))
        if bars[i].timestamp - bars[i - 1].timestamp > step
        and series.local_date(i) == series.local_date(i - 1)
    )
    result.add(
        "gap_detection", large_gaps if large_gaps > MAX_SAME_DAY_GAPS else 0,
        f"{large_gaps} intraday gaps wider than {series.timeframe}",
        fatal=False,
    )

    return result
