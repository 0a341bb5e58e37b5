"""NYSE trading calendar — holidays, half days, session bar grids."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from intradayvol.errors import AnalysisError, AnalysisErrorCode

EXCHANGE_TZ = ZoneInfo("America/New_York")
REGULAR_OPEN = time(9, 30)
REGULAR_CLOSE = time(16, 0)
EARLY_CLOSE = time(13, 0)
SESSION_MINUTES = 390

_TIMEFRAME_RE = re.compile(r"^(\d+)(min|hour|day)$")


# ---- Holiday rules ----

def _observed(d: date) -> date:
    """Saturday holidays move to Friday, Sunday holidays to Monday."""
    if d.weekday() == 5:
        return d - timedelta(days=1)
    if d.weekday() == 6:
        return d + timedelta(days=1)
    return d


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """nth (1-indexed) occurrence of ``weekday`` in the month."""
    first = date(year, month, 1)
    return first + timedelta(days=(weekday - first.weekday()) % 7, weeks=n - 1)


def _last_weekday(year: int, month: int, weekday: int) -> date:
    nxt = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    last = nxt - timedelta(days=1)
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def _easter(year: int) -> date:
    """Gregorian Easter Sunday (anonymous algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def nyse_holidays(year: int) -> set[date]:
    """Full-day NYSE closures for ``year``."""
    holidays = {
        _nth_weekday(year, 1, 0, 3),   # MLK day
        _nth_weekday(year, 2, 0, 3),   # Presidents' day
        _easter(year) - timedelta(days=2),  # Good Friday
        _last_weekday(year, 5, 0),     # Memorial day
        _observed(date(year, 7, 4)),
        _nth_weekday(year, 9, 0, 1),   # Labor day
        _nth_weekday(year, 11, 3, 4),  # Thanksgiving
        _observed(date(year, 12, 25)),
    }
    # New Year's Day falling on Saturday is not observed on the prior Friday.
    new_year = date(year, 1, 1)
    if new_year.weekday() != 5:
        holidays.add(_observed(new_year))
    if year >= 2022:
        holidays.add(_observed(date(year, 6, 19)))
    return holidays


def nyse_half_days(year: int) -> set[date]:
    """NYSE early-close (13:00 ET) days for ``year``."""
    holidays = nyse_holidays(year)
    candidates = (
        _observed(date(year, 7, 4)) - timedelta(days=1),
        _nth_weekday(year, 11, 3, 4) + timedelta(days=1),
        date(year, 12, 24),
    )
    return {d for d in candidates if d.weekday() < 5 and d not in holidays}


# ---- Public API ----

def is_holiday(d: date) -> bool:
    return d in nyse_holidays(d.year)


def is_half_day(d: date) -> bool:
    return d in nyse_half_days(d.year)


def is_trading_day(d: date) -> bool:
    """Weekday and not an NYSE holiday."""
    return d.weekday() < 5 and not is_holiday(d)


def get_trading_dates(start: date, end: date) -> list[date]:
    """All trading dates in the range [start, end]."""
    dates: list[date] = []
    current = start
    while current <= end:
        if is_trading_day(current):
            dates.append(current)
        current += timedelta(days=1)
    return dates


def timeframe_minutes(timeframe: str) -> int:
    """Bar length in minutes for a timeframe string like "5min" or "1hour"."""
    match = _TIMEFRAME_RE.match(timeframe)
    if match is None or int(match.group(1)) < 1:
        raise AnalysisError(
            f"Invalid timeframe: {timeframe!r}",
            code=AnalysisErrorCode.INVALID_CONFIG,
        )
    count, unit = int(match.group(1)), match.group(2)
    if unit == "hour":
        return count * 60
    if unit == "day":
        return count * SESSION_MINUTES
    return count


def bars_per_session(timeframe: str) -> int:
    """Bars in a regular session, e.g. 78 for "5min"."""
    return max(SESSION_MINUTES // timeframe_minutes(timeframe), 1)


def session_bounds(d: date, tz: ZoneInfo = EXCHANGE_TZ) -> tuple[datetime, datetime]:
    """(open, close) of the regular session on ``d`` in exchange time."""
    close = EARLY_CLOSE if is_half_day(d) else REGULAR_CLOSE
    return (
        datetime.combine(d, REGULAR_OPEN, tzinfo=tz),
        datetime.combine(d, close, tzinfo=tz),
    )


def session_timestamps(
    d: date, timeframe: str = "5min", tz: ZoneInfo = EXCHANGE_TZ,
) -> list[datetime]:
    """Bar start times covering the session on ``d`` (empty on non-trading days)."""
    if not is_trading_day(d):
        return []
    step = timedelta(minutes=timeframe_minutes(timeframe))
    open_, close = session_bounds(d, tz)
    stamps: list[datetime] = []
    ts = open_
    while ts < close:
        stamps.append(ts)
        ts += step
    return stamps
