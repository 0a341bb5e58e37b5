"""Preprocessor — validation, log returns, and IQR outlier fencing."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.models.bar import BarSeries
from intradayvol.models.derived import DerivedSeries
from intradayvol.numeric import quartiles
from intradayvol.quality import validate_bars

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fence:
    """Closed interval of accepted values."""

    lower: float
    upper: float

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


def iqr_fence(values: Iterable[float | None], multiplier: float = 1.5) -> Fence | None:
    """Tukey fence ``[Q1 - k*IQR, Q3 + k*IQR]`` over the defined values.

    Returns None when no value is defined.
    """
    q = quartiles(values)
    if q is None:
        return None
    q1, q3 = q
    h = multiplier * (q3 - q1)
    return Fence(q1 - h, q3 + h)


def _apply_fence(values: Sequence[float | None], fence: Fence | None) -> list[float | None]:
    """Mark values outside ``fence`` undefined, keeping positions."""
    return [
        v if v is not None and (fence is None or fence.contains(v)) else None
        for v in values
    ]


def log_returns(closes: Sequence[float]) -> list[float | None]:
    """``ln(close[i]) - ln(close[i-1])``; the first entry is undefined."""
    if not closes:
        return []
    logs = [math.log(c) for c in closes]
    return [None] + [cur - prev for prev, cur in zip(logs, logs[1:])]


@dataclass(frozen=True)
class CleanedSeries:
    """Output of ``Preprocessor.clean``.

    Every bar has a defined close and a defined return.

    Attributes:
        bars: Surviving bars, contiguous.
        returns: Log return per surviving bar.
        close_fence: Fence applied to closes (None if nothing to fence).
        return_fence: Fence applied to returns (None if nothing to fence).
        raw_count: Bars in the raw series the fences were derived from.
    """

    bars: BarSeries
    returns: DerivedSeries
    close_fence: Fence | None
    return_fence: Fence | None
    raw_count: int

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def dropped_count(self) -> int:
        return self.raw_count - len(self.bars)

    @property
    def is_empty(self) -> bool:
        return len(self.bars) == 0


class Preprocessor:
    """Cleans a raw BarSeries into a CleanedSeries.

    Steps: validate, drop incomplete bars, compute log returns, fence
    closes and returns independently, drop bars with either undefined.
    """

    def __init__(self, iqr_multiplier: float = 1.5) -> None:
        if iqr_multiplier < 0:
            raise AnalysisError(
                "iqr_multiplier must be >= 0", code=AnalysisErrorCode.INVALID_CONFIG,
            )
        self.iqr_multiplier = iqr_multiplier

    def clean(self, series: BarSeries | CleanedSeries) -> CleanedSeries:
        """Clean ``series``.

        A CleanedSeries is re-filtered with its own recorded fences and
        existing returns, which leaves it unchanged.

        Raises:
            AnalysisError: VALIDATION_FAILED for malformed bars.
        """
        if isinstance(series, CleanedSeries):
            return self._refilter(series)

        self._validate(series)

        complete = series.take([i for i, b in enumerate(series) if b.is_complete])
        closes = [float(b.close) for b in complete]
        returns = log_returns(closes)

        close_fence = iqr_fence(closes, self.iqr_multiplier)
        return_fence = iqr_fence(returns, self.iqr_multiplier)
        logger.debug(
            "%s fences: close=%s return=%s", series.symbol, close_fence, return_fence,
        )

        fenced_closes = _apply_fence(closes, close_fence)
        fenced_returns = _apply_fence(returns, return_fence)
        keep = [
            i for i in range(len(complete))
            if fenced_closes[i] is not None and fenced_returns[i] is not None
        ]

        bars = complete.take(keep)
        cleaned = CleanedSeries(
            bars=bars,
            returns=DerivedSeries.build("return", bars.timestamps, (fenced_returns[i] for i in keep)),
            close_fence=close_fence,
            return_fence=return_fence,
            raw_count=len(series),
        )
        logger.info(
            "%s: kept %d of %d bars (%d incomplete, %d fenced or without return)",
            series.symbol or "series", len(cleaned), len(series),
            len(series) - len(complete), len(complete) - len(keep),
        )
        return cleaned

    @staticmethod
    def _validate(series: BarSeries) -> None:
        result = validate_bars(series)
        for check in result.warnings:
            logger.warning("%s: %s: %s", series.symbol or "series", check.name, check.message)
        if result.errors:
            msgs = "; ".join(f"{c.name}: {c.message}" for c in result.errors)
            raise AnalysisError(
                f"Validation failed: {msgs}",
                code=AnalysisErrorCode.VALIDATION_FAILED,
            )

    @staticmethod
    def _refilter(cleaned: CleanedSeries) -> CleanedSeries:
        closes = _apply_fence([b.close for b in cleaned.bars], cleaned.close_fence)
        returns = _apply_fence(cleaned.returns.values, cleaned.return_fence)
        keep = [
            i for i in range(len(cleaned))
            if closes[i] is not None and returns[i] is not None
        ]
        return CleanedSeries(
            bars=cleaned.bars.take(keep),
            returns=cleaned.returns.take(keep),
            close_fence=cleaned.close_fence,
            return_fence=cleaned.return_fence,
            raw_count=cleaned.raw_count,
        )
