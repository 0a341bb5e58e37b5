"""Polygon.io bar provider (REST aggregates endpoint via ``requests``).

Install the optional dependency:
    pip install intradayvol[polygon]
"""

from __future__ import annotations

import logging
import os
import time
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

import requests

from intradayvol.calendar import EXCHANGE_TZ, SESSION_MINUTES, timeframe_minutes
from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.models.bar import Bar
from intradayvol.providers.base import BaseBarProvider

logger = logging.getLogger(__name__)


class PolygonProvider(BaseBarProvider):
    """Fetch aggregate bars from Polygon.io.

    Timestamps (epoch milliseconds, bar start) are converted to the exchange
    timezone so date and hour grouping downstream is exchange-local.
    """

    base_url = "https://api.polygon.io"

    def __init__(
        self,
        api_key: str | None = None,
        timezone: ZoneInfo = EXCHANGE_TZ,
        timeout: float = 30.0,
        page_delay: float = 0.25,
    ) -> None:
        self.api_key = api_key or os.getenv("POLYGON_API_KEY")
        if not self.api_key:
            raise AnalysisError(
                "Polygon API key required. Set POLYGON_API_KEY env var or pass api_key.",
                code=AnalysisErrorCode.AUTH_FAILED,
            )
        self.timezone = timezone
        self.timeout = timeout
        self.page_delay = page_delay
        self.session = requests.Session()

    _TF_MAP: dict[str, tuple[int, str]] = {
        "1min": (1, "minute"),
        "5min": (5, "minute"),
        "15min": (15, "minute"),
        "1hour": (1, "hour"),
        "1day": (1, "day"),
    }

    @classmethod
    def _range_for(cls, timeframe: str) -> tuple[int, str]:
        if timeframe in cls._TF_MAP:
            return cls._TF_MAP[timeframe]
        minutes = timeframe_minutes(timeframe)
        if timeframe.endswith("day"):
            return minutes // SESSION_MINUTES, "day"
        if minutes % 60 == 0:
            return minutes // 60, "hour"
        return minutes, "minute"

    def get_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        timeframe: str = "5min",
    ) -> list[Bar]:
        mult, span = self._range_for(timeframe)
        url: str | None = (
            f"{self.base_url}/v2/aggs/ticker/{symbol.upper()}"
            f"/range/{mult}/{span}/{start}/{end}"
        )
        params: dict[str, Any] = {
            "apiKey": self.api_key,
            "adjusted": "true",
            "sort": "asc",
            "limit": 50000,
        }

        bars: list[Bar] = []
        try:
            while url:
                resp = self.session.get(url, params=params, timeout=self.timeout)
                self._check_response(resp)
                data = resp.json()
                bars.extend(self._to_bar(r) for r in data.get("results") or [])

                url = data.get("next_url")
                if url:
                    params = {"apiKey": self.api_key}
                    time.sleep(self.page_delay)
        except AnalysisError:
            raise
        except requests.Timeout as exc:
            raise AnalysisError(
                f"Polygon request timed out: {exc}",
                code=AnalysisErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except (requests.RequestException, ValueError, KeyError) as exc:
            raise AnalysisError(
                f"Polygon get_bars failed: {exc}",
                code=AnalysisErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc

        logger.info("Fetched %d %s bars for %s from Polygon", len(bars), timeframe, symbol.upper())
        return bars

    def _to_bar(self, r: dict[str, Any]) -> Bar:
        return Bar(
            timestamp=datetime.fromtimestamp(r["t"] / 1000, tz=self.timezone),
            open=_opt_float(r.get("o")),
            high=_opt_float(r.get("h")),
            low=_opt_float(r.get("l")),
            close=_opt_float(r.get("c")),
            volume=_opt_float(r.get("v")),
            vwap=_opt_float(r.get("vw")),
            num_trades=int(r["n"]) if r.get("n") is not None else None,
        )

    @staticmethod
    def _check_response(resp: requests.Response) -> None:
        if resp.status_code in (401, 403):
            raise AnalysisError(
                f"Polygon auth failed ({resp.status_code})",
                code=AnalysisErrorCode.AUTH_FAILED,
            )
        if resp.status_code == 429:
            raise AnalysisError(
                "Polygon rate limit exceeded",
                code=AnalysisErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code >= 400:
            raise AnalysisError(
                f"Polygon HTTP {resp.status_code}: {resp.text[:200]}",
                code=AnalysisErrorCode.PROVIDER_ERROR,
                retryable=resp.status_code >= 500,
            )


def _opt_float(value: Any) -> float | None:
    return None if value is None else float(value)
