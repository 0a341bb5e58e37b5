"""Tests for PolygonProvider with a fake HTTP session."""

from datetime import date, datetime
from typing import Any

import pytest

pytest.importorskip("requests")

import requests

from intradayvol.calendar import EXCHANGE_TZ
from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.providers.polygon import PolygonProvider

# 2024-01-16 14:30:00 UTC == 09:30 New York
T0 = 1705415400000


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: dict | None = None) -> None:
        self.status_code = status_code
        self._payload = payload or {}
        self.text = str(self._payload)

    def json(self) -> dict:
        return self._payload


class _FakeSession:
    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def _agg(offset_min: int, close: float) -> dict:
    return {
        "t": T0 + offset_min * 60_000,
        "o": close, "h": close + 0.5, "l": close - 0.5, "c": close,
        "v": 1200, "vw": close, "n": 15,
    }


@pytest.fixture
def provider() -> PolygonProvider:
    return PolygonProvider(api_key="test-key", page_delay=0.0)


class TestPolygonProvider:
    def test_requires_key(self, monkeypatch):
        monkeypatch.delenv("POLYGON_API_KEY", raising=False)
        with pytest.raises(AnalysisError) as exc_info:
            PolygonProvider()
        assert exc_info.value.code == AnalysisErrorCode.AUTH_FAILED

    def test_paginates_and_converts(self, provider):
        provider.session = _FakeSession([
            _FakeResponse(payload={"results": [_agg(0, 100.0)], "next_url": "https://next/page"}),
            _FakeResponse(payload={"results": [_agg(5, 101.0)]}),
        ])
        bars = provider.get_bars("aapl", date(2024, 1, 16), date(2024, 1, 16), "5min")

        assert [b.close for b in bars] == [100.0, 101.0]
        assert bars[0].timestamp == datetime(2024, 1, 16, 9, 30, tzinfo=EXCHANGE_TZ)
        assert bars[0].timestamp.utcoffset() == EXCHANGE_TZ.utcoffset(bars[0].timestamp)
        assert bars[0].num_trades == 15
        url, params = provider.session.calls[0]
        assert url.endswith("/v2/aggs/ticker/AAPL/range/5/minute/2024-01-16/2024-01-16")
        assert params["apiKey"] == "test-key"
        assert provider.session.calls[1] == ("https://next/page", {"apiKey": "test-key"})

    def test_hourly_range(self, provider):
        provider.session = _FakeSession([_FakeResponse(payload={"results": []})])
        provider.get_bars("AAPL", date(2024, 1, 16), date(2024, 1, 16), "1hour")
        assert "/range/1/hour/" in provider.session.calls[0][0]

    def test_daily_range(self, provider):
        provider.session = _FakeSession([_FakeResponse(payload={"results": []})])
        provider.get_bars("AAPL", date(2024, 1, 16), date(2024, 1, 19), "1day")
        assert "/range/1/day/" in provider.session.calls[0][0]

    @pytest.mark.parametrize("timeframe,expected", [
        ("5min", (5, "minute")),
        ("30min", (30, "minute")),
        ("120min", (2, "hour")),
        ("2hour", (2, "hour")),
        ("1day", (1, "day")),
        ("2day", (2, "day")),
    ])
    def test_range_for(self, timeframe, expected):
        assert PolygonProvider._range_for(timeframe) == expected

    def test_missing_fields_become_none(self, provider):
        agg = _agg(0, 100.0)
        del agg["v"]
        provider.session = _FakeSession([_FakeResponse(payload={"results": [agg]})])
        (bar,) = provider.get_bars("AAPL", date(2024, 1, 16), date(2024, 1, 16))
        assert bar.volume is None
        assert not bar.is_complete

    @pytest.mark.parametrize("status,code,retryable", [
        (401, AnalysisErrorCode.AUTH_FAILED, False),
        (403, AnalysisErrorCode.AUTH_FAILED, False),
        (429, AnalysisErrorCode.RATE_LIMITED, True),
        (500, AnalysisErrorCode.PROVIDER_ERROR, True),
        (404, AnalysisErrorCode.PROVIDER_ERROR, False),
    ])
    def test_http_errors(self, provider, status, code, retryable):
        provider.session = _FakeSession([_FakeResponse(status_code=status)])
        with pytest.raises(AnalysisError) as exc_info:
            provider.get_bars("AAPL", date(2024, 1, 16), date(2024, 1, 16))
        assert exc_info.value.code == code
        assert exc_info.value.retryable is retryable

    def test_timeout(self, provider):
        provider.session = _FakeSession([requests.Timeout("slow")])
        with pytest.raises(AnalysisError) as exc_info:
            provider.get_bars("AAPL", date(2024, 1, 16), date(2024, 1, 16))
        assert exc_info.value.code == AnalysisErrorCode.TIMEOUT
        assert exc_info.value.retryable

    def test_connection_error(self, provider):
        provider.session = _FakeSession([requests.ConnectionError("down")])
        with pytest.raises(AnalysisError) as exc_info:
            provider.get_bars("AAPL", date(2024, 1, 16), date(2024, 1, 16))
        assert exc_info.value.code == AnalysisErrorCode.PROVIDER_ERROR
