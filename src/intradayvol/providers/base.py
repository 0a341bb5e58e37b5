"""Abstract base class for bar data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from intradayvol.models.bar import Bar


class BaseBarProvider(ABC):
    """Abstract base for historical bar sources.

    Providers only acquire data; all analysis happens downstream on the
    BarSeries built from their output.
    """

    @abstractmethod
    def get_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        timeframe: str = "5min",
    ) -> list[Bar]:
        """Fetch historical OHLCV bars.

        Args:
            symbol: Ticker symbol.
            start: Start date (inclusive).
            end: End date (inclusive).
            timeframe: Bar size — "1min", "5min", "15min", "1hour".

        Returns:
            List of Bar objects ordered by timestamp ascending.
        """
        ...
