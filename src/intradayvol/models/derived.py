"""DerivedSeries — one derived numeric field aligned to a BarSeries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime

from intradayvol.errors import AnalysisError, AnalysisErrorCode
from intradayvol.numeric import clean_value


@dataclass(frozen=True)
class DerivedSeries:
    """Per-bar values aligned by position with a source series.

    ``None`` marks "no value" (e.g. leading positions of a rolling window).
    NaN and inf are normalized to ``None`` on construction.

    Attributes:
        name: Field name, e.g. "return", "volatility", "ma20".
        timestamps: Timestamps of the source bars.
        values: One value per timestamp.
    """

    name: str
    timestamps: tuple[datetime, ...]
    values: tuple[float | None, ...]

    def __post_init__(self) -> None:
        if len(self.timestamps) != len(self.values):
            raise AnalysisError(
                f"{self.name}: {len(self.values)} values for "
                f"{len(self.timestamps)} timestamps",
                code=AnalysisErrorCode.INVALID_SERIES,
            )
        object.__setattr__(self, "values", tuple(clean_value(v) for v in self.values))

    @classmethod
    def build(
        cls, name: str, timestamps: Iterable[datetime], values: Iterable[float | None],
    ) -> DerivedSeries:
        return cls(name, tuple(timestamps), tuple(values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float | None]:
        return iter(self.values)

    def __getitem__(self, index: int) -> float | None:
        return self.values[index]

    @property
    def defined_count(self) -> int:
        return sum(1 for v in self.values if v is not None)

    def defined(self) -> list[tuple[int, float]]:
        """(index, value) pairs for every defined position."""
        return [(i, v) for i, v in enumerate(self.values) if v is not None]

    def take(self, indices: Sequence[int]) -> DerivedSeries:
        return DerivedSeries(
            self.name,
            tuple(self.timestamps[i] for i in indices),
            tuple(self.values[i] for i in indices),
        )
