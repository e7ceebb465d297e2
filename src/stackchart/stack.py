"""Stacking of wide rows into cumulative interval series."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StackPoint:
    """One ``[start, end)`` interval of a stacked series."""

    start: float
    end: float
    data: Mapping[str, Any]

    @property
    def width(self) -> float:
        return self.end - self.start


@dataclass
class StackSeries:
    """All intervals of a single key, one per input row."""

    key: str
    index: int
    points: list[StackPoint] = field(default_factory=list)

    def __iter__(self):
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)


def stack(rows: Sequence[Mapping[str, Any]], keys: Sequence[str]) -> list[StackSeries]:
    """Stack ``keys`` of every row on top of each other, in key order.

    The first key of a row starts at 0 and each following key starts where
    the previous one ended, so the intervals of a row are contiguous and
    cover ``[0, sum of the row's values]``.
    """
    series = [StackSeries(key=key, index=i) for i, key in enumerate(keys)]
    for row in rows:
        offset: float = 0
        for s in series:
            value = row[s.key]
            s.points.append(StackPoint(start=offset, end=offset + value, data=row))
            offset += value
    return series
