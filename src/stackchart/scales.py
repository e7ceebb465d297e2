"""Scales mapping data values to pixel positions and colors.

Three scales cover everything the stacked bar chart needs:

- :class:`LinearScale` for the continuous value axis
- :class:`BandScale` for the discrete category axis
- :class:`OrdinalScale` for sub-category colors
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any

from stackchart.utils import format_number


# =============================================================================
# Tick generation
# =============================================================================

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
    """Return a 1, 2 or 5 times power-of-ten tick step.

    Negative results encode the reciprocal of a fractional step so that tick
    values can be computed by division without rounding noise.
    """
    if count <= 0:
        return 0.0
    step = (stop - start) / count
    if step <= 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


def ticks(start: float, stop: float, count: int = 10) -> list[float]:
    """Return roughly ``count`` evenly spaced, human friendly values."""
    if start == stop and count > 0:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start

    inc = tick_increment(start, stop, count)
    if inc == 0:
        return []
    if inc > 0:
        r0 = math.ceil(start / inc)
        r1 = math.floor(stop / inc)
        values = [(r0 + i) * inc for i in range(r1 - r0 + 1)]
    else:
        inc = -inc
        r0 = math.ceil(start * inc)
        r1 = math.floor(stop * inc)
        values = [(r0 + i) / inc for i in range(r1 - r0 + 1)]

    values = [int(v) if float(v).is_integer() else v for v in values]
    return values[::-1] if reverse else values


# =============================================================================
# Linear
# =============================================================================


class LinearScale:
    """Continuous scale mapping ``[d0, d1]`` onto ``[r0, r1]``."""

    def __init__(
        self,
        domain: Sequence[float] = (0, 1),
        range: Sequence[float] = (0, 1),
    ) -> None:
        self._domain = [domain[0], domain[1]]
        self._range = [range[0], range[1]]

    def domain(self, *values: Sequence[float]) -> Any:
        if not values:
            return list(self._domain)
        self._domain = [values[0][0], values[0][1]]
        return self

    def range(self, *values: Sequence[float]) -> Any:
        if not values:
            return list(self._range)
        self._range = [values[0][0], values[0][1]]
        return self

    def __call__(self, value: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        span = d1 - d0
        t = (value - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        span = r1 - r0
        t = (pixel - r0) / span if span else 0.5
        return d0 + t * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        return ticks(self._domain[0], self._domain[-1], count)

    def tick_format(self) -> Callable[[Any], str]:
        return format_number

    def copy(self) -> LinearScale:
        return LinearScale(self._domain, self._range)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self._domain}, range={self._range})"


# =============================================================================
# Band
# =============================================================================


class BandScale:
    """Discrete scale dividing a pixel range into uniform, padded bands.

    Each domain value owns one band; ``scale(value)`` returns the band's start
    and :attr:`bandwidth` its extent. Padding is a fraction of the step: inner
    padding between bands, outer padding before the first and after the last.
    Values not in the domain map to ``None``.
    """

    def __init__(
        self,
        domain: Sequence[Any] = (),
        range: Sequence[float] = (0, 1),
        padding_inner: float = 0.0,
        padding_outer: float = 0.0,
        align: float = 0.5,
    ) -> None:
        self._domain = list(dict.fromkeys(domain))
        self._range = [range[0], range[1]]
        self._padding_inner = min(1.0, padding_inner)
        self._padding_outer = padding_outer
        self._align = max(0.0, min(1.0, align))
        self._rescale()

    def _rescale(self) -> None:
        n = len(self._domain)
        r0, r1 = self._range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)

        self._step = (stop - start) / max(
            1, n - self._padding_inner + self._padding_outer * 2
        )
        start += (stop - start - self._step * (n - self._padding_inner)) * self._align
        self._bandwidth = self._step * (1 - self._padding_inner)

        positions = [start + self._step * i for i in range(n)]
        if reverse:
            positions.reverse()
        self._index = dict(zip(self._domain, positions))

    def domain(self, *values: Sequence[Any]) -> Any:
        if not values:
            return list(self._domain)
        self._domain = list(dict.fromkeys(values[0]))
        self._rescale()
        return self

    def range(self, *values: Sequence[float]) -> Any:
        if not values:
            return list(self._range)
        self._range = [values[0][0], values[0][1]]
        self._rescale()
        return self

    def padding(self, value: float) -> BandScale:
        """Set inner and outer padding to the same fraction."""
        self._padding_inner = min(1.0, value)
        self._padding_outer = value
        self._rescale()
        return self

    @property
    def padding_inner(self) -> float:
        return self._padding_inner

    @property
    def padding_outer(self) -> float:
        return self._padding_outer

    @property
    def bandwidth(self) -> float:
        return self._bandwidth

    @property
    def step(self) -> float:
        return self._step

    def __call__(self, value: Any) -> float | None:
        return self._index.get(value)

    def ticks(self, count: int = 10) -> list[Any]:
        return list(self._domain)

    def tick_format(self) -> Callable[[Any], str]:
        return str

    def copy(self) -> BandScale:
        return BandScale(
            self._domain,
            self._range,
            self._padding_inner,
            self._padding_outer,
            self._align,
        )

    def __repr__(self) -> str:
        return (
            f"BandScale(domain={self._domain}, range={self._range}, "
            f"padding_inner={self._padding_inner}, padding_outer={self._padding_outer})"
        )


# =============================================================================
# Ordinal
# =============================================================================


class OrdinalScale:
    """Discrete scale mapping domain values onto a cyclic output range.

    Looking up a value that is not yet in the domain appends it, so the
    mapping stays stable for values first seen at render time.
    """

    def __init__(self, domain: Sequence[Any] = (), range: Sequence[Any] = ()) -> None:
        self._index: dict[Any, int] = {}
        self._domain: list[Any] = []
        for value in domain:
            self._add(value)
        self._range = list(range)

    def _add(self, value: Any) -> int:
        if value not in self._index:
            self._index[value] = len(self._domain)
            self._domain.append(value)
        return self._index[value]

    def domain(self, *values: Sequence[Any]) -> Any:
        if not values:
            return list(self._domain)
        self._index = {}
        self._domain = []
        for value in values[0]:
            self._add(value)
        return self

    def range(self, *values: Sequence[Any]) -> Any:
        if not values:
            return list(self._range)
        self._range = list(values[0])
        return self

    def __call__(self, value: Any) -> Any:
        if not self._range:
            return None
        return self._range[self._add(value) % len(self._range)]

    def copy(self) -> OrdinalScale:
        return OrdinalScale(self._domain, self._range)

    def __repr__(self) -> str:
        return f"OrdinalScale(domain={self._domain}, range={self._range})"
