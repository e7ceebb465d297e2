"""Estimates of the space axes take up, for laying out charts."""

from __future__ import annotations

import logging
from typing import Any

from stackchart.exceptions import InvalidArgumentError
from stackchart.utils import max_characters

logger = logging.getLogger(__name__)


def compute_axis_text_and_tick_buffer(axis: Any, font_size: float | None) -> float:
    """Estimate how many pixels an axis' labels and ticks occupy.

    Label width is approximated as character count times font size; no glyph
    measurement happens.

    Args:
        axis: Axis descriptor exposing ``scale()``, ``tick_format()``,
            ``tick_size()``, ``tick_size_outer()`` and ``tick_padding()``.
        font_size: Font size of the tick labels, in pixels.

    Returns:
        ``longest_label_length * font_size + max(tick_size + tick_padding,
        tick_size_outer)``. The label term is 0 when the tick format is ``""``.

    Raises:
        InvalidArgumentError: If ``axis`` or ``font_size`` is None.
    """
    if axis is None:
        raise InvalidArgumentError("axis")
    if font_size is None:
        raise InvalidArgumentError("font_size")

    domain = axis.scale().domain()
    tick_format = axis.tick_format()
    tick_size = axis.tick_size()
    tick_size_outer = axis.tick_size_outer()
    tick_padding = axis.tick_padding()

    max_tick_size = max(tick_size + tick_padding, tick_size_outer)
    longest_label = max_characters([str(value) for value in domain])

    # Ticks remain when labels are suppressed.
    if tick_format == "":
        longest_label = 0

    buffer = longest_label * font_size + max_tick_size
    logger.debug(
        "Axis buffer %s (longest label %d chars, font %s, ticks %s)",
        buffer,
        longest_label,
        font_size,
        max_tick_size,
    )
    return buffer
