"""Tests for axis buffer estimation."""

import pytest

from stackchart.axis import axis_bottom, axis_left
from stackchart.exceptions import InvalidArgumentError
from stackchart.layout import compute_axis_text_and_tick_buffer
from stackchart.scales import BandScale, LinearScale


@pytest.fixture
def y_axis():
    scale = BandScale(["BRCA1", "TP53"], [50, 700]).padding(0.2)
    return axis_left(scale).tick_size(0).tick_size_outer(0).tick_padding(3)


class TestComputeAxisTextAndTickBuffer:
    """Test the buffer estimate."""

    def test_label_length_times_font_plus_ticks(self, y_axis):
        """Test the basic estimate."""
        # "BRCA1" is 5 characters; max(0 + 3, 0) = 3
        assert compute_axis_text_and_tick_buffer(y_axis, 10) == 53

    def test_outer_tick_size_wins(self, y_axis):
        """Test the outer tick size is used when larger."""
        y_axis.tick_size_outer(20)
        assert compute_axis_text_and_tick_buffer(y_axis, 10) == 70

    def test_numeric_domain(self):
        """Test numeric domains use their string length."""
        axis = axis_bottom(LinearScale([0, 1500], [0, 100]))
        # "1500" is 4 characters; max(6 + 3, 6) = 9
        assert compute_axis_text_and_tick_buffer(axis, 12) == 4 * 12 + 9

    def test_empty_format_drops_labels(self, y_axis):
        """Test an empty tick format leaves only the tick size."""
        y_axis.tick_format("")
        assert compute_axis_text_and_tick_buffer(y_axis, 10) == 3

    def test_empty_tick_values_do_not_short_circuit(self, y_axis):
        """Test explicitly empty tick values still estimate labels."""
        y_axis.tick_values([])
        assert compute_axis_text_and_tick_buffer(y_axis, 10) == 53

    @pytest.mark.parametrize("font_sizes", [(8, 10, 12, 16, 24)])
    def test_monotonic_in_font_size(self, y_axis, font_sizes):
        """Test larger fonts never shrink the buffer."""
        buffers = [compute_axis_text_and_tick_buffer(y_axis, f) for f in font_sizes]
        assert buffers == sorted(buffers)

    def test_monotonic_in_label_length(self):
        """Test longer labels never shrink the buffer."""
        short = axis_left(BandScale(["ab", "c"], [0, 100]))
        long = axis_left(BandScale(["ab", "a much longer label"], [0, 100]))
        assert compute_axis_text_and_tick_buffer(long, 10) >= compute_axis_text_and_tick_buffer(short, 10)

    def test_missing_axis(self):
        """Test a None axis raises."""
        with pytest.raises(InvalidArgumentError, match="axis"):
            compute_axis_text_and_tick_buffer(None, 10)

    def test_missing_font_size(self, y_axis):
        """Test a None font size raises."""
        with pytest.raises(InvalidArgumentError, match="font_size"):
            compute_axis_text_and_tick_buffer(y_axis, None)
