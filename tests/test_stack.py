"""Tests for stacking."""

import pytest

from stackchart.stack import StackPoint, stack


@pytest.fixture
def wide_data():
    return [
        {"gene": "BRCA1", "missense": 2, "nonsense": 2},
        {"gene": "TP53", "missense": 2, "nonsense": 1},
    ]


class TestStack:
    """Test the stack function."""

    def test_one_series_per_key(self, wide_data):
        """Test a series is produced per key, in key order."""
        series = stack(wide_data, ["missense", "nonsense"])
        assert [s.key for s in series] == ["missense", "nonsense"]
        assert [s.index for s in series] == [0, 1]
        assert all(len(s) == len(wide_data) for s in series)

    def test_cumulative_intervals(self, wide_data):
        """Test intervals are prefix sums per row."""
        missense, nonsense = stack(wide_data, ["missense", "nonsense"])
        assert [(p.start, p.end) for p in missense] == [(0, 2), (0, 2)]
        assert [(p.start, p.end) for p in nonsense] == [(2, 4), (2, 3)]

    def test_points_reference_rows(self, wide_data):
        """Test each point keeps its source row."""
        missense = stack(wide_data, ["missense"])[0]
        assert missense.points[1].data["gene"] == "TP53"

    def test_contiguous_and_sum_to_total(self):
        """Test a row's intervals tile [0, total] without overlap."""
        rows = [{"c": "a", "k1": 3, "k2": 0, "k3": 5.5, "k4": 1}]
        keys = ["k1", "k2", "k3", "k4"]
        points = [s.points[0] for s in stack(rows, keys)]

        assert points[0].start == 0
        for prev, nxt in zip(points, points[1:]):
            assert prev.end == nxt.start
        assert sum(p.width for p in points) == pytest.approx(9.5)
        assert points[-1].end == pytest.approx(9.5)

    def test_key_order_controls_stacking(self, wide_data):
        """Test stacking follows the given key order."""
        nonsense, missense = stack(wide_data, ["nonsense", "missense"])
        assert (nonsense.points[0].start, nonsense.points[0].end) == (0, 2)
        assert (missense.points[1].start, missense.points[1].end) == (1, 3)

    def test_missing_key_raises(self):
        """Test heterogeneous rows propagate the lookup error."""
        with pytest.raises(KeyError):
            stack([{"c": "a", "k1": 1}, {"c": "b"}], ["k1"])

    def test_point_width(self):
        """Test width is end minus start."""
        assert StackPoint(start=2, end=5, data={}).width == 3
