"""Tests for the command-line interface."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import polars as pl
import pytest
from typer.testing import CliRunner

from stackchart.cli import app, load_rows
from stackchart.exceptions import UnsupportedFormatError

runner = CliRunner()


@pytest.fixture
def long_csv(tmp_path: Path) -> Path:
    """Create a long-form CSV file."""
    csv_content = """x,gene,type
Patient1,BRCA1,missense
Patient2,BRCA1,missense
Patient3,BRCA1,nonsense
Patient4,BRCA1,nonsense
Patient5,TP53,missense
Patient6,TP53,missense
Patient6,TP53,nonsense
"""
    path = tmp_path / "mutations.csv"
    path.write_text(csv_content)
    return path


@pytest.fixture
def wide_json(tmp_path: Path) -> Path:
    """Create a wide-form JSON file."""
    path = tmp_path / "counts.json"
    path.write_text(
        json.dumps(
            [
                {"gene": "BRCA1", "missense": 2, "nonsense": 2},
                {"gene": "TP53", "missense": 2, "nonsense": 1},
            ]
        )
    )
    return path


class TestLoadRows:
    """Test file loading."""

    def test_csv(self, long_csv):
        """Test CSV rows are loaded as dicts."""
        rows = load_rows(long_csv)
        assert len(rows) == 7
        assert rows[0] == {"x": "Patient1", "gene": "BRCA1", "type": "missense"}

    def test_json(self, wide_json):
        """Test JSON records keep their column order."""
        rows = load_rows(wide_json)
        assert list(rows[0].keys()) == ["gene", "missense", "nonsense"]

    def test_unsupported(self, tmp_path):
        """Test unknown suffixes raise."""
        path = tmp_path / "data.txt"
        path.write_text("x")
        with pytest.raises(UnsupportedFormatError):
            load_rows(path)


class TestCountCommand:
    """Test the count command."""

    def test_count_with_sub_category(self, long_csv):
        """Test counts are printed as JSON."""
        result = runner.invoke(
            app, ["count", str(long_csv), "--category", "gene", "--sub-category", "type"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"gene": "BRCA1", "missense": 2, "nonsense": 2},
            {"gene": "TP53", "missense": 2, "nonsense": 1},
        ]

    def test_count_to_file(self, long_csv, tmp_path):
        """Test counts are written to a file."""
        output = tmp_path / "counts.json"
        result = runner.invoke(app, ["count", str(long_csv), "-c", "gene", "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text()) == [
            {"gene": "BRCA1", "count": 4},
            {"gene": "TP53", "count": 3},
        ]

    def test_count_parquet_date_category(self, tmp_path):
        """Test date values from Parquet are printed as ISO strings."""
        path = tmp_path / "days.parquet"
        pl.DataFrame({"day": [date(2024, 1, 1)], "t": ["a"]}).write_parquet(path)

        result = runner.invoke(app, ["count", str(path), "-c", "day", "-s", "t"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"day": "2024-01-01", "a": 1}]

    def test_missing_file(self, tmp_path):
        """Test a missing file exits with an error."""
        result = runner.invoke(app, ["count", str(tmp_path / "nope.csv"), "-c", "gene"])
        assert result.exit_code == 1


class TestRenderCommand:
    """Test the render command."""

    def test_render_wide(self, wide_json, tmp_path):
        """Test rendering wide data to SVG."""
        output = tmp_path / "chart.svg"
        result = runner.invoke(app, ["render", str(wide_json), "-o", str(output)])

        assert result.exit_code == 0
        svg = output.read_text()
        assert svg.startswith("<svg")
        assert svg.count('class="stacked-rect"') == 4
        assert "Y axis buffer: 53" in result.stdout

    def test_render_long(self, long_csv, tmp_path):
        """Test long data is counted before rendering."""
        output = tmp_path / "chart.svg"
        result = runner.invoke(
            app,
            ["render", str(long_csv), "-c", "gene", "-s", "type", "-o", str(output), "--hide-x-axis"],
        )

        assert result.exit_code == 0
        svg = output.read_text()
        assert svg.count('class="stacked-rect"') == 4
        assert 'class="x-axis"' not in svg
        assert 'class="y-axis"' in svg

    def test_render_unsupported_format(self, tmp_path):
        """Test an unsupported file exits with an error."""
        path = tmp_path / "data.txt"
        path.write_text("x")
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1
