"""Command-line interface for stackchart."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import polars as pl
import typer

from stackchart.chart import StackedBarHorizontal
from stackchart.counting import count
from stackchart.exceptions import UnsupportedFormatError
from stackchart.surface import SvgCanvas
from stackchart.utils import dput

app = typer.Typer(
    name="stackchart",
    help="Count long data and render stacked horizontal bar charts as SVG",
    add_completion=False,
)

_READERS = {
    ".csv": pl.read_csv,
    ".tsv": lambda path: pl.read_csv(path, separator="\t"),
    ".json": pl.read_json,
    ".parquet": pl.read_parquet,
}


def load_rows(path: Path) -> list[dict]:
    """Read a tabular file into a list of row dicts."""
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedFormatError(str(path), path.suffix)
    return reader(path).to_dicts()


def _parse_point(value: str) -> tuple[float, float]:
    x, y = (float(part) for part in value.split(","))
    return x, y


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@app.command(name="count")
def count_cmd(
    file: Annotated[Path, typer.Argument(help="Path to the long data file")],
    category: Annotated[
        str,
        typer.Option("--category", "-c", help="Column whose values become rows"),
    ],
    sub_category: Annotated[
        Optional[str],
        typer.Option("--sub-category", "-s", help="Column whose values become count columns"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output JSON file path"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable logging")] = False,
) -> None:
    """Count long data into wide per-category counts."""
    _configure_logging(verbose)
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        result = dput(count(load_rows(file), category, sub_category))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output:
        output.write_text(result, encoding="utf-8")
        typer.echo(f"Counts written to {output}")
    else:
        typer.echo(result)


@app.command(name="render")
def render_cmd(
    file: Annotated[Path, typer.Argument(help="Path to the data file")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output SVG file path"),
    ] = Path("chart.svg"),
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="Treat the file as long data and count by this column"),
    ] = None,
    sub_category: Annotated[
        Optional[str],
        typer.Option("--sub-category", "-s", help="Sub-category column for long data"),
    ] = None,
    width: Annotated[int, typer.Option("--width", help="Canvas width in pixels")] = 900,
    height: Annotated[int, typer.Option("--height", help="Canvas height in pixels")] = 800,
    top_left: Annotated[
        str, typer.Option("--top-left", help="Top left of the plot as 'x,y'")
    ] = "50,50",
    bottom_right: Annotated[
        str, typer.Option("--bottom-right", help="Bottom right of the plot as 'x,y'")
    ] = "800,700",
    gap: Annotated[float, typer.Option("--gap", help="Pixel gap between stacks")] = 2,
    hide_x_axis: Annotated[bool, typer.Option("--hide-x-axis", help="Do not draw the x axis")] = False,
    hide_y_axis: Annotated[bool, typer.Option("--hide-y-axis", help="Do not draw the y axis")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable logging")] = False,
) -> None:
    """Render a stacked horizontal bar chart to SVG."""
    _configure_logging(verbose)
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        rows = load_rows(file)
        if category:
            rows = count(rows, category, sub_category)

        chart = (
            StackedBarHorizontal()
            .data(rows)
            .pixel_gap_between_stacks(gap)
            .position_top_left(_parse_point(top_left))
            .position_bottom_right(_parse_point(bottom_right))
        )
        if hide_x_axis:
            chart.hide_axis_x()
        if hide_y_axis:
            chart.hide_axis_y()

        canvas = SvgCanvas(width, height)
        chart(canvas)
        canvas.save(output)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Chart written to {output}")
    typer.echo(f"  Segments: {len(chart.marks())}")
    typer.echo(f"  Y axis buffer: {chart.y_axis_text_and_tick_buffer()}")
    typer.echo(f"  X axis buffer: {chart.x_axis_text_and_tick_buffer()}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
