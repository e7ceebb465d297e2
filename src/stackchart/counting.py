"""Long-to-wide category counting.

Converts row-per-observation ("long") data into one row per category
("wide") with one count column per sub-category, the input format expected by
:class:`stackchart.chart.StackedBarHorizontal`.

Example:
    >>> rows = [
    ...     {"x": "Patient1", "gene": "BRCA1", "type": "missense"},
    ...     {"x": "Patient2", "gene": "BRCA1", "type": "nonsense"},
    ...     {"x": "Patient3", "gene": "TP53", "type": "missense"},
    ... ]
    >>> count(rows, "gene", "type")
    [{'gene': 'BRCA1', 'missense': 1, 'nonsense': 1}, {'gene': 'TP53', 'missense': 1, 'nonsense': 0}]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Union

import polars as pl

from stackchart.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
RowsLike = Union[pl.DataFrame, Sequence[Row]]


def as_rows(data: RowsLike) -> list[dict[str, Any]]:
    """Normalize a DataFrame or a sequence of mappings to a list of dicts."""
    if isinstance(data, pl.DataFrame):
        return data.to_dicts()
    return [dict(row) for row in data]


def to_frame(rows: Sequence[Row]) -> pl.DataFrame:
    """Build a DataFrame from wide rows, keeping the column order."""
    return pl.DataFrame([dict(row) for row in rows])


def _key(value: Any) -> tuple[type, Any]:
    # 1 == True in Python, but they are distinct categories here.
    return (type(value), value)


def distinct(values: Iterable[Any]) -> list[Any]:
    """Distinct values in first-occurrence order, compared by type and value."""
    seen: dict[tuple[type, Any], Any] = {}
    for value in values:
        seen.setdefault(_key(value), value)
    return list(seen.values())


def count(
    data: RowsLike | None,
    category_key: str | None,
    sub_category_key: str | None = None,
) -> list[dict[str, Any]]:
    """Count rows per category, optionally cross-tabulated by a sub-category.

    Args:
        data: Long data, one row per observation.
        category_key: Field whose distinct values become the output rows.
        sub_category_key: Optional field whose distinct values (across the
            whole input) become count columns.

    Returns:
        One record per distinct category value, in first-occurrence order.
        Without ``sub_category_key`` each record is
        ``{category_key: value, "count": n}``.

    Raises:
        InvalidArgumentError: If ``data`` or ``category_key`` is None.
    """
    if category_key is None:
        raise InvalidArgumentError("category_key", "category_key must be defined")
    if data is None:
        raise InvalidArgumentError("data", "data must be defined")

    rows = as_rows(data)
    categories = distinct(row.get(category_key) for row in rows)

    result: list[dict[str, Any]] = []
    if sub_category_key:
        sub_categories = distinct(row.get(sub_category_key) for row in rows)
        for category in categories:
            record: dict[str, Any] = {category_key: category}
            for sub_category in sub_categories:
                record[sub_category] = sum(
                    1
                    for row in rows
                    if _key(row.get(category_key)) == _key(category)
                    and _key(row.get(sub_category_key)) == _key(sub_category)
                )
            result.append(record)
    else:
        for category in categories:
            n = sum(1 for row in rows if _key(row.get(category_key)) == _key(category))
            result.append({category_key: category, "count": n})

    logger.debug(
        "Counted %d rows into %d categories by %r", len(rows), len(result), category_key
    )
    return result
