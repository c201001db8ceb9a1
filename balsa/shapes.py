"""Shape and element-type checks for vectors and matrices."""

from __future__ import annotations

import numbers
from typing import Iterable, Union

import numpy as np

__all__ = [
    "row_check",
    "col_check",
    "shape_check",
    "row_check_with_throw",
    "col_check_with_throw",
    "shape_check_with_throw",
    "is_integral_matrix",
]

Expected = Union[int, Iterable[int]]


def _shape(matrix) -> tuple[int, int]:
    """Rows and columns of ``matrix``; a 1-D array counts as a column vector."""
    shape = np.shape(matrix)
    if len(shape) == 1:
        return shape[0], 1
    if len(shape) == 2:
        return shape[0], shape[1]
    raise ValueError(f"expected a vector or matrix, got an array with {len(shape)} dimensions")


def _options(expected: Expected) -> tuple[int, ...]:
    if isinstance(expected, numbers.Integral):
        return (int(expected),)
    return tuple(int(e) for e in expected)


def _format_options(options: tuple[int, ...]) -> str:
    return "(" + ", ".join(str(o) for o in options) + ")"


def row_check(matrix, expected: Expected) -> bool:
    """Whether the row count is ``expected`` (or one of several)."""
    return _shape(matrix)[0] in _options(expected)


def col_check(matrix, expected: Expected) -> bool:
    """Whether the column count is ``expected`` (or one of several)."""
    return _shape(matrix)[1] in _options(expected)


def shape_check(matrix, rows: Expected, cols: Expected) -> bool:
    return row_check(matrix, rows) and col_check(matrix, cols)


def row_check_with_throw(matrix, expected: Expected) -> None:
    """Raise ValueError unless the row count matches."""
    if row_check(matrix, expected):
        return
    rows = _shape(matrix)[0]
    if isinstance(expected, numbers.Integral):
        wanted = str(int(expected))
    else:
        wanted = _format_options(_options(expected))
    raise ValueError(f"Row check: wrong size, got {rows} expected {wanted}")


def col_check_with_throw(matrix, expected: Expected) -> None:
    """Raise ValueError unless the column count matches."""
    if col_check(matrix, expected):
        return
    cols = _shape(matrix)[1]
    if isinstance(expected, numbers.Integral):
        raise ValueError(f"Col check: wrong size, got {cols} expected {int(expected)}")
    raise ValueError(
        f"Col check: wrong size, got {cols} expected one of "
        f"{_format_options(_options(expected))}"
    )


def shape_check_with_throw(matrix, rows: Expected, cols: Expected) -> None:
    row_check_with_throw(matrix, rows)
    col_check_with_throw(matrix, cols)


def is_integral_matrix(matrix) -> bool:
    """Whether the elements are of an integer (or boolean) type."""
    return np.asarray(matrix).dtype.kind in "iub"