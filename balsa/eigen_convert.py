"""Stacking matrices and converting nested sequences to numpy arrays.

Matrices follow the column-vector convention: a 1-D array is treated as a
single column, and a sequence of fixed-size points becomes a matrix whose
columns are the points.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

__all__ = [
    "DYNAMIC",
    "vstack",
    "hstack",
    "vstack_iter",
    "hstack_iter",
    "container_size",
    "stl2eigen",
    "eigen2span",
]

DYNAMIC = -1
"""Size reported for containers whose length is not fixed."""


def _as_matrix(value) -> np.ndarray:
    """View ``value`` as a 2-D array; 1-D input becomes a column."""
    array = np.asarray(value)
    if array.ndim == 0:
        return array.reshape(1, 1)
    if array.ndim == 1:
        return array.reshape(-1, 1)
    if array.ndim == 2:
        return array
    raise ValueError(f"expected a vector or matrix, got an array with {array.ndim} dimensions")


def _stack(args: Sequence, by_rows: bool) -> np.ndarray:
    if not args:
        raise ValueError("at least one matrix is required")
    mats = [_as_matrix(a) for a in args]
    if by_rows:
        rows = sum(m.shape[0] for m in mats)
        cols = max(m.shape[1] for m in mats)
    else:
        rows = max(m.shape[0] for m in mats)
        cols = sum(m.shape[1] for m in mats)
    result = np.zeros((rows, cols), dtype=mats[0].dtype)
    offset = 0
    for m in mats:
        r, c = m.shape
        if by_rows:
            result[offset : offset + r, :c] = m
            offset += r
        else:
            result[:r, offset : offset + c] = m
            offset += c
    return result


def vstack(*args) -> np.ndarray:
    """Stack matrices on top of each other.

    The result has as many columns as the widest input; narrower inputs are
    padded with zeros on the right. The element type is that of the first.
    """
    return _stack(args, by_rows=True)


def hstack(*args) -> np.ndarray:
    """Place matrices side by side, padding shorter ones with zeros below."""
    return _stack(args, by_rows=False)


def _stack_iter(arrays: Iterable, by_rows: bool) -> np.ndarray:
    mats = [_as_matrix(a) for a in arrays]
    dtype = mats[0].dtype if mats else np.dtype(float)
    nonempty = [m for m in mats if m.size > 0]
    if by_rows:
        rows = sum(m.shape[0] for m in nonempty)
        cols = max((m.shape[1] for m in nonempty), default=0)
    else:
        rows = max((m.shape[0] for m in nonempty), default=0)
        cols = sum(m.shape[1] for m in nonempty)
    if rows == 0 or cols == 0:
        return np.zeros((0, 0), dtype=dtype)
    return _stack(nonempty, by_rows)


def vstack_iter(arrays: Iterable) -> np.ndarray:
    """Stack an iterable of matrices vertically, skipping empty ones.

    Returns a 0x0 array when nothing non-empty is given.
    """
    return _stack_iter(arrays, by_rows=True)


def hstack_iter(arrays: Iterable) -> np.ndarray:
    """Stack an iterable of matrices horizontally, skipping empty ones.

    Returns a 0x0 array when nothing non-empty is given.
    """
    return _stack_iter(arrays, by_rows=False)


def container_size(container) -> int:
    """The fixed length of a tuple, or ``DYNAMIC`` for growable containers."""
    if isinstance(container, tuple):
        return len(container)
    return DYNAMIC


def stl2eigen(container) -> np.ndarray:
    """Convert a sequence to an array.

    Arrays are returned unchanged. A sequence of scalars becomes a vector;
    a sequence of equally sized vectors becomes a matrix with one column
    per element.
    """
    if isinstance(container, np.ndarray):
        return container
    items = list(container)
    if not items:
        return np.zeros(0)
    if all(np.ndim(item) == 0 for item in items):
        return np.asarray(items)
    inner = [np.asarray(item) for item in items]
    if any(item.ndim != 1 for item in inner):
        raise ValueError("only sequences of scalars or of vectors can be converted")
    sizes = {item.shape[0] for item in inner}
    if len(sizes) != 1:
        raise ValueError(
            f"all inner vectors must have the same size, got sizes {sorted(sizes)}"
        )
    return np.ascontiguousarray(np.stack(inner, axis=1))


def eigen2span(matrix) -> np.ndarray:
    """A flat view of a contiguous array's elements in storage order.

    Writes through the view change the original; a read-only array yields a
    read-only view.
    """
    array = np.asarray(matrix)
    if array.flags.f_contiguous:
        return array.ravel(order="F")
    if array.flags.c_contiguous:
        return array.ravel(order="C")
    raise ValueError("array is not stored contiguously")