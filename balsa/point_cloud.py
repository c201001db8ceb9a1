"""Reading point clouds from XYZ files."""

from __future__ import annotations

import os
from itertools import islice

import numpy as np

__all__ = ["read_xyz"]

_COLUMNS = 6


def _read_count(header: str) -> int:
    tokens = header.split()
    if not tokens:
        raise ValueError("XYZ file has no point count on its first line")
    try:
        count = int(float(tokens[0]))
    except ValueError:
        raise ValueError(f"could not read a point count from {tokens[0]!r}") from None
    if count < 0:
        raise ValueError(f"point count must not be negative, got {count}")
    return count


def _parse_line(line: str) -> list[float]:
    tokens = [token for token in line.rstrip("\r\n").split(" ") if token]
    values = []
    for token in tokens[1 : 1 + _COLUMNS]:
        try:
            values.append(float(token))
        except ValueError:
            raise ValueError(f"could not read a number from {token!r}") from None
    values.extend([0.0] * (_COLUMNS - len(values)))
    return values


def read_xyz(filename: str | os.PathLike, dtype=np.float64) -> tuple[np.ndarray, np.ndarray]:
    """Read an XYZ file into positions and velocities, each 3 x N.

    The first line holds the point count and the second a comment. Each
    following line holds a species name and up to six numbers; missing
    numbers are zero. When every velocity is zero the velocities come back
    as an empty 3 x 0 array.
    """
    dtype = np.dtype(dtype)
    with open(filename, encoding="utf-8") as fh:
        count = _read_count(fh.readline())
        fh.readline()
        rows = [_parse_line(line) for line in islice(fh, count)]
    if len(rows) < count:
        raise ValueError(f"expected {count} points, found {len(rows)}")

    data = np.array(rows, dtype=dtype).reshape(count, _COLUMNS).T
    positions = np.ascontiguousarray(data[:3])
    velocities = np.ascontiguousarray(data[3:])
    if np.abs(velocities).sum() == 0:
        return positions, np.zeros((3, 0), dtype=dtype)
    return positions, velocities