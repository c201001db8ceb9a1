"""Triangulation of simple polygons by ear clipping."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from balsa.shapes import row_check_with_throw

__all__ = ["earclipping"]

_CROSS_EPS = 1e-10


def _cross(u: np.ndarray, v: np.ndarray) -> float:
    return float(u[0] * v[1] - u[1] * v[0])


def _positive_angle(u: np.ndarray, v: np.ndarray) -> float:
    """Angle turning ``u`` onto ``v``, mapped into ``[0, 2*pi)``."""
    angle = math.atan2(_cross(u, v), float(u[0] * v[0] + u[1] * v[1]))
    if angle < 0:
        angle += 2 * math.pi
    return angle


def _cyclic_triplets(items: Sequence[int]):
    return zip(items, [*items[1:], *items[:1]], [*items[2:], *items[:2]])


def _strictly_inside(vertices: np.ndarray, face: Sequence[int], point: np.ndarray) -> bool:
    """Whether ``point`` lies strictly inside the triangle ``face``."""
    a, b, c = (vertices[:, i] for i in face)
    d1 = _cross(b - a, point - a)
    d2 = _cross(c - b, point - b)
    d3 = _cross(a - c, point - c)
    return (d1 > 0 and d2 > 0 and d3 > 0) or (d1 < 0 and d2 < 0 and d3 < 0)


def earclipping(vertices, loop: Iterable[int]) -> np.ndarray:
    """Triangulate the polygon whose corners are ``vertices[:, loop]``.

    ``vertices`` holds 2-D points as columns. Returns a 3 x (n - 2) integer
    array of triangles, each column a triple of indices from ``loop``,
    oriented counter-clockwise whatever the orientation of the loop.
    """
    V = np.asarray(vertices, dtype=float)
    if V.ndim != 2:
        raise ValueError(f"vertices must be a 2 x N matrix, got shape {V.shape}")
    row_check_with_throw(V, 2)
    indices = [int(i) for i in loop]
    if len(indices) < 3:
        raise ValueError(f"a polygon needs at least 3 corners, got {len(indices)}")

    inner_sum = 0.0
    outer_sum = 0.0
    for ai, bi, ci in _cyclic_triplets(indices):
        a, b, c = V[:, ai], V[:, bi], V[:, ci]
        angle = _positive_angle(c - b, a - b)
        inner_sum += angle
        outer_sum += 2 * math.pi - angle
    reverse_orientation = outer_sum < inner_sum

    def is_ear(face: tuple[int, int, int]) -> bool:
        a, b, c = (V[:, i] for i in face)
        cb = c - b
        ab = a - b
        if _cross(cb, ab) < _CROSS_EPS:
            return False
        angle = _positive_angle(cb, ab)
        if angle > math.pi or angle < 0:
            return False
        return not any(
            _strictly_inside(V, face, V[:, i]) for i in indices if i not in face
        )

    faces: list[tuple[int, int, int]] = []
    remaining = list(indices)
    while len(remaining) > 3:
        for position, face in enumerate(_cyclic_triplets(remaining)):
            if reverse_orientation:
                face = (face[2], face[1], face[0])
            if is_ear(face):
                faces.append(face)
                del remaining[(position + 1) % len(remaining)]
                break
        else:
            faces.append((remaining[0], remaining[1], remaining[2]))
            del remaining[1]

    a, b, c = (V[:, i] for i in remaining)
    if _cross(c - b, a - b) < _CROSS_EPS:
        faces.append((remaining[1], remaining[0], remaining[2]))
    else:
        faces.append((remaining[0], remaining[1], remaining[2]))

    return np.ascontiguousarray(np.array(faces, dtype=int).reshape(-1, 3).T)