"""Polygon meshes and a reader for Wavefront OBJ files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from balsa.stacked_buffer import (
    StackedContiguousBuffer,
    container_of_containers_to_stacked_contiguous_buffer,
)

__all__ = [
    "PolygonBuffer",
    "PLCurveBuffer",
    "PolygonMesh",
    "OBJMesh",
    "read_obj",
]


@dataclass(eq=False)
class PolygonBuffer(StackedContiguousBuffer):
    """Polygons stored as stacked spans of vertex indices."""

    def get_polygon(self, index: int) -> np.ndarray:
        return self.get_span(index)

    def get_polygon_offsets(self, index: int) -> np.ndarray:
        return self.get_span_offsets(index)

    def polygon_count(self) -> int:
        return self.span_count()


@dataclass(eq=False)
class PLCurveBuffer(StackedContiguousBuffer):
    """Piecewise-linear curves stored as stacked spans of vertex indices.

    ``is_closed`` holds one flag per curve; it defaults to all open and is
    not part of equality.
    """

    is_closed: list[bool] | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.is_closed is None:
            self.is_closed = [False] * self.curve_count()
        else:
            self.is_closed = [bool(flag) for flag in self.is_closed]
            if len(self.is_closed) != self.curve_count():
                raise ValueError(
                    f"got {len(self.is_closed)} closedness flags for "
                    f"{self.curve_count()} curves"
                )

    def get_curve(self, index: int) -> np.ndarray:
        return self.get_span(index)

    def get_curve_offsets(self, index: int) -> np.ndarray:
        return self.get_span_offsets(index)

    def curve_count(self) -> int:
        return self.span_count()


@dataclass
class PolygonMesh:
    """Vertices as columns of a matrix, with polygons and curves over them."""

    vertices: np.ndarray
    polygons: PolygonBuffer = field(default_factory=PolygonBuffer)
    curves: PLCurveBuffer = field(default_factory=PLCurveBuffer)


@dataclass
class OBJMesh:
    """The position, texture and normal meshes an OBJ file can hold."""

    position: PolygonMesh
    texture: PolygonMesh
    normal: PolygonMesh


_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"-?\d+")


def _read_float(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        match = _FLOAT_PREFIX.match(token)
        if match is None:
            raise ValueError(f"could not read a number from {token!r}") from None
        return float(match.group())


def _read_int(token: str) -> int:
    match = _INT_PREFIX.match(token)
    if match is None:
        raise ValueError(f"could not read an index from {token!r}")
    return int(match.group())


def _read_point(tokens: Sequence[str], size: int) -> list[float]:
    values = [_read_float(token) for token in tokens[:size]]
    values.extend([0.0] * (size - len(values)))
    return values


def _split_slash_tokens(tokens: Sequence[str]) -> tuple[list[int], list[int], list[int]]:
    """Split ``v/t/n`` tokens into zero-based vertex, texture and normal indices."""
    vertex: list[int] = []
    texture: list[int] = []
    normal: list[int] = []
    for token in tokens:
        for target, part in zip((vertex, texture, normal), token.split("/")):
            if part:
                target.append(_read_int(part) - 1)
    return vertex, texture, normal


def _make_mesh(
    points: list[list[float]],
    size: int,
    dtype: np.dtype,
    polygons: list[list[int]],
    curves: list[list[int]],
) -> PolygonMesh:
    vertices = np.ascontiguousarray(np.array(points, dtype=dtype).reshape(-1, size).T)
    packed_polygons = container_of_containers_to_stacked_contiguous_buffer(polygons)
    packed_curves = container_of_containers_to_stacked_contiguous_buffer(curves)
    return PolygonMesh(
        vertices=vertices,
        polygons=PolygonBuffer(buffer=packed_polygons.buffer, offsets=packed_polygons.offsets),
        curves=PLCurveBuffer(buffer=packed_curves.buffer, offsets=packed_curves.offsets),
    )


def read_obj(
    filename: str | os.PathLike, dim: int = 3, dtype=np.float64
) -> OBJMesh:
    """Read an OBJ file into position, texture and normal polygon meshes.

    Positions and normals keep their first ``dim`` coordinates, texture
    coordinates their first two; missing coordinates are zero. Faces (``f``)
    become polygons and lines (``l``) become curves, with zero-based indices.
    """
    if int(dim) < 1:
        raise ValueError(f"dimension must be positive, got {dim}")
    dim = int(dim)
    dtype = np.dtype(dtype)

    positions: list[list[float]] = []
    textures: list[list[float]] = []
    normals: list[list[float]] = []
    faces: tuple[list, list, list] = ([], [], [])
    lines: tuple[list, list, list] = ([], [], [])

    with open(filename, encoding="utf-8") as fh:
        for line in fh:
            tokens = line.split()
            if not tokens:
                continue
            head, data = tokens[0], tokens[1:]
            if head == "v":
                positions.append(_read_point(data, dim))
            elif head == "vt":
                textures.append(_read_point(data, 2))
            elif head == "vn":
                normals.append(_read_point(data, dim))
            elif head in ("f", "l"):
                targets = faces if head == "f" else lines
                for indices, target in zip(_split_slash_tokens(data), targets):
                    if indices:
                        target.append(indices)

    return OBJMesh(
        position=_make_mesh(positions, dim, dtype, faces[0], lines[0]),
        texture=_make_mesh(textures, 2, dtype, faces[1], lines[1]),
        normal=_make_mesh(normals, dim, dtype, faces[2], lines[2]),
    )