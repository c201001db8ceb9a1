"""Triangle meshes, triangulation of polygon meshes and an OBJ reader."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import numpy as np

from balsa.earclipping import earclipping
from balsa.polygon_mesh import PLCurveBuffer, PolygonMesh
from balsa.polygon_mesh import read_obj as _read_polygon_obj

__all__ = [
    "TriangleMesh",
    "TriangleOBJMesh",
    "triangulate_polygons",
    "edges_from_curves",
    "read_obj",
]


def _empty_indices(rows: int) -> np.ndarray:
    return np.zeros((rows, 0), dtype=int)


@dataclass
class TriangleMesh:
    """Vertices as columns, triangles as 3 x N and edges as 2 x M index arrays."""

    vertices: np.ndarray
    triangles: np.ndarray = field(default_factory=lambda: _empty_indices(3))
    edges: np.ndarray = field(default_factory=lambda: _empty_indices(2))


@dataclass
class TriangleOBJMesh:
    """The position, texture and normal triangle meshes of an OBJ file."""

    position: TriangleMesh
    texture: TriangleMesh
    normal: TriangleMesh


def _normalized(v: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(v)
    return v / norm if norm > 0 else v


def _plane_projection(vertices: np.ndarray, polygon: np.ndarray) -> np.ndarray:
    """A 2 x 3 matrix mapping points onto a plane spanned by the polygon."""
    origin = vertices[:, polygon[0]]
    u = _normalized(vertices[:, polygon[1]] - origin)
    v = np.zeros_like(u)
    for index in polygon[1:]:
        v = _normalized(vertices[:, index] - origin)
        if np.linalg.norm(np.cross(u, v)) > 1e-2:
            break
    return np.vstack([u, v])


def _clip_polygon(vertices: np.ndarray, polygon: np.ndarray) -> np.ndarray:
    dim = vertices.shape[0]
    if dim == 3:
        return earclipping(_plane_projection(vertices, polygon) @ vertices, polygon)
    if dim == 2:
        return earclipping(vertices, polygon)
    raise ValueError(f"polygons with more than 4 corners need 2-d or 3-d vertices, got {dim}-d")


def triangulate_polygons(pmesh: PolygonMesh) -> np.ndarray:
    """Split every polygon of ``pmesh`` into triangles.

    Polygons with fewer than 3 corners are dropped, quads are split into two
    triangles around their first corner and larger polygons are ear clipped.
    Returns a 3 x N integer array.
    """
    polygons = pmesh.polygons
    sizes = np.diff(polygons.offsets)
    if np.all(sizes == 3):
        return np.ascontiguousarray(np.asarray(polygons.buffer, dtype=int).reshape(-1, 3).T)

    vertices = np.asarray(pmesh.vertices, dtype=float)
    faces: list[tuple[int, int, int]] = []
    for polygon in polygons:
        polygon = np.asarray(polygon, dtype=int)
        if polygon.size < 3:
            continue
        if polygon.size == 3:
            faces.append(tuple(polygon.tolist()))
        elif polygon.size == 4:
            p0, p1, p2, p3 = polygon.tolist()
            faces.append((p0, p1, p2))
            faces.append((p0, p2, p3))
        else:
            faces.extend(tuple(f) for f in _clip_polygon(vertices, polygon).T.tolist())
    return np.ascontiguousarray(np.array(faces, dtype=int).reshape(-1, 3).T)


def edges_from_curves(curves: PLCurveBuffer) -> np.ndarray:
    """The segments of every curve as a 2 x N array of index pairs."""
    if curves.curve_count() == 0:
        return _empty_indices(2)
    pairs = [
        (int(a), int(b))
        for curve in (curves.get_curve(i) for i in range(curves.curve_count()))
        for a, b in zip(curve[:-1], curve[1:])
    ]
    return np.ascontiguousarray(np.array(pairs, dtype=int).reshape(-1, 2).T)


def _to_triangle_mesh(pmesh: PolygonMesh) -> TriangleMesh:
    return TriangleMesh(
        vertices=pmesh.vertices,
        triangles=triangulate_polygons(pmesh),
        edges=edges_from_curves(pmesh.curves),
    )


def read_obj(filename: str | os.PathLike, dim: int = 3, dtype=np.float64) -> TriangleOBJMesh:
    """Read an OBJ file, triangulating its faces and turning lines into edges."""
    pmesh = _read_polygon_obj(filename, dim, dtype)
    return TriangleOBJMesh(
        position=_to_triangle_mesh(pmesh.position),
        texture=_to_triangle_mesh(pmesh.texture),
        normal=_to_triangle_mesh(pmesh.normal),
    )