"""Geometry processing utilities: OBJ and XYZ readers, triangulation, scene graphs and array helpers."""

__version__ = "0.1.0"

__all__ = [
    "earclipping",
    "eigen_convert",
    "filesystem",
    "jsonlog",
    "point_cloud",
    "polygon_mesh",
    "scene_graph",
    "shapes",
    "stacked_buffer",
    "stopwatch",
    "triangle_mesh",
]