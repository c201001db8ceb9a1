# balsa

A small geometry-processing toolkit built on NumPy. It reads meshes and point
clouds, triangulates polygons, and provides a small scene graph and some array
helpers.

Matrices follow the column-vector convention: a set of N points in D
dimensions is a `D x N` array, and triangles are `3 x N` integer arrays of
vertex indices.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Modules

### Meshes

- `balsa.polygon_mesh.read_obj(filename, dim=3, dtype=numpy.float64)` reads a
  Wavefront OBJ file into an `OBJMesh` with `position`, `texture` and `normal`
  `PolygonMesh`es.
  - Positions (`v`) and normals (`vn`) keep their first `dim` coordinates.
    Texture coordinates (`vt`) keep their first two. Missing coordinates are zero.
  - Faces (`f`) become polygons in a `PolygonBuffer`. Lines (`l`) become curves
    in a `PLCurveBuffer`. Indices are zero-based. The `v/t/n` parts of a token
    go to the matching mesh.
- `PolygonBuffer` offers `get_polygon`, `get_polygon_offsets` and
  `polygon_count`.
- `PLCurveBuffer` offers `get_curve`, `get_curve_offsets` and `curve_count`. It
  also keeps a per-curve `is_closed` list, which defaults to all open.
- `balsa.triangle_mesh.read_obj(filename, dim=3, dtype=numpy.float64)` reads
  the same files into a `TriangleOBJMesh` of `TriangleMesh`es. Each mesh has
  `vertices`, `triangles` (`3 x N`) and `edges` (`2 x M`).
- `balsa.triangle_mesh.triangulate_polygons(pmesh)` builds the triangles:
  - polygons with fewer than three corners are dropped;
  - quads are split around their first corner;
  - larger polygons are ear clipped. In 3-D they are first projected onto a
    plane through the polygon.
- `balsa.triangle_mesh.edges_from_curves(curves)` turns every curve segment
  into an edge.
- `balsa.earclipping.earclipping(vertices, loop)` triangulates one simple 2-D
  polygon given by a loop of indices into a `2 x N` vertex array. It returns
  `3 x (n - 2)` triangles oriented counter-clockwise for either loop
  direction. It raises `ValueError` for fewer than three corners or for
  vertices that are not 2-D.

### Point clouds

- `balsa.point_cloud.read_xyz(filename, dtype=numpy.float64)` reads an XYZ
  file. It returns `(positions, velocities)`, each `3 x N`.
  - The first line holds the point count. The second line is a comment.
  - Each following line holds a species name and up to six numbers. Missing
    numbers are zero.
  - When every velocity is zero, the velocities come back as an empty `3 x 0`
    array.
  - A file with fewer points than announced raises `ValueError`.

### Buffers and arrays

- `balsa.stacked_buffer.StackedContiguousBuffer` stores variable-length spans
  back to back in `buffer`. Span `i` is `buffer[offsets[i]:offsets[i + 1]]`.
  - It offers `span_count`, `get_span` and `get_span_offsets`, iteration,
    `len` and equality.
  - `container_of_containers_to_stacked_contiguous_buffer` builds one from a
    list of integer lists.
- `balsa.eigen_convert` provides the following helpers:
  - `vstack` and `hstack` stack matrices and pad narrower inputs with zeros.
  - `vstack_iter` and `hstack_iter` do the same over an iterable, skip empty
    arrays, and return a `0 x 0` array when nothing is left.
  - `stl2eigen` turns a list of scalars into a vector and a list of equal-size
    vectors into a matrix with one column per vector.
  - `eigen2span` gives a flat view of a contiguous array in storage order.
  - `container_size` returns a tuple's length, or `DYNAMIC` for other
    containers.
- `balsa.shapes` checks array shapes:
  - `row_check`, `col_check` and `shape_check` each accept one size or a
    collection of allowed sizes.
  - The `*_with_throw` variants raise `ValueError`.
  - `is_integral_matrix` reports integer or boolean element types.

### Scene graph

`balsa.scene_graph` provides a small scene graph:

- `EmbeddingTraits` describes the dimension and scalar type of a space. Ready
  instances are `EMBEDDING_TRAITS_2F`, `_2D`, `_3F` and `_3D`.
- `MatrixTransformation` holds a homogeneous matrix, initially the identity.
  Its `as_matrix` and `reset_transformation` methods come from
  `AbstractTransformation`.
- `Object` and `Camera` are nodes with a `parent` and `children`.
  - `add_child` and `emplace_child` add children and set the parent.
  - `add_feature` constructs a feature, attaches it to the node and returns it.
    It comes from `AbstractObject`.
- `AlignedBox` is an axis-aligned box with `extend`, `is_empty` and `copy`.
- `BoundingBoxNode` is a feature whose box is the union of its children's
  boxes.
- `CachedBoundingBoxNode` stores a box set with `set_bounding_box`, or
  computed from its children with `update_from_children`.

### Logging and files

- `balsa.stopwatch.HierarchicalStopwatch(name, logger=None, level=logging.INFO)`
  is a nested timer.
  - It logs a JSON `stopwatch_start` record when created.
  - It logs a `stopwatch_end` record with the duration in milliseconds when
    stopped, either through `stop()` or when leaving a `with` block.
  - It nests inside whichever stopwatch is running.
  - `hierarchical_stopwatch` is a shorthand for creating one.
- `balsa.jsonlog.make_json_file_logger(name, path, messages_are_json=False)`
  creates a `logging.Logger` that writes one JSON object per line to a file.
  Creating a second one with the same name raises `ValueError`.
  `set_json_format` applies the same format to an existing logger's handlers.
- `balsa.filesystem.get_relative_path(base_file, new_path)` resolves a path
  against the directory of another file.
- `balsa.filesystem.prepend_to_filename(orig, prefix)` puts a prefix in front
  of a file name.

## Examples

```python
import numpy as np
from balsa.earclipping import earclipping

square = np.array([[0.0, 1.0, 1.0, 0.0, 0.5],
                   [0.0, 0.0, 1.0, 1.0, 0.5]])
triangles = earclipping(square, [0, 1, 2, 3, 4])   # shape (3, 3)
```

```python
from balsa.triangle_mesh import read_obj

mesh = read_obj("plane.obj")
print(mesh.position.vertices.shape, mesh.position.triangles.shape)
```

```python
from balsa.scene_graph import AlignedBox, BoundingBoxNode, CachedBoundingBoxNode, Object

root = Object()
box = root.add_feature(BoundingBoxNode)
leaf = root.add_feature(CachedBoundingBoxNode)
leaf.set_bounding_box(AlignedBox([-1, -2, -3], [0, 0, 0]))
box.add_child(leaf)
print(box.bounding_box())   # AlignedBox([-1.0, -2.0, -3.0], [0.0, 0.0, 0.0])
```

```python
import logging
from balsa.stopwatch import HierarchicalStopwatch

with HierarchicalStopwatch("outer", None, logging.INFO):
    with HierarchicalStopwatch("inner", None, logging.INFO):
        pass
```

## What it does not do

- The package has no viewer, window or rendering. The scene graph only holds
  structure, transformations and bounding boxes; nothing draws it.
- It reads OBJ and XYZ files but writes no mesh or point-cloud formats.
- It has no other particle file formats.
- It has no command-line tool.