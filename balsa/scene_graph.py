"""A small scene graph: objects with transformations, children and features."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np

__all__ = [
    "EmbeddingTraits",
    "EMBEDDING_TRAITS_2F",
    "EMBEDDING_TRAITS_2D",
    "EMBEDDING_TRAITS_3F",
    "EMBEDDING_TRAITS_3D",
    "AbstractTransformation",
    "MatrixTransformation",
    "AbstractFeature",
    "AbstractGroupedFeature",
    "AbstractObject",
    "Object",
    "Camera",
    "AlignedBox",
    "BoundingBoxNode",
    "CachedBoundingBoxNode",
]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbeddingTraits:
    """Dimension and scalar type of the space a scene lives in."""

    embedding_dimension: int
    scalar_type: np.dtype = np.dtype(np.float64)

    def __post_init__(self) -> None:
        if int(self.embedding_dimension) < 1:
            raise ValueError(
                f"embedding dimension must be positive, got {self.embedding_dimension}"
            )
        object.__setattr__(self, "embedding_dimension", int(self.embedding_dimension))
        dtype = np.dtype(self.scalar_type)
        if dtype.kind not in "iuf":
            raise ValueError(f"scalar type must be numeric, got {dtype}")
        object.__setattr__(self, "scalar_type", dtype)

    @property
    def vector_shape(self) -> tuple[int]:
        return (self.embedding_dimension,)

    @property
    def matrix_shape(self) -> tuple[int, int]:
        """Shape of a matrix acting on vectors of this space."""
        d = self.embedding_dimension
        return (d, d)

    @property
    def transformation_matrix_shape(self) -> tuple[int, int]:
        """Shape of a matrix acting on homogeneous coordinates."""
        d = self.embedding_dimension + 1
        return (d, d)


EMBEDDING_TRAITS_2F = EmbeddingTraits(2, np.dtype(np.float32))
EMBEDDING_TRAITS_2D = EmbeddingTraits(2, np.dtype(np.float64))
EMBEDDING_TRAITS_3F = EmbeddingTraits(3, np.dtype(np.float32))
EMBEDDING_TRAITS_3D = EmbeddingTraits(3, np.dtype(np.float64))


class AbstractTransformation(ABC):
    """A transformation expressible as a homogeneous matrix."""

    def __init__(self, embedding_traits: EmbeddingTraits = EMBEDDING_TRAITS_3D) -> None:
        self.embedding_traits = embedding_traits

    def reset_transformation(self) -> AbstractTransformation:
        """Return the transformation to the identity; returns ``self``."""
        self._do_reset_transformation()
        return self

    @abstractmethod
    def as_matrix(self) -> np.ndarray:
        """The transformation as a homogeneous matrix."""

    @abstractmethod
    def _do_reset_transformation(self) -> None:
        """Set the transformation to the identity."""


class MatrixTransformation(AbstractTransformation):
    """A transformation stored directly as a homogeneous matrix."""

    def __init__(self, embedding_traits: EmbeddingTraits = EMBEDDING_TRAITS_3D) -> None:
        super().__init__(embedding_traits)
        self._matrix = self._identity()

    def _identity(self) -> np.ndarray:
        n = self.embedding_traits.transformation_matrix_shape[0]
        return np.identity(n, dtype=self.embedding_traits.scalar_type)

    def as_matrix(self) -> np.ndarray:
        return self._matrix.copy()

    def _do_reset_transformation(self) -> None:
        self._matrix = self._identity()


class AbstractFeature:
    """Something attached to an object; knows the object that owns it."""

    def __init__(self, embedding_traits: EmbeddingTraits | None = None) -> None:
        self._embedding_traits = embedding_traits
        self.owner: AbstractObject | None = None

    @property
    def embedding_traits(self) -> EmbeddingTraits | None:
        """The traits given at construction, else those of the owning object."""
        if self._embedding_traits is not None:
            return self._embedding_traits
        if self.owner is not None:
            return self.owner.embedding_traits
        return None


class AbstractGroupedFeature(AbstractFeature):
    """A feature meant to be collected in a group of like features."""


class AbstractObject:
    """An object owning a list of features."""

    def __init__(self, embedding_traits: EmbeddingTraits = EMBEDDING_TRAITS_3D) -> None:
        self.embedding_traits = embedding_traits
        self._features: list[AbstractFeature] = []

    @property
    def features(self) -> tuple[AbstractFeature, ...]:
        return tuple(self._features)

    def add_feature(self, feature_type: type, *args: Any, **kwargs: Any) -> Any:
        """Construct a feature, attach it to this object and return it."""
        feature = feature_type(*args, **kwargs)
        feature.owner = self
        self._features.append(feature)
        return feature


class Object(AbstractObject):
    """A scene-graph node with a transformation, a parent and children."""

    def __init__(
        self,
        parent: Object | None = None,
        transformation: AbstractTransformation | None = None,
    ) -> None:
        if transformation is None:
            transformation = MatrixTransformation()
        super().__init__(transformation.embedding_traits)
        self.transformation = transformation
        self.parent = parent
        self._children: list[Object] = []

    @property
    def children(self) -> tuple[Object, ...]:
        return tuple(self._children)

    def children_size(self) -> int:
        return len(self._children)

    def add_child(self, child: Object) -> None:
        """Append ``child`` and make this object its parent."""
        self._children.append(child)
        child.parent = self

    def emplace_child(self, object_type: type, *args: Any, **kwargs: Any) -> Any:
        """Construct a child object, add it and return it."""
        child = object_type(*args, **kwargs)
        self.add_child(child)
        return child


class Camera(Object):
    """An object from which a scene is viewed."""


class AlignedBox:
    """An axis-aligned box given by its minimum and maximum corners."""

    def __init__(self, minimum, maximum) -> None:
        self.min = np.array(minimum, dtype=float).reshape(-1)
        self.max = np.array(maximum, dtype=float).reshape(-1)
        if self.min.shape != self.max.shape:
            raise ValueError(
                f"corner sizes differ: {self.min.size} and {self.max.size}"
            )

    @classmethod
    def empty(cls, dimension: int) -> AlignedBox:
        """A box containing nothing, which any extension replaces."""
        return cls(np.full(dimension, np.inf), np.full(dimension, -np.inf))

    @property
    def dimension(self) -> int:
        return int(self.min.size)

    def extend(self, other: AlignedBox) -> AlignedBox:
        """Grow to contain ``other``; returns ``self``."""
        if other.dimension != self.dimension:
            raise ValueError(
                f"cannot extend a {self.dimension}-d box by a {other.dimension}-d box"
            )
        self.min = np.minimum(self.min, other.min)
        self.max = np.maximum(self.max, other.max)
        return self

    def is_empty(self) -> bool:
        return bool(np.any(self.min > self.max))

    def copy(self) -> AlignedBox:
        return AlignedBox(self.min, self.max)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AlignedBox):
            return NotImplemented
        return np.array_equal(self.min, other.min) and np.array_equal(self.max, other.max)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AlignedBox({self.min.tolist()}, {self.max.tolist()})"


class BoundingBoxNode(AbstractFeature):
    """A feature whose bounding box is the union of its children's boxes."""

    def __init__(self, embedding_traits: EmbeddingTraits | None = None) -> None:
        super().__init__(embedding_traits)
        self._children: list[BoundingBoxNode] = []

    @property
    def children(self) -> tuple[BoundingBoxNode, ...]:
        return tuple(self._children)

    def add_child(self, node: BoundingBoxNode) -> None:
        _log.debug("adding bounding box child")
        self._children.append(node)

    def _dimension(self) -> int:
        traits = self.embedding_traits
        if traits is None:
            raise ValueError("bounding box dimension is unknown: no embedding traits")
        return traits.embedding_dimension

    def bounding_box(self) -> AlignedBox:
        boxes = [child.bounding_box() for child in self._children]
        if self.embedding_traits is None and boxes:
            result = AlignedBox.empty(boxes[0].dimension)
        else:
            result = AlignedBox.empty(self._dimension())
        for box in boxes:
            _log.debug("child box %s => %s", box.min, box.max)
            result.extend(box)
        return result


class CachedBoundingBoxNode(BoundingBoxNode):
    """A bounding box node that stores its box instead of recomputing it."""

    def __init__(self, embedding_traits: EmbeddingTraits | None = None) -> None:
        super().__init__(embedding_traits)
        self._bbox: AlignedBox | None = None

    def bounding_box(self) -> AlignedBox:
        if self._bbox is None:
            return AlignedBox.empty(self._dimension())
        return self._bbox.copy()

    def set_bounding_box(self, box: AlignedBox) -> None:
        self._bbox = box.copy()

    def update_from_children(self) -> None:
        """Replace the stored box with the union of the children's boxes."""
        self._bbox = BoundingBoxNode.bounding_box(self)