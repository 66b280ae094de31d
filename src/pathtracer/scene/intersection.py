"""Scene-level nearest-hit queries.

A ShapeCollection is a fixed, ordered sequence of shapes. Rendering only
reads it, so it is shared by every worker without locking. Intersection is
a brute-force linear scan: each shape is tested with the upper bound shrunk
to the closest hit found so far.

Example:
    >>> from pathtracer.geometry import Sphere
    >>> from pathtracer.materials import diffuse
    >>> world = ShapeCollection([
    ...     Sphere(vec3(0, 0, -1), 0.5, diffuse((0.8, 0.3, 0.3))),
    ...     Sphere(vec3(0, -100.5, -1), 100.0, diffuse((0.9, 0.9, 0.9))),
    ... ])
    >>> record = world.nearest_hit(ray, MIN_ROOT, MAX_ROOT)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from pathtracer.core.errors import GeometryError
from pathtracer.core.ray import Ray
from pathtracer.geometry.shape import HitRecord, Shape

# Roots closer than this are ignored so bounce rays do not re-hit their origin
MIN_ROOT = 0.001

# Camera and bounce rays are unbounded
MAX_ROOT = math.inf


class ShapeCollection:
    """An immutable, ordered collection of shapes.

    Attributes:
        shapes: The shapes, in insertion order.
    """

    def __init__(self, shapes: Iterable[Shape] = ()) -> None:
        self._shapes: tuple[Shape, ...] = tuple(shapes)

    @property
    def shapes(self) -> tuple[Shape, ...]:
        """Get the shapes in the collection."""
        return self._shapes

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._shapes)

    def nearest_hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test ray against all shapes and return the closest hit.

        Args:
            ray: The ray to test.
            t_min: Minimum t value to consider a valid hit.
            t_max: Maximum t value to consider a valid hit.

        Returns:
            The closest HitRecord with t in [t_min, t_max], or None.

        Raises:
            GeometryError: If a shape reports a root outside the bounds it was
                queried with.
        """
        closest_t = t_max
        result = None

        for shape in self._shapes:
            record = shape.intersect(ray, t_min, closest_t)
            if record is None:
                continue
            if not (t_min <= record.t <= closest_t):
                raise GeometryError(
                    f"{shape!r} reported root {record.t} outside [{t_min}, {closest_t}]"
                )
            closest_t = record.t
            result = record

        return result

    def __repr__(self) -> str:
        return f"ShapeCollection({len(self._shapes)} shapes)"
