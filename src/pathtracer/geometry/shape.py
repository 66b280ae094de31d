"""Shape contract and hit record.

Any object with ``intersect`` and ``normal_at`` can be placed in a scene;
no base class is required. Sphere is the only primitive today.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pathtracer.core.ray import Ray, Vec3
from pathtracer.materials.material import Material


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Record of a ray-shape intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: Unit surface normal, flipped to face the incoming ray.
        t: The ray parameter (distance, for unit directions) of the hit.
        front_face: True if the ray hit the outside of the surface.
        material: Material of the shape that was hit.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    material: Material


@runtime_checkable
class Shape(Protocol):
    """Anything a ray can hit."""

    material: Material

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the nearest hit with t in [t_min, t_max], or None."""
        ...

    def normal_at(self, point: Vec3) -> Vec3:
        """Return the outward unit normal at a point on the surface."""
        ...
