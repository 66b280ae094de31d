"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, oc)  (half of traditional b)
    c = dot(oc, oc) - radius^2
    oc = origin - center

Example:
    >>> from pathtracer.materials import diffuse
    >>> sphere = Sphere(center=vec3(0, 0, -1), radius=0.5, material=diffuse((0.8, 0.3, 0.3)))
    >>> record = sphere.intersect(make_ray(vec3(0, 0, 0), vec3(0, 0, -1)), 0.001, math.inf)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from pathtracer.core.ray import Ray, Vec3, dot, ray_at
from pathtracer.geometry.shape import HitRecord
from pathtracer.materials.material import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The material owned by the sphere.
    """

    center: Vec3
    radius: float
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius = {self.radius} must be positive")

    def normal_at(self, point: Vec3) -> Vec3:
        """Outward unit normal at a point on the sphere surface."""
        return (point - self.center) / self.radius

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for ray-sphere intersection.

        Of the two roots, the near one is tried first and the far one is the
        fallback, so a ray starting inside the sphere hits its back face.

        Args:
            ray: The ray to test (unit direction).
            t_min: Minimum t value to consider a valid hit (avoids self-intersection).
            t_max: Maximum t value to consider a valid hit.

        Returns:
            A HitRecord for the nearest root in [t_min, t_max], or None.
        """
        oc = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        h = dot(ray.direction, oc)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)

        # Find the nearest root that lies in the acceptable range
        root = (-h - sqrt_d) / a
        if root < t_min or root > t_max:
            root = (-h + sqrt_d) / a
            if root < t_min or root > t_max:
                return None

        point = ray_at(ray, root)
        outward_normal = self.normal_at(point)

        # Front face: ray direction and outward normal point in opposite directions
        front_face = dot(ray.direction, outward_normal) < 0.0

        return HitRecord(
            point=point,
            normal=outward_normal if front_face else -outward_normal,
            t=root,
            front_face=front_face,
            material=self.material,
        )
