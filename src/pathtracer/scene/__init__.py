"""Scene module.

Components:
    intersection: ShapeCollection and nearest-hit queries
    spheres: Sphere row demonstration scene
"""

from .intersection import MAX_ROOT, MIN_ROOT, ShapeCollection
from .spheres import SphereRowParams, create_sphere_row_scene

__all__ = [
    "ShapeCollection",
    "MIN_ROOT",
    "MAX_ROOT",
    "SphereRowParams",
    "create_sphere_row_scene",
]
