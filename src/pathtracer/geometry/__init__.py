"""Geometry module for shape primitives.

Components:
    shape: The Shape protocol and HitRecord
    sphere: Sphere primitive with ray-sphere intersection

Shapes are plain dataclasses satisfying the Shape protocol; new primitive
kinds only need ``intersect`` and ``normal_at``.
"""

from .shape import HitRecord, Shape
from .sphere import Sphere

__all__ = [
    "Shape",
    "HitRecord",
    "Sphere",
]
