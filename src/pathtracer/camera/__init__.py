"""Camera module.

Components:
    camera: Thin-lens camera with optional depth of field
"""

from .camera import FALLBACK_UP, WORLD_UP, Camera, build_basis

__all__ = [
    "Camera",
    "build_basis",
    "WORLD_UP",
    "FALLBACK_UP",
]
