"""Preview module for image output.

Components:
    export: ColorBuffer to Pillow image conversion and file export
"""

from .export import apply_gamma, buffer_to_image, save_image

__all__ = [
    "apply_gamma",
    "buffer_to_image",
    "save_image",
]
