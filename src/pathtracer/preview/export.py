"""Image export utilities for rendered color buffers.

The render core stops at a filled ColorBuffer whose row 0 is the bottom of
the viewport. This module flips it to the top-left origin image formats use
and encodes it with Pillow; the format follows the file extension.

Example:
    >>> buffer = render(camera, world, settings)
    >>> save_image(buffer, "spheres.png")
    >>> save_image(buffer, "spheres.jpg", gamma=2.2)
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.color_buffer import ColorBuffer


def apply_gamma(image: npt.NDArray[np.uint8], gamma: float) -> npt.NDArray[np.uint8]:
    """Apply gamma correction to an 8-bit image.

    Args:
        image: Image array with dtype uint8.
        gamma: Gamma value; 1.0 returns the image unchanged.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma = {gamma} must be positive")
    if gamma == 1.0:
        return image
    normalized = image.astype(np.float32) / 255.0
    corrected = np.power(normalized, 1.0 / gamma)
    return (corrected * 255).astype(np.uint8)


def buffer_to_image(buffer: ColorBuffer, gamma: float = 1.0) -> PILImage.Image:
    """Convert a ColorBuffer to a Pillow RGB image with a top-left origin."""
    image = apply_gamma(buffer.to_image_array(flip=True), gamma)
    return PILImage.fromarray(image)


def save_image(buffer: ColorBuffer, filepath: str | Path, gamma: float = 1.0) -> Path:
    """Save a ColorBuffer to disk.

    Args:
        buffer: The rendered buffer.
        filepath: Output path; the extension selects the format
            (e.g. ".png", ".jpg").
        gamma: Gamma correction value. Default 1.0 writes the stored bytes.

    Returns:
        The path written.
    """
    path = Path(filepath)
    buffer_to_image(buffer, gamma=gamma).save(path)
    return path
