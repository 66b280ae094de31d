"""8-bit RGB render target.

The ColorBuffer is the only state shared by render workers. Each pixel
task writes exactly one cell and no two tasks own the same coordinate, so
writes need no lock.

Row 0 is the bottom of the viewport, matching the camera's (u, v) origin.
Use to_image_array() to get the conventional top-left origin for encoders.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from pathtracer.core.ray import Vec3

BYTES_PER_COLOR = 3


class ColorBuffer:
    """A width x height grid of RGB bytes.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a black buffer.

        Args:
            width: Image width in pixels (positive).
            height: Image height in pixels (positive).

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions ({width}x{height}) must be positive")
        self._width = width
        self._height = height
        self._data = np.zeros((height, width, BYTES_PER_COLOR), dtype=np.uint8)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} buffer"
            )

    def write(self, x: int, y: int, color: Vec3) -> None:
        """Store a color at the given pixel.

        Components are clamped to [0, 1] and scaled to bytes by truncation.

        Args:
            x: Horizontal coordinate (0 = left).
            y: Vertical coordinate (0 = bottom).
            color: Linear color, nominally in [0, 1].
        """
        self._check_bounds(x, y)
        self._data[y, x] = [int(min(max(c, 0.0), 1.0) * 255) for c in color]

    def read(self, x: int, y: int) -> tuple[int, int, int]:
        """Return the stored bytes at the given pixel as (R, G, B)."""
        self._check_bounds(x, y)
        r, g, b = self._data[y, x]
        return int(r), int(g), int(b)

    def to_bytes(self) -> bytes:
        """Return the buffer as width * height * 3 bytes, row-major, row 0 first."""
        return self._data.tobytes()

    def to_array(self) -> npt.NDArray[np.uint8]:
        """Return a copy of the raw (height, width, 3) array, row 0 = bottom."""
        return self._data.copy()

    def to_image_array(self, flip: bool = True) -> npt.NDArray[np.uint8]:
        """Return a (height, width, 3) array ready for image encoders.

        Args:
            flip: Flip vertically so row 0 is the top of the image.
        """
        image = np.flipud(self._data) if flip else self._data
        return np.ascontiguousarray(image)

    def __repr__(self) -> str:
        return f"ColorBuffer(width={self._width}, height={self._height})"
