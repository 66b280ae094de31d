"""Exceptions raised by the rendering core.

GeometryError:
    An intersection routine broke its own contract. This is a programming
    error, so it derives from AssertionError and is never caught.
PixelTaskError:
    One pixel task failed while shading or writing its result.
RenderCancelledError:
    The render as a whole did not complete, either because a pixel task
    failed or because cancellation was requested.
"""

from __future__ import annotations


class GeometryError(AssertionError):
    """A shape reported a hit that violates the intersection contract."""


class PixelTaskError(RuntimeError):
    """Failure of a single pixel task.

    Attributes:
        x: Column of the failed pixel.
        y: Row of the failed pixel (0 = bottom of the viewport).
    """

    def __init__(self, x: int, y: int, message: str) -> None:
        super().__init__(f"Pixel ({x}, {y}) failed: {message}")
        self.x = x
        self.y = y


class RenderCancelledError(RuntimeError):
    """The render was cancelled before every pixel was processed.

    Attributes:
        failures: Pixel task failures that triggered the cancellation, in the
            order they were observed. Empty when the caller cancelled.
    """

    def __init__(self, message: str, failures: list[PixelTaskError] | None = None) -> None:
        super().__init__(message)
        self.failures = list(failures or [])
