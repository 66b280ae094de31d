"""Render configuration records.

RenderSettings gathers everything the scheduler needs besides the camera and
the scene: image size, sampling budget, bounce limit, worker count and the
optional gradient skybox. Values are validated on construction so a bad
configuration fails before any worker starts.

Example:
    >>> settings = RenderSettings.from_aspect_ratio(
    ...     width=320,
    ...     aspect_ratio=16.0 / 9.0,
    ...     samples_per_pixel=64,
    ...     max_depth=5,
    ...     skybox=Skybox(),
    ... )
    >>> settings.height
    180
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from pathtracer.core.ray import Vec3, lerp


@dataclass(frozen=True)
class Skybox:
    """Linear vertical gradient used as radiance for escaped rays.

    Attributes:
        horizon_color: Color seen looking straight down (direction.y = -1).
        zenith_color: Color seen looking straight up (direction.y = +1).
    """

    horizon_color: Vec3 = Vec3(1.0, 1.0, 1.0)
    zenith_color: Vec3 = Vec3(0.5, 0.7, 1.0)

    def sample(self, direction: Vec3) -> Vec3:
        """Return the sky radiance for a unit ray direction."""
        t = 0.5 * (direction.y + 1.0)
        return lerp(self.horizon_color, self.zenith_color, t)


def _default_concurrency() -> int:
    return os.cpu_count() or 1


# trace_ray recurses once per bounce; this keeps paths well inside the
# interpreter's recursion limit
MAX_DEPTH = 100


def _check_integer(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} = {value!r} must be an integer")


@dataclass(frozen=True)
class RenderSettings:
    """Parameters of a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Camera rays averaged per pixel (positive).
        max_depth: Maximum number of bounces per path, in [0, MAX_DEPTH].
            A depth of zero renders a black image.
        concurrency: Number of pixel tasks allowed to run at once.
        seed: Render-level seed mixed into every pixel stream.
        skybox: Gradient sky for escaped rays, or None for a black background.
        progress_interval: Pixels between progress reports. Defaults to one
            scanline (the image width).
    """

    width: int
    height: int
    samples_per_pixel: int = 100
    max_depth: int = 5
    concurrency: int = field(default_factory=_default_concurrency)
    seed: int = 0
    skybox: Skybox | None = None
    progress_interval: int | None = None

    def __post_init__(self) -> None:
        for name in ("width", "height", "samples_per_pixel", "max_depth", "concurrency", "seed"):
            _check_integer(name, getattr(self, name))
        if self.progress_interval is not None:
            _check_integer("progress_interval", self.progress_interval)

        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) must be positive"
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel = {self.samples_per_pixel} must be a positive integer"
            )
        if not 0 <= self.max_depth <= MAX_DEPTH:
            raise ValueError(f"max_depth = {self.max_depth} is outside [0, {MAX_DEPTH}]")
        if self.concurrency <= 0:
            raise ValueError(f"concurrency = {self.concurrency} must be a positive integer")
        if self.progress_interval is not None and self.progress_interval <= 0:
            raise ValueError(
                f"progress_interval = {self.progress_interval} must be a positive integer"
            )

    @classmethod
    def from_aspect_ratio(
        cls, width: int, aspect_ratio: float, **kwargs: object
    ) -> RenderSettings:
        """Build settings whose height follows from width and aspect ratio.

        Args:
            width: Image width in pixels.
            aspect_ratio: Width divided by height.
            **kwargs: Any other RenderSettings field.

        Raises:
            ValueError: If the aspect ratio is not positive.
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio = {aspect_ratio} must be positive")
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)

    @property
    def pixel_count(self) -> int:
        """Total number of pixels in the image."""
        return self.width * self.height

    @property
    def report_every(self) -> int:
        """Effective progress interval in pixels."""
        return self.progress_interval or self.width
