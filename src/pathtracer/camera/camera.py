"""Thin-lens camera model for ray generation.

The camera looks along ``look_direction`` from ``origin``. A rectangular
viewport of the given width and height sits ``focal_length`` units in front
of it, and (u, v) in [0, 1] address that viewport from its bottom-left corner.

The camera builds an orthonormal basis from the look direction and the fixed
world up axis (+Y):
    - forward: the normalized look direction
    - right: forward x world_up
    - up: right x forward

When the look direction is parallel to +Y the cross product vanishes, so +Z
is used as the reference up axis instead.

With a positive ``defocus_strength`` every ray starts from a random point on
a lens disk of that radius (in the right/up plane) and still passes through
its viewport target, so only geometry at the focal distance stays sharp.

Example:
    >>> camera = Camera.from_aspect_ratio(
    ...     aspect_ratio=16.0 / 9.0,
    ...     viewport_height=2.0,
    ...     focal_length=5.0,
    ...     origin=vec3(0.0, 0.0, 7.0),
    ...     look_direction=vec3(0.0, 0.0, -1.0),
    ... )
    >>> ray, state = camera.get_ray(0.5, 0.5, state=1)  # Ray through image center
"""

from __future__ import annotations

from pathtracer.core.ray import Ray, Vec3, cross, length, make_ray, near_zero, normalize
from pathtracer.core.rng import point_in_disk

WORLD_UP = Vec3(0.0, 1.0, 0.0)

# Reference up axis when the look direction is parallel to WORLD_UP
FALLBACK_UP = Vec3(0.0, 0.0, 1.0)

_PARALLEL_EPSILON = 1e-6


def build_basis(look_direction: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build the camera's orthonormal basis.

    Args:
        look_direction: View direction (any non-zero length).

    Returns:
        A tuple (right, up, forward) of unit vectors.

    Raises:
        ValueError: If the look direction has zero length.
    """
    if near_zero(look_direction):
        raise ValueError("Camera look direction must be non-zero")

    forward = normalize(look_direction)
    right = cross(forward, WORLD_UP)
    if length(right) < _PARALLEL_EPSILON:
        right = cross(forward, FALLBACK_UP)
    right = normalize(right)
    up = normalize(cross(right, forward))
    return right, up, forward


class Camera:
    """Camera mapping viewport coordinates to world-space rays.

    Attributes:
        viewport_height: Height of the viewport in world units.
        viewport_width: Width of the viewport in world units.
        focal_length: Distance from the origin to the viewport.
        origin: Camera position in world space.
        look_direction: Unit view direction.
        right: Unit vector pointing right in the image plane.
        up: Unit vector pointing up in the image plane.
        defocus_strength: Lens radius; 0 gives a pinhole camera.
    """

    def __init__(
        self,
        viewport_height: float,
        viewport_width: float,
        focal_length: float,
        origin: Vec3,
        look_direction: Vec3,
        defocus_strength: float = 0.0,
    ) -> None:
        """Derive the basis and viewport corners from the configuration.

        Raises:
            ValueError: If a viewport dimension or the focal length is not
                positive, the defocus strength is negative, or the look
                direction is zero.
        """
        if viewport_height <= 0.0 or viewport_width <= 0.0:
            raise ValueError(
                f"Viewport dimensions ({viewport_width}x{viewport_height}) must be positive"
            )
        if focal_length <= 0.0:
            raise ValueError(f"focal_length = {focal_length} must be positive")
        if defocus_strength < 0.0:
            raise ValueError(f"defocus_strength = {defocus_strength} is negative")

        self.viewport_height = viewport_height
        self.viewport_width = viewport_width
        self.focal_length = focal_length
        self.origin = origin
        self.defocus_strength = defocus_strength
        self.right, self.up, self.look_direction = build_basis(look_direction)

        self._horizontal = self.right * viewport_width
        self._vertical = self.up * viewport_height
        self._bottom_left = (
            origin
            - self._horizontal / 2.0
            - self._vertical / 2.0
            + self.look_direction * focal_length
        )

    @classmethod
    def from_aspect_ratio(
        cls,
        aspect_ratio: float,
        viewport_height: float,
        focal_length: float,
        origin: Vec3,
        look_direction: Vec3,
        defocus_strength: float = 0.0,
    ) -> Camera:
        """Create a camera whose viewport width follows the image aspect ratio."""
        return cls(
            viewport_height=viewport_height,
            viewport_width=aspect_ratio * viewport_height,
            focal_length=focal_length,
            origin=origin,
            look_direction=look_direction,
            defocus_strength=defocus_strength,
        )

    @property
    def bottom_left(self) -> Vec3:
        """Bottom-left corner of the viewport, (u, v) = (0, 0)."""
        return self._bottom_left

    @property
    def bottom_right(self) -> Vec3:
        """Bottom-right corner of the viewport, (u, v) = (1, 0)."""
        return self._bottom_left + self._horizontal

    @property
    def top_left(self) -> Vec3:
        """Top-left corner of the viewport, (u, v) = (0, 1)."""
        return self._bottom_left + self._vertical

    @property
    def top_right(self) -> Vec3:
        """Top-right corner of the viewport, (u, v) = (1, 1)."""
        return self._bottom_left + self._horizontal + self._vertical

    def viewport_point(self, u: float, v: float) -> Vec3:
        """World-space point on the viewport at (u, v)."""
        return self._bottom_left + self._horizontal * u + self._vertical * v

    def get_ray(self, u: float, v: float, state: int) -> tuple[Ray, int]:
        """Generate a ray through normalized viewport coordinates (u, v).

        The coordinates are normalized:
        - u = 0: left edge, u = 1: right edge
        - v = 0: bottom edge, v = 1: top edge

        Args:
            u: Horizontal coordinate in [0, 1].
            v: Vertical coordinate in [0, 1].
            state: Random stream state, consumed only when defocus is enabled.

        Returns:
            Tuple of (ray, new_state). The ray direction is unit length.
        """
        target = self.viewport_point(u, v)
        origin = self.origin

        if self.defocus_strength > 0.0:
            (dx, dy), state = point_in_disk(state, self.defocus_strength)
            origin = origin + self.right * dx + self.up * dy

        return make_ray(origin, target - origin), state

    def __repr__(self) -> str:
        return (
            f"Camera(origin={self.origin}, look_direction={self.look_direction}, "
            f"viewport={self.viewport_width}x{self.viewport_height}, "
            f"focal_length={self.focal_length}, defocus_strength={self.defocus_strength})"
        )
