"""Ray data structure and vector utilities for CPU path tracing.

This module provides the Vec3 value type, the Ray dataclass and the vector
utility functions used throughout the renderer. All values are immutable:
arithmetic produces new vectors, so they can be shared freely between
render workers.

Example:
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -2.0)
    >>> ray = make_ray(origin, direction)  # direction is normalized
    >>> ray_at(ray, 5.0)
    Vec3(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec3:
    """A three component vector used for points, directions and colors.

    Multiplying two vectors is component-wise (color modulation); use
    dot() and cross() for the geometric products.

    Attributes:
        x: First component (red channel for colors).
        y: Second component (green channel for colors).
        z: Third component (blue channel for colors).
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z


ZERO = Vec3(0.0, 0.0, 0.0)
ONE = Vec3(1.0, 1.0, 1.0)


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a vector from three numbers, coercing them to float."""
    return Vec3(float(x), float(y), float(z))


@dataclass(frozen=True, slots=True)
class Ray:
    """Half-line from ``origin`` along ``direction``.

    Attributes:
        origin: Point the ray leaves from.
        direction: Travel direction. Rays built with make_ray() always carry
            a unit-length direction, so t measures distance.
    """

    origin: Vec3
    direction: Vec3


def make_ray(origin: Vec3, direction: Vec3) -> Ray:
    """Build a ray, normalizing ``direction`` to unit length."""
    return Ray(origin=origin, direction=normalize(direction))


def ray_at(ray: Ray, t: float) -> Vec3:
    """Return origin + t * direction."""
    return ray.origin + ray.direction * t


# =============================================================================
# Vector helpers
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def length_squared(v: Vec3) -> float:
    return v.x * v.x + v.y * v.y + v.z * v.z


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Scale v to unit length. The zero vector is returned as ZERO."""
    n = length(v)
    if n == 0.0:
        return ZERO
    return Vec3(v.x / n, v.y / n, v.z / n)


def near_zero(v: Vec3) -> bool:
    """True when every component is within 1e-8 of zero.

    Scatter code uses this to catch directions that cancelled out.
    """
    s = 1e-8
    return abs(v.x) < s and abs(v.y) < s and abs(v.z) < s


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    """Linearly interpolate between a (t = 0) and b (t = 1)."""
    return a + (b - a) * t


def clamp(v: Vec3, low: float = 0.0, high: float = 1.0) -> Vec3:
    """Clamp every component of v into [low, high]."""
    return Vec3(
        min(max(v.x, low), high),
        min(max(v.y, low), high),
        min(max(v.z, low), high),
    )


def exp_attenuation(coefficients: Vec3, distance: float) -> Vec3:
    """Per-channel exponential falloff exp(-coefficient * distance)."""
    return Vec3(
        math.exp(-coefficients.x * distance),
        math.exp(-coefficients.y * distance),
        math.exp(-coefficients.z * distance),
    )


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Mirror ``incident`` about a unit ``normal``: I - 2(I . N)N."""
    return incident - normal * (2.0 * dot(incident, normal))


def refract(incident: Vec3, normal: Vec3, eta: float) -> Vec3:
    """Bend a unit direction through a boundary with Snell's law.

    Args:
        incident: Unit direction arriving at the surface.
        normal: Unit normal on the incident side of the surface.
        eta: n_incident / n_transmitted.

    Returns:
        The transmitted direction, or ZERO when eta * sin(theta_i) > 1
        (total internal reflection).
    """
    cos_i = -dot(incident, normal)
    sin2_t = (1.0 - cos_i * cos_i) * eta * eta
    if sin2_t > 1.0:
        return ZERO
    cos_t = math.sqrt(1.0 - sin2_t)
    return incident * eta + normal * (eta * cos_i - cos_t)


def schlick_fresnel(cosine: float, ratio: float) -> float:
    """Schlick's approximation of the Fresnel reflectance.

    Args:
        cosine: Cosine of the angle of incidence.
        ratio: Ratio of the refractive indices on either side.

    Returns:
        The probability of reflection, from r0 at normal incidence up to 1
        at grazing angles.
    """
    r0 = (1.0 - ratio) / (1.0 + ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5
