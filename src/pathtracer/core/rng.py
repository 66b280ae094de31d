"""Stateless PCG random stream for Monte Carlo sampling.

There is no generator object here. Every function takes the current 32-bit
state and returns ``(value, new_state)``, so a pixel task can thread its own
stream through camera jitter and bounce sampling without sharing anything
with other workers. The same seed always yields the same sequence, no matter
how many threads are rendering.

The core step is the PCG hash (a linear congruential advance followed by an
xorshift/multiply permutation), computed with explicit 32-bit masking.

Example:
    >>> state = pixel_seed(3, 2, width=16)
    >>> value, state = next_random(state)
    >>> direction, state = unit_sphere_point(state)
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Vec3, dot, near_zero, normalize

MASK32 = 0xFFFFFFFF

# PCG constants
_PCG_MULTIPLIER = 747796405
_PCG_INCREMENT = 2891336453
_PCG_PERMUTE = 277803737

# Spreads render-level seeds far apart in the per-pixel state space
_SEED_STRIDE = 719393

_TWO_PI = 2.0 * math.pi
_INV_2_32 = 1.0 / 4294967296.0


def pcg_hash(state: int) -> int:
    """Advance and permute a 32-bit state.

    Args:
        state: Current stream state (any int; only the low 32 bits are used).

    Returns:
        The next state, also used as the raw random output.
    """
    state = (state * _PCG_MULTIPLIER + _PCG_INCREMENT) & MASK32
    word = (((state >> ((state >> 28) + 4)) ^ state) * _PCG_PERMUTE) & MASK32
    return ((word >> 22) ^ word) & MASK32


def next_random(state: int) -> tuple[float, int]:
    """Draw a uniform value in [0, 1).

    Args:
        state: Current stream state.

    Returns:
        Tuple of (value, new_state).
    """
    new_state = pcg_hash(state)
    return new_state * _INV_2_32, new_state


def pixel_seed(x: int, y: int, width: int, seed: int = 0) -> int:
    """Derive the initial stream state for a pixel from its linear index.

    Args:
        x: Pixel column.
        y: Pixel row.
        width: Image width, used to linearize the coordinate.
        seed: Render-level seed; different seeds give different images.

    Returns:
        A 32-bit initial state.
    """
    return (y * width + x + seed * _SEED_STRIDE) & MASK32


def normal_sample(state: int) -> tuple[float, int]:
    """Draw a standard normal deviate using the Box-Muller transform."""
    u1, state = next_random(state)
    u2, state = next_random(state)
    theta = _TWO_PI * u1
    # 1 - u2 lies in (0, 1], keeping log() finite
    rho = math.sqrt(-2.0 * math.log(1.0 - u2))
    return rho * math.cos(theta), state


def unit_sphere_point(state: int) -> tuple[Vec3, int]:
    """Draw an isotropic direction on the unit sphere.

    Three independent normal deviates form a spherically symmetric vector,
    so normalizing it gives a uniform direction without rejection sampling.
    """
    while True:
        x, state = normal_sample(state)
        y, state = normal_sample(state)
        z, state = normal_sample(state)
        v = Vec3(x, y, z)
        if not near_zero(v):
            return normalize(v), state


def unit_hemisphere_point(state: int, normal: Vec3) -> tuple[Vec3, int]:
    """Draw a unit direction on the hemisphere around ``normal``.

    A sphere sample pointing away from the normal is flipped to its side.
    """
    point, state = unit_sphere_point(state)
    if dot(point, normal) < 0.0:
        point = -point
    return point, state


def cosine_weighted_hemisphere(state: int, normal: Vec3) -> tuple[Vec3, int]:
    """Draw a cosine-weighted direction around ``normal``.

    Computed as normalize(normal + unit_sphere_point), which has a
    cos(theta) / pi density about the normal.

    Args:
        state: Current stream state.
        normal: Unit normal defining the hemisphere.

    Returns:
        Tuple of (unit direction, new_state).
    """
    point, state = unit_sphere_point(state)
    direction = normal + point
    # The sample cancelled the normal exactly
    if near_zero(direction):
        return normal, state
    return normalize(direction), state


def point_in_disk(state: int, radius: float = 1.0) -> tuple[tuple[float, float], int]:
    """Draw a uniform point inside a disk of the given radius.

    Returns:
        Tuple of ((x, y), new_state).
    """
    u1, state = next_random(state)
    u2, state = next_random(state)
    angle = _TWO_PI * u1
    r = radius * math.sqrt(u2)
    return (r * math.cos(angle), r * math.sin(angle)), state


def point_in_sphere(state: int, radius: float = 1.0) -> tuple[Vec3, int]:
    """Draw a uniform point inside a ball of the given radius."""
    direction, state = unit_sphere_point(state)
    u, state = next_random(state)
    return direction * (radius * u ** (1.0 / 3.0)), state
