"""Core rendering module.

This module contains the fundamental building blocks for path tracing:

Components:
    ray: Vec3 value type, Ray, and vector utilities
    rng: Stateless PCG random stream and sampling helpers
    settings: Render configuration and the gradient skybox
    color_buffer: 8-bit RGB render target
    errors: Exception taxonomy of the render core
    integrator: Recursive light transport and per-pixel sampling
    scheduler: Bounded-concurrency pixel scheduler
"""

from .color_buffer import ColorBuffer
from .errors import GeometryError, PixelTaskError, RenderCancelledError
from .ray import (
    ONE,
    ZERO,
    Ray,
    Vec3,
    clamp,
    cross,
    dot,
    exp_attenuation,
    length,
    length_squared,
    lerp,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)
from .rng import (
    cosine_weighted_hemisphere,
    next_random,
    normal_sample,
    pixel_seed,
    point_in_disk,
    point_in_sphere,
    unit_hemisphere_point,
    unit_sphere_point,
)
from .settings import MAX_DEPTH, RenderSettings, Skybox

# Note: integrator and scheduler are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator or pathtracer.core.scheduler.

__all__ = [
    "Vec3",
    "Ray",
    "ZERO",
    "ONE",
    "vec3",
    "make_ray",
    "ray_at",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "near_zero",
    "lerp",
    "clamp",
    "exp_attenuation",
    "reflect",
    "refract",
    "schlick_fresnel",
    "next_random",
    "pixel_seed",
    "normal_sample",
    "unit_sphere_point",
    "unit_hemisphere_point",
    "cosine_weighted_hemisphere",
    "point_in_disk",
    "point_in_sphere",
    "RenderSettings",
    "MAX_DEPTH",
    "Skybox",
    "ColorBuffer",
    "GeometryError",
    "PixelTaskError",
    "RenderCancelledError",
]
