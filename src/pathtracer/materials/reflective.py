"""Reflection branch of the shading model.

The reflected direction blends a cosine-weighted diffuse sample with the
mirror direction:

    R = I - 2(I . N)N
    direction = normalize(lerp(diffuse, R, weight))

Under the FULL model the weight is the material smoothness and the mirror
direction may be fuzzed by a random offset on a sphere of radius ``fuzz``.
Under the SIMPLE model a specular coin flip decides per bounce whether the
smoothness applies at all (weight 0 on diffuse bounces) and fuzz is ignored.

Example:
    >>> state = 12345
    >>> is_specular, state = roll_specular(material, state)
    >>> color = surface_color(material, is_specular)
    >>> direction, state = scatter_reflective(material, incident, normal, is_specular, state)
"""

from __future__ import annotations

from pathtracer.core.ray import Vec3, dot, lerp, near_zero, normalize, reflect
from pathtracer.core.rng import cosine_weighted_hemisphere, next_random, unit_sphere_point
from pathtracer.materials.material import Material, ShadingModel


def roll_specular(material: Material, state: int) -> tuple[bool, int]:
    """Decide whether this bounce is specular.

    No random number is drawn when specular_probability is 0.

    Returns:
        Tuple of (is_specular, new_state).
    """
    if material.specular_probability <= 0.0:
        return False, state
    roll, state = next_random(state)
    return roll < material.specular_probability, state


def surface_color(material: Material, is_specular: bool) -> Vec3:
    """Color multiplied into the path throughput at a hit."""
    return material.specular_color if is_specular else material.base_color


def fuzz_direction(direction: Vec3, normal: Vec3, fuzz: float, state: int) -> tuple[Vec3, int]:
    """Perturb a mirror direction by a random offset of radius ``fuzz``.

    An offset pointing into the surface is negated rather than discarded so
    the result stays on the normal's side.

    Returns:
        Tuple of (unit direction, new_state).
    """
    offset, state = unit_sphere_point(state)
    offset = offset * fuzz
    if dot(offset, normal) < 0.0:
        offset = -offset
    return normalize(direction + offset), state


def scatter_reflective(
    material: Material,
    incident: Vec3,
    normal: Vec3,
    is_specular: bool,
    state: int,
) -> tuple[Vec3, int]:
    """Sample a reflected direction for a hit.

    Args:
        material: Material of the hit surface.
        incident: Incoming unit ray direction.
        normal: Unit normal facing the incoming ray.
        is_specular: Outcome of roll_specular() for this bounce.
        state: Current random stream state.

    Returns:
        Tuple of (unit scattered direction, new_state).
    """
    diffuse_direction, state = cosine_weighted_hemisphere(state, normal)
    mirror_direction = reflect(incident, normal)

    if material.shading_model is ShadingModel.SIMPLE:
        weight = material.smoothness if is_specular else 0.0
    else:
        weight = material.smoothness
        if material.fuzz > 0.0:
            mirror_direction, state = fuzz_direction(
                mirror_direction, normal, material.fuzz, state
            )

    direction = lerp(diffuse_direction, mirror_direction, weight)
    if near_zero(direction):
        return normal, state
    return normalize(direction), state
