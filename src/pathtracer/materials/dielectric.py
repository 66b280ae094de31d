"""Dielectric (glass/water) transmission branch.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when ratio * sin(theta_i) > 1
    - Beer-Lambert absorption for light travelling inside the medium

The branch randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Vec3, dot, exp_attenuation, normalize, reflect, refract, schlick_fresnel
from pathtracer.core.rng import next_random
from pathtracer.materials.material import Material

# Index of refraction of the medium surrounding every shape
AIR_IOR = 1.0


def refraction_ratio(material: Material, front_face: bool) -> float:
    """Ratio of refractive indices n_incident / n_transmitted.

    Entering from outside the ratio is AIR_IOR / ior; leaving the material
    it is ior / AIR_IOR.
    """
    if front_face:
        return AIR_IOR / material.ior
    return material.ior / AIR_IOR


def cannot_refract(ratio: float, cos_theta: float) -> bool:
    """True when Snell's law has no solution (total internal reflection)."""
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    return ratio * sin_theta > 1.0


def scatter_transmissive(
    material: Material,
    incident: Vec3,
    normal: Vec3,
    front_face: bool,
    state: int,
) -> tuple[Vec3, bool, int]:
    """Sample the transmission branch at a dielectric boundary.

    Args:
        material: Material of the hit surface.
        incident: Incoming unit ray direction.
        normal: Unit normal facing the incoming ray.
        front_face: True if the ray arrived from outside the shape.
        state: Current random stream state.

    Returns:
        A tuple of (direction, refracted, new_state) where:
        - direction: The reflected or refracted unit direction.
        - refracted: True if the ray crossed the boundary.
        - new_state: The advanced random stream state.
    """
    ratio = refraction_ratio(material, front_face)
    cos_theta = min(-dot(incident, normal), 1.0)

    # One draw per call, whether or not the Fresnel roll is needed
    roll, state = next_random(state)

    if cannot_refract(ratio, cos_theta) or roll < schlick_fresnel(cos_theta, ratio):
        return normalize(reflect(incident, normal)), False, state

    return normalize(refract(incident, normal, ratio)), True, state


def beer_lambert(medium: Material, distance: float) -> Vec3:
    """Per-channel transmittance after travelling ``distance`` inside ``medium``.

    Computed as exp(-absorbance * absorbance_color * distance).
    """
    return exp_attenuation(medium.absorbance_color * medium.absorbance, distance)
