"""Materials module.

Components:
    material: Material record, shading model selector and factory helpers
    reflective: Diffuse/mirror reflection branch
    dielectric: Fresnel transmission branch and Beer-Lambert absorption
"""

from .dielectric import (
    AIR_IOR,
    beer_lambert,
    cannot_refract,
    refraction_ratio,
    scatter_transmissive,
)
from .material import (
    Material,
    ShadingModel,
    diffuse,
    glass,
    light,
    metal,
    mirror,
)
from .reflective import (
    fuzz_direction,
    roll_specular,
    scatter_reflective,
    surface_color,
)

__all__ = [
    # Material record
    "Material",
    "ShadingModel",
    "diffuse",
    "mirror",
    "metal",
    "glass",
    "light",
    # Reflection
    "roll_specular",
    "surface_color",
    "fuzz_direction",
    "scatter_reflective",
    # Transmission
    "AIR_IOR",
    "refraction_ratio",
    "cannot_refract",
    "scatter_transmissive",
    "beer_lambert",
]
