"""Material record shared by every shape.

A Material describes how a surface emits, reflects and transmits light. One
record covers diffuse, glossy, mirror, glass and emissive surfaces; the
parameters decide which scatter branches the integrator takes:

    - reflective_constant = 1.0: opaque, only the reflection branch
    - reflective_constant = 0.0: fully transmissive dielectric
    - values in between: both branches, weighted by the constant

Two shading models exist. FULL is the physically richer one (Fresnel glass,
Beer-Lambert absorption, fuzzy mirrors). SIMPLE flips a coin on
specular_probability and blends base/specular colors, without transmission
or absorption.

Example:
    >>> red = diffuse((1.0, 0.1, 0.1))
    >>> glass_ball = glass(ior=1.5, absorbance=0.4, absorbance_color=(0.1, 0.6, 0.9))
    >>> sun = light((1.0, 1.0, 1.0), strength=2.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pathtracer.core.ray import Vec3, vec3

ColorLike = Vec3 | tuple[float, float, float]


class ShadingModel(Enum):
    """Shading model selector.

    FULL: Fresnel glass, absorption, fuzz and weighted reflect/transmit branches.
    SIMPLE: specular-probability coin flip, opaque surfaces only.
    """

    FULL = "full"
    SIMPLE = "simple"


def _as_color(value: ColorLike) -> Vec3:
    if isinstance(value, Vec3):
        return value
    return vec3(*value)


def _check_unit_range(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} = {value} is outside [0, 1]")


@dataclass(frozen=True)
class Material:
    """Surface material properties.

    Attributes:
        base_color: Diffuse albedo multiplied into the path on every hit.
        specular_color: Tint used instead of base_color on specular bounces.
        emission_color: Color of emitted light.
        emission_strength: Scale of emitted light; 0 means non-emissive.
        smoothness: Blend between diffuse (0) and mirror (1) directions.
        specular_probability: Chance a reflection is treated as specular.
        reflective_constant: Fraction of energy reflected rather than
            transmitted. 1.0 is opaque, 0.0 is a clear dielectric.
        ior: Index of refraction, used when the material transmits.
        fuzz: Radius of the random perturbation of mirror directions.
        absorbance: Beer-Lambert extinction coefficient inside the medium.
        absorbance_color: Per-channel weighting of the extinction.
        shading_model: FULL or SIMPLE scatter rules.
    """

    base_color: Vec3 = Vec3(1.0, 1.0, 1.0)
    specular_color: Vec3 = Vec3(1.0, 1.0, 1.0)
    emission_color: Vec3 = Vec3(0.0, 0.0, 0.0)
    emission_strength: float = 0.0
    smoothness: float = 0.0
    specular_probability: float = 0.0
    reflective_constant: float = 1.0
    ior: float = 1.0
    fuzz: float = 0.0
    absorbance: float = 0.0
    absorbance_color: Vec3 = Vec3(0.0, 0.0, 0.0)
    shading_model: ShadingModel = ShadingModel.FULL

    def __post_init__(self) -> None:
        _check_unit_range("smoothness", self.smoothness)
        _check_unit_range("specular_probability", self.specular_probability)
        _check_unit_range("reflective_constant", self.reflective_constant)
        if self.ior <= 0.0:
            raise ValueError(f"Index of refraction = {self.ior} must be positive")
        if self.emission_strength < 0.0:
            raise ValueError(f"emission_strength = {self.emission_strength} is negative")
        if self.fuzz < 0.0:
            raise ValueError(f"fuzz = {self.fuzz} is negative")
        if self.absorbance < 0.0:
            raise ValueError(f"absorbance = {self.absorbance} is negative")

    @property
    def emission(self) -> Vec3:
        """Emitted radiance (emission_color * emission_strength)."""
        return self.emission_color * self.emission_strength

    @property
    def is_emissive(self) -> bool:
        """True when the material emits any light."""
        return self.emission_strength > 0.0 and any(c > 0.0 for c in self.emission_color)

    @property
    def is_transmissive(self) -> bool:
        """True when part of the energy is transmitted into the material."""
        return self.shading_model is ShadingModel.FULL and self.reflective_constant < 1.0

    @property
    def is_absorbing(self) -> bool:
        """True when light travelling inside the material is attenuated."""
        return self.is_transmissive and self.absorbance > 0.0


# =============================================================================
# Factory helpers
# =============================================================================


def diffuse(color: ColorLike, **kwargs: object) -> Material:
    """Create a purely diffuse (Lambertian-like) opaque material."""
    return Material(base_color=_as_color(color), **kwargs)


def mirror(color: ColorLike = (1.0, 1.0, 1.0), fuzz: float = 0.0) -> Material:
    """Create a perfect (or fuzzy) mirror."""
    return Material(base_color=_as_color(color), smoothness=1.0, fuzz=fuzz)


def metal(
    color: ColorLike,
    smoothness: float = 0.9,
    specular_probability: float = 0.5,
    specular_color: ColorLike = (1.0, 1.0, 1.0),
    shading_model: ShadingModel = ShadingModel.SIMPLE,
) -> Material:
    """Create a glossy material with a colored base and a specular tint.

    Defaults to the SIMPLE shading model, where specular_probability decides
    per bounce whether the specular tint and mirror direction are used.
    """
    return Material(
        base_color=_as_color(color),
        specular_color=_as_color(specular_color),
        smoothness=smoothness,
        specular_probability=specular_probability,
        shading_model=shading_model,
    )


def glass(
    ior: float = 1.5,
    color: ColorLike = (1.0, 1.0, 1.0),
    absorbance: float = 0.0,
    absorbance_color: ColorLike = (0.0, 0.0, 0.0),
    reflective_constant: float = 0.0,
) -> Material:
    """Create a transmissive dielectric.

    Args:
        ior: Index of refraction (glass ~1.5, water ~1.33, diamond ~2.4).
        color: Tint applied at each surface interaction.
        absorbance: Beer-Lambert coefficient for light inside the glass.
        absorbance_color: Per-channel extinction weights; a channel with a
            larger weight is absorbed faster.
        reflective_constant: Share of energy sent down the opaque reflection
            branch at front-face hits.
    """
    return Material(
        base_color=_as_color(color),
        smoothness=1.0,
        reflective_constant=reflective_constant,
        ior=ior,
        absorbance=absorbance,
        absorbance_color=_as_color(absorbance_color),
    )


def light(color: ColorLike = (1.0, 1.0, 1.0), strength: float = 1.0) -> Material:
    """Create an emissive material that does not reflect any light."""
    return Material(
        base_color=Vec3(0.0, 0.0, 0.0),
        emission_color=_as_color(color),
        emission_strength=strength,
    )
