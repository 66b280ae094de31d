"""Path tracing integrator for Monte Carlo light transport.

This module implements the recursive light transport estimate for a single
camera ray and the per-pixel sampling loop built on top of it.

The path tracer follows rays from the camera through the scene, bouncing off
surfaces according to their material, and accumulates emitted radiance
weighted by the path throughput. Nothing here is shared between calls: the
random stream state and the accumulated radiance are passed in and returned,
so any number of pixels can be sampled concurrently.

Per hit, in order:
    1. Emission is added, weighted by the current throughput.
    2. If the segment that just ended ran inside an absorbing medium, the
       throughput is attenuated by Beer-Lambert transmittance.
    3. The throughput is multiplied by the surface (or specular) color.
    4. Reflection branch: front-face hits with reflective_constant > 0.
    5. Transmission branch: reflective_constant < 1 (FULL model only).
Both branches recurse with one less bounce of depth.

Example:
    >>> from pathtracer.scene import create_sphere_row_scene
    >>> world, camera = create_sphere_row_scene()
    >>> settings = RenderSettings(width=64, height=36, samples_per_pixel=16)
    >>> color = sample_pixel(32, 18, camera, world, settings)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathtracer.core.ray import ONE, ZERO, Ray, Vec3, clamp, make_ray
from pathtracer.core.rng import next_random, pixel_seed
from pathtracer.core.settings import RenderSettings, Skybox
from pathtracer.materials.dielectric import beer_lambert, scatter_transmissive
from pathtracer.materials.material import Material, ShadingModel
from pathtracer.materials.reflective import roll_specular, scatter_reflective, surface_color
from pathtracer.scene.intersection import MAX_ROOT, MIN_ROOT, ShapeCollection

if TYPE_CHECKING:
    from pathtracer.camera.camera import Camera


def _is_black(color: Vec3) -> bool:
    return color.x <= 0.0 and color.y <= 0.0 and color.z <= 0.0


def trace_ray(
    ray: Ray,
    world: ShapeCollection,
    depth: int,
    throughput: Vec3,
    radiance: Vec3,
    state: int,
    skybox: Skybox | None = None,
    medium: Material | None = None,
) -> tuple[Vec3, int]:
    """Trace one path and return the radiance it collects.

    Args:
        ray: The ray to follow (unit direction).
        world: Shapes to intersect.
        depth: Remaining bounces. At 0 the radiance is returned unchanged.
        throughput: Attenuation accumulated along the path so far.
        radiance: Radiance accumulated along the path so far.
        state: Random stream state.
        skybox: Sky gradient for escaped rays, or None for black.
        medium: Material whose interior the ray is currently travelling
            through, or None in air.

    Returns:
        Tuple of (radiance including this path's contribution, new_state).

    Note:
        Only one medium is tracked. Refracting out of a transmissive shape
        nested inside another returns the ray to air, so the enclosing
        shape's absorption is not applied to the rest of that segment.
        Recursion is one level per bounce; RenderSettings caps depth at
        MAX_DEPTH.
    """
    if depth <= 0:
        return radiance, state

    hit = world.nearest_hit(ray, MIN_ROOT, MAX_ROOT)

    if hit is None:
        # Ray escaped - add sky contribution
        if skybox is not None:
            radiance = radiance + skybox.sample(ray.direction) * throughput
        return radiance, state

    material = hit.material

    if material.is_emissive:
        radiance = radiance + material.emission * throughput

    if medium is not None and medium.is_absorbing:
        throughput = throughput * beer_lambert(medium, hit.t)

    is_specular, state = roll_specular(material, state)
    throughput = throughput * surface_color(material, is_specular)

    # Nothing further along this path can contribute
    if _is_black(throughput):
        return radiance, state

    if material.shading_model is ShadingModel.SIMPLE:
        direction, state = scatter_reflective(
            material, ray.direction, hit.normal, is_specular, state
        )
        return trace_ray(
            make_ray(hit.point, direction),
            world,
            depth - 1,
            throughput,
            radiance,
            state,
            skybox,
            medium,
        )

    reflective_constant = material.reflective_constant

    if reflective_constant > 0.0 and hit.front_face:
        direction, state = scatter_reflective(
            material, ray.direction, hit.normal, is_specular, state
        )
        radiance, state = trace_ray(
            make_ray(hit.point, direction),
            world,
            depth - 1,
            throughput * reflective_constant,
            radiance,
            state,
            skybox,
            medium,
        )

    if reflective_constant < 1.0:
        direction, refracted, state = scatter_transmissive(
            material, ray.direction, hit.normal, hit.front_face, state
        )
        next_medium = medium
        if refracted:
            # Crossing the boundary enters or leaves the material
            next_medium = material if hit.front_face else None
        radiance, state = trace_ray(
            make_ray(hit.point, direction),
            world,
            depth - 1,
            throughput * (1.0 - reflective_constant),
            radiance,
            state,
            skybox,
            next_medium,
        )

    return radiance, state


def sample_pixel(
    pixel_x: int,
    pixel_y: int,
    camera: Camera,
    world: ShapeCollection,
    settings: RenderSettings,
) -> Vec3:
    """Estimate the color of one pixel.

    Seeds the pixel's own random stream from its linear index, traces
    ``settings.samples_per_pixel`` jittered camera rays and averages them.

    Args:
        pixel_x: Pixel x-coordinate (0 = left).
        pixel_y: Pixel y-coordinate (0 = bottom).
        camera: Camera generating the primary rays.
        world: Shapes to intersect.
        settings: Image size, sample count, depth, seed and skybox.

    Returns:
        The averaged color, clamped to [0, 1].
    """
    state = pixel_seed(pixel_x, pixel_y, settings.width, settings.seed)
    total = ZERO

    for _ in range(settings.samples_per_pixel):
        # Add random jitter within pixel [0, 1)
        jitter_u, state = next_random(state)
        jitter_v, state = next_random(state)
        u = (pixel_x + jitter_u) / settings.width
        v = (pixel_y + jitter_v) / settings.height

        ray, state = camera.get_ray(u, v, state)
        radiance, state = trace_ray(
            ray, world, settings.max_depth, ONE, ZERO, state, settings.skybox
        )
        total = total + radiance

    return clamp(total / settings.samples_per_pixel)
