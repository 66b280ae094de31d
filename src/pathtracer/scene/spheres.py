"""Sphere row demonstration scene.

Five spheres sit in a row on a large ground sphere: red, mirror, green,
mirror and blue from left to right. A big emissive sphere behind and above
the camera lights the scene. Optionally a glass sphere with a faint cyan
absorbance is placed in front of the row.

Example:
    >>> world, camera = create_sphere_row_scene(aspect_ratio=16.0 / 9.0)
    >>> settings = RenderSettings.from_aspect_ratio(320, 16.0 / 9.0, skybox=Skybox())
    >>> buffer = render(camera, world, settings)
"""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.camera.camera import Camera
from pathtracer.core.ray import vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import diffuse, glass, light, mirror
from pathtracer.scene.intersection import ShapeCollection


@dataclass
class SphereRowParams:
    """Parameters for configuring the sphere row scene.

    Attributes:
        light_strength: Emission strength of the light sphere.
        light_color: RGB color of the light.
        ground_color: Albedo of the ground sphere.
        include_glass: Add a glass sphere in front of the row.
        glass_ior: Index of refraction of the glass sphere.
        defocus_strength: Camera lens radius; 0 keeps everything sharp.
    """

    light_strength: float = 2.0
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    ground_color: tuple[float, float, float] = (0.95, 0.95, 0.95)
    include_glass: bool = False
    glass_ior: float = 1.5
    defocus_strength: float = 0.0


def create_sphere_row_scene(
    aspect_ratio: float = 16.0 / 9.0,
    params: SphereRowParams | None = None,
) -> tuple[ShapeCollection, Camera]:
    """Create the sphere row scene and a camera framing it.

    Args:
        aspect_ratio: Image width divided by height.
        params: Scene parameters; defaults to SphereRowParams().

    Returns:
        Tuple of (world, camera).
    """
    if params is None:
        params = SphereRowParams()

    shapes = [
        Sphere(vec3(-2.2, 0.0, -1.5), 0.5, diffuse((1.0, 0.1, 0.1))),
        Sphere(vec3(-1.1, 0.0, -1.5), 0.5, mirror()),
        Sphere(vec3(0.0, 0.0, -1.5), 0.5, diffuse((0.1, 1.0, 0.1))),
        Sphere(vec3(1.1, 0.0, -1.5), 0.5, mirror()),
        Sphere(vec3(2.2, 0.0, -1.5), 0.5, diffuse((0.1, 0.1, 1.0))),
        # Ground
        Sphere(vec3(0.0, -100.5, -1.0), 100.0, diffuse(params.ground_color)),
        # Light
        Sphere(
            vec3(-10.0, 12.0, 15.0),
            10.0,
            light(params.light_color, strength=params.light_strength),
        ),
    ]

    if params.include_glass:
        shapes.append(
            Sphere(
                vec3(0.0, -0.2, -0.4),
                0.3,
                glass(
                    ior=params.glass_ior,
                    absorbance=0.5,
                    absorbance_color=(0.8, 0.2, 0.1),
                ),
            )
        )

    camera = Camera.from_aspect_ratio(
        aspect_ratio=aspect_ratio,
        viewport_height=2.0,
        focal_length=5.0,
        origin=vec3(0.0, 0.0, 7.0),
        look_direction=vec3(0.0, 0.0, -1.0),
        defocus_strength=params.defocus_strength,
    )

    return ShapeCollection(shapes), camera
