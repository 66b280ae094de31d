"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: small scenes,
a camera looking down -z and fast render settings.
"""

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.ray import vec3
from pathtracer.core.settings import RenderSettings
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import diffuse, light
from pathtracer.scene.intersection import ShapeCollection


@pytest.fixture
def camera():
    """Pinhole camera at z=5 looking toward the origin."""
    return Camera(
        viewport_height=2.0,
        viewport_width=2.0,
        focal_length=2.0,
        origin=vec3(0.0, 0.0, 5.0),
        look_direction=vec3(0.0, 0.0, -1.0),
    )


@pytest.fixture
def white_sphere():
    """Unit sphere at the origin with a pure diffuse white material."""
    return Sphere(vec3(0.0, 0.0, 0.0), 1.0, diffuse((1.0, 1.0, 1.0)))


def make_lit_world(white_sphere: Sphere, strength: float) -> ShapeCollection:
    """White sphere enclosed by a large emissive sphere."""
    return ShapeCollection(
        [
            white_sphere,
            Sphere(vec3(0.0, 0.0, 0.0), 50.0, light((1.0, 1.0, 1.0), strength=strength)),
        ]
    )


@pytest.fixture
def lit_world(white_sphere):
    """White sphere inside an emissive enclosure of strength 0.25."""
    return make_lit_world(white_sphere, 0.25)


@pytest.fixture
def small_settings():
    """Tiny, fast render settings."""
    return RenderSettings(
        width=8,
        height=6,
        samples_per_pixel=4,
        max_depth=3,
        concurrency=4,
    )
