"""Unit tests for the camera.

Tests cover:
- Orthonormal basis construction, including the degenerate up case
- Viewport corners and ray directions
- Thin-lens defocus
- Configuration validation
"""

import pytest

from pathtracer.camera.camera import Camera, build_basis
from pathtracer.core.ray import cross, dot, length, normalize, ray_at, vec3


def assert_vec_close(actual, expected, tol=1e-9):
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e, abs=tol)


class TestBasis:
    """Tests for build_basis."""

    @pytest.mark.parametrize(
        "look",
        [
            vec3(0.0, 0.0, -1.0),
            vec3(1.0, 2.0, 3.0),
            vec3(-4.0, 0.5, 0.0),
        ],
    )
    def test_basis_is_orthonormal(self, look):
        right, up, forward = build_basis(look)

        for axis in (right, up, forward):
            assert length(axis) == pytest.approx(1.0)
        assert dot(right, up) == pytest.approx(0.0, abs=1e-12)
        assert dot(right, forward) == pytest.approx(0.0, abs=1e-12)
        assert dot(up, forward) == pytest.approx(0.0, abs=1e-12)
        assert_vec_close(forward, normalize(look))

    def test_basis_is_right_handed(self):
        right, up, forward = build_basis(vec3(1.0, -1.0, 2.0))
        assert_vec_close(cross(right, up), -forward)

    def test_looking_down_negative_z(self):
        right, up, forward = build_basis(vec3(0.0, 0.0, -1.0))
        assert_vec_close(right, (1.0, 0.0, 0.0))
        assert_vec_close(up, (0.0, 1.0, 0.0))

    @pytest.mark.parametrize("look", [vec3(0.0, 1.0, 0.0), vec3(0.0, -3.0, 0.0)])
    def test_look_parallel_to_world_up_uses_fallback(self, look):
        right, up, forward = build_basis(look)

        assert length(right) == pytest.approx(1.0)
        assert length(up) == pytest.approx(1.0)
        assert dot(right, forward) == pytest.approx(0.0, abs=1e-12)
        assert dot(up, forward) == pytest.approx(0.0, abs=1e-12)

    def test_zero_look_direction_rejected(self):
        with pytest.raises(ValueError, match="non-zero"):
            build_basis(vec3(0.0, 0.0, 0.0))


class TestRays:
    """Tests for ray generation."""

    def test_center_ray_follows_look_direction(self, camera):
        ray, _ = camera.get_ray(0.5, 0.5, state=1)
        assert ray.origin == camera.origin
        assert_vec_close(ray.direction, (0.0, 0.0, -1.0))

    def test_rays_are_unit_length(self, camera):
        for u, v in [(0.0, 0.0), (1.0, 0.25), (0.3, 0.9)]:
            ray, _ = camera.get_ray(u, v, state=1)
            assert length(ray.direction) == pytest.approx(1.0)

    def test_corners(self, camera):
        assert_vec_close(camera.bottom_left, (-1.0, -1.0, 3.0))
        assert_vec_close(camera.bottom_right, (1.0, -1.0, 3.0))
        assert_vec_close(camera.top_left, (-1.0, 1.0, 3.0))
        assert_vec_close(camera.top_right, (1.0, 1.0, 3.0))

    def test_ray_passes_through_viewport_point(self, camera):
        ray, _ = camera.get_ray(0.25, 0.75, state=1)
        target = camera.viewport_point(0.25, 0.75)
        distance = length(target - camera.origin)
        assert_vec_close(ray_at(ray, distance), target)

    def test_v_zero_is_bottom(self, camera):
        ray, _ = camera.get_ray(0.5, 0.0, state=1)
        assert ray.direction.y < 0.0

    def test_pinhole_does_not_consume_random_state(self, camera):
        _, state = camera.get_ray(0.1, 0.2, state=42)
        assert state == 42


class TestDefocus:
    """Tests for the thin-lens model."""

    @pytest.fixture
    def lens_camera(self):
        return Camera(
            viewport_height=2.0,
            viewport_width=2.0,
            focal_length=2.0,
            origin=vec3(0.0, 0.0, 5.0),
            look_direction=vec3(0.0, 0.0, -1.0),
            defocus_strength=0.2,
        )

    def test_origins_stay_on_lens(self, lens_camera):
        state = 7
        for _ in range(200):
            ray, state = lens_camera.get_ray(0.5, 0.5, state)
            offset = ray.origin - lens_camera.origin
            assert length(offset) <= 0.2 + 1e-12
            assert offset.z == pytest.approx(0.0, abs=1e-12)

    def test_rays_still_pass_through_target(self, lens_camera):
        target = lens_camera.viewport_point(0.3, 0.6)
        state = 9
        for _ in range(50):
            ray, state = lens_camera.get_ray(0.3, 0.6, state)
            distance = length(target - ray.origin)
            assert_vec_close(ray_at(ray, distance), target, tol=1e-9)

    def test_defocus_consumes_random_state(self, lens_camera):
        _, state = lens_camera.get_ray(0.5, 0.5, state=42)
        assert state != 42


class TestValidation:
    """Tests for camera configuration validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"viewport_height": 0.0},
            {"viewport_width": -1.0},
            {"focal_length": 0.0},
            {"defocus_strength": -0.1},
            {"look_direction": vec3(0.0, 0.0, 0.0)},
        ],
    )
    def test_invalid_configuration_rejected(self, kwargs):
        config = {
            "viewport_height": 2.0,
            "viewport_width": 2.0,
            "focal_length": 1.0,
            "origin": vec3(0.0, 0.0, 0.0),
            "look_direction": vec3(0.0, 0.0, -1.0),
        }
        config.update(kwargs)
        with pytest.raises(ValueError):
            Camera(**config)

    def test_from_aspect_ratio(self):
        camera = Camera.from_aspect_ratio(
            aspect_ratio=2.0,
            viewport_height=1.5,
            focal_length=1.0,
            origin=vec3(0.0, 0.0, 0.0),
            look_direction=vec3(0.0, 0.0, -1.0),
        )
        assert camera.viewport_width == pytest.approx(3.0)
        assert camera.viewport_height == pytest.approx(1.5)
