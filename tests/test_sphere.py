"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Ray tangent to sphere
- Root bounds and the far-root fallback
- Random rays: hit points lie on the surface
"""

import math

import pytest

from pathtracer.core.ray import Vec3, dot, length, make_ray, vec3
from pathtracer.core.rng import next_random, unit_sphere_point
from pathtracer.geometry.shape import Shape
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import diffuse


@pytest.fixture
def unit_sphere():
    return Sphere(vec3(0.0, 0.0, 0.0), 1.0, diffuse((0.5, 0.5, 0.5)))


class TestSphereBasics:
    """Tests for Sphere construction."""

    def test_sphere_satisfies_shape_protocol(self, unit_sphere):
        assert isinstance(unit_sphere, Shape)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_rejected(self, radius):
        with pytest.raises(ValueError, match="radius"):
            Sphere(vec3(0.0, 0.0, 0.0), radius)

    def test_normal_at_is_outward_unit(self, unit_sphere):
        normal = unit_sphere.normal_at(vec3(0.0, 1.0, 0.0))
        assert normal == Vec3(0.0, 1.0, 0.0)


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit_from_outside(self, unit_sphere):
        ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
        record = unit_sphere.intersect(ray, 0.001, math.inf)

        assert record is not None
        assert record.t == pytest.approx(4.0)
        assert record.point.z == pytest.approx(1.0)
        assert record.normal == Vec3(0.0, 0.0, 1.0)
        assert record.front_face
        assert record.material is unit_sphere.material

    def test_miss(self, unit_sphere):
        ray = make_ray(vec3(0.0, 2.0, 5.0), vec3(0.0, 0.0, -1.0))
        assert unit_sphere.intersect(ray, 0.001, math.inf) is None

    def test_ray_pointing_away_misses(self, unit_sphere):
        ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, 1.0))
        assert unit_sphere.intersect(ray, 0.001, math.inf) is None

    def test_hit_from_inside_is_back_face(self, unit_sphere):
        ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
        record = unit_sphere.intersect(ray, 0.001, math.inf)

        assert record is not None
        assert record.t == pytest.approx(1.0)
        assert not record.front_face
        # Normal is flipped to face the incoming ray
        assert record.normal.z == pytest.approx(1.0)
        assert dot(record.normal, ray.direction) < 0.0

    def test_tangent_ray(self, unit_sphere):
        ray = make_ray(vec3(1.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
        record = unit_sphere.intersect(ray, 0.001, math.inf)

        assert record is not None
        assert record.t == pytest.approx(5.0)
        assert record.point.x == pytest.approx(1.0)

    def test_t_max_rejects_distant_hit(self, unit_sphere):
        ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
        assert unit_sphere.intersect(ray, 0.001, 3.0) is None

    def test_t_min_falls_back_to_far_root(self, unit_sphere):
        ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
        record = unit_sphere.intersect(ray, 4.5, math.inf)

        assert record is not None
        assert record.t == pytest.approx(6.0)
        assert not record.front_face

    def test_bounds_are_inclusive(self, unit_sphere):
        ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
        record = unit_sphere.intersect(ray, 0.0, 4.0)
        assert record is not None
        assert record.t == pytest.approx(4.0)

    def test_offset_sphere(self):
        sphere = Sphere(vec3(2.0, 0.0, -3.0), 0.5)
        ray = make_ray(vec3(2.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
        record = sphere.intersect(ray, 0.001, math.inf)

        assert record is not None
        assert record.t == pytest.approx(2.5)
        assert record.point.z == pytest.approx(-2.5)


class TestRandomRays:
    """Properties that hold for arbitrary rays aimed at a sphere."""

    def test_hits_lie_on_surface(self):
        sphere = Sphere(vec3(0.5, -0.25, 1.0), 1.5)
        state = 1234
        hits = 0

        for _ in range(300):
            offset, state = unit_sphere_point(state)
            distance, state = next_random(state)
            origin = sphere.center + offset * (4.0 + 4.0 * distance)
            target, state = unit_sphere_point(state)
            ray = make_ray(origin, sphere.center + target * 1.2 - origin)

            record = sphere.intersect(ray, 0.001, math.inf)
            if record is None:
                continue
            hits += 1

            assert length(record.point - sphere.center) == pytest.approx(1.5)
            assert record.t >= 0.001
            assert length(record.normal) == pytest.approx(1.0)
            assert record.front_face == (
                dot(ray.direction, sphere.normal_at(record.point)) < 0.0
            )
            assert dot(record.normal, ray.direction) <= 0.0

        # Every ray aims within the sphere's silhouette
        assert hits == 300
