"""Unit tests for ParticipatingMedium.

Tests cover:
- Scattering distance drawn from the supplied random source
- Rays passing through a thin medium
- Rays starting on, inside, and missing the boundary
- Isotropic phase function
"""

import math

import pytest

from core.ray import Ray
from core.vector import Vector3
from geometry.medium import MEDIUM_EPSILON, ParticipatingMedium
from geometry.prism import RectangularPrism
from geometry.sphere import Sphere
from materials.isotropic import Isotropic


class FixedRandom:
    """Random source returning a constant, so scatter distances are known."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def unit_fog(gray, density, albedo=Vector3(1, 1, 1)):
    return ParticipatingMedium(Sphere(Vector3(0, 0, 0), 1.0, gray), density, albedo)


class TestParticipatingMedium:
    """Tests for ParticipatingMedium.hit."""

    def test_scatter_distance(self, gray):
        fog = unit_fog(gray, 10.0)
        rec = fog.hit(Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf, FixedRandom(0.5))
        assert rec is not None
        assert rec.t == pytest.approx(4.0 + math.log(2.0) / 10.0)
        assert rec.front_face
        assert rec.normal == Vector3(1, 0, 0)
        assert isinstance(rec.material, Isotropic)

    def test_scatter_distance_scales_with_direction_length(self, gray):
        fog = unit_fog(gray, 10.0)
        rec = fog.hit(Ray(Vector3(-5, 0, 0), Vector3(2, 0, 0)), 0.001, math.inf, FixedRandom(0.5))
        assert rec.t == pytest.approx(2.0 + math.log(2.0) / 20.0)
        assert rec.p.x == pytest.approx(-1.0 + math.log(2.0) / 10.0)

    def test_thin_medium_lets_ray_through(self, gray):
        fog = unit_fog(gray, 0.01)
        ray = Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0))
        assert fog.hit(ray, 0.001, math.inf, FixedRandom(0.999999)) is None

    def test_dense_medium_scatters_near_entry(self, gray, rng):
        fog = unit_fog(gray, 1e6)
        for _ in range(20):
            rec = fog.hit(Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf, rng)
            assert rec is not None
            assert 4.0 <= rec.t < 4.01

    def test_miss(self, gray):
        fog = unit_fog(gray, 10.0)
        assert fog.hit(Ray(Vector3(-5, 5, 0), Vector3(1, 0, 0)), 0.001, math.inf,
                       FixedRandom(0.5)) is None

    def test_ray_starting_on_boundary_is_nudged(self, gray):
        fog = unit_fog(gray, 10.0)
        rec = fog.hit(Ray(Vector3(-1, 0, 0), Vector3(1, 0, 0)), 0.0, math.inf, FixedRandom(0.5))
        assert rec.t == pytest.approx(MEDIUM_EPSILON + math.log(2.0) / 10.0)

    def test_ray_starting_inside(self, gray):
        fog = unit_fog(gray, 10.0)
        rec = fog.hit(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf, FixedRandom(0.5))
        assert rec.t == pytest.approx(0.001 + math.log(2.0) / 10.0)

    def test_interval_ending_before_scatter(self, gray):
        fog = unit_fog(gray, 10.0)
        ray = Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0))
        assert fog.hit(ray, 0.001, 4.01, FixedRandom(0.5)) is None

    def test_prism_boundary(self, gray):
        fog = ParticipatingMedium(RectangularPrism(Vector3(0, 0, 0), Vector3(1, 1, 1), gray),
                                  10.0, Vector3(0, 0, 0))
        rec = fog.hit(Ray(Vector3(0.5, 0.5, 5), Vector3(0, 0, -1)), 0.001, math.inf,
                      FixedRandom(0.5))
        assert rec.t == pytest.approx(4.0 + math.log(2.0) / 10.0)

    def test_box_is_boundary_box(self, gray):
        fog = unit_fog(gray, 1.0)
        assert fog.bounding_box(0.0, 1.0) == fog.boundary.bounding_box(0.0, 1.0)

    def test_density_must_be_positive(self, gray):
        with pytest.raises(ValueError):
            unit_fog(gray, 0.0)


class TestIsotropic:
    """Tests for the isotropic phase function."""

    def test_scatter_keeps_time_and_albedo(self, gray, rng):
        fog = unit_fog(gray, 10.0, Vector3(0.2, 0.4, 0.6))
        ray = Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0), 0.3)
        rec = fog.hit(ray, 0.001, math.inf, FixedRandom(0.5))
        scattered, attenuation = rec.material.scatter(ray, rec, rng)
        assert attenuation == Vector3(0.2, 0.4, 0.6)
        assert scattered.time == 0.3
        assert scattered.origin == rec.p
        assert scattered.direction.length() < 1.0
