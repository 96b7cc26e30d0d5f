"""Pytest configuration for renderer tests.

Shared fixtures: a seeded random source and a few stock materials. Sources
live under src/ and are importable through the pythonpath setting in
pyproject.toml.
"""

import random

import pytest

from core.vector import Vector3
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """A seeded random source so stochastic tests replay identically."""
    return random.Random(1234)


@pytest.fixture
def gray():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def light():
    return DiffuseLight(Vector3(2.0, 3.0, 4.0))
