"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: the built-in
scenes, a seeded random generator and a factory for closed test scenes.
"""

import numpy as np
import pytest

from pathtracer.core.ray import Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.scene.cornell_box import create_cornell_box_scene, create_single_sphere_scene
from pathtracer.scene.intersection import Scene


@pytest.fixture
def rng():
    """A random generator with a fixed seed."""
    return np.random.default_rng(42)


@pytest.fixture
def cornell_box():
    """The path traced room as (scene, camera)."""
    return create_cornell_box_scene()


@pytest.fixture
def single_sphere():
    """The one-sphere pinhole scene as (scene, camera)."""
    return create_single_sphere_scene()


@pytest.fixture
def enclosing_scene():
    """Factory for a scene made of one big sphere around the origin.

    Any ray starting at the origin, and any ray scattered inward from the
    surface, hits the sphere again, so every path reaches the depth cut-off.
    """

    def _make(emission=(1.0, 1.0, 1.0), color=(1.0, 1.0, 1.0), radius=10.0):
        sphere = Sphere(radius, Vec3(0.0, 0.0, 0.0), Vec3(*emission), Vec3(*color))
        return Scene.from_spheres([sphere])

    return _make
