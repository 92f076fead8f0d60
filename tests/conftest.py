"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session and a seeded
random generator for the sampling code.
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def rng():
    """A freshly seeded generator, so every test draws the same numbers."""
    return np.random.default_rng(42)


@pytest.fixture
def unit_sphere_scene():
    """Unit sphere at the origin with a tiny light high above it.

    Returns (scene, intensity, ambient). The light is small enough that the
    direction from the sphere's apex to any point on it is vertical to
    within 1e-10.
    """
    from src.lumen.core.radiance import Radiance
    from src.lumen.core.ray import vec3
    from src.lumen.geometry import PlanarPatch, Sphere
    from src.lumen.materials.material import lambertian
    from src.lumen.scene.entities import LightSource, Scene, Solid

    intensity = Radiance(0.8, 0.6, 0.4)
    ambient = Radiance.gray(0.1)
    sphere = Solid(Sphere(vec3(0.0, 0.0, 0.0), 1.0), lambertian(1.0))
    light = LightSource(
        PlanarPatch(
            vec3(-5e-5, 5.0, -5e-5),
            vec3(1e-4, 0.0, 0.0),
            vec3(0.0, 0.0, 1e-4),
        ),
        intensity,
    )
    scene = Scene(solids=(sphere,), lights=(light,), ambient=ambient)
    return scene, intensity, ambient
