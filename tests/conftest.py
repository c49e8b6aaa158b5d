"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.

Test modules import toy_raytracer modules inside the tests: modules that
allocate Taichi fields must not be imported before ti.init() runs.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate fields allocated by previously imported modules.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear sphere and material storage around each test."""
    from toy_raytracer.materials.registry import clear_materials
    from toy_raytracer.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_materials()

    _clear_all()
    yield
    _clear_all()
