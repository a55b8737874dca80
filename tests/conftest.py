"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate fields allocated by modules imported in earlier tests.
    """
    from src.whitted.core.runtime import init

    init(arch=ti.cpu)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear spheres and lights before and after each test."""
    # Import here so Taichi is initialized before fields are allocated
    from src.whitted.scene.intersection import clear_scene
    from src.whitted.scene.lights import clear_lights

    clear_scene()
    clear_lights()

    yield

    clear_scene()
    clear_lights()
