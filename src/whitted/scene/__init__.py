"""Scene module for sphere and light storage.

Components:
    intersection: Sphere storage and closest-hit queries
    lights: Light storage and per-light direction/shadow bounds
    manager: Scene manager with JSON-friendly serialization
    classic: The classic four-sphere demo scene

Scene data lives in preallocated Structure-of-Arrays Taichi fields, so
Taichi must be initialized before this package is imported.
"""

from .classic import create_classic_scene
from .intersection import (
    MAX_SPHERES,
    NO_HIT,
    ClosestHit,
    add_sphere,
    clear_scene,
    find_closest_intersection,
    get_sphere_count,
)
from .lights import (
    MAX_LIGHTS,
    LightKind,
    add_light,
    clear_lights,
    get_light_count,
)
from .manager import LightInfo, SceneConfig, SceneManager, SphereInfo

__all__ = [
    # Intersection module
    "ClosestHit",
    "NO_HIT",
    "MAX_SPHERES",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "find_closest_intersection",
    # Lights module
    "LightKind",
    "MAX_LIGHTS",
    "add_light",
    "clear_lights",
    "get_light_count",
    # Manager module
    "SceneManager",
    "SphereInfo",
    "LightInfo",
    "SceneConfig",
    # Classic scene
    "create_classic_scene",
]
