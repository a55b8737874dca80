"""Geometry module: the sphere primitive."""

from .sphere import (
    MISS_T,
    NO_SPECULAR,
    Sphere,
    intersect_sphere,
    make_sphere,
    sphere_normal,
)

__all__ = [
    "Sphere",
    "make_sphere",
    "intersect_sphere",
    "sphere_normal",
    "NO_SPECULAR",
    "MISS_T",
]
