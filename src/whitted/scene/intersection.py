"""Scene-level sphere storage and closest-hit selection.

Spheres are stored in Taichi fields (Structure of Arrays) and addressed by
index. The closest-hit scan walks them in insertion order and reports the
index of the winning sphere, so nothing is copied per candidate.

Example:
    >>> import taichi as ti
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.scene.intersection import (
    ...     add_sphere, clear_scene, find_closest_intersection
    ... )
    >>> clear_scene()
    >>> add_sphere((0, -1, 3), (255, 0, 0), 1.0, specular=500.0, reflective=0.2)
    >>> find_closest_intersection((0, 0, 0), (0, -0.2, 1), 1.0, 1000.0)
"""

import math

import taichi as ti

from src.whitted.core.vector import INF, real, vec3
from src.whitted.geometry.sphere import NO_SPECULAR, Sphere, intersect_sphere

# Index reported when no sphere is hit
NO_HIT = -1


@ti.dataclass
class ClosestHit:
    """Result of a closest-hit query.

    Attributes:
        index: Index of the nearest sphere, or NO_HIT (-1) if none qualified.
        t: Parametric distance of the hit along the query direction.
            Infinite when index == NO_HIT.
    """

    index: ti.i32
    t: real


# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=real, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=real, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=real, shape=MAX_SPHERES)
sphere_speculars = ti.field(dtype=real, shape=MAX_SPHERES)
sphere_reflectives = ti.field(dtype=real, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def _check_vector(name: str, value) -> tuple[float, float, float]:
    """Convert a 3-sequence to floats, rejecting non-finite components."""
    if len(value) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(value)}")
    result = (float(value[0]), float(value[1]), float(value[2]))
    if not all(math.isfinite(c) for c in result):
        raise ValueError(f"{name} must be finite, got {result}")
    return result


def validate_sphere(center, color, radius: float, specular: float, reflective: float) -> None:
    """Check sphere parameters before they reach the Taichi fields.

    Raises:
        ValueError: If a component is not finite, radius is not positive,
            specular is neither NO_SPECULAR nor non-negative, or reflective
            lies outside [0, 1].
    """
    _check_vector("center", center)
    _check_vector("color", color)
    if not math.isfinite(radius) or radius <= 0.0:
        raise ValueError(f"radius must be positive and finite, got {radius}")
    if not math.isfinite(specular) or (specular != NO_SPECULAR and specular < 0.0):
        raise ValueError(f"specular must be {NO_SPECULAR} or >= 0, got {specular}")
    if not 0.0 <= reflective <= 1.0:
        raise ValueError(f"reflective must be in [0, 1], got {reflective}")


def clear_scene() -> None:
    """Remove all spheres from the scene.

    Resets the sphere count to zero. Stale field data is overwritten when
    new spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(
    center,
    color,
    radius: float,
    specular: float = NO_SPECULAR,
    reflective: float = 0.0,
) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point as (x, y, z).
        color: RGB color as (r, g, b), conventionally in [0, 255].
        radius: The radius (must be positive).
        specular: Phong exponent, or NO_SPECULAR to disable highlights.
        reflective: Mirror reflectivity in [0, 1].

    Returns:
        The index of the added sphere.

    Raises:
        ValueError: If the parameters are invalid.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    validate_sphere(center, color, radius, specular, reflective)
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [float(c) for c in center]
    sphere_colors[idx] = [float(c) for c in color]
    sphere_radii[idx] = radius
    sphere_speculars[idx] = specular
    sphere_reflectives[idx] = reflective
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Assemble the Sphere stored at index."""
    return Sphere(
        center=sphere_centers[index],
        color=sphere_colors[index],
        radius=sphere_radii[index],
        specular=sphere_speculars[index],
        reflective=sphere_reflectives[index],
    )


@ti.func
def closest_intersection(
    origin: vec3,
    direction: vec3,
    t_min: real,
    t_max: real,
) -> ClosestHit:
    """Find the nearest sphere hit with t in [t_min, t_max].

    Both roots of every sphere are considered. The comparison against the
    running best is strict, so when two roots tie the sphere added first
    keeps the hit. NaN roots fail every comparison and are never selected.

    Args:
        origin: The ray origin.
        direction: The ray direction (not necessarily unit length).
        t_min: Inclusive lower bound on t.
        t_max: Inclusive upper bound on t.

    Returns:
        A ClosestHit with the winning sphere index and its t, or
        index == NO_HIT if no root lies in range.
    """
    closest_t = ti.cast(INF, real)
    closest_index = NO_HIT

    # Scan order decides ties
    ti.loop_config(serialize=True)
    for i in range(num_spheres[None]):
        t1, t2 = intersect_sphere(origin, direction, get_sphere(i))
        if t1 >= t_min and t1 <= t_max and t1 < closest_t:
            closest_t = t1
            closest_index = i
        if t2 >= t_min and t2 <= t_max and t2 < closest_t:
            closest_t = t2
            closest_index = i

    return ClosestHit(index=closest_index, t=closest_t)


@ti.kernel
def _closest_intersection_kernel(
    origin: vec3,
    direction: vec3,
    t_min: real,
    t_max: real,
) -> ti.types.vector(2, real):
    hit = closest_intersection(origin, direction, t_min, t_max)
    return ti.Vector([ti.cast(hit.index, real), hit.t], dt=real)


def find_closest_intersection(
    origin,
    direction,
    t_min: float,
    t_max: float,
) -> tuple[int | None, float]:
    """Python-side closest-hit query.

    Args:
        origin: The ray origin as (x, y, z).
        direction: The ray direction as (x, y, z).
        t_min: Inclusive lower bound on t.
        t_max: Inclusive upper bound on t.

    Returns:
        Tuple of (sphere_index, t). sphere_index is None when nothing is
        hit, in which case t is infinite.
    """
    result = _closest_intersection_kernel(vec3(*origin), vec3(*direction), t_min, t_max)
    index = int(result[0])
    if index == NO_HIT:
        return None, float(result[1])
    return index, float(result[1])
