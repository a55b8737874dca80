"""Sphere primitive and closed-form ray-sphere intersection.

A sphere carries its own surface description: an RGB color, a Phong
specular exponent and a mirror reflectivity. Intersection solves the
classic quadratic

    |O + t*D - C|^2 = r^2

with the textbook formula, keeping both roots. The direction D is not
normalized, so the roots are parametric distances along D.

Example:
    >>> import taichi as ti
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.geometry.sphere import Sphere, intersect_sphere
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti

from src.whitted.core.vector import INF, dot, normalize, real, sub, vec3

# Specular exponent value that disables highlights
NO_SPECULAR = -1.0

# Root pair returned when the ray misses the sphere
MISS_T = INF


@ti.dataclass
class Sphere:
    """A sphere with its surface properties.

    Attributes:
        center: The center point of the sphere.
        color: RGB color, conventionally in [0, 255].
        radius: The radius of the sphere (positive).
        specular: Phong exponent; NO_SPECULAR (-1) disables highlights.
        reflective: Mirror blending weight in [0, 1].
    """

    center: vec3
    color: vec3
    radius: real
    specular: real
    reflective: real


@ti.func
def make_sphere(
    center: vec3,
    color: vec3,
    radius: real,
    specular: real,
    reflective: real,
) -> Sphere:
    """Create a sphere within a Taichi kernel."""
    return Sphere(
        center=center,
        color=color,
        radius=radius,
        specular=specular,
        reflective=reflective,
    )


@ti.func
def intersect_sphere(origin: vec3, direction: vec3, sphere: Sphere):
    """Solve for the two parametric intersections of a ray and a sphere.

    With CO = O - C the quadratic coefficients are:
        a = D . D
        b = 2 * (CO . D)
        c = CO . CO - r^2

    A negative discriminant means no real intersection and yields the
    (inf, inf) pair. Otherwise the roots are returned unordered as
    t1 = (-b + sqrt(disc)) / 2a and t2 = (-b - sqrt(disc)) / 2a.

    A zero-length direction makes a == 0; the division then produces NaN
    or infinite roots, which the range checks of the closest-hit scan
    reject.

    Args:
        origin: The ray origin.
        direction: The ray direction (any non-zero length).
        sphere: The sphere to test.

    Returns:
        Tuple of (t1, t2).
    """
    r = sphere.radius
    co = sub(origin, sphere.center)
    a = dot(direction, direction)
    b = 2.0 * dot(co, direction)
    c = dot(co, co) - (r * r)
    discriminant = b * b - 4.0 * a * c

    t1 = ti.cast(MISS_T, real)
    t2 = ti.cast(MISS_T, real)

    if not discriminant < 0.0:
        square_disc = ti.sqrt(discriminant)
        t1 = (-b + square_disc) / (2.0 * a)
        t2 = (-b - square_disc) / (2.0 * a)

    return t1, t2


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Unit outward normal of a sphere at a surface point.

    Scales (P - C) by the reciprocal of its length rather than by the
    radius, so points slightly off the surface still get a unit normal.
    """
    return normalize(sub(point, sphere.center))
