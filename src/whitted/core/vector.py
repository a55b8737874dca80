"""Double-precision vector algebra for the Whitted ray tracer.

This module provides the 3-component vector type shared by every stage of
the tracer, together with the small set of operations the intersection,
lighting and reflection code is built from. The same vector type is used
for positions, directions and RGB colors.

All operations are Taichi functions and run inside kernels. They use
``ti.f64`` explicitly so results match IEEE-754 double precision.

Example:
    >>> import taichi as ti
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.core.vector import vec3, add, dot
    >>> @ti.kernel
    ... def demo() -> ti.f64:
    ...     return dot(add(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0)), vec3(1.0, 1.0, 1.0))
"""

import taichi as ti

# Scalar and vector types used throughout the tracer
real = ti.f64
vec3 = ti.types.vector(3, real)

# Unbounded parametric distance
INF = float("inf")


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return vec3(a.x + b.x, a.y + b.y, a.z + b.z)


@ti.func
def sub(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return vec3(a.x - b.x, a.y - b.y, a.z - b.z)


@ti.func
def add_scalar(a: vec3, s: real) -> vec3:
    """Add the scalar s to every component of a."""
    return vec3(a.x + s, a.y + s, a.z + s)


@ti.func
def sub_scalar(a: vec3, s: real) -> vec3:
    """Subtract the scalar s from every component of a."""
    return vec3(a.x - s, a.y - s, a.z - s)


@ti.func
def scale(a: vec3, s: real) -> vec3:
    """Multiply every component of a by the scalar s."""
    return vec3(a.x * s, a.y * s, a.z * s)


@ti.func
def dot(a: vec3, b: vec3) -> real:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return (a.x * b.x) + (a.y * b.y) + (a.z * b.z)


@ti.func
def length(a: vec3) -> real:
    """Compute the Euclidean length sqrt(a . a)."""
    return ti.sqrt(dot(a, a))


@ti.func
def normalize(a: vec3) -> vec3:
    """Scale a vector to unit length.

    The vector is multiplied by the reciprocal of its length. A zero-length
    input produces non-finite components; callers pass non-degenerate
    vectors.

    Args:
        a: The input vector.

    Returns:
        A unit vector in the same direction as a.
    """
    return scale(a, 1.0 / length(a))


@ti.func
def ray_at(origin: vec3, direction: vec3, t: real) -> vec3:
    """Compute the point origin + t * direction.

    Args:
        origin: The starting point of the ray.
        direction: The ray direction. Not required to be unit length, so t
            is a parametric distance rather than a world distance.
        t: The parameter value.

    Returns:
        The point along the ray at parameter t.
    """
    return add(origin, scale(direction, t))


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Mirror a vector about a surface normal.

    Computes R = 2 * (N . I) * N - I. Both the incident vector and the
    result point away from the surface, so the same formula serves for the
    specular highlight direction (reflecting the light vector) and for the
    mirror ray (reflecting the reversed view direction).

    Args:
        incident: The vector to reflect, pointing away from the surface.
        normal: The surface normal (unit length for a true mirror image).

    Returns:
        The reflected vector.
    """
    return sub(scale(scale(normal, dot(normal, incident)), 2.0), incident)
