"""Whitted-style tracer: local shading plus depth-bounded mirror reflection.

Conceptually the tracer is the recursion

    trace(O, D, t_min, t_max, depth):
        hit = closest sphere in [t_min, t_max]         (none -> background)
        P = O + t*D, N = normalize(P - C)
        local = color * lighting(P, N, -D, specular)
        if depth <= 0 or reflective <= 0: return local
        R = reflect(-D, N)
        return local * (1 - r) + trace(P, R, eps, inf, depth - 1) * r

Taichi functions cannot call themselves, so the recursion is unrolled
into a loop. Each bounce adds its local color weighted by the product of
the reflectivities above it and by (1 - r) of its own surface; the last
surface (miss, depth exhausted, or non-reflective) adds its full weighted
color. The loop runs at most depth + 1 times.

The loop sums the same terms as the recursion but in a different order,
so results match the recursive definition only up to floating-point
rounding.

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.scene.classic import create_classic_scene
    >>> from src.whitted.core.tracer import trace
    >>> scene = create_classic_scene()
    >>> trace((0, 0, 0), (-0.5, -0.5, 1.0), 1.0, 1000.0, depth=3)
"""

import taichi as ti

from src.whitted.core.lighting import compute_lighting
from src.whitted.core.vector import INF, real, ray_at, reflect, scale, vec3
from src.whitted.geometry.sphere import sphere_normal
from src.whitted.scene.intersection import NO_HIT, closest_intersection, get_sphere

# =============================================================================
# Tracing Constants
# =============================================================================

# Reflected rays start this far along R to avoid re-hitting their surface
REFLECTION_EPSILON = 0.001

# Color returned for rays that escape the scene
BACKGROUND_COLOR = vec3(0.0, 0.0, 0.0)

# Default recursion budget (reflective bounces)
DEFAULT_DEPTH = 3

# Largest depth whose loop bound (depth + 1) still fits in an i32
MAX_DEPTH = 2**31 - 2


def validate_depth(depth) -> None:
    """Check a reflection budget before it is passed to a kernel.

    Raises:
        ValueError: If depth is not an integer in [0, MAX_DEPTH].
    """
    if int(depth) != depth or depth < 0:
        raise ValueError(f"depth must be a non-negative integer, got {depth}")
    if depth > MAX_DEPTH:
        raise ValueError(f"depth must not exceed {MAX_DEPTH}, got {depth}")


@ti.func
def trace_ray(
    origin: vec3,
    direction: vec3,
    t_min: real,
    t_max: real,
    depth: ti.i32,
) -> vec3:
    """Trace a ray and return its color.

    Args:
        origin: The ray origin.
        direction: The ray direction (not necessarily unit length).
        t_min: Inclusive lower bound on t for the first hit.
        t_max: Inclusive upper bound on t for the first hit.
        depth: Number of reflective bounces still allowed. Values <= 0
            return the local color of the first hit.

    Returns:
        The unclamped RGB color.
    """
    color = vec3(0.0, 0.0, 0.0)
    weight = ti.cast(1.0, real)

    ray_origin = origin
    ray_direction = direction
    lo = t_min
    hi = t_max
    remaining = depth

    # Active flag instead of break: the loop carries the blend state
    active = 1

    ti.loop_config(serialize=True)
    for _ in range(ti.max(depth, 0) + 1):
        if active == 1:
            hit = closest_intersection(ray_origin, ray_direction, lo, hi)

            if hit.index == NO_HIT:
                color += weight * BACKGROUND_COLOR
                active = 0
            else:
                sphere = get_sphere(hit.index)
                p = ray_at(ray_origin, ray_direction, hit.t)
                n = sphere_normal(sphere, p)
                view = scale(ray_direction, -1.0)

                intensity = compute_lighting(p, n, view, sphere.specular)
                local_color = scale(sphere.color, intensity)

                r = sphere.reflective
                if remaining <= 0 or r <= 0.0:
                    color += weight * local_color
                    active = 0
                else:
                    color += weight * scale(local_color, 1.0 - r)
                    weight *= r

                    ray_origin = p
                    ray_direction = reflect(view, n)
                    lo = ti.cast(REFLECTION_EPSILON, real)
                    hi = ti.cast(INF, real)
                    remaining -= 1

    return color


@ti.kernel
def _trace_kernel(
    origin: vec3,
    direction: vec3,
    t_min: real,
    t_max: real,
    depth: ti.i32,
) -> vec3:
    return trace_ray(origin, direction, t_min, t_max, depth)


def trace(
    origin,
    direction,
    t_min: float = 1.0,
    t_max: float = 1000.0,
    depth: int = DEFAULT_DEPTH,
) -> tuple[float, float, float]:
    """Trace a single ray through the current scene.

    This is the Python-callable entry point. For whole images use
    :func:`src.whitted.core.render.render_image`.

    Args:
        origin: The ray origin as (x, y, z).
        direction: The ray direction as (x, y, z).
        t_min: Inclusive lower bound on t for the first hit.
        t_max: Inclusive upper bound on t for the first hit.
        depth: Reflection budget (non-negative integer).

    Returns:
        Tuple of (R, G, B), unclamped.

    Raises:
        ValueError: If depth is negative, not an integer, or above MAX_DEPTH.
    """
    validate_depth(depth)

    color = _trace_kernel(vec3(*origin), vec3(*direction), t_min, t_max, int(depth))
    return (float(color[0]), float(color[1]), float(color[2]))
