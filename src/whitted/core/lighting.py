"""Local lighting model with shadow rays.

The intensity at a surface point is the sum over all lights of:

- ambient lights: their intensity, unconditionally;
- point and directional lights, when the shadow ray toward the light is
  unobstructed:
    diffuse   = intensity * max(0, N . L) / (|N| |L|)
    specular  = intensity * (max(0, R . V) / (|R| |V|)) ^ s
  where R is L mirrored about N and s the surface specular exponent.
  Specular is skipped when s == NO_SPECULAR.

The sum is not clamped. Values above 1 produce over-bright highlights;
clamping belongs to the image export step.

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.core.lighting import compute_light
    >>> compute_light(point=(0, 0, 0), normal=(0, 1, 0), view=(0, 1, 0), specular=-1.0)
"""

import taichi as ti

from src.whitted.core.vector import dot, length, real, reflect, vec3
from src.whitted.geometry.sphere import NO_SPECULAR
from src.whitted.scene.intersection import NO_HIT, closest_intersection
from src.whitted.scene.lights import is_ambient, light_intensities, light_vector, num_lights

# Shadow rays start this far along L to avoid hitting their own surface
SHADOW_EPSILON = 0.001


@ti.func
def diffuse_term(normal: vec3, l: vec3, intensity: real) -> real:
    """Lambertian contribution of one unoccluded light."""
    result = ti.cast(0.0, real)
    n_dot_l = dot(normal, l)
    if n_dot_l > 0.0:
        result = (n_dot_l * intensity) / (length(normal) * length(l))
    return result


@ti.func
def specular_term(normal: vec3, l: vec3, view: vec3, specular: real, intensity: real) -> real:
    """Phong highlight of one unoccluded light."""
    result = ti.cast(0.0, real)
    r = reflect(l, normal)
    r_dot_v = dot(r, view)
    if r_dot_v > 0.0:
        result = intensity * ((r_dot_v / (length(r) * length(view))) ** specular)
    return result


@ti.func
def compute_lighting(point: vec3, normal: vec3, view: vec3, specular: real) -> real:
    """Total light intensity arriving at a surface point.

    Args:
        point: The shaded surface point.
        normal: Surface normal at the point (normally unit length; the
            diffuse term divides by its length anyway).
        view: Vector from the point toward the viewer.
        specular: Specular exponent, or NO_SPECULAR.

    Returns:
        The unclamped sum of ambient, diffuse and specular contributions.
    """
    total = ti.cast(0.0, real)

    ti.loop_config(serialize=True)
    for i in range(num_lights[None]):
        intensity = light_intensities[i]
        if is_ambient(i) == 1:
            total += intensity
        else:
            l, t_max = light_vector(i, point)
            shadow = closest_intersection(point, l, SHADOW_EPSILON, t_max)
            if shadow.index == NO_HIT:
                total += diffuse_term(normal, l, intensity)
                if specular != NO_SPECULAR:
                    total += specular_term(normal, l, view, specular, intensity)

    return total


@ti.kernel
def _compute_lighting_kernel(point: vec3, normal: vec3, view: vec3, specular: real) -> real:
    return compute_lighting(point, normal, view, specular)


def compute_light(point, normal, view, specular: float) -> float:
    """Python-side lighting query against the current scene and lights.

    Args:
        point: The shaded point as (x, y, z).
        normal: The surface normal as (x, y, z).
        view: Vector toward the viewer as (x, y, z).
        specular: Specular exponent, or NO_SPECULAR (-1).

    Returns:
        The light intensity at the point.
    """
    return float(
        _compute_lighting_kernel(vec3(*point), vec3(*normal), vec3(*view), specular)
    )
