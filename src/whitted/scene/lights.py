"""Light sources: ambient, point and directional.

Lights are stored in Taichi fields alongside a closed ``LightKind`` tag.
Unknown kinds are rejected when a light is added or parsed from a name,
so the shading code only ever sees the three supported kinds.

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.scene.lights import LightKind, add_light
    >>> add_light(LightKind.AMBIENT, intensity=0.2)
    >>> add_light(LightKind.POINT, intensity=0.6, position=(2, 1, 0))
    >>> add_light(LightKind.DIRECTIONAL, intensity=0.2, direction=(1, 4, 4))
"""

import math
from enum import IntEnum

import taichi as ti

from src.whitted.core.vector import INF, real, sub, vec3


class LightKind(IntEnum):
    """Closed set of supported light kinds."""

    AMBIENT = 0
    POINT = 1
    DIRECTIONAL = 2

    @classmethod
    def from_name(cls, name: str) -> "LightKind":
        """Parse a light kind from its (case-insensitive) name.

        Raises:
            ValueError: If the name does not match a supported kind.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(kind.name.lower() for kind in cls)
            raise ValueError(f"Unknown light kind: {name!r} (expected one of {valid})") from None


# Integer tags compared inside Taichi functions
_AMBIENT = int(LightKind.AMBIENT)
_POINT = int(LightKind.POINT)
_DIRECTIONAL = int(LightKind.DIRECTIONAL)

# Point light shadow rays stop at the light: P + 1.0 * (light - P)
POINT_LIGHT_T_MAX = 1.0

# Maximum number of lights supported in the scene
MAX_LIGHTS = 64

light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_positions = ti.Vector.field(3, dtype=real, shape=MAX_LIGHTS)
light_directions = ti.Vector.field(3, dtype=real, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=real, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all lights from the scene."""
    num_lights[None] = 0


def add_light(
    kind: LightKind,
    intensity: float,
    position=(0.0, 0.0, 0.0),
    direction=(0.0, 0.0, 0.0),
) -> int:
    """Add a light to the scene.

    Args:
        kind: The light kind. Plain ints and names are coerced to LightKind.
        intensity: Scalar intensity in [0, 1].
        position: Light position (used by point lights only).
        direction: Vector pointing toward the light (used by directional
            lights only). It is used verbatim, not normalized.

    Returns:
        The index of the added light.

    Raises:
        ValueError: If the kind is unknown, the intensity is outside
            [0, 1], a vector is not finite, or a directional light has a
            zero direction.
        RuntimeError: If the maximum number of lights is exceeded.
    """
    if isinstance(kind, str):
        kind = LightKind.from_name(kind)
    else:
        try:
            kind = LightKind(kind)
        except ValueError:
            raise ValueError(f"Unknown light kind: {kind!r}") from None

    if not 0.0 <= intensity <= 1.0:
        raise ValueError(f"intensity must be in [0, 1], got {intensity}")
    position = tuple(float(c) for c in position)
    direction = tuple(float(c) for c in direction)
    for name, value in (("position", position), ("direction", direction)):
        if len(value) != 3 or not all(math.isfinite(c) for c in value):
            raise ValueError(f"{name} must be 3 finite components, got {value}")
    if kind == LightKind.DIRECTIONAL and not any(direction):
        raise ValueError("directional light needs a non-zero direction")

    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_kinds[idx] = int(kind)
    light_positions[idx] = list(position)
    light_directions[idx] = list(direction)
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def is_ambient(index: ti.i32) -> ti.i32:
    """1 if the light at index is ambient, 0 otherwise."""
    return ti.select(light_kinds[index] == _AMBIENT, 1, 0)


@ti.func
def light_vector(index: ti.i32, point: vec3):
    """Direction toward a light and the shadow-ray range for it.

    Point lights aim at the stored position and the shadow ray ends at the
    light (t = 1). Directional lights use the stored direction unchanged
    and the shadow ray is unbounded.

    Args:
        index: Index of a point or directional light.
        point: The shaded surface point.

    Returns:
        Tuple of (L, t_max). L is not normalized.
    """
    l = vec3(0.0, 0.0, 0.0)
    t_max = ti.cast(0.0, real)
    kind = light_kinds[index]
    if kind == _POINT:
        l = sub(light_positions[index], point)
        t_max = ti.cast(POINT_LIGHT_T_MAX, real)
    elif kind == _DIRECTIONAL:
        l = light_directions[index]
        t_max = ti.cast(INF, real)
    return l, t_max
