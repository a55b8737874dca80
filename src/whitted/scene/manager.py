"""Scene manager coordinating spheres and lights.

This module provides a high-level scene API over the Taichi-side sphere
and light storage. It keeps a Python-side record of everything added so a
scene can be inspected and serialized to and from plain dictionaries
(and hence JSON files).

The SceneManager maintains:
- A SphereInfo per sphere, in insertion (= scan) order
- A LightInfo per light, in insertion order
- Scene serialization via SceneConfig / dictionaries

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_sphere((0, -1, 3), color=(255, 0, 0), radius=1.0, specular=500, reflective=0.2)
    >>> scene.add_ambient_light(0.2)
    >>> scene.add_point_light((2, 1, 0), 0.6)
    >>> data = scene.to_dict()
"""

from dataclasses import dataclass, field
from typing import Any

from src.whitted.geometry.sphere import NO_SPECULAR
from src.whitted.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)
from src.whitted.scene.lights import (
    MAX_LIGHTS,
    LightKind,
    add_light,
    clear_lights,
    get_light_count,
)


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        color: RGB color of the sphere.
        radius: The radius of the sphere.
        specular: Phong exponent, or NO_SPECULAR.
        reflective: Mirror reflectivity in [0, 1].
    """

    sphere_index: int
    center: tuple[float, float, float]
    color: tuple[float, float, float]
    radius: float
    specular: float
    reflective: float


@dataclass
class LightInfo:
    """Information about a light in the scene.

    Attributes:
        light_index: The index in the light storage arrays.
        kind: Ambient, point or directional.
        intensity: Scalar intensity in [0, 1].
        position: Light position (point lights).
        direction: Vector toward the light (directional lights).
    """

    light_index: int
    kind: LightKind
    intensity: float
    position: tuple[float, float, float]
    direction: tuple[float, float, float]


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: List of sphere configurations.
        lights: List of light configurations.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


def _as_vec3(name: str, value: Any) -> tuple[float, float, float]:
    """Convert a config entry to a float 3-tuple."""
    try:
        x, y, z = value
        return (float(x), float(y), float(z))
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a list of 3 numbers, got {value!r}") from None


class SceneManager:
    """Scene manager for spheres and lights.

    Creating a SceneManager clears the global scene storage, so the most
    recently created manager describes what the tracer sees.

    Attributes:
        spheres: List of SphereInfo for all spheres in the scene.
        lights: List of LightInfo for all lights in the scene.

    Example:
        >>> scene = SceneManager()
        >>> scene.add_sphere((0, -5001, 0), (255, 255, 0), 5000.0, specular=1000, reflective=0.5)
        >>> scene.add_directional_light((1, 4, 4), 0.2)
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.spheres: list[SphereInfo] = []
        self.lights: list[LightInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        clear_lights()
        self.spheres.clear()
        self.lights.clear()

    def clear(self) -> None:
        """Clear the entire scene (spheres and lights)."""
        self._clear_all()

    # =========================================================================
    # Spheres
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        color: tuple[float, float, float],
        radius: float,
        specular: float = NO_SPECULAR,
        reflective: float = 0.0,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            color: RGB color as (r, g, b), conventionally in [0, 255].
            radius: The radius of the sphere.
            specular: Phong exponent, or NO_SPECULAR (-1) for a matte surface.
            reflective: Mirror reflectivity in [0, 1].

        Returns:
            The sphere index.

        Raises:
            ValueError: If the sphere parameters are invalid.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        sphere_index = add_sphere(center, color, radius, specular, reflective)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=_as_vec3("center", center),
                color=_as_vec3("color", color),
                radius=float(radius),
                specular=float(specular),
                reflective=float(reflective),
            )
        )
        return sphere_index

    # =========================================================================
    # Lights
    # =========================================================================

    def add_light(
        self,
        kind: LightKind,
        intensity: float,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        direction: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> int:
        """Add a light of any kind to the scene.

        Returns:
            The light index.

        Raises:
            ValueError: If the kind is unknown or the parameters are invalid.
            RuntimeError: If the maximum number of lights is exceeded.
        """
        light_index = add_light(kind, intensity, position, direction)
        if isinstance(kind, str):
            kind = LightKind.from_name(kind)
        self.lights.append(
            LightInfo(
                light_index=light_index,
                kind=LightKind(kind),
                intensity=float(intensity),
                position=_as_vec3("position", position),
                direction=_as_vec3("direction", direction),
            )
        )
        return light_index

    def add_ambient_light(self, intensity: float) -> int:
        """Add an ambient light, applied to every point unconditionally."""
        return self.add_light(LightKind.AMBIENT, intensity)

    def add_point_light(self, position: tuple[float, float, float], intensity: float) -> int:
        """Add a point light at a position."""
        return self.add_light(LightKind.POINT, intensity, position=position)

    def add_directional_light(
        self, direction: tuple[float, float, float], intensity: float
    ) -> int:
        """Add a directional light shining from the given direction."""
        return self.add_light(LightKind.DIRECTIONAL, intensity, direction=direction)

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return get_light_count()

    def get_sphere_info(self, sphere_index: int) -> SphereInfo | None:
        """Get the SphereInfo for an index, or None if it does not exist."""
        if 0 <= sphere_index < len(self.spheres):
            return self.spheres[sphere_index]
        return None

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "color": list(sphere.color),
                    "radius": sphere.radius,
                    "specular": sphere.specular,
                    "reflective": sphere.reflective,
                }
            )

        for light in self.lights:
            light_config: dict[str, Any] = {
                "type": light.kind.name.lower(),
                "intensity": light.intensity,
            }
            if light.kind == LightKind.POINT:
                light_config["position"] = list(light.position)
            elif light.kind == LightKind.DIRECTIONAL:
                light_config["direction"] = list(light.direction)
            config.lights.append(light_config)

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration. If an entry
        is invalid the scene is left empty.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()
        try:
            self._load_config(config)
        except (ValueError, RuntimeError):
            self.clear()
            raise

    def _load_config(self, config: SceneConfig) -> None:
        """Add every sphere and light of a configuration to the scene."""
        for sphere_config in config.spheres:
            if "center" not in sphere_config or "radius" not in sphere_config:
                raise ValueError(f"Sphere needs 'center' and 'radius': {sphere_config!r}")
            self.add_sphere(
                center=_as_vec3("center", sphere_config["center"]),
                color=_as_vec3("color", sphere_config.get("color", [255, 255, 255])),
                radius=float(sphere_config["radius"]),
                specular=float(sphere_config.get("specular", NO_SPECULAR)),
                reflective=float(sphere_config.get("reflective", 0.0)),
            )

        for light_config in config.lights:
            kind = LightKind.from_name(str(light_config.get("type", "")))
            intensity = float(light_config.get("intensity", 0.0))
            if kind == LightKind.AMBIENT:
                self.add_ambient_light(intensity)
            elif kind == LightKind.POINT:
                if "position" not in light_config:
                    raise ValueError(f"Point light needs 'position': {light_config!r}")
                self.add_point_light(_as_vec3("position", light_config["position"]), intensity)
            else:
                if "direction" not in light_config:
                    raise ValueError(f"Directional light needs 'direction': {light_config!r}")
                self.add_directional_light(
                    _as_vec3("direction", light_config["direction"]), intensity
                )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "spheres": config.spheres,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'spheres' and 'lights' keys.
        """
        config = SceneConfig(
            spheres=data.get("spheres", []),
            lights=data.get("lights", []),
        )
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_lights() -> int:
        """Get the maximum number of lights supported."""
        return MAX_LIGHTS
