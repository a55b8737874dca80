"""The classic four-sphere demo scene.

Three unit spheres (red, blue, green) rest above a huge yellow sphere that
acts as the floor. The scene is lit by an ambient term, a point light to
the right of the eye and a directional light from above.

Example:
    >>> from src.whitted.core.runtime import init
    >>> init()
    >>> from src.whitted.scene.classic import create_classic_scene
    >>> scene = create_classic_scene()
    >>> scene.get_sphere_count()
    4
"""

from src.whitted.scene.manager import SceneManager

# =============================================================================
# Scene Constants
# =============================================================================

# (center, color, radius, specular, reflective)
CLASSIC_SPHERES = (
    ((0.0, -1.0, 3.0), (255.0, 0.0, 0.0), 1.0, 500.0, 0.2),  # Red, shiny
    ((2.0, 0.0, 4.0), (0.0, 0.0, 255.0), 1.0, 500.0, 0.3),  # Blue, shiny
    ((-2.0, 0.0, 4.0), (0.0, 255.0, 0.0), 1.0, 10.0, 0.4),  # Green, somewhat shiny
    ((0.0, -5001.0, 0.0), (255.0, 255.0, 0.0), 5000.0, 1000.0, 0.5),  # Yellow floor
)

AMBIENT_INTENSITY = 0.2
POINT_LIGHT_POSITION = (2.0, 1.0, 0.0)
POINT_LIGHT_INTENSITY = 0.6
DIRECTIONAL_LIGHT_DIRECTION = (1.0, 4.0, 4.0)
DIRECTIONAL_LIGHT_INTENSITY = 0.2


def create_classic_scene() -> SceneManager:
    """Create the classic scene, replacing whatever was loaded before.

    Returns:
        The SceneManager describing the scene.
    """
    scene = SceneManager()

    for center, color, radius, specular, reflective in CLASSIC_SPHERES:
        scene.add_sphere(center, color, radius, specular=specular, reflective=reflective)

    scene.add_ambient_light(AMBIENT_INTENSITY)
    scene.add_point_light(POINT_LIGHT_POSITION, POINT_LIGHT_INTENSITY)
    scene.add_directional_light(DIRECTIONAL_LIGHT_DIRECTION, DIRECTIONAL_LIGHT_INTENSITY)

    return scene
