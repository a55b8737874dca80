"""Unit tests for the classic demo scene."""

import pytest


class TestClassicScene:
    """Tests for create_classic_scene."""

    def test_counts(self):
        from src.whitted.scene.classic import create_classic_scene

        scene = create_classic_scene()

        assert scene.get_sphere_count() == 4
        assert scene.get_light_count() == 3

    def test_spheres_in_scan_order(self):
        from src.whitted.scene.classic import create_classic_scene

        scene = create_classic_scene()

        colors = [sphere.color for sphere in scene.spheres]
        assert colors == [
            (255.0, 0.0, 0.0),
            (0.0, 0.0, 255.0),
            (0.0, 255.0, 0.0),
            (255.0, 255.0, 0.0),
        ]
        floor = scene.spheres[3]
        assert floor.center == (0.0, -5001.0, 0.0)
        assert floor.radius == 5000.0
        assert floor.specular == 1000.0
        assert floor.reflective == 0.5

    def test_lights(self):
        from src.whitted.scene.classic import create_classic_scene

        lights = create_classic_scene().to_dict()["lights"]

        assert lights == [
            {"type": "ambient", "intensity": 0.2},
            {"type": "point", "intensity": 0.6, "position": [2.0, 1.0, 0.0]},
            {"type": "directional", "intensity": 0.2, "direction": [1.0, 4.0, 4.0]},
        ]

    def test_replaces_previous_scene(self):
        from src.whitted.scene.classic import create_classic_scene
        from src.whitted.scene.intersection import add_sphere

        add_sphere((0, 0, 5), (255, 0, 0), 1.0)
        scene = create_classic_scene()

        assert scene.get_sphere_count() == 4

    def test_floor_is_first_hit_of_reference_ray(self):
        from src.whitted.scene.classic import create_classic_scene
        from src.whitted.scene.intersection import find_closest_intersection

        create_classic_scene()

        index, t = find_closest_intersection((0, 0, 0), (-0.5, -0.5, 1.0), 1.0, 1000.0)

        assert index == 3
        assert t == 2.001001001302029
