"""Unit tests for the Whitted tracer.

Tests cover:
- The reference color on the classic scene
- Background color on misses
- Reflection blending by hand-computed values
- Depth independence for non-reflective surfaces and the depth-0 cut-off
- Rejection of invalid depth budgets
"""

import pytest


class TestReferenceTrace:
    """Reference color on the classic scene."""

    def test_classic_scene_reference_color(self):
        from src.whitted.core.tracer import trace
        from src.whitted.scene.classic import create_classic_scene

        create_classic_scene()

        r, g, b = trace((0, 0, 0), (-0.5, -0.5, 1.0), 1.0, 1000.0, depth=3)

        assert (r, g, b) == (96.38257683539419, 144.8400555916369, 0.0)


class TestMisses:
    """Tests for rays that escape the scene."""

    def test_empty_scene_is_black(self):
        from src.whitted.core.tracer import trace
        from src.whitted.scene.lights import LightKind, add_light

        add_light(LightKind.AMBIENT, 1.0)

        assert trace((0, 0, 0), (0, 0, 1), 1.0, 1000.0, depth=3) == (0.0, 0.0, 0.0)

    def test_ray_above_classic_scene_is_black(self):
        from src.whitted.core.tracer import trace
        from src.whitted.scene.classic import create_classic_scene

        create_classic_scene()

        assert trace((0, 0, 0), (0, 1, 0), 1.0, 1000.0, depth=3) == (0.0, 0.0, 0.0)


class TestReflection:
    """Tests for reflection blending."""

    def _mirror_scene(self, reflective):
        from src.whitted.scene.intersection import add_sphere
        from src.whitted.scene.lights import LightKind, add_light

        # Eye looks down +z at a grey mirror; a red ball sits behind the eye
        add_light(LightKind.AMBIENT, 1.0)
        add_sphere((0, 0, 5), (100, 100, 100), 1.0, specular=-1.0, reflective=reflective)
        add_sphere((0, 0, -5), (200, 0, 0), 1.0, specular=-1.0, reflective=0.0)

    def test_reflection_blends_with_local_color(self):
        from src.whitted.core.tracer import trace

        self._mirror_scene(reflective=0.5)

        assert trace((0, 0, 0), (0, 0, 1), 1.0, 1000.0, depth=1) == (150.0, 50.0, 50.0)

    def test_reflected_miss_blends_with_background(self):
        from src.whitted.core.tracer import trace
        from src.whitted.scene.intersection import add_sphere
        from src.whitted.scene.lights import LightKind, add_light

        add_light(LightKind.AMBIENT, 1.0)
        add_sphere((0, 0, 5), (100, 100, 100), 1.0, specular=-1.0, reflective=0.5)

        assert trace((0, 0, 0), (0, 0, 1), 1.0, 1000.0, depth=3) == (50.0, 50.0, 50.0)

    def test_full_mirror_shows_only_reflection(self):
        from src.whitted.core.tracer import trace

        self._mirror_scene(reflective=1.0)

        assert trace((0, 0, 0), (0, 0, 1), 1.0, 1000.0, depth=1) == (200.0, 0.0, 0.0)

    def test_depth_zero_returns_local_color(self):
        from src.whitted.core.tracer import trace

        self._mirror_scene(reflective=0.5)

        assert trace((0, 0, 0), (0, 0, 1), 1.0, 1000.0, depth=0) == (100.0, 100.0, 100.0)

    def test_depth_zero_matches_non_reflective_scene(self):
        from src.whitted.core.tracer import trace
        from src.whitted.scene.classic import create_classic_scene
        from src.whitted.scene.manager import SceneManager

        direction = (-0.5, -0.5, 1.0)

        create_classic_scene()
        shallow = trace((0, 0, 0), direction, 1.0, 1000.0, depth=0)

        data = create_classic_scene().to_dict()
        for sphere in data["spheres"]:
            sphere["reflective"] = 0.0
        SceneManager().from_dict(data)
        matte = trace((0, 0, 0), direction, 1.0, 1000.0, depth=3)

        assert shallow == matte

    def test_non_reflective_result_independent_of_depth(self):
        from src.whitted.core.tracer import trace
        from src.whitted.scene.intersection import add_sphere
        from src.whitted.scene.lights import LightKind, add_light

        add_light(LightKind.AMBIENT, 0.2)
        add_light(LightKind.POINT, 0.6, position=(2, 1, 0))
        add_sphere((0, -1, 3), (255, 0, 0), 1.0, specular=500.0, reflective=0.0)

        colors = [trace((0, 0, 0), (0, -0.2, 1), 1.0, 1000.0, depth=d) for d in (0, 1, 5)]

        assert colors[0] == colors[1] == colors[2]
        assert colors[0][0] > 0.0

    def test_output_is_not_clamped(self):
        from src.whitted.core.tracer import trace
        from src.whitted.scene.intersection import add_sphere
        from src.whitted.scene.lights import LightKind, add_light

        add_light(LightKind.AMBIENT, 1.0)
        add_light(LightKind.DIRECTIONAL, 1.0, direction=(0, 0, -1))
        add_sphere((0, 0, 5), (255, 255, 255), 1.0)

        assert trace((0, 0, 0), (0, 0, 1), 1.0, 1000.0, depth=3) == (510.0, 510.0, 510.0)


class TestDepthValidation:
    """Tests for rejected depth budgets."""

    @pytest.mark.parametrize("depth", [-1, 1.5, 2**31])
    def test_invalid_depth_raises(self, depth):
        from src.whitted.core.tracer import trace

        with pytest.raises(ValueError, match="depth"):
            trace((0, 0, 0), (0, 0, 1), 1.0, 1000.0, depth=depth)

    def test_max_depth_is_accepted(self):
        from src.whitted.core.tracer import MAX_DEPTH, validate_depth

        validate_depth(MAX_DEPTH)

        with pytest.raises(ValueError, match="must not exceed"):
            validate_depth(MAX_DEPTH + 1)
