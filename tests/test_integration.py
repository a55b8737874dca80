"""Integration tests for the end-to-end rendering pipeline.

These tests run the whole pipeline from scene creation to PNG output,
including the example command-line script.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

import json

import numpy as np
import pytest
from PIL import Image


class TestClassicRender:
    """Full-size render of the classic scene."""

    def test_full_render_to_png(self, tmp_path):
        from src.whitted.camera.viewport import Viewport, setup_viewport
        from src.whitted.core.render import RenderSettings, get_image_numpy, render_image
        from src.whitted.preview.export import color_to_uint8, save_png
        from src.whitted.scene.classic import create_classic_scene

        create_classic_scene()
        setup_viewport(Viewport())
        render_image(RenderSettings())
        image = get_image_numpy()

        path = tmp_path / "classic.png"
        save_png(str(path))

        with Image.open(path) as saved:
            assert saved.size == (600, 600)
            pixels = np.asarray(saved)

        np.testing.assert_array_equal(pixels, color_to_uint8(image))

        # Sky above, lit geometry below
        assert not pixels[:50].any()
        assert pixels[500:].any()
        # Blue sphere on the right, green sphere on the left
        assert image[300, 560, 2] > image[300, 560, 1]
        assert image[300, 40, 1] > image[300, 40, 2]


class TestRenderScript:
    """Tests for examples/render_spheres.py."""

    @pytest.fixture(autouse=True)
    def keep_session_runtime(self, monkeypatch):
        """Skip ti.init in main(); re-initializing would drop live fields."""
        import src.whitted.core.runtime as runtime

        monkeypatch.setattr(runtime, "init", lambda arch=None, **kwargs: None)

    def test_renders_classic_scene(self, tmp_path):
        from examples.render_spheres import main

        output = tmp_path / "spheres.png"

        exit_code = main(
            ["--width", "40", "--height", "30", "--depth", "1", "--output", str(output), "--quiet"]
        )

        assert exit_code == 0
        with Image.open(output) as saved:
            assert saved.size == (40, 30)

    def test_renders_scene_file(self, tmp_path):
        from examples.render_spheres import main

        scene_file = tmp_path / "scene.json"
        scene_file.write_text(
            json.dumps(
                {
                    "spheres": [{"center": [0, 0, 5], "color": [0, 0, 200], "radius": 1}],
                    "lights": [{"type": "ambient", "intensity": 1.0}],
                }
            )
        )
        output = tmp_path / "scene.png"

        exit_code = main(
            [
                "--width", "11",
                "--height", "11",
                "--scene", str(scene_file),
                "--output", str(output),
                "--quiet",
            ]
        )

        assert exit_code == 0
        with Image.open(output) as saved:
            pixels = np.asarray(saved)
        assert tuple(pixels[5, 5]) == (0, 0, 200)
        assert tuple(pixels[0, 0]) == (0, 0, 0)

    @pytest.mark.parametrize(
        "scene",
        [
            {"lights": [{"type": "spot", "intensity": 0.5}]},
            {"spheres": [{"center": [0, 0, 5], "radius": -1}]},
        ],
    )
    def test_invalid_scene_file_reports_error(self, tmp_path, capsys, scene):
        from examples.render_spheres import main

        scene_file = tmp_path / "bad.json"
        scene_file.write_text(json.dumps(scene))

        exit_code = main(
            ["--scene", str(scene_file), "--output", str(tmp_path / "x.png"), "--quiet"]
        )

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_backend_reports_error(self, tmp_path, capsys):
        from examples.render_spheres import main

        exit_code = main(["--arch", "tpu", "--output", str(tmp_path / "x.png"), "--quiet"])

        assert exit_code == 1
        assert "Unknown Taichi backend" in capsys.readouterr().err
