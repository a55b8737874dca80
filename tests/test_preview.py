"""Unit tests for image export and preview.

Tests cover:
- Saturating conversion of unclamped colors to 8 bits
- PNG writing via Pillow
- Display normalisation and the Matplotlib preview (non-interactive)
"""

import math

import numpy as np
import pytest
from PIL import Image


class TestColorToUint8:
    """Tests for color_to_uint8."""

    def test_saturating_conversion(self):
        from src.whitted.preview.export import color_to_uint8

        values = np.array([math.nan, -5.0, 0.0, 12.9, 254.999, 255.0, 300.7, math.inf])

        result = color_to_uint8(values)

        assert result.dtype == np.uint8
        assert result.tolist() == [0, 0, 0, 12, 254, 255, 255, 255]

    def test_shape_is_preserved(self):
        from src.whitted.preview.export import color_to_uint8

        image = np.full((4, 6, 3), 96.38257683539419)

        result = color_to_uint8(image)

        assert result.shape == (4, 6, 3)
        assert np.all(result == 96)


class TestSavePng:
    """Tests for PNG export."""

    def test_save_png_from_array(self, tmp_path):
        from src.whitted.preview.export import save_png_from_array

        image = np.zeros((2, 3, 3))
        image[0, 0] = (510.0, 128.5, -3.0)
        image[1, 2] = (0.0, 0.0, 255.0)
        path = tmp_path / "out.png"

        save_png_from_array(image, str(path))

        with Image.open(path) as saved:
            assert saved.size == (3, 2)
            assert saved.mode == "RGB"
            pixels = np.asarray(saved)
        assert tuple(pixels[0, 0]) == (255, 128, 0)
        assert tuple(pixels[1, 2]) == (0, 0, 255)

    def test_save_png_rejects_wrong_shape(self, tmp_path):
        from src.whitted.preview.export import save_png_from_array

        with pytest.raises(ValueError, match="shape"):
            save_png_from_array(np.zeros((4, 4)), str(tmp_path / "bad.png"))

    def test_save_png_writes_render_target(self, tmp_path):
        from src.whitted.core.render import get_image_numpy, setup_render_target
        from src.whitted.preview.export import save_png

        setup_render_target(5, 7)
        path = tmp_path / "target.png"

        save_png(str(path))

        with Image.open(path) as saved:
            assert saved.size == (5, 7)
        assert get_image_numpy().shape == (7, 5, 3)


class TestDisplay:
    """Tests for display helpers."""

    def test_process_image_for_display(self):
        from src.whitted.preview.display import process_image_for_display

        image = np.array([[[0.0, 255.0, 510.0], [math.nan, -1.0, 127.5]]])

        result = process_image_for_display(image)

        assert result.dtype == np.float32
        assert result.shape == (1, 2, 3)
        assert result[0, 0].tolist() == [0.0, 1.0, 1.0]
        assert result[0, 1, 2] == pytest.approx(127.0 / 255.0)

    def test_process_image_rejects_wrong_shape(self):
        from src.whitted.preview.display import process_image_for_display

        with pytest.raises(ValueError, match="shape"):
            process_image_for_display(np.zeros((3, 3, 4)))

    def test_show_preview_non_blocking(self, monkeypatch):
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from src.whitted.preview.display import show_preview

        shown = []
        monkeypatch.setattr(plt, "show", lambda block=True: shown.append(block))

        show_preview(np.zeros((4, 4, 3)), title="test", block=False)
        plt.close("all")

        assert shown == [False]
