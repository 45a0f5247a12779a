"""Tests for the preview module.

This module tests the canvas and export functionality including:
- Canvas pixel access, fill and row upload
- Tone mapping and gamma correction
- PPM text layout (header, scaling, clamping, line length)
- PNG export through Pillow
- The interactive preview's headless behavior

Note: Tests avoid creating actual windows; only field handling is tested
for the interactive preview.
"""

import os
import tempfile

import numpy as np
import pytest
from PIL import Image as PILImage


class TestCanvas:
    """Tests for the Taichi-backed canvas."""

    def test_new_canvas_is_black(self):
        from glint.materials.color import BLACK
        from glint.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        assert canvas.width == 10
        assert canvas.height == 20
        assert canvas.pixel_at(0, 0) == BLACK
        assert canvas.pixel_at(9, 19) == BLACK

    def test_write_and_read_pixel(self):
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        canvas.write_pixel(2, 3, Color(1, 0, 0))
        assert canvas.pixel_at(2, 3) == Color(1, 0, 0)

    def test_out_of_bounds(self):
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas

        canvas = Canvas(4, 4)
        with pytest.raises(IndexError):
            canvas.write_pixel(4, 0, Color(1, 1, 1))
        with pytest.raises(IndexError):
            canvas.pixel_at(0, -1)

    def test_invalid_size(self):
        from glint.preview.canvas import Canvas

        with pytest.raises(ValueError, match="must be positive"):
            Canvas(0, 5)

    def test_fill(self):
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas

        canvas = Canvas(3, 2)
        canvas.fill(Color(0.25, 0.5, 0.75))
        assert np.allclose(canvas.to_numpy(), [0.25, 0.5, 0.75])

    def test_write_row(self):
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas

        canvas = Canvas(3, 2)
        canvas.write_row(1, [[1, 0, 0], [0, 1, 0], [0, 0, 1]])
        assert canvas.pixel_at(0, 1) == Color(1, 0, 0)
        assert canvas.pixel_at(2, 1) == Color(0, 0, 1)
        assert canvas.pixel_at(0, 0) == Color(0, 0, 0)

    def test_write_row_wrong_shape(self):
        from glint.preview.canvas import Canvas

        canvas = Canvas(3, 2)
        with pytest.raises(ValueError, match="doesn't match"):
            canvas.write_row(0, np.zeros((2, 3)))

    def test_to_numpy_layout(self):
        """to_numpy returns (height, width, 3) with row 0 at the top."""
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas

        canvas = Canvas(4, 2)
        canvas.write_pixel(3, 1, Color(1.5, 0, 0))
        image = canvas.to_numpy()
        assert image.shape == (2, 4, 3)
        assert image[1, 3, 0] == pytest.approx(1.5)


class TestProcessImage:
    """Tests for tone mapping and gamma."""

    def test_no_tone_map_clamps(self):
        from glint.preview.export import process_image

        image = np.array([[[-0.5, 0.5, 1.5]]], dtype=np.float32)
        result = process_image(image)
        assert np.allclose(result, [[[0.0, 0.5, 1.0]]])

    def test_reinhard(self):
        from glint.preview.export import process_image

        image = np.full((2, 2, 3), 10.0, dtype=np.float32)
        result = process_image(image, tone_map="reinhard")
        assert np.allclose(result, 10.0 / 11.0, atol=1e-5)

    def test_exposure(self):
        from glint.preview.export import process_image

        image = np.full((2, 2, 3), 1.0, dtype=np.float32)
        result = process_image(image, tone_map="exposure", exposure=2.0)
        assert np.allclose(result, 1.0 - np.exp(-2.0), atol=1e-5)

    def test_gamma_brightens_midtones(self):
        from glint.preview.export import process_image

        image = np.full((2, 2, 3), 0.5, dtype=np.float32)
        result = process_image(image, gamma=2.2)
        assert np.allclose(result, 0.5 ** (1 / 2.2), atol=1e-5)

    def test_invalid_tone_map(self):
        from glint.preview.export import process_image

        with pytest.raises(ValueError, match="Unknown tone mapping"):
            process_image(np.zeros((1, 1, 3)), tone_map="filmic")

    def test_invalid_gamma(self):
        from glint.preview.export import process_image

        with pytest.raises(ValueError, match="Gamma must be positive"):
            process_image(np.zeros((1, 1, 3)), gamma=0.0)

    def test_image_to_uint8(self):
        from glint.preview.export import image_to_uint8

        image = np.array([[[0.0, 0.5, 1.0], [2.0, -1.0, 0.8]]], dtype=np.float32)
        result = image_to_uint8(image)
        assert result.dtype == np.uint8
        assert result.tolist() == [[[0, 128, 255], [255, 0, 204]]]


class TestPPM:
    """Tests for plain PPM output."""

    def test_header(self):
        from glint.preview.canvas import Canvas
        from glint.preview.export import canvas_to_ppm

        lines = canvas_to_ppm(Canvas(5, 3)).splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_pixel_data_scaled_and_clamped(self):
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas
        from glint.preview.export import canvas_to_ppm

        canvas = Canvas(5, 3)
        canvas.write_pixel(0, 0, Color(1.5, 0, 0))
        canvas.write_pixel(2, 1, Color(0, 0.5, 0))
        canvas.write_pixel(4, 2, Color(-0.5, 0, 1))
        lines = canvas_to_ppm(canvas).splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_split(self):
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas
        from glint.preview.export import PPM_LINE_LIMIT, canvas_to_ppm

        canvas = Canvas(10, 2)
        canvas.fill(Color(1, 0.8, 0.6))
        lines = canvas_to_ppm(canvas).splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]
        assert all(len(line) <= PPM_LINE_LIMIT for line in lines)

    def test_ends_with_newline(self):
        from glint.preview.canvas import Canvas
        from glint.preview.export import canvas_to_ppm

        assert canvas_to_ppm(Canvas(5, 3)).endswith("\n")


class TestSaveImage:
    """Tests for writing image files."""

    def test_save_png(self):
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas
        from glint.preview.export import save_image

        canvas = Canvas(8, 4)
        canvas.fill(Color(1, 0, 0))

        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_image(canvas, os.path.join(tmpdir, "out.png"))
            img = PILImage.open(path)
            assert img.size == (8, 4)
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (255, 0, 0)

    def test_save_png_with_tone_mapping(self):
        from glint.preview.canvas import Canvas
        from glint.preview.export import save_png

        canvas = Canvas(4, 4)
        with tempfile.TemporaryDirectory() as tmpdir:
            for tone_map in ["none", "reinhard", "exposure"]:
                filepath = os.path.join(tmpdir, f"{tone_map}.png")
                save_png(canvas, filepath, tone_map=tone_map)
                assert os.path.exists(filepath)

    def test_save_ppm_by_suffix(self):
        from glint.preview.canvas import Canvas
        from glint.preview.export import save_image

        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_image(Canvas(2, 2), os.path.join(tmpdir, "out.ppm"))
            assert path.read_text(encoding="ascii").startswith("P3\n2 2\n255\n")


class TestComputeRMSE:
    """Tests for image comparison."""

    def test_identical(self):
        from glint.preview.export import compute_rmse

        image = np.random.default_rng(0).random((4, 4, 3))
        assert compute_rmse(image, image) == 0.0

    def test_known_difference(self):
        from glint.preview.export import compute_rmse

        assert compute_rmse(np.zeros((2, 2, 3)), np.full((2, 2, 3), 0.5)) == pytest.approx(0.5)

    def test_shape_mismatch(self):
        from glint.preview.export import compute_rmse

        with pytest.raises(ValueError, match="shapes must match"):
            compute_rmse(np.zeros((2, 2, 3)), np.zeros((3, 2, 3)))


class TestInteractivePreview:
    """Tests for the InteractivePreview class.

    Note: These tests avoid creating actual GUI windows by testing
    the initialization and data handling logic only.
    """

    def test_init_creates_display_field(self):
        from glint.preview.interactive import InteractivePreview

        preview = InteractivePreview(64, 48)
        assert preview.width == 64
        assert preview.height == 48
        assert preview.display_image.shape == (64, 48)

    def test_init_defers_window_creation(self):
        from glint.preview.interactive import InteractivePreview

        preview = InteractivePreview(32, 32)
        assert preview._window is None
        assert preview._canvas is None

    def test_update_from_canvas_flips_and_clamps(self):
        """Canvas row 0 is the top; the GGUI field has row 0 at the bottom."""
        from glint.materials.color import Color
        from glint.preview.canvas import Canvas
        from glint.preview.interactive import InteractivePreview

        canvas = Canvas(2, 3)
        canvas.write_pixel(1, 0, Color(2.0, 0.5, -1.0))
        preview = InteractivePreview(2, 3)
        preview.update_from_canvas(canvas, gamma=1.0)

        result = preview.display_image.to_numpy()
        assert np.allclose(result[1, 2], [1.0, 0.5, 0.0], atol=1e-6)
        assert np.allclose(result[1, 0], 0.0)

    def test_update_from_canvas_size_mismatch(self):
        from glint.preview.canvas import Canvas
        from glint.preview.interactive import InteractivePreview

        preview = InteractivePreview(4, 4)
        with pytest.raises(ValueError, match="doesn't match"):
            preview.update_from_canvas(Canvas(2, 2))

    def test_is_display_available_returns_bool(self):
        from glint.preview.interactive import InteractivePreview

        assert isinstance(InteractivePreview.is_display_available(), bool)

    def test_close_without_window(self):
        from glint.preview.interactive import InteractivePreview

        InteractivePreview(8, 8).close()
