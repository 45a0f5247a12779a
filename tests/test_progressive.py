"""Tests for the scanline renderer.

This module tests the ProgressiveRenderer class including:
- Initialization and canvas validation
- Batch rendering with callbacks
- Generator-based progress and early stopping
- Reset functionality
- The one-call ``render`` function

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

import math

import numpy as np
import pytest


def _camera(width=11, height=11):
    from glint.camera.pinhole import Camera
    from glint.core.tuples import point, vector

    return Camera.look_at(
        width,
        height,
        math.pi / 2,
        point(0, 0, -5),
        point(0, 0, 0),
        vector(0, 1, 0),
    )


class TestProgressiveRendererInit:
    """Test ProgressiveRenderer initialization."""

    def test_init_creates_canvas(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(8, 6), world)

        assert renderer.width == 8
        assert renderer.height == 6
        assert renderer.canvas.width == 8
        assert renderer.canvas.height == 6
        assert renderer.rows_done == 0
        assert not renderer.is_complete

    def test_init_accepts_matching_canvas(self, world):
        from glint.core.progressive import ProgressiveRenderer
        from glint.preview.canvas import Canvas

        canvas = Canvas(8, 6)
        renderer = ProgressiveRenderer(_camera(8, 6), world, canvas)
        assert renderer.canvas is canvas

    def test_init_rejects_mismatched_canvas(self, world):
        from glint.core.progressive import ProgressiveRenderer
        from glint.preview.canvas import Canvas

        with pytest.raises(ValueError, match="doesn't match"):
            ProgressiveRenderer(_camera(8, 6), world, Canvas(6, 8))

    def test_repr(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(8, 6), world)
        assert repr(renderer) == "ProgressiveRenderer(width=8, height=6, rows_done=0)"


class TestProgressiveRendererRender:
    """Test batch rendering."""

    def test_render_fills_center_pixel(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        canvas = renderer.render()

        assert renderer.is_complete
        color = canvas.pixel_at(5, 5)
        assert color.red == pytest.approx(0.38066, abs=1e-4)
        assert color.green == pytest.approx(0.47583, abs=1e-4)
        assert color.blue == pytest.approx(0.2855, abs=1e-4)

    def test_render_through_canvas_kernels(self, world):
        from glint.camera.pinhole import Camera
        from glint.core.progressive import render

        canvas = render(Camera(4, 3, math.pi / 2), world)
        image = canvas.to_numpy()

        assert image.shape == (3, 4, 3)
        assert not np.isnan(image).any()

    def test_render_row_returns_row(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        row = renderer.render_row(5)

        assert row.shape == (11, 3)
        np.testing.assert_allclose(row[5], [0.38066, 0.47583, 0.2855], atol=1e-4)
        np.testing.assert_allclose(renderer.canvas.to_numpy()[5], row, atol=1e-6)

    def test_render_twice_is_a_no_op(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        renderer.render()

        calls = []
        renderer.render(callback=lambda done, total: calls.append(done))
        assert calls == []

    def test_render_is_deterministic(self, world):
        from glint.core.progressive import render

        first = render(_camera(), world).to_numpy()
        second = render(_camera(), world).to_numpy()
        np.testing.assert_array_equal(first, second)

    def test_render_function_matches_renderer(self, world):
        from glint.core.progressive import ProgressiveRenderer, render

        expected = ProgressiveRenderer(_camera(), world).render(batch_size=4).to_numpy()
        actual = render(_camera(), world).to_numpy()
        np.testing.assert_array_equal(actual, expected)

    def test_missed_rays_are_black(self, world):
        from glint.core.progressive import render

        image = render(_camera(), world).to_numpy()
        # The corner rays miss both spheres
        np.testing.assert_array_equal(image[0, 0], [0.0, 0.0, 0.0])


class TestProgressiveRendererCallbacks:
    """Test progress callback functionality."""

    def test_callback_receives_progress(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        progress_values = []

        def callback(done, total):
            progress_values.append((done, total))

        renderer.render(batch_size=4, callback=callback)

        assert progress_values == [(4, 11), (8, 11), (11, 11)]

    def test_render_without_callback(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        renderer.render(batch_size=3, callback=None)
        assert renderer.rows_done == 11


class TestProgressiveRendererGenerator:
    """Test generator-based progress reporting."""

    def test_render_progressive_yields_progress(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        progress_values = list(renderer.render_progressive(batch_size=5))

        assert progress_values == [(5, 11), (10, 11), (11, 11)]
        assert renderer.is_complete

    def test_render_progressive_interruptible(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        gen = renderer.render_progressive(batch_size=2)
        for _ in range(3):
            next(gen)

        assert renderer.rows_done == 6
        assert not renderer.is_complete
        # Rows past the stopping point are untouched
        np.testing.assert_array_equal(renderer.canvas.to_numpy()[6:], 0.0)

    def test_render_resumes_after_interruption(self, world):
        from glint.core.progressive import ProgressiveRenderer, render

        renderer = ProgressiveRenderer(_camera(), world)
        gen = renderer.render_progressive(batch_size=3)
        next(gen)
        renderer.render(batch_size=3)

        expected = render(_camera(), world).to_numpy()
        np.testing.assert_array_equal(renderer.canvas.to_numpy(), expected)

    @pytest.mark.parametrize("batch_size", [0, -1])
    def test_invalid_batch_size(self, world, batch_size):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        gen = renderer.render_progressive(batch_size=batch_size)
        with pytest.raises(ValueError, match="batch_size must be positive"):
            next(gen)

    def test_render_rejects_invalid_batch_size(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        with pytest.raises(ValueError, match="batch_size must be positive"):
            renderer.render(batch_size=0)


class TestProgressiveRendererReset:
    """Test reset functionality."""

    def test_reset_clears_progress_and_canvas(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        renderer.render()
        assert renderer.canvas.to_numpy().max() > 0.0

        renderer.reset()

        assert renderer.rows_done == 0
        assert not renderer.is_complete
        np.testing.assert_array_equal(renderer.canvas.to_numpy(), 0.0)

    def test_render_after_reset(self, world):
        from glint.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(_camera(), world)
        first = renderer.render().to_numpy().copy()
        renderer.reset()
        second = renderer.render().to_numpy()

        np.testing.assert_array_equal(first, second)
