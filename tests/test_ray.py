"""Unit tests for rays."""

import pytest

from glint.core.ray import Ray
from glint.core.transform import scaling, translation
from glint.core.tuples import point, vector


class TestRay:
    """Tests for ray construction, positions and transforms."""

    def test_create(self):
        origin = point(1, 2, 3)
        direction = vector(4, 5, 6)
        ray = Ray(origin, direction)
        assert ray.origin == origin
        assert ray.direction == direction

    def test_origin_must_be_point(self):
        with pytest.raises(ValueError, match="origin must be a point"):
            Ray(vector(0, 0, 0), vector(0, 0, 1))

    def test_direction_must_be_vector(self):
        with pytest.raises(ValueError, match="direction must be a vector"):
            Ray(point(0, 0, 0), point(0, 0, 1))

    @pytest.mark.parametrize(
        "t,expected",
        [(0, point(2, 3, 4)), (1, point(3, 3, 4)), (-1, point(1, 3, 4)), (2.5, point(4.5, 3, 4))],
    )
    def test_position(self, t, expected):
        ray = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert ray.position(t) == expected

    def test_translate(self):
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        moved = ray.transform(translation(3, 4, 5))
        assert moved.origin == point(4, 6, 8)
        assert moved.direction == vector(0, 1, 0)

    def test_scale_keeps_direction_unnormalized(self):
        """Scaled rays keep their scaled direction so t stays in world units."""
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        scaled = ray.transform(scaling(2, 3, 4))
        assert scaled.origin == point(2, 6, 12)
        assert scaled.direction == vector(0, 3, 0)

    def test_transform_returns_new_ray(self):
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        ray.transform(translation(3, 4, 5))
        assert ray.origin == point(1, 2, 3)
