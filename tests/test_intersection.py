"""Unit tests for hit selection and precomputed shading state.

Tests cover:
- Choosing the visible hit from an intersection list
- Eye and normal vectors, inside/outside detection
- over_point / under_point offsets
- Refractive indices from the containment stack
- Schlick reflectance
"""

import math

import pytest

from glint.core.ray import Ray
from glint.core.transform import scaling, translation
from glint.core.tuples import EPSILON, point, vector
from glint.geometry.shape import Intersection, glass_sphere, plane, sphere
from glint.scene.intersection import hit, prepare_computations, refractive_indices

HALF_ROOT2 = math.sqrt(2) / 2


class TestHit:
    """Tests for selecting the visible intersection."""

    def test_all_positive(self):
        s = sphere()
        i1, i2 = Intersection(1, s), Intersection(2, s)
        assert hit([i2, i1]) is i1

    def test_some_negative(self):
        s = sphere()
        i1, i2 = Intersection(-1, s), Intersection(1, s)
        assert hit([i2, i1]) is i2

    def test_all_negative(self):
        s = sphere()
        assert hit([Intersection(-2, s), Intersection(-1, s)]) is None

    def test_lowest_nonnegative(self):
        s = sphere()
        i4 = Intersection(2, s)
        xs = [Intersection(5, s), Intersection(7, s), Intersection(-3, s), i4]
        assert hit(xs) is i4

    def test_ignores_self_intersection_distance(self):
        """A hit closer than EPSILON would be the surface the ray left."""
        s = sphere()
        far = Intersection(1.0, s)
        assert hit([Intersection(EPSILON / 2, s), far]) is far

    def test_empty(self):
        assert hit([]) is None


class TestPrepareComputations:
    """Tests for the precomputed shading state."""

    def test_outside_hit(self):
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = sphere()
        comps = prepare_computations(Intersection(4, shape), ray)
        assert comps.t == 4
        assert comps.shape is shape
        assert comps.point == point(0, 0, -1)
        assert comps.eyev == vector(0, 0, -1)
        assert comps.normalv == vector(0, 0, -1)
        assert comps.inside is False

    def test_inside_hit_flips_normal(self):
        ray = Ray(point(0, 0, 0), vector(0, 0, 1))
        comps = prepare_computations(Intersection(1, sphere()), ray)
        assert comps.point == point(0, 0, 1)
        assert comps.eyev == vector(0, 0, -1)
        assert comps.inside is True
        assert comps.normalv == vector(0, 0, -1)

    def test_over_point(self):
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = sphere(transform=translation(0, 0, 1))
        comps = prepare_computations(Intersection(5, shape), ray)
        assert comps.over_point.z < -EPSILON / 2
        assert comps.point.z > comps.over_point.z

    def test_under_point(self):
        ray = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = glass_sphere(transform=translation(0, 0, 1))
        i = Intersection(5, shape)
        comps = prepare_computations(i, ray, [i])
        assert comps.under_point.z > EPSILON / 2
        assert comps.point.z < comps.under_point.z

    def test_reflect_vector(self):
        shape = plane()
        ray = Ray(point(0, 1, -1), vector(0, -HALF_ROOT2, HALF_ROOT2))
        comps = prepare_computations(Intersection(math.sqrt(2), shape), ray)
        assert comps.reflectv == vector(0, HALF_ROOT2, HALF_ROOT2)


class TestRefractiveIndices:
    """Tests for n1/n2 from the containment stack."""

    @pytest.mark.parametrize(
        "index,n1,n2",
        [
            (0, 1.0, 1.5),
            (1, 1.5, 2.0),
            (2, 2.0, 2.5),
            (3, 2.5, 2.5),
            (4, 2.5, 1.5),
            (5, 1.5, 1.0),
        ],
    )
    def test_nested_glass_spheres(self, index, n1, n2):
        a = glass_sphere(scaling(2, 2, 2), refractive_index=1.5)
        b = glass_sphere(translation(0, 0, -0.25), refractive_index=2.0)
        c = glass_sphere(translation(0, 0, 0.25), refractive_index=2.5)
        ray = Ray(point(0, 0, -4), vector(0, 0, 1))
        xs = [
            Intersection(2, a),
            Intersection(2.75, b),
            Intersection(3.25, c),
            Intersection(4.75, b),
            Intersection(5.25, c),
            Intersection(6, a),
        ]
        comps = prepare_computations(xs[index], ray, xs)
        assert comps.n1 == pytest.approx(n1)
        assert comps.n2 == pytest.approx(n2)

    def test_ray_starting_inside(self):
        """Intersections behind the origin still mark the medium the ray starts in."""
        a = glass_sphere(refractive_index=1.5)
        xs = [Intersection(-1, a), Intersection(1, a)]
        assert refractive_indices(xs[1], xs) == (1.5, 1.0)

    def test_empty_stack_is_vacuum(self):
        s = sphere()
        xs = [Intersection(4, s), Intersection(6, s)]
        assert refractive_indices(xs[0], xs) == (1.0, 1.0)


class TestSchlick:
    """Tests for the Fresnel approximation."""

    def test_total_internal_reflection(self):
        shape = glass_sphere()
        ray = Ray(point(0, 0, HALF_ROOT2), vector(0, 1, 0))
        xs = [Intersection(-HALF_ROOT2, shape), Intersection(HALF_ROOT2, shape)]
        comps = prepare_computations(xs[1], ray, xs)
        assert comps.schlick() == pytest.approx(1.0)

    def test_perpendicular_viewing_angle(self):
        shape = glass_sphere()
        ray = Ray(point(0, 0, 0), vector(0, 1, 0))
        xs = [Intersection(-1, shape), Intersection(1, shape)]
        comps = prepare_computations(xs[1], ray, xs)
        assert comps.schlick() == pytest.approx(0.04, abs=1e-4)

    def test_small_angle_with_n2_greater(self):
        shape = glass_sphere()
        ray = Ray(point(0, 0.99, -2), vector(0, 0, 1))
        xs = [Intersection(1.8589, shape)]
        comps = prepare_computations(xs[0], ray, xs)
        assert comps.schlick() == pytest.approx(0.48873, abs=1e-4)
