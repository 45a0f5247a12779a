"""Hit selection and precomputed shading state.

``prepare_computations`` turns the visible intersection into everything the
shading engine needs: the hit point, eye and normal vectors (normal flipped
when the ray is inside the shape), the reflection vector, points nudged off
the surface in both directions, and the refractive indices on either side of
the boundary.

The refractive indices come from a containment stack walked over the full,
sorted intersection list: every intersection toggles its shape in or out of
the stack, and the top of the stack before and after the hit gives ``n1``
and ``n2`` (1.0 when the stack is empty).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from glint.core.ray import Ray
from glint.core.tuples import EPSILON, Tuple
from glint.geometry.shape import Intersection, Shape
from glint.materials.material import VACUUM


def hit(intersections: Iterable[Intersection]) -> Intersection | None:
    """Return the visible intersection: the lowest ``t`` greater than EPSILON."""
    visible = [i for i in intersections if i.t > EPSILON]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)


@dataclass(frozen=True)
class Computations:
    """Precomputed state for shading one intersection.

    Attributes:
        t: Ray parameter of the hit.
        shape: The shape that was hit.
        point: Hit point in world space.
        eyev: Unit vector from the hit toward the ray origin.
        normalv: Unit normal, facing the eye.
        inside: True when the ray hit the shape from within.
        reflectv: Ray direction reflected about the normal.
        over_point: ``point`` nudged along the normal (shadow and reflection
            ray origin).
        under_point: ``point`` nudged against the normal (refraction ray
            origin).
        n1: Refractive index of the medium being exited.
        n2: Refractive index of the medium being entered.
    """

    t: float
    shape: Shape
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool
    reflectv: Tuple
    over_point: Tuple
    under_point: Tuple
    n1: float = VACUUM
    n2: float = VACUUM

    def schlick(self) -> float:
        """Fresnel reflectance by Schlick's approximation.

        Returns 1.0 under total internal reflection.
        """
        cos = self.eyev.dot(self.normalv)
        if self.n1 > self.n2:
            ratio = self.n1 / self.n2
            sin2_t = ratio * ratio * (1.0 - cos * cos)
            if sin2_t > 1.0:
                return 1.0
            cos = math.sqrt(1.0 - sin2_t)
        r0 = ((self.n1 - self.n2) / (self.n1 + self.n2)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cos) ** 5


def refractive_indices(
    hit_intersection: Intersection, intersections: Sequence[Intersection]
) -> tuple[float, float]:
    """Find ``(n1, n2)`` at ``hit_intersection`` using a containment stack."""
    containers: list[Shape] = []
    n1 = n2 = VACUUM
    for intersection in intersections:
        is_hit = intersection == hit_intersection
        if is_hit:
            n1 = containers[-1].material.refractive_index if containers else VACUUM

        for index, shape in enumerate(containers):
            if shape is intersection.shape:
                del containers[index]
                break
        else:
            containers.append(intersection.shape)

        if is_hit:
            n2 = containers[-1].material.refractive_index if containers else VACUUM
            break
    return n1, n2


def prepare_computations(
    hit_intersection: Intersection,
    ray: Ray,
    intersections: Sequence[Intersection] | None = None,
) -> Computations:
    """Precompute the shading state for a hit.

    Args:
        hit_intersection: The intersection being shaded.
        ray: The ray that produced it.
        intersections: All intersections along the ray, sorted by ``t``, used
            to determine refractive indices. Defaults to just the hit.

    Returns:
        The populated Computations.
    """
    if intersections is None:
        intersections = [hit_intersection]

    shape = hit_intersection.shape
    position = ray.position(hit_intersection.t)
    eyev = -ray.direction
    normalv = shape.normal_at(position)
    inside = normalv.dot(eyev) < 0.0
    if inside:
        normalv = -normalv
    reflectv = ray.direction.reflect(normalv)
    offset = normalv * EPSILON
    n1, n2 = refractive_indices(hit_intersection, intersections)

    return Computations(
        t=hit_intersection.t,
        shape=shape,
        point=position,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        reflectv=reflectv,
        over_point=position + offset,
        under_point=position - offset,
        n1=n1,
        n2=n2,
    )
