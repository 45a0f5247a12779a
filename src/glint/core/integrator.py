"""Whitted-style shading: direct Phong lighting, shadows, reflection, refraction.

The shaded color of a hit is

    ambient + sum over lights of (mean over unshadowed light samples of
    diffuse + specular) + reflected + refracted

where ``reflected`` and ``refracted`` are traced recursively. When a material
is both reflective and transparent the two recursive terms are blended with
Schlick's Fresnel approximation. Recursion stops after ``remaining`` levels;
exhausted levels contribute black rather than failing. Nothing here clamps
colors; that happens when the image is written.

Key features:
    - Point lights (one sample) and area lights (grid of samples, soft shadows)
    - Shapes with ``shadow=False`` never occlude
    - Refractive indices from the containment stack (see scene.intersection)
    - Total internal reflection yields no refracted contribution

Example:
    >>> from glint.core.integrator import color_at
    >>> from glint.core.ray import Ray
    >>> from glint.core.tuples import point, vector
    >>> from glint.scene.world import default_world
    >>> color_at(default_world(), Ray(point(0, 0, -5), vector(0, 0, 1)))
    Color(0.380661, 0.475826, 0.285496)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from glint.core.ray import Ray
from glint.core.tuples import Tuple
from glint.geometry.shape import Shape
from glint.materials.color import BLACK, Color
from glint.materials.material import Material
from glint.scene.intersection import Computations, hit, prepare_computations
from glint.scene.world import BACKGROUND_COLOR, MAX_DEPTH, World

if TYPE_CHECKING:
    from glint.scene.lights import Light

__all__ = [
    "BACKGROUND_COLOR",
    "MAX_DEPTH",
    "color_at",
    "direct_lighting",
    "lighting",
    "reflected_color",
    "refracted_color",
    "shade_hit",
]


# =============================================================================
# Direct Lighting
# =============================================================================


def _sample_contribution(
    material: Material,
    base_color: Color,
    intensity: Color,
    sample_position: Tuple,
    position: Tuple,
    eyev: Tuple,
    normalv: Tuple,
) -> Color:
    """Diffuse plus specular light arriving from one light sample."""
    lightv = (sample_position - position).normalize()
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        # Light is on the other side of the surface
        return BLACK

    diffuse = base_color * intensity * (material.diffuse * light_dot_normal)

    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        return diffuse
    specular = intensity * (material.specular * math.pow(reflect_dot_eye, material.shininess))
    return diffuse + specular


def lighting(
    material: Material,
    shape: Shape,
    light: Light,
    position: Tuple,
    eyev: Tuple,
    normalv: Tuple,
    in_shadow: bool = False,
) -> Color:
    """Phong illumination of a point by a single light, without shadow rays.

    Args:
        material: Surface material.
        shape: Shape being lit (locates the pattern, if any).
        light: The light source; area lights average over their samples.
        position: The point being lit, in world space.
        eyev: Unit vector toward the eye.
        normalv: Unit surface normal.
        in_shadow: If True only the ambient term is returned.

    Returns:
        ambient + diffuse + specular.
    """
    base_color = material.color_at_object(shape.world_to_object(position))
    ambient = base_color * material.ambient
    if in_shadow:
        return ambient
    direct = BLACK
    for sample in light.samples:
        direct = direct + _sample_contribution(
            material, base_color, light.intensity, sample, position, eyev, normalv
        )
    return ambient + direct / len(light.samples)


def direct_lighting(world: World, comps: Computations, light: Light) -> Color:
    """Diffuse and specular light from ``light``, shadow-tested per sample."""
    material = comps.shape.material
    position = comps.over_point
    base_color = comps.shape.color_at(position)
    total = BLACK
    for sample in light.samples:
        if world.is_shadowed(position, sample):
            continue
        total = total + _sample_contribution(
            material, base_color, light.intensity, sample, position, comps.eyev, comps.normalv
        )
    return total / len(light.samples)


# =============================================================================
# Recursive Shading
# =============================================================================


def shade_hit(world: World, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    """Shade a prepared hit.

    Args:
        world: The scene being rendered.
        comps: Precomputed state of the hit.
        remaining: Recursion levels left for reflection/refraction rays.

    Returns:
        The unclamped color of the hit.
    """
    material = comps.shape.material
    surface = comps.shape.color_at(comps.over_point) * material.ambient
    for light in world.lights:
        surface = surface + direct_lighting(world, comps, light)

    reflected = reflected_color(world, comps, remaining)
    refracted = refracted_color(world, comps, remaining)

    if material.reflective > 0.0 and material.transparency > 0.0:
        reflectance = comps.schlick()
        return surface + reflected * reflectance + refracted * (1.0 - reflectance)
    return surface + reflected + refracted


def color_at(world: World, ray: Ray, remaining: int | None = None) -> Color:
    """Trace ``ray`` into the world and return the color it sees.

    Args:
        world: The scene being rendered.
        ray: World-space ray.
        remaining: Recursion levels left; defaults to ``world.max_depth``.

    Returns:
        The shaded color, or ``world.background`` on a miss.
    """
    if remaining is None:
        remaining = world.max_depth
    # Refractive indices come from boundaries ahead of the origin only
    intersections = world.intersect(ray)
    visible = hit(intersections)
    if visible is None:
        return world.background
    comps = prepare_computations(visible, ray, intersections)
    return shade_hit(world, comps, remaining)


def reflected_color(world: World, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    """Color seen along the mirror direction, scaled by ``reflective``."""
    reflective = comps.shape.material.reflective
    if reflective == 0.0 or remaining <= 0:
        return BLACK
    reflect_ray = Ray(comps.over_point, comps.reflectv)
    return color_at(world, reflect_ray, remaining - 1) * reflective


def refracted_color(world: World, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    """Color seen through the surface by Snell's law, scaled by ``transparency``.

    Total internal reflection (sin^2 of the transmitted angle above 1)
    contributes black.
    """
    transparency = comps.shape.material.transparency
    if transparency == 0.0 or remaining <= 0:
        return BLACK

    n_ratio = comps.n1 / comps.n2
    cos_i = comps.eyev.dot(comps.normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return BLACK

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
    refract_ray = Ray(comps.under_point, direction)
    return color_at(world, refract_ray, remaining - 1) * transparency
