"""Phong material with optical properties.

A material carries either a solid color or a pattern, the Phong lighting
coefficients, and the reflective/transparent properties used by recursive
shading. Materials are immutable and may be shared by any number of shapes.

Common refractive indices:
    Vacuum: 1.0, Air: 1.00029, Water: 1.333, Glass: 1.52, Diamond: 2.417

Example:
    >>> from glint.materials.material import Material, GLASS
    >>> glass = Material(transparency=1.0, refractive_index=GLASS)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from glint.core.tuples import Tuple
from glint.materials.color import WHITE, Color
from glint.materials.pattern import Pattern

VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.52
DIAMOND = 2.417


@dataclass(frozen=True)
class Material:
    """Surface appearance of a shape.

    Attributes:
        color: Base color used when no pattern is set.
        pattern: Optional pattern that replaces ``color``.
        ambient: Ambient coefficient (>= 0).
        diffuse: Lambertian diffuse coefficient (>= 0).
        specular: Phong specular coefficient (>= 0).
        shininess: Phong exponent (>= 0).
        reflective: Mirror reflectance in [0, 1].
        transparency: Transmittance in [0, 1].
        refractive_index: Index of refraction (> 0, vacuum = 1.0).
    """

    color: Color = WHITE
    pattern: Pattern | None = None
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular", "shininess"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"Material {name} must be >= 0, got {getattr(self, name)}")
        for name in ("reflective", "transparency"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Material {name} must be in [0, 1], got {value}")
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Material refractive_index must be > 0, got {self.refractive_index}"
            )

    def color_at_object(self, object_point: Tuple) -> Color:
        """Base color at a point in the owning shape's object space."""
        if self.pattern is None:
            return self.color
        return self.pattern.color_at_object(object_point)

    def with_changes(self, **changes: Any) -> Material:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


DEFAULT_MATERIAL = Material()
