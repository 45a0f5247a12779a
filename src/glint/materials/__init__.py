"""Materials module: colors, patterns and Phong surface properties."""

from .color import BLACK, WHITE, Color
from .material import AIR, DEFAULT_MATERIAL, DIAMOND, GLASS, VACUUM, WATER, Material
from .pattern import (
    Pattern,
    PatternKind,
    checkers_pattern,
    gradient_pattern,
    ring_pattern,
    solid_pattern,
    stripe_pattern,
)

__all__ = [
    # Colors
    "BLACK",
    "WHITE",
    "Color",
    # Materials
    "AIR",
    "DEFAULT_MATERIAL",
    "DIAMOND",
    "GLASS",
    "Material",
    "VACUUM",
    "WATER",
    # Patterns
    "Pattern",
    "PatternKind",
    "checkers_pattern",
    "gradient_pattern",
    "ring_pattern",
    "solid_pattern",
    "stripe_pattern",
]
