"""Color patterns evaluated in pattern-local space.

Patterns form a closed set of variants identified by ``PatternKind``. Each
variant is a plain function of the pattern-local point, dispatched through
``_PATTERN_FUNCTIONS``. A world-space hit point reaches pattern space through
``pattern.inverse @ shape.inverse``; the shape applies its own inverse before
calling ``Pattern.color_at_object``.

Variants:
    SOLID:    one color everywhere.
    STRIPE:   alternates on floor(x) mod 2.
    GRADIENT: linear blend from the first color to the second over each unit
              of x (fractional part of x).
    RING:     alternates on floor(sqrt(x^2 + z^2)) mod 2.
    CHECKERS: alternates on (floor(x) + floor(y) + floor(z)) mod 2.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from glint.core.matrix import IDENTITY, Matrix
from glint.core.tuples import Tuple
from glint.materials.color import Color


class PatternKind(IntEnum):
    """Enumeration of supported pattern variants."""

    SOLID = 0
    STRIPE = 1
    GRADIENT = 2
    RING = 3
    CHECKERS = 4

    @classmethod
    def from_name(cls, name: str) -> PatternKind:
        """Look up a kind by its scene-file name (e.g. ``"checkers"``).

        Raises:
            KeyError: If no variant has that name.
        """
        return cls[name.strip().upper().replace("-", "_")]


def _solid(colors: tuple[Color, ...], p: Tuple) -> Color:
    return colors[0]


def _stripe(colors: tuple[Color, ...], p: Tuple) -> Color:
    return colors[math.floor(p.x) % 2]


def _gradient(colors: tuple[Color, ...], p: Tuple) -> Color:
    a, b = colors
    fraction = p.x - math.floor(p.x)
    return a + (b - a) * fraction


def _ring(colors: tuple[Color, ...], p: Tuple) -> Color:
    return colors[math.floor(math.hypot(p.x, p.z)) % 2]


def _checkers(colors: tuple[Color, ...], p: Tuple) -> Color:
    return colors[(math.floor(p.x) + math.floor(p.y) + math.floor(p.z)) % 2]


_PATTERN_FUNCTIONS: dict[PatternKind, Callable[[tuple[Color, ...], Tuple], Color]] = {
    PatternKind.SOLID: _solid,
    PatternKind.STRIPE: _stripe,
    PatternKind.GRADIENT: _gradient,
    PatternKind.RING: _ring,
    PatternKind.CHECKERS: _checkers,
}


@dataclass(frozen=True)
class Pattern:
    """A color pattern with its own transform.

    Attributes:
        kind: Which pattern variant this is.
        colors: The colors the pattern alternates or blends between
            (one for SOLID, two for every other kind).
        transform: Object-to-pattern placement of the pattern.
        inverse: Cached inverse of ``transform``.
    """

    kind: PatternKind
    colors: tuple[Color, ...]
    transform: Matrix = IDENTITY
    inverse: Matrix = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", tuple(self.colors))
        expected = 1 if self.kind == PatternKind.SOLID else 2
        if len(self.colors) != expected:
            raise ValueError(
                f"{self.kind.name.lower()} pattern needs {expected} color(s), "
                f"got {len(self.colors)}"
            )
        object.__setattr__(self, "inverse", self.transform.inverse())

    def color_at(self, pattern_point: Tuple) -> Color:
        """Color at a point already expressed in pattern space."""
        return _PATTERN_FUNCTIONS[self.kind](self.colors, pattern_point)

    def color_at_object(self, object_point: Tuple) -> Color:
        """Color at a point expressed in the owning shape's object space."""
        return self.color_at(self.inverse @ object_point)


def solid_pattern(color: Color) -> Pattern:
    return Pattern(PatternKind.SOLID, (color,))


def stripe_pattern(a: Color, b: Color, transform: Matrix = IDENTITY) -> Pattern:
    return Pattern(PatternKind.STRIPE, (a, b), transform)


def gradient_pattern(a: Color, b: Color, transform: Matrix = IDENTITY) -> Pattern:
    return Pattern(PatternKind.GRADIENT, (a, b), transform)


def ring_pattern(a: Color, b: Color, transform: Matrix = IDENTITY) -> Pattern:
    return Pattern(PatternKind.RING, (a, b), transform)


def checkers_pattern(a: Color, b: Color, transform: Matrix = IDENTITY) -> Pattern:
    return Pattern(PatternKind.CHECKERS, (a, b), transform)
