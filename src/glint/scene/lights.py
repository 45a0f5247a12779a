"""Light sources.

Two variants share one interface, a tuple of sample positions:

    PointLight: a single sample at ``position``.
    AreaLight:  a rectangle spanned by ``uvec`` and ``vvec`` from ``corner``,
                divided into ``usteps x vsteps`` cells with one sample at the
                center of each cell. Each sample carries weight
                ``1 / (usteps * vsteps)``, which produces soft shadow edges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from glint.core.tuples import Tuple, point
from glint.materials.color import Color


@dataclass(frozen=True)
class PointLight:
    """A point light.

    Attributes:
        position: Light position in world space.
        intensity: Light color and brightness.
    """

    position: Tuple
    intensity: Color

    def __post_init__(self) -> None:
        if not self.position.is_point():
            raise ValueError("PointLight position must be a point")

    @property
    def samples(self) -> tuple[Tuple, ...]:
        return (self.position,)


@dataclass(frozen=True)
class AreaLight:
    """A rectangular area light sampled on a regular grid.

    Attributes:
        corner: One corner of the rectangle.
        uvec: Full edge vector along the u direction.
        usteps: Number of cells along ``uvec``.
        vvec: Full edge vector along the v direction.
        vsteps: Number of cells along ``vvec``.
        intensity: Light color and brightness (shared by all samples).
        samples: Precomputed cell-center sample positions.
        position: Mean of the sample positions.
    """

    corner: Tuple
    uvec: Tuple
    usteps: int
    vvec: Tuple
    vsteps: int
    intensity: Color
    samples: tuple[Tuple, ...] = field(init=False, repr=False)
    position: Tuple = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.corner.is_point():
            raise ValueError("AreaLight corner must be a point")
        if not (self.uvec.is_vector() and self.vvec.is_vector()):
            raise ValueError("AreaLight edges must be vectors")
        if self.usteps < 1 or self.vsteps < 1:
            raise ValueError(
                f"AreaLight needs at least one step per edge, got "
                f"usteps={self.usteps}, vsteps={self.vsteps}"
            )
        cell_u = self.uvec / self.usteps
        cell_v = self.vvec / self.vsteps
        samples = tuple(
            self.corner + cell_u * (u + 0.5) + cell_v * (v + 0.5)
            for v in range(self.vsteps)
            for u in range(self.usteps)
        )
        object.__setattr__(self, "samples", samples)
        center = self.corner + self.uvec * 0.5 + self.vvec * 0.5
        object.__setattr__(self, "position", point(center.x, center.y, center.z))


Light = Union[PointLight, AreaLight]
