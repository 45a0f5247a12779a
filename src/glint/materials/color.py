"""RGB color values.

Colors are unclamped linear RGB. Clamping to the displayable range happens
only when an image is written (see ``glint.preview.export``).
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from glint.core.tuples import EPSILON


class Color:
    """An RGB triple backed by a float64 array."""

    __slots__ = ("data",)

    def __init__(self, red: float, green: float, blue: float) -> None:
        self.data: npt.NDArray[np.float64] = np.array([red, green, blue], dtype=np.float64)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Color:
        """Build a color from a 3-element sequence.

        Raises:
            ValueError: If ``values`` does not have exactly three numbers.
        """
        if isinstance(values, str) or len(values) != 3:
            raise ValueError(f"Color needs exactly 3 components, got {values!r}")
        red, green, blue = (float(v) for v in values)
        return cls(red, green, blue)

    @classmethod
    def _wrap(cls, data: npt.NDArray[np.float64]) -> Color:
        color = cls.__new__(cls)
        color.data = data
        return color

    @property
    def red(self) -> float:
        return float(self.data[0])

    @property
    def green(self) -> float:
        return float(self.data[1])

    @property
    def blue(self) -> float:
        return float(self.data[2])

    def __add__(self, other: Color) -> Color:
        return Color._wrap(self.data + other.data)

    def __sub__(self, other: Color) -> Color:
        return Color._wrap(self.data - other.data)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (component-wise) product
        if isinstance(other, Color):
            return Color._wrap(self.data * other.data)
        return Color._wrap(self.data * float(other))

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Color:
        return Color._wrap(self.data / float(scalar))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.allclose(self.data, other.data, atol=EPSILON, rtol=0.0))

    def __hash__(self) -> int:
        return hash(tuple(np.round(self.data, 5)))

    def __iter__(self):
        return iter(self.data.tolist())

    def __repr__(self) -> str:
        return f"Color({self.red:g}, {self.green:g}, {self.blue:g})"


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
