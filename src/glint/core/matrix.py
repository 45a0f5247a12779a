"""4x4 affine transform matrices.

Matrices compose right-to-left: in ``A @ B`` the transform ``B`` is applied
first. Inversion fails explicitly with ``SingularMatrixError`` rather than
returning garbage when the determinant is (numerically) zero.

Example:
    >>> from glint.core.matrix import Matrix
    >>> from glint.core.tuples import point
    >>> m = Matrix.identity()
    >>> m @ point(1.0, 2.0, 3.0)
    point(1, 2, 3)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from glint.core.errors import SingularMatrixError
from glint.core.tuples import EPSILON, Tuple

# Determinants below this magnitude are treated as zero
SINGULAR_THRESHOLD = 1e-12


class Matrix:
    """An immutable 4x4 matrix.

    Attributes:
        data: The underlying read-only float64 array of shape (4, 4).
    """

    __slots__ = ("data",)

    def __init__(self, rows: npt.ArrayLike) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.shape != (4, 4):
            raise ValueError(f"Matrix must be 4x4, got shape {data.shape}")
        data.setflags(write=False)
        self.data: npt.NDArray[np.float64] = data

    @classmethod
    def identity(cls) -> Matrix:
        return cls(np.eye(4))

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.data[index])

    def __matmul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        if isinstance(other, Matrix):
            return Matrix(self.data @ other.data)
        if isinstance(other, Tuple):
            return Tuple.from_array(self.data @ other.data)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.allclose(self.data, other.data, atol=EPSILON, rtol=0.0))

    def __hash__(self) -> int:
        return hash(tuple(np.round(self.data, 5).ravel()))

    def __repr__(self) -> str:
        rows = ", ".join(str(row) for row in self.data.tolist())
        return f"Matrix([{rows}])"

    def transpose(self) -> Matrix:
        return Matrix(self.data.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self.data))

    def is_invertible(self) -> bool:
        return abs(self.determinant()) >= SINGULAR_THRESHOLD

    def inverse(self) -> Matrix:
        """Return the inverse matrix.

        Raises:
            SingularMatrixError: If the matrix is not invertible.
        """
        det = self.determinant()
        if abs(det) < SINGULAR_THRESHOLD:
            raise SingularMatrixError(
                f"Matrix is not invertible (determinant {det:g})"
            )
        return Matrix(np.linalg.inv(self.data))


IDENTITY = Matrix.identity()
