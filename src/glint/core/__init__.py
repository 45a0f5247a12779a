"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    tuples: Homogeneous points and vectors
    matrix: 4x4 matrices, transpose, determinant and inversion
    transform: Translation, scaling, rotation, shearing and view transforms
    ray: Ray data structure and ray transformation
    errors: Exceptions raised while building a scene
    integrator: Whitted-style shading (direct light, shadows, reflection, refraction)
    progressive: Scanline render loop with progress reporting

All geometry here is double precision NumPy; Taichi is only used for the
render target and the preview window.
"""

from .errors import (
    CyclicDefinitionError,
    DegenerateCameraError,
    GlintError,
    ParseError,
    SingularMatrixError,
    UnknownKindError,
    UnresolvedReferenceError,
)
from .matrix import IDENTITY, Matrix
from .ray import Ray
from .transform import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuples import EPSILON, Tuple, point, vector

# Note: integrator and progressive are NOT imported here to avoid circular imports.
# Import directly from glint.core.integrator or glint.core.progressive when needed.

__all__ = [
    # Tuples
    "EPSILON",
    "Tuple",
    "point",
    "vector",
    # Matrices and transforms
    "IDENTITY",
    "Matrix",
    "chain",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "scaling",
    "shearing",
    "translation",
    "view_transform",
    # Rays
    "Ray",
    # Errors
    "CyclicDefinitionError",
    "DegenerateCameraError",
    "GlintError",
    "ParseError",
    "SingularMatrixError",
    "UnknownKindError",
    "UnresolvedReferenceError",
]
