"""Exception taxonomy for scene construction failures.

Every error here is raised while a scene is being built (parsing directives,
resolving names, composing transforms, orienting the camera). Rendering
itself never raises for numerical degeneracies such as grazing rays or total
internal reflection; those produce background or zero contributions.
"""


class GlintError(Exception):
    """Base class for all errors raised by the ray tracer."""


class ParseError(GlintError, ValueError):
    """A scene directive is malformed (bad shape, missing or unknown field)."""


class UnknownKindError(ParseError):
    """An ``add`` directive or pattern names a kind that is not supported."""


class UnresolvedReferenceError(GlintError, LookupError):
    """A named definition is used before it has been defined."""

    def __init__(self, name: str, context: str = "") -> None:
        self.name = name
        where = f" in {context}" if context else ""
        super().__init__(f"Reference to undefined name '{name}'{where}")


class CyclicDefinitionError(GlintError):
    """A named transform list refers to itself."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"Cyclic definition: {' -> '.join(self.chain)}")


class SingularMatrixError(GlintError, ArithmeticError):
    """Inversion was requested on a matrix whose determinant is zero."""


class DegenerateCameraError(GlintError, ValueError):
    """The camera's up vector is parallel to its view direction."""
