"""Scene description loading and resolution.

A scene file is a YAML list of directives, processed strictly in order:

    - define: <name>            # store a reusable value
      extend: <base>            # optional, base must already be defined
      value: <mapping or list>

    - add: <camera|light|sphere|plane|cube>
      <field>: <value>

Defined mappings are material fragments; ``extend`` shallow-merges the new
fields over the base's. Defined lists are transform lists whose entries are
either literal operations (``[translate, 1, 2, 3]``) or names of other
transform lists; ``extend`` appends the new entries to the base list. Names
are replaced by their operations when a list is defined, so redefining a name
later does not change lists that already used it. A list that names itself
is rejected as cyclic.

Transform operations are composed in the order they are listed: the first
entry is applied to the object first.

Every error is raised while the scene is being built; nothing is rendered
from a partially resolved scene.

Example:
    >>> from glint.scene.loader import load_scene
    >>> scene = load_scene("scenes/refraction.yml")
    >>> scene.camera.width, len(scene.world.shapes)
    (320, 7)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from glint.camera.pinhole import Camera
from glint.core.errors import (
    CyclicDefinitionError,
    GlintError,
    ParseError,
    UnknownKindError,
    UnresolvedReferenceError,
)
from glint.core.matrix import Matrix
from glint.core.transform import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from glint.core.tuples import Tuple, point, vector
from glint.geometry.shape import Shape, ShapeKind
from glint.materials.color import Color
from glint.materials.material import DEFAULT_MATERIAL, Material
from glint.materials.pattern import Pattern, PatternKind
from glint.scene.lights import AreaLight, Light, PointLight
from glint.scene.world import World

# Transform operation name -> (argument count, matrix builder)
TRANSFORM_OPS: dict[str, tuple[int, Callable[..., Matrix]]] = {
    "translate": (3, translation),
    "scale": (3, scaling),
    "rotate-x": (1, rotation_x),
    "rotate-y": (1, rotation_y),
    "rotate-z": (1, rotation_z),
    "shear": (6, shearing),
}

# Scene-file material field -> Material attribute
MATERIAL_FIELDS = {
    "color": "color",
    "pattern": "pattern",
    "ambient": "ambient",
    "diffuse": "diffuse",
    "specular": "specular",
    "shininess": "shininess",
    "reflective": "reflective",
    "transparency": "transparency",
    "refractive-index": "refractive_index",
}

CAMERA_FIELDS = ("width", "height", "field-of-view", "from", "to", "up")
POINT_LIGHT_FIELDS = ("at",)
AREA_LIGHT_FIELDS = ("corner", "uvec", "usteps", "vvec", "vsteps")
SHAPE_FIELDS = ("material", "transform", "shadow")
PATTERN_FIELDS = ("type", "colors", "transform")


@dataclass(frozen=True)
class SceneDescription:
    """A fully resolved scene: the world to render and the camera to render it with."""

    world: World
    camera: Camera


# =============================================================================
# Field Conversion Helpers
# =============================================================================


def _number(value: Any, context: str) -> float:
    # YAML booleans are ints in Python; they are never valid numbers here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"{context}: expected a number, got {value!r}")
    return float(value)


def _integer(value: Any, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"{context}: expected an integer, got {value!r}")
    return value


def _triple(value: Any, context: str) -> tuple[float, float, float]:
    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 3:
        raise ParseError(f"{context}: expected a list of 3 numbers, got {value!r}")
    x, y, z = (_number(v, context) for v in value)
    return x, y, z


def _point(value: Any, context: str) -> Tuple:
    return point(*_triple(value, context))


def _vector(value: Any, context: str) -> Tuple:
    return vector(*_triple(value, context))


def _color(value: Any, context: str) -> Color:
    return Color(*_triple(value, context))


def _mapping(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ParseError(f"{context}: expected a mapping, got {value!r}")
    return value


def _check_fields(fields: Mapping[str, Any], allowed: Iterable[str], context: str) -> None:
    unknown = sorted(set(fields) - set(allowed))
    if unknown:
        raise ParseError(f"{context}: unknown field(s) {', '.join(map(str, unknown))}")


def _require(fields: Mapping[str, Any], name: str, context: str) -> Any:
    if name not in fields:
        raise ParseError(f"{context}: missing required field '{name}'")
    return fields[name]


def _construct(factory: Callable[..., Any], context: str, *args: Any, **kwargs: Any) -> Any:
    """Call a constructor, reporting its validation errors as ParseError.

    Errors from the scene-construction taxonomy (singular transforms,
    degenerate cameras) pass through unchanged.
    """
    try:
        return factory(*args, **kwargs)
    except GlintError:
        raise
    except ValueError as exc:
        raise ParseError(f"{context}: {exc}") from exc


def parse_transform_op(entry: Any, context: str = "transform") -> Matrix:
    """Build the matrix for one literal operation such as ``[rotate-x, 1.57]``.

    Raises:
        ParseError: For an unknown operation or the wrong number of arguments.
    """
    if not isinstance(entry, Sequence) or isinstance(entry, str) or not entry:
        raise ParseError(f"{context}: expected [operation, args...], got {entry!r}")
    name, *args = entry
    if name not in TRANSFORM_OPS:
        raise ParseError(f"{context}: unknown transform operation {name!r}")
    arity, builder = TRANSFORM_OPS[name]
    if len(args) != arity:
        raise ParseError(
            f"{context}: '{name}' takes {arity} argument(s), got {len(args)}"
        )
    return builder(*(_number(arg, f"{context} '{name}'") for arg in args))


# =============================================================================
# Resolver
# =============================================================================


class SceneResolver:
    """Turns an ordered list of directives into a SceneDescription.

    The resolver keeps the definitions seen so far; directives are applied one
    at a time with ``apply`` and the final scene is assembled by ``build``.
    ``resolve`` does both for a whole document.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, Any] = {}
        self._shapes: list[Shape] = []
        self._lights: list[Light] = []
        self._camera: Camera | None = None

    @property
    def definitions(self) -> Mapping[str, Any]:
        """Named values defined so far; transform lists hold literal operations only."""
        return dict(self._definitions)

    def resolve(self, directives: Any) -> SceneDescription:
        if not isinstance(directives, list):
            raise ParseError(
                f"Scene must be a list of directives, got {type(directives).__name__}"
            )
        for index, directive in enumerate(directives, start=1):
            self.apply(directive, index)
        return self.build()

    def apply(self, directive: Any, index: int = 0) -> None:
        """Apply a single ``add`` or ``define`` directive."""
        context = f"directive {index}" if index else "directive"
        directive = _mapping(directive, context)
        if "add" in directive and "define" in directive:
            raise ParseError(f"{context}: has both 'add' and 'define'")
        if "define" in directive:
            _check_fields(directive, ("define", "extend", "value"), context)
            name = directive["define"]
            if not isinstance(name, str):
                raise ParseError(f"{context}: definition name must be a string")
            self.define(name, _require(directive, "value", context), directive.get("extend"))
        elif "add" in directive:
            fields = {key: value for key, value in directive.items() if key != "add"}
            self.add(directive["add"], fields, context)
        else:
            raise ParseError(f"{context}: expected an 'add' or 'define' directive")

    def build(self) -> SceneDescription:
        if self._camera is None:
            raise ParseError("Scene has no camera")
        world = World(shapes=tuple(self._shapes), lights=tuple(self._lights))
        return SceneDescription(world=world, camera=self._camera)

    # -------------------------------------------------------------------------
    # Definitions
    # -------------------------------------------------------------------------

    def lookup(self, name: str, context: str = "") -> Any:
        try:
            return self._definitions[name]
        except KeyError:
            raise UnresolvedReferenceError(name, context) from None

    def define(self, name: str, value: Any, extend: str | None = None) -> None:
        """Store a named value, optionally merged over an existing definition.

        Raises:
            UnresolvedReferenceError: If ``extend`` or a referenced transform
                list name is not defined yet.
            CyclicDefinitionError: If a transform list names itself.
            ParseError: If the value and its base are not both mappings or
                both lists.
        """
        context = f"define '{name}'"
        if extend is not None:
            base = self.lookup(extend, context)
            if isinstance(base, Mapping) and isinstance(value, Mapping):
                value = {**base, **value}
            elif isinstance(base, list) and isinstance(value, list):
                value = base + value
            else:
                raise ParseError(
                    f"{context}: cannot extend '{extend}', both values must be "
                    f"mappings or both lists"
                )
        if not isinstance(value, (Mapping, list)):
            raise ParseError(f"{context}: value must be a mapping or a list")
        if isinstance(value, list):
            value = self._flatten(value, name)
        self._definitions[name] = value

    def _flatten(self, items: Any, name: str | None = None) -> list[Any]:
        """Replace the names in a transform list by the operations they stand for.

        Names resolve to their current definitions, which are already flat, so
        redefining a name later leaves earlier lists unchanged. ``name`` is the
        definition being built, if any; the list may not mention it.
        """
        context = f"transform of '{name}'" if name else "transform"
        if not isinstance(items, list):
            raise ParseError(f"{context}: expected a list, got {items!r}")
        operations: list[Any] = []
        for item in items:
            if isinstance(item, str):
                if item == name:
                    raise CyclicDefinitionError([name, item])
                referenced = self.lookup(item, context)
                if not isinstance(referenced, list):
                    raise ParseError(f"{context}: '{item}' is not a transform list")
                operations.extend(referenced)
            else:
                parse_transform_op(item, context)
                operations.append(item)
        return operations

    def transform(self, items: Any) -> Matrix:
        """Compose a transform list (literal ops and names) into one matrix."""
        if isinstance(items, str):
            items = [items]
        return chain([parse_transform_op(op) for op in self._flatten(items)])

    # -------------------------------------------------------------------------
    # Materials and patterns
    # -------------------------------------------------------------------------

    def material(self, spec: Any, context: str = "material") -> Material:
        """Build a material from an inline mapping or the name of a definition."""
        if isinstance(spec, str):
            name = spec
            spec = self.lookup(name, context)
            if not isinstance(spec, Mapping):
                raise ParseError(f"{context}: '{name}' is not a material")
        spec = _mapping(spec, context)
        _check_fields(spec, MATERIAL_FIELDS, context)

        params: dict[str, Any] = {}
        for key, value in spec.items():
            attribute = MATERIAL_FIELDS[key]
            if key == "color":
                params[attribute] = _color(value, f"{context} color")
            elif key == "pattern":
                params[attribute] = self.pattern(value, f"{context} pattern")
            else:
                params[attribute] = _number(value, f"{context} {key}")
        return _construct(DEFAULT_MATERIAL.with_changes, context, **params)

    def pattern(self, spec: Any, context: str = "pattern") -> Pattern:
        spec = _mapping(spec, context)
        _check_fields(spec, PATTERN_FIELDS, context)
        kind_name = _require(spec, "type", context)
        try:
            kind = PatternKind.from_name(str(kind_name))
        except KeyError:
            raise UnknownKindError(f"{context}: unknown pattern type {kind_name!r}") from None
        colors_spec = _require(spec, "colors", context)
        if not isinstance(colors_spec, list):
            raise ParseError(f"{context}: colors must be a list")
        colors = tuple(_color(c, f"{context} colors") for c in colors_spec)
        transform = self.transform(spec.get("transform", []))
        return _construct(Pattern, context, kind, colors, transform)

    # -------------------------------------------------------------------------
    # add: camera / light / shapes
    # -------------------------------------------------------------------------

    def add(self, kind: Any, fields: Mapping[str, Any], context: str = "directive") -> None:
        """Instantiate a camera, light or shape.

        Raises:
            UnknownKindError: If ``kind`` is not supported.
        """
        context = f"{context} (add {kind})"
        if kind == "camera":
            self._add_camera(fields, context)
        elif kind == "light":
            self._lights.append(self._light(fields, context))
        else:
            try:
                shape_kind = ShapeKind.from_name(str(kind))
            except KeyError:
                raise UnknownKindError(f"{context}: unknown kind {kind!r}") from None
            self._shapes.append(self._shape(shape_kind, fields, context))

    def _add_camera(self, fields: Mapping[str, Any], context: str) -> None:
        if self._camera is not None:
            raise ParseError(f"{context}: scene already has a camera")
        _check_fields(fields, CAMERA_FIELDS, context)
        width = _integer(_require(fields, "width", context), f"{context} width")
        height = _integer(_require(fields, "height", context), f"{context} height")
        fov = _number(_require(fields, "field-of-view", context), f"{context} field-of-view")
        from_point = _point(_require(fields, "from", context), f"{context} from")
        to_point = _point(_require(fields, "to", context), f"{context} to")
        up = _vector(_require(fields, "up", context), f"{context} up")
        self._camera = _construct(
            Camera.look_at, context, width, height, fov, from_point, to_point, up
        )

    def _light(self, fields: Mapping[str, Any], context: str) -> Light:
        intensity = _color(_require(fields, "intensity", context), f"{context} intensity")
        if "at" in fields:
            _check_fields(fields, ("intensity", *POINT_LIGHT_FIELDS), context)
            position = _point(fields["at"], f"{context} at")
            return _construct(PointLight, context, position, intensity)

        _check_fields(fields, ("intensity", *AREA_LIGHT_FIELDS), context)
        if "corner" not in fields:
            raise ParseError(f"{context}: light needs 'at' or an area light 'corner'")
        return _construct(
            AreaLight,
            context,
            _point(fields["corner"], f"{context} corner"),
            _vector(_require(fields, "uvec", context), f"{context} uvec"),
            _integer(_require(fields, "usteps", context), f"{context} usteps"),
            _vector(_require(fields, "vvec", context), f"{context} vvec"),
            _integer(_require(fields, "vsteps", context), f"{context} vsteps"),
            intensity,
        )

    def _shape(self, kind: ShapeKind, fields: Mapping[str, Any], context: str) -> Shape:
        _check_fields(fields, SHAPE_FIELDS, context)
        material = (
            self.material(fields["material"], f"{context} material")
            if "material" in fields
            else DEFAULT_MATERIAL
        )
        transform = self.transform(fields.get("transform", []))
        shadow = fields.get("shadow", True)
        if not isinstance(shadow, bool):
            raise ParseError(f"{context}: shadow must be true or false, got {shadow!r}")
        return Shape(kind, transform, material, shadow)


# =============================================================================
# Entry Points
# =============================================================================


def resolve_scene(directives: Any) -> SceneDescription:
    """Resolve an already-parsed list of directives."""
    return SceneResolver().resolve(directives)


def load_scene_string(text: str) -> SceneDescription:
    """Parse and resolve a scene from YAML text.

    Raises:
        ParseError: If the text is not valid YAML or a directive is malformed.
        UnknownKindError: For an unsupported ``add`` kind or pattern type.
        UnresolvedReferenceError: If a name is used before it is defined.
        CyclicDefinitionError: If a transform list names itself.
        SingularMatrixError: If a shape or pattern transform can't be inverted.
        DegenerateCameraError: If the camera's up vector is parallel to its
            view direction.
    """
    try:
        directives = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid scene YAML: {exc}") from exc
    if directives is None:
        raise ParseError("Scene is empty")
    return resolve_scene(directives)


def load_scene(path: str | Path) -> SceneDescription:
    """Load a scene from a YAML file. See ``load_scene_string`` for errors."""
    return load_scene_string(Path(path).read_text(encoding="utf-8"))
