"""Scene module for scene representation and resolution.

Components:
    lights: Point and area lights
    intersection: Hit selection and precomputed shading state
    world: Immutable collection of shapes and lights
    loader: Resolves YAML scene directives into a world and camera

Scenes are resolved completely before rendering starts; afterwards the world
is only read.
"""

from .intersection import Computations, hit, prepare_computations, refractive_indices
from .lights import AreaLight, Light, PointLight
from .loader import (
    SceneDescription,
    SceneResolver,
    load_scene,
    load_scene_string,
    resolve_scene,
)
from .world import BACKGROUND_COLOR, MAX_DEPTH, World, default_world

__all__ = [
    # Lights
    "AreaLight",
    "Light",
    "PointLight",
    # Intersections
    "Computations",
    "hit",
    "prepare_computations",
    "refractive_indices",
    # World
    "BACKGROUND_COLOR",
    "MAX_DEPTH",
    "World",
    "default_world",
    # Loading
    "SceneDescription",
    "SceneResolver",
    "load_scene",
    "load_scene_string",
    "resolve_scene",
]
