"""Whitted-style ray tracer driven by declarative YAML scene files.

This package renders scenes of spheres, planes and cubes with Phong shading,
hard and soft shadows, recursive reflection and refraction, and procedural
patterns. Scenes are built once, then rendered read-only pixel by pixel.

Subpackages:
    core: Tuples, matrices, transforms, rays, errors, shading and the render loop
    geometry: Shape primitives and object-space intersection algorithms
    materials: Colors, patterns and Phong materials
    camera: Pinhole camera with per-pixel ray generation
    scene: Lights, intersections, the world and the scene-file resolver
    preview: Taichi canvas, image export and the interactive preview window
"""

__version__ = "0.1.0"
