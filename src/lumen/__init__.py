"""Recursive ray tracer for scenes of spheres, planar patches and area lights.

This package renders a scene by tracing rays from a pinhole camera through
every pixel, with support for:
- Mirror reflection and refraction through transparent solids
- Soft shadows from sampled rectangular area lights
- Optional Monte Carlo indirect diffuse lighting
- Textured diffuse surfaces
- Deterministic multi-process rendering from a single seed

Subpackages:
    core: Rays, radiance, the recursive tracer, renderer and frame buffer
    geometry: Sphere and planar patch primitives, box aggregate
    materials: Composite materials and textures
    scene: Solids, lights, scene snapshots and the scene builder
    camera: Pinhole camera generating primary rays
    preview: Tone mapping and PNG export
"""

__version__ = "0.1.0"
