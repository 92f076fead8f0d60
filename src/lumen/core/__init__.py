"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure and vector utilities
    radiance: HDR light values and tone mapping of single colors
    tracer: Recursive light transport (reflection, refraction, soft shadows,
        optional Monte Carlo indirect diffuse)
    renderer: Full-frame loop over pixel columns, optionally multi-process
    framebuffer: Taichi-backed HDR image storage and tone-mapping kernel
"""

from .radiance import Radiance
from .ray import (
    Ray,
    as_vec3,
    cross,
    dot,
    face_forward,
    length,
    length_squared,
    normalize,
    project_onto,
    random_in_unit_sphere,
    random_on_hemisphere,
    random_unit_vector,
    reflect,
    refract,
    vec3,
)

# Note: tracer, renderer and framebuffer are NOT imported here to avoid circular imports.
# Import directly from src.lumen.core.tracer, src.lumen.core.renderer or
# src.lumen.core.framebuffer when needed.

__all__ = [
    "Radiance",
    "Ray",
    "vec3",
    "as_vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "project_onto",
    "reflect",
    "refract",
    "face_forward",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_on_hemisphere",
]
