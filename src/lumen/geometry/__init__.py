"""Geometry module for shape primitives.

This module provides the geometric primitives and their intersection tests:

Components:
    sphere: Sphere primitive with ray-sphere intersection
    patch: Rectangular planar patch (walls, box faces, area lights)
    box: Six-patch box aggregate

Primitives form a closed set, {Sphere, PlanarPatch}, and expose exactly two
operations:
    hit = primitive.intersect(ray)      # HitRecord or None
    normal = primitive.normal_at(point)

Texture lookup needs local 2-D coordinates on a primitive; those are
provided by texture_coordinates(primitive, point) rather than by the
primitives themselves.
"""

from __future__ import annotations

from typing import Protocol, Union

from src.lumen.core.ray import Ray, Vec3

from .box import Box
from .patch import PlanarPatch
from .sphere import HitRecord, Sphere, equirectangular_coordinates


class SupportsIntersection(Protocol):
    """Interface shared by all primitives."""

    def intersect(self, ray: Ray) -> HitRecord | None: ...

    def normal_at(self, point: Vec3) -> Vec3: ...


# Closed variant of renderable shapes
Primitive = Union[Sphere, PlanarPatch]


def texture_coordinates(primitive: Primitive, point: Vec3) -> tuple[float, float]:
    """Map a point on a primitive to texture coordinates (u, v) in [0, 1].

    Patches use their local coordinates normalized by width and height;
    spheres use an equirectangular latitude/longitude mapping.

    Raises:
        TypeError: If the primitive is not a Sphere or PlanarPatch.
    """
    if isinstance(primitive, PlanarPatch):
        x, y = primitive.local_coordinates(point)
        return x / primitive.width, y / primitive.height
    if isinstance(primitive, Sphere):
        return equirectangular_coordinates(primitive, point)
    raise TypeError(f"Unsupported primitive type: {type(primitive).__name__}")


__all__ = [
    "Box",
    "HitRecord",
    "PlanarPatch",
    "Primitive",
    "Sphere",
    "SupportsIntersection",
    "equirectangular_coordinates",
    "texture_coordinates",
]
