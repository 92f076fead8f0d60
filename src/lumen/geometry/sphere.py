"""Sphere primitive with ray-sphere intersection.

This module provides the Sphere primitive and the HitRecord produced by every
primitive intersection test.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Because ray directions are unit length the quadratic coefficient a is 1,
leaving:
    t^2 + b*t + c = 0,  b = 2 * dot(oc, direction),  c = dot(oc, oc) - r^2

Example:
    >>> from src.lumen.core.ray import Ray, vec3
    >>> from src.lumen.geometry.sphere import Sphere
    >>> sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0)
    >>> hit = sphere.intersect(Ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0)))
    >>> hit.t, hit.hit_from_inside
    (4.0, False)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from src.lumen.core.ray import Ray, Vec3, as_vec3, dot


@dataclass(frozen=True, eq=False)
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        t: Distance along the ray at which the intersection occurred.
        point: The 3D point where the ray intersected the surface.
        normal: The geometric surface normal at the point (unit length).
            For spheres it always points away from the center; for patches
            it is the patch's fixed normal.
        hit_from_inside: Whether the ray reached the surface from the inside
            of the primitive (from the side opposite the normal).
    """

    t: float
    point: Vec3
    normal: Vec3
    hit_from_inside: bool


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere.

    Raises:
        ValueError: If the radius is not positive.
    """

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))

    def intersect(self, ray: Ray) -> HitRecord | None:
        """Test for ray-sphere intersection.

        The two roots neg_t <= pos_t are examined:
        - both <= 0: the sphere lies behind the ray, no hit.
        - neg_t <= 0 < pos_t: the ray starts inside the sphere, the far root
          is taken and the hit is flagged as coming from inside.
        - otherwise the near root is taken.

        Args:
            ray: The ray to test (direction must be unit length).

        Returns:
            A HitRecord, or None if the ray misses.
        """
        oc = ray.origin - self.center
        b = 2.0 * dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius
        discriminant = b * b - 4.0 * c

        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)
        neg_t = (-b - sqrt_d) / 2.0
        pos_t = (-b + sqrt_d) / 2.0

        if neg_t <= 0.0 and pos_t <= 0.0:
            return None

        if neg_t <= 0.0:
            t = pos_t
            hit_from_inside = True
        else:
            t = neg_t
            hit_from_inside = False

        point = ray.at(t)
        return HitRecord(
            t=t,
            point=point,
            normal=self.normal_at(point),
            hit_from_inside=hit_from_inside,
        )

    def normal_at(self, point: Vec3) -> Vec3:
        """Return the outward unit normal at a point on the sphere."""
        return (point - self.center) / self.radius


def equirectangular_coordinates(sphere: Sphere, point: Vec3) -> tuple[float, float]:
    """Map a point on a sphere to equirectangular (u, v) in [0, 1].

    u follows the longitude around the vertical (y) axis and v runs from the
    north pole (0) to the south pole (1).
    """
    local = sphere.normal_at(point)
    latitude = math.acos(float(np.clip(local[1], -1.0, 1.0)))
    longitude = math.atan2(local[0], local[2])
    u = (longitude + math.pi) / (2.0 * math.pi)
    v = latitude / math.pi
    return u, v
