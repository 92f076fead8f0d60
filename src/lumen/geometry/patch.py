"""Planar patch primitive with ray-patch intersection.

This module provides the PlanarPatch primitive used for walls, box faces and
area lights.

A patch is defined by:
- origin: The top-left corner of the patch
- right: Edge vector from the origin to the top-right corner
- down: Edge vector from the origin to the bottom-left corner

The patch spans the rectangle from origin to origin + right + down. Its
normal is normalize(down x right). Points on the patch have local 2-D
coordinates (x, y) measured in world units along the right and down edges,
so a point is on the patch when 0 <= x <= width and 0 <= y <= height.

Ray-patch intersection uses the parametric plane test:
1. Find where the ray intersects the plane containing the patch
2. Project the hit point onto the edges and check the local bounds

Example:
    >>> from src.lumen.core.ray import Ray, vec3
    >>> from src.lumen.geometry.patch import PlanarPatch
    >>> # Floor patch at y=0, spanning x=[0,1] and z=[0,1], normal +y
    >>> floor = PlanarPatch(
    ...     origin=vec3(0.0, 0.0, 0.0),
    ...     right=vec3(1.0, 0.0, 0.0),
    ...     down=vec3(0.0, 0.0, 1.0),
    ... )
    >>> floor.intersect(Ray(vec3(0.5, 1.0, 0.5), vec3(0.0, -1.0, 0.0))).t
    1.0
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.lumen.core.ray import Ray, Vec3, as_vec3, cross, dot, length
from src.lumen.geometry.sphere import HitRecord

# Rays this close to parallel with the patch plane never hit it
PARALLEL_EPSILON = 1e-12


@dataclass(frozen=True, eq=False)
class PlanarPatch:
    """A rectangular patch defined by a corner point and two edge vectors.

    Attributes:
        origin: The top-left corner point of the patch.
        right: Edge vector from the origin to the top-right corner.
        down: Edge vector from the origin to the bottom-left corner.
        width: Length of the right edge (derived).
        height: Length of the down edge (derived).
        normal: Unit normal, normalize(down x right) (derived).

    Raises:
        ValueError: If an edge is zero or the edges are parallel.
    """

    origin: Vec3
    right: Vec3
    down: Vec3
    width: float = field(init=False)
    height: float = field(init=False)
    normal: Vec3 = field(init=False)

    def __post_init__(self) -> None:
        origin = as_vec3(self.origin)
        right = as_vec3(self.right)
        down = as_vec3(self.down)

        width = length(right)
        height = length(down)
        if width == 0.0 or height == 0.0:
            raise ValueError("Patch edge vectors must be non-zero")

        n = cross(down, right)
        n_length = length(n)
        # Parallel edges span no area
        if n_length <= 1e-12 * width * height:
            raise ValueError("Patch edge vectors must not be parallel")

        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "right", right)
        object.__setattr__(self, "down", down)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "normal", n / n_length)

    @classmethod
    def from_corners(
        cls,
        top_left: Vec3,
        top_right: Vec3,
        bottom_left: Vec3,
    ) -> PlanarPatch:
        """Create a patch from three of its corners."""
        top_left = as_vec3(top_left)
        return cls(
            origin=top_left,
            right=as_vec3(top_right) - top_left,
            down=as_vec3(bottom_left) - top_left,
        )

    @property
    def area(self) -> float:
        """Surface area of the patch."""
        return length(cross(self.down, self.right))

    @property
    def center(self) -> Vec3:
        """The center point of the patch."""
        return self.origin + 0.5 * self.right + 0.5 * self.down

    def local_coordinates(self, point: Vec3) -> tuple[float, float]:
        """Express a point in the patch's local 2-D basis.

        The offset from the origin is projected onto the right and down edge
        vectors; the projection lengths are the local coordinates.

        Args:
            point: A point in (or near) the patch plane.

        Returns:
            Tuple (x, y) in world units along the right and down edges.
        """
        offset = point - self.origin
        x = dot(offset, self.right) / self.width
        y = dot(offset, self.down) / self.height
        return x, y

    def contains(self, x: float, y: float) -> bool:
        """Check whether local coordinates lie on the patch (boundary inclusive)."""
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height

    def world_point_at(self, x: float, y: float) -> Vec3:
        """Map local coordinates (in world units) back to a world-space point."""
        return self.origin + self.right * (x / self.width) + self.down * (y / self.height)

    def intersect(self, ray: Ray) -> HitRecord | None:
        """Test for ray-patch intersection.

        The hit is flagged as coming from inside when the ray travels along
        the normal, i.e. it reaches the patch from the side the normal points
        away from. Box faces carry outward normals, so this is the same rule a
        Sphere applies with its outward normal: a ray leaving the solid hits
        from inside, and refracted_direction orders the two indices the same
        way for both primitives.

        Args:
            ray: The ray to test (direction must be unit length).

        Returns:
            A HitRecord, or None if the ray misses, is parallel to the patch
            or the patch lies behind the ray origin.
        """
        denom = dot(self.normal, ray.direction)
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = dot(self.origin - ray.origin, self.normal) / denom
        if t <= 0.0:
            return None

        point = ray.at(t)
        x, y = self.local_coordinates(point)
        if not self.contains(x, y):
            return None

        return HitRecord(
            t=t,
            point=point,
            normal=self.normal,
            hit_from_inside=denom > 0.0,
        )

    def normal_at(self, point: Vec3) -> Vec3:
        """Return the patch normal (constant over the patch)."""
        return self.normal
