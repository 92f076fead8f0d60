"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Pixel-center ray generation for a given image size

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The up vector does not need to be perpendicular to the view direction; it is
projected onto the image plane when the basis is built.

Example:
    >>> from src.lumen.camera.pinhole import PinholeCamera
    >>>
    >>> # Create camera looking at origin from z=3
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0/9.0
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
    >>> ray.direction
    array([ 0.,  0., -1.])
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from src.lumen.core.ray import Ray, Vec3, as_vec3, cross, normalize


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    A pinhole camera produces perfect perspective projection with no
    depth of field effects. It is the simplest camera model for ray tracing.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees (typically 40-90).
        aspect_ratio: Width divided by height of the output image.

    Raises:
        ValueError: If lookfrom equals lookat, vup is parallel to the view
            direction, or vfov / aspect_ratio are out of range.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 40.0
    aspect_ratio: float = 1.0
    _origin: Vec3 = field(init=False, repr=False, compare=False)
    _lower_left: Vec3 = field(init=False, repr=False, compare=False)
    _horizontal: Vec3 = field(init=False, repr=False, compare=False)
    _vertical: Vec3 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Vertical field of view must be in (0, 180), got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {self.aspect_ratio}")

        # Viewport dimensions at unit distance
        theta = math.radians(self.vfov)
        viewport_height = 2.0 * math.tan(theta / 2.0)
        viewport_width = self.aspect_ratio * viewport_height

        origin = as_vec3(self.lookfrom)
        w = normalize(origin - as_vec3(self.lookat))
        u_raw = cross(as_vec3(self.vup), w)
        if np.linalg.norm(u_raw) == 0.0:
            raise ValueError("Up vector must not be parallel to the view direction")
        u = normalize(u_raw)
        v = cross(w, u)

        horizontal = viewport_width * u
        vertical = viewport_height * v
        # Origin - w (move forward) - horizontal/2 (left) - vertical/2 (down)
        lower_left = origin - w - horizontal / 2.0 - vertical / 2.0

        object.__setattr__(self, "_origin", origin)
        object.__setattr__(self, "_horizontal", horizontal)
        object.__setattr__(self, "_vertical", vertical)
        object.__setattr__(self, "_lower_left", lower_left)

    @property
    def origin(self) -> Vec3:
        """The camera position as a vector."""
        return self._origin

    def basis(self) -> tuple[Vec3, Vec3, Vec3]:
        """Return the orthonormal basis (u, v, w): right, up and backward."""
        u = normalize(self._horizontal)
        v = normalize(self._vertical)
        return u, v, cross(u, v)

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        The coordinates are normalized:
        - u = 0: left edge of image
        - u = 1: right edge of image
        - v = 0: bottom edge of image
        - v = 1: top edge of image

        Args:
            u: Horizontal coordinate in [0, 1] (left to right).
            v: Vertical coordinate in [0, 1] (bottom to top).

        Returns:
            A Ray with origin at the camera position and direction toward
            the specified point on the image plane.
        """
        point_on_viewport = self._lower_left + u * self._horizontal + v * self._vertical
        return Ray(self._origin, normalize(point_on_viewport - self._origin))

    def get_ray_for_pixel(self, x: int, y: int, width: int, height: int) -> Ray:
        """Generate the ray through the center of pixel (x, y).

        Pixel rows are counted from the top of the image, matching the
        row order of the output buffer.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            The primary ray for the pixel.
        """
        u = (x + 0.5) / width
        v = 1.0 - (y + 0.5) / height
        return self.get_ray(u, v)
