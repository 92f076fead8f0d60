"""Ray data structure and vector utilities for recursive ray tracing.

This module provides the fundamental Ray dataclass and the vector helpers the
tracer is built from. Vectors are plain NumPy ``float64`` arrays of shape
``(3,)``; every helper returns a new array and never mutates its inputs, so
rays and hit points can be shared freely between recursive calls.

Randomized helpers take an explicit ``numpy.random.Generator`` so that
sampling is reproducible when the generator is seeded.

Example:
    >>> import numpy as np
    >>> from src.lumen.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    array([ 0.,  0., -5.])
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors
Vec3 = npt.NDArray[np.float64]

# Allowed deviation of a ray direction from unit length
UNIT_LENGTH_TOLERANCE = 1e-6

# Rejection sampling gives up after this many draws
MAX_REJECTION_ATTEMPTS = 100


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(v: npt.ArrayLike) -> Vec3:
    """Convert a tuple/list/array to a float64 vector of shape (3,).

    Raises:
        ValueError: If the input does not have exactly three components.
    """
    result = np.asarray(v, dtype=np.float64)
    if result.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {result.shape}")
    return result


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and unit direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Must have unit length.

    Raises:
        ValueError: If the direction is not of unit length.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        origin = as_vec3(self.origin)
        direction = as_vec3(self.direction)
        if abs(length(direction) - 1.0) > UNIT_LENGTH_TOLERANCE:
            raise ValueError(
                f"Ray direction must be a unit vector, got length {length(direction):.6g}"
            )
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)

    @classmethod
    def through(cls, start: npt.ArrayLike, point_on_ray: npt.ArrayLike) -> Ray:
        """Create a ray starting at ``start`` and passing through ``point_on_ray``.

        Raises:
            ValueError: If the two points coincide.
        """
        start = as_vec3(start)
        offset = as_vec3(point_on_ray) - start
        if length_squared(offset) == 0.0:
            raise ValueError("Cannot build a ray through two identical points")
        return cls(origin=start, direction=normalize(offset))

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at distance t.

        Args:
            t: The distance from the origin. Positive values are in front of
                the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + t * self.direction

    def shifted(self, amount: float) -> Ray:
        """Return a copy of this ray with its origin moved forward by ``amount``."""
        return Ray(origin=self.at(amount), direction=self.direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return float(np.sqrt(np.dot(v, v)))


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        ValueError: If v has zero length.
    """
    norm = length(v)
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / norm


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return np.cross(a, b)


def project_onto(v: Vec3, onto: Vec3) -> Vec3:
    """Project vector ``v`` onto vector ``onto``.

    Args:
        v: The vector to project.
        onto: The (non-zero) vector to project onto.

    Returns:
        The component of v parallel to ``onto``.
    """
    return onto * (dot(v, onto) / length_squared(onto))


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Computes R = I - 2 (I . N) N. The result does not depend on which side
    the normal faces.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, from_index: float, to_index: float) -> Vec3 | None:
    """Refract an incident vector through a surface using Snell's law.

    The normal may face either side of the surface; it is flipped internally
    to oppose the incident direction.

    Args:
        incident: The incoming direction vector (should be normalized).
        normal: The surface normal (should be normalized).
        from_index: Refractive index of the medium the ray travels in.
        to_index: Refractive index of the medium the ray enters.

    Returns:
        The normalized refracted direction, or None when total internal
        reflection occurs (no real solution exists).
    """
    if dot(incident, normal) > 0.0:
        normal = -normal

    eta = from_index / to_index
    cos_i = -dot(incident, normal)
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None

    refracted = eta * incident + (eta * cos_i - np.sqrt(k)) * normal
    return normalize(refracted)


def face_forward(normal: Vec3, incident: Vec3) -> Vec3:
    """Orient a normal so that it opposes the incident direction."""
    if dot(normal, incident) > 0.0:
        return -normal
    return normal


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling to generate uniformly distributed points
    within the unit sphere, excluding the immediate neighbourhood of the
    center so the result can always be normalized.

    Args:
        rng: The random generator to draw from.

    Returns:
        A random point with 0 < length < 1.
    """
    for _ in range(MAX_REJECTION_ATTEMPTS):
        p = rng.uniform(-1.0, 1.0, size=3)
        if 1e-12 < length_squared(p) < 1.0:
            return p
    # Practically unreachable: each draw succeeds with probability pi/6
    return vec3(0.0, 0.0, 1.0)


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    return normalize(random_in_unit_sphere(rng))


def random_on_hemisphere(normal: Vec3, rng: np.random.Generator) -> Vec3:
    """Generate a random unit vector in the hemisphere around a normal.

    Directions whose dot product with the normal is not strictly positive
    are rejected and redrawn, which keeps the distribution uniform over the
    visible hemisphere.

    Args:
        normal: The surface normal defining the hemisphere orientation.
        rng: The random generator to draw from.

    Returns:
        A random unit vector d with dot(d, normal) > 0.
    """
    for _ in range(MAX_REJECTION_ATTEMPTS):
        direction = random_unit_vector(rng)
        if dot(direction, normal) > 0.0:
            return direction
    return normalize(normal)
