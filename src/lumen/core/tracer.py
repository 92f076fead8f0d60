"""Recursive ray tracer.

This module implements the light transport algorithm: a bounded-depth
recursion that maps a ray to the Radiance arriving along it. At every solid
hit the material decides which of the following terms are accumulated:

    transmission  refracted ray, traced recursively (Snell's law)
    reflection    mirrored ray, traced recursively
    direct light  soft shadows from area lights, estimated with shadow rays
    ambient       constant ambient radiance times the diffuse albedo
    indirect      optional Monte Carlo gathering over the hemisphere

A ray that reaches a light before any solid returns the light's emitted
radiance unchanged; a ray that hits nothing returns zero.

The tracer is a pure function of an immutable Scene, the ray, the depth and
a random generator. Randomness is drawn only from the generator passed in,
or from a per-thread generator when none is given, so seeded renders are
reproducible and the tracer can be called concurrently.

Example:
    >>> import numpy as np
    >>> from src.lumen.core.tracer import Tracer, TracerConfig
    >>> from src.lumen.scene.cornell_box import create_cornell_box_scene
    >>> scene, camera = create_cornell_box_scene()
    >>> tracer = Tracer(scene, TracerConfig(max_depth=3, shadow_samples=8))
    >>> radiance = tracer.trace(camera.get_ray(0.5, 0.5), rng=np.random.default_rng(7))
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from src.lumen.core.radiance import Radiance
from src.lumen.core.ray import (
    Ray,
    Vec3,
    dot,
    face_forward,
    length,
    normalize,
    random_on_hemisphere,
    reflect,
    refract,
)
from src.lumen.materials.material import AIR_INDEX

if TYPE_CHECKING:
    from src.lumen.scene.entities import LightSource, Scene, Solid
    from src.lumen.scene.intersection import SceneHit

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Default recursion cap: the primary hit plus three bounces
MAX_DEPTH = 3

# Default shadow rays per light per shading point
SHADOW_SAMPLES = 16

# Ray offset epsilon to avoid self-intersection
RAY_EPSILON = 1e-4


class GIEstimator(Enum):
    """Normalization of the indirect diffuse (global illumination) sum.

    Both variants draw K directions uniformly over the visible hemisphere and
    trace them recursively; they differ only in how the cosine-weighted sum
    of incoming radiance is normalized.

    Attributes:
        COSINE_WEIGHTED_MEAN: Divide by the sum of the cosine weights. This is
            a weighted average of the incoming radiance, so a uniformly lit
            surrounding of radiance L contributes albedo * L.
        UNBIASED: The standard uniform-hemisphere estimator of the Lambertian
            reflection integral, (2 / K) * sum(cos * L) * albedo. A uniform
            surrounding of radiance L also contributes albedo * L on average.
    """

    COSINE_WEIGHTED_MEAN = "cosine_weighted_mean"
    UNBIASED = "unbiased"


@dataclass(frozen=True)
class TracerConfig:
    """Settings of the recursive tracer.

    Attributes:
        max_depth: Hard recursion cap; trace() at a depth above it returns zero.
        shadow_samples: Shadow rays per light per shading point (at least 1).
        gi_samples: Indirect diffuse samples per shading point (0 disables GI).
        gi_estimator: Normalization of the indirect diffuse sum.
        epsilon: Distance rays are moved forward before intersection tests.

    Raises:
        ValueError: If any value is out of range.
    """

    max_depth: int = MAX_DEPTH
    shadow_samples: int = SHADOW_SAMPLES
    gi_samples: int = 0
    gi_estimator: GIEstimator = GIEstimator.COSINE_WEIGHTED_MEAN
    epsilon: float = RAY_EPSILON

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.shadow_samples < 1:
            raise ValueError(f"shadow_samples must be at least 1, got {self.shadow_samples}")
        if self.gi_samples < 0:
            raise ValueError(f"gi_samples must be non-negative, got {self.gi_samples}")
        if not self.epsilon > 0.0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        object.__setattr__(self, "gi_estimator", GIEstimator(self.gi_estimator))


_thread_state = threading.local()


def thread_rng() -> np.random.Generator:
    """Return the calling thread's random generator, creating it on first use."""
    rng = getattr(_thread_state, "rng", None)
    if rng is None:
        rng = np.random.default_rng()
        _thread_state.rng = rng
    return rng


def refracted_direction(
    incident: Vec3,
    normal: Vec3,
    hit_from_inside: bool,
    refraction_index: float,
) -> Vec3:
    """Direction of the ray transmitted through a surface.

    Entering a solid the ray goes from air into the material; leaving it
    the order is reversed. Under total internal reflection no refracted ray
    exists and the mirrored direction is returned instead.

    Args:
        incident: Unit direction of the incoming ray.
        normal: Geometric surface normal at the hit point (either side).
        hit_from_inside: Whether the ray hit the surface from inside the solid.
        refraction_index: Index of refraction of the solid's material.

    Returns:
        Unit direction of the transmitted (or totally reflected) ray.
    """
    if hit_from_inside:
        from_index, to_index = refraction_index, AIR_INDEX
    else:
        from_index, to_index = AIR_INDEX, refraction_index
    direction = refract(incident, normal, from_index, to_index)
    if direction is None:
        return normalize(reflect(incident, normal))
    return direction


class Tracer:
    """Recursive ray tracer over an immutable scene.

    Attributes:
        scene: The scene being rendered.
        config: Recursion, sampling and epsilon settings.
    """

    def __init__(self, scene: Scene, config: TracerConfig | None = None) -> None:
        self.scene = scene
        self.config = config if config is not None else TracerConfig()
        logger.debug("Tracer created with %s", self.config)

    def trace(self, ray: Ray, depth: int = 0, rng: np.random.Generator | None = None) -> Radiance:
        """Compute the radiance arriving along a ray.

        Args:
            ray: The ray to trace (unit direction).
            depth: Recursion depth of this call; primary rays use 0.
            rng: Generator for shadow and indirect sampling. Defaults to the
                calling thread's generator.

        Returns:
            The (unbounded) radiance seen along the ray. Zero when the ray
            hits nothing or depth exceeds the configured maximum.
        """
        if rng is None:
            rng = thread_rng()
        return self._trace(ray, depth, rng)

    def _trace(self, ray: Ray, depth: int, rng: np.random.Generator) -> Radiance:
        if depth > self.config.max_depth:
            return Radiance.zero()
        depth += 1

        ray = ray.shifted(self.config.epsilon)
        solid_hit = self.scene.nearest_solid_hit(ray)
        light_hit = self.scene.nearest_light_hit(ray)

        if light_hit is not None and (solid_hit is None or light_hit.t < solid_hit.t):
            return light_hit.entity.intensity
        if solid_hit is None:
            return Radiance.zero()
        return self._shade(ray, solid_hit, depth, rng)

    def _shade(
        self,
        ray: Ray,
        hit: SceneHit[Solid],
        depth: int,
        rng: np.random.Generator,
    ) -> Radiance:
        """Accumulate every material term at a solid hit."""
        solid = hit.entity
        material = solid.material
        point = hit.point
        incident = ray.direction
        result = Radiance.zero()

        if material.is_transmissive:
            direction = refracted_direction(
                incident, hit.normal, hit.hit_from_inside, material.refraction_index
            )
            transmitted = self._trace(Ray(point, direction), depth, rng)
            result = result + transmitted * material.transmission

        if material.is_reflective:
            direction = normalize(reflect(incident, hit.normal))
            reflected = self._trace(Ray(point, direction), depth, rng)
            result = result + reflected * material.mirror

        albedo = solid.diffuse_albedo_at(point)
        if albedo.is_zero():
            return result

        normal = face_forward(hit.normal, incident)
        result = result + self.direct_lighting(point, normal, albedo, solid, rng)
        result = result + self.scene.ambient * albedo
        if self.config.gi_samples > 0:
            result = result + self.indirect_lighting(point, normal, albedo, depth, rng)
        return result

    # =========================================================================
    # Soft shadows
    # =========================================================================

    def direct_lighting(
        self,
        point: Vec3,
        normal: Vec3,
        albedo: Radiance,
        solid: Solid | None,
        rng: np.random.Generator,
    ) -> Radiance:
        """Estimate diffuse light received directly from the area lights.

        For each light, shadow rays are cast toward independently sampled
        points on its surface. An unoccluded sample contributes
        albedo * intensity * max(0, normal . light_direction); the samples of
        one light are averaged and the lights are summed.

        Args:
            point: The shading point.
            normal: The shading normal, facing the viewer.
            albedo: Diffuse albedo at the point.
            solid: The solid being shaded, skipped by shadow rays.
            rng: Generator for light sampling.

        Returns:
            The direct diffuse radiance.
        """
        samples = self.config.shadow_samples
        total = Radiance.zero()
        for light in self.scene.lights:
            cosine_sum = 0.0
            for _ in range(samples):
                direction, distance = _toward(point, light.random_point(rng))
                if direction is None:
                    continue
                cosine = dot(normal, direction)
                if cosine <= 0.0:
                    continue
                if self.scene.is_occluded(Ray(point, direction), distance, ignore=solid):
                    continue
                cosine_sum += cosine
            total = total + light.intensity * albedo * (cosine_sum / samples)
        return total

    def light_visibility(
        self,
        point: Vec3,
        light: LightSource,
        rng: np.random.Generator,
        ignore: Solid | None = None,
        samples: int | None = None,
    ) -> float:
        """Estimate the fraction of a light visible from a point.

        Args:
            point: The point to test from.
            light: The area light.
            rng: Generator for light sampling.
            ignore: A solid skipped by the shadow rays.
            samples: Number of shadow rays; defaults to config.shadow_samples.

        Returns:
            The fraction of sampled light points not blocked by a solid.
        """
        if samples is None:
            samples = self.config.shadow_samples
        visible = 0
        for _ in range(samples):
            direction, distance = _toward(point, light.random_point(rng))
            if direction is None:
                visible += 1
            elif not self.scene.is_occluded(Ray(point, direction), distance, ignore=ignore):
                visible += 1
        return visible / samples

    # =========================================================================
    # Indirect diffuse
    # =========================================================================

    def indirect_lighting(
        self,
        point: Vec3,
        normal: Vec3,
        albedo: Radiance,
        depth: int,
        rng: np.random.Generator,
    ) -> Radiance:
        """Estimate diffuse light arriving from other surfaces.

        Draws gi_samples directions uniformly over the hemisphere around the
        normal, traces each one at the given depth and combines the results
        according to config.gi_estimator.

        Args:
            point: The shading point.
            normal: The shading normal, facing the viewer.
            albedo: Diffuse albedo at the point.
            depth: Depth for the gathered rays.
            rng: Generator for direction sampling.

        Returns:
            The indirect diffuse radiance.
        """
        count = self.config.gi_samples
        gathered = Radiance.zero()
        cosine_sum = 0.0
        for _ in range(count):
            direction = random_on_hemisphere(normal, rng)
            cosine = dot(direction, normal)
            incoming = self._trace(Ray(point, direction), depth, rng)
            gathered = gathered + incoming * cosine
            cosine_sum += cosine

        if self.config.gi_estimator is GIEstimator.UNBIASED:
            return gathered * albedo * (2.0 / count)
        if cosine_sum <= 0.0:
            return Radiance.zero()
        return gathered * albedo * (1.0 / cosine_sum)


def _toward(origin: Vec3, target: Vec3) -> tuple[Vec3 | None, float]:
    """Unit direction and distance from origin to target (None if they coincide)."""
    offset = target - origin
    distance = length(offset)
    if distance == 0.0:
        return None, 0.0
    return offset / distance, distance
