"""Renderable scene entities.

Components:
    Solid: A primitive paired with a material.
    LightSource: A planar patch emitting a constant radiance.
    Scene: The immutable aggregate of solids, lights and ambient light.

Entities compare by identity: two solids built from equal parameters are
still distinct objects, which is what the tracer relies on when it skips
the surface a shadow ray starts from.

Example:
    >>> from src.lumen.core.radiance import Radiance
    >>> from src.lumen.core.ray import vec3
    >>> from src.lumen.geometry import PlanarPatch, Sphere
    >>> from src.lumen.materials.material import lambertian
    >>> from src.lumen.scene.entities import LightSource, Scene, Solid
    >>> ball = Solid(Sphere(vec3(0.0, 0.0, 0.0), 1.0), lambertian(1.0))
    >>> lamp = LightSource(
    ...     PlanarPatch(vec3(-0.5, 4.0, -0.5), vec3(1.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0)),
    ...     Radiance.gray(10.0),
    ... )
    >>> scene = Scene(solids=(ball,), lights=(lamp,), ambient=Radiance.gray(0.1))
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from src.lumen.core.radiance import Radiance
from src.lumen.core.ray import Ray, Vec3
from src.lumen.geometry import PlanarPatch, Primitive
from src.lumen.geometry.sphere import HitRecord
from src.lumen.materials.material import Material, diffuse_albedo_at
from src.lumen.scene.intersection import SceneHit, is_occluded, nearest_hit


@dataclass(frozen=True, eq=False)
class Solid:
    """A renderable primitive with a material.

    Attributes:
        primitive: The shape (Sphere or PlanarPatch).
        material: The optical parameters of the surface.
    """

    primitive: Primitive
    material: Material

    def intersect(self, ray: Ray) -> HitRecord | None:
        return self.primitive.intersect(ray)

    def normal_at(self, point: Vec3) -> Vec3:
        return self.primitive.normal_at(point)

    def diffuse_albedo_at(self, point: Vec3) -> Radiance:
        """Diffuse albedo at a point, including the texture if there is one."""
        return diffuse_albedo_at(self.primitive, self.material, point)


@dataclass(frozen=True, eq=False)
class LightSource:
    """A planar area light.

    Attributes:
        patch: The emitting surface.
        intensity: Emitted radiance (unbounded).
    """

    patch: PlanarPatch
    intensity: Radiance

    def intersect(self, ray: Ray) -> HitRecord | None:
        return self.patch.intersect(ray)

    def random_point(self, rng: np.random.Generator) -> Vec3:
        """Draw a point uniformly distributed over the light's surface.

        Args:
            rng: The random generator to draw from.

        Returns:
            A world-space point on the patch.
        """
        x = rng.uniform(0.0, self.patch.width)
        y = rng.uniform(0.0, self.patch.height)
        return self.patch.world_point_at(x, y)


@dataclass(frozen=True, eq=False)
class Scene:
    """Immutable snapshot of everything a render pass needs.

    Attributes:
        solids: Ordered solids.
        lights: Ordered area lights.
        ambient: Constant ambient radiance added at every diffuse surface.
    """

    solids: tuple[Solid, ...] = ()
    lights: tuple[LightSource, ...] = ()
    ambient: Radiance = field(default_factory=Radiance.zero)

    def __post_init__(self) -> None:
        object.__setattr__(self, "solids", tuple(self.solids))
        object.__setattr__(self, "lights", tuple(self.lights))

    def nearest_solid_hit(self, ray: Ray, ignore: Solid | None = None) -> SceneHit[Solid] | None:
        """Return the closest solid hit along the ray, or None."""
        return nearest_hit(self.solids, ray, ignore)

    def nearest_light_hit(self, ray: Ray) -> SceneHit[LightSource] | None:
        """Return the closest light hit along the ray, or None."""
        return nearest_hit(self.lights, ray)

    def is_occluded(self, ray: Ray, max_distance: float, ignore: Solid | None = None) -> bool:
        """Check whether a solid blocks the ray before max_distance."""
        return is_occluded(self.solids, ray, max_distance, ignore)
