"""Scene-level ray intersection queries.

This module tests a ray against a list of scene entities (solids or light
sources) and returns the closest hit together with the entity that owns it.
It also provides the distance-bounded occlusion query used by shadow rays.

Example:
    >>> from src.lumen.scene.intersection import nearest_hit
    >>> hit = nearest_hit(scene.solids, ray)
    >>> if hit is not None:
    ...     print(hit.t, hit.entity.material)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from src.lumen.core.ray import Ray, Vec3
from src.lumen.geometry.sphere import HitRecord

if TYPE_CHECKING:
    from src.lumen.scene.entities import LightSource, Solid

EntityT = TypeVar("EntityT", "Solid", "LightSource")


@dataclass(frozen=True, eq=False)
class SceneHit(Generic[EntityT]):
    """Record of a ray-scene intersection with the entity that was hit.

    Attributes:
        record: The primitive-level hit record.
        entity: The Solid or LightSource that owns the hit primitive.
    """

    record: HitRecord
    entity: EntityT

    @property
    def t(self) -> float:
        return self.record.t

    @property
    def point(self) -> Vec3:
        return self.record.point

    @property
    def normal(self) -> Vec3:
        return self.record.normal

    @property
    def hit_from_inside(self) -> bool:
        return self.record.hit_from_inside


def nearest_hit(
    entities: Iterable[EntityT],
    ray: Ray,
    ignore: EntityT | None = None,
) -> SceneHit[EntityT] | None:
    """Test a ray against entities and return the closest hit.

    Args:
        entities: The solids or lights to test.
        ray: The ray to trace.
        ignore: An entity to skip (compared by identity).

    Returns:
        The closest SceneHit, or None if nothing was hit.
    """
    closest: SceneHit[EntityT] | None = None
    for entity in entities:
        if entity is ignore:
            continue
        record = entity.intersect(ray)
        if record is not None and (closest is None or record.t < closest.t):
            closest = SceneHit(record=record, entity=entity)
    return closest


def is_occluded(
    entities: Iterable[EntityT],
    ray: Ray,
    max_distance: float,
    ignore: EntityT | None = None,
) -> bool:
    """Check whether anything lies on the ray strictly before max_distance.

    This is the shadow ray query: a hit beyond the target point (for example
    a wall behind the light) does not count as occlusion.

    Args:
        entities: The entities that may block the ray.
        ray: The shadow ray, starting at the shaded point.
        max_distance: Distance from the ray origin to the target point.
        ignore: An entity to skip (compared by identity).

    Returns:
        True if an entity is hit at a distance below max_distance.
    """
    for entity in entities:
        if entity is ignore:
            continue
        record = entity.intersect(ray)
        if record is not None and record.t < max_distance:
            return True
    return False
