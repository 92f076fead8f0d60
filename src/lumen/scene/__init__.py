"""Scene module for scene entities, queries and builders.

This module handles scene representation and ray-scene queries:

Components:
    entities: Solid, LightSource and the immutable Scene snapshot
    intersection: Closest-hit and occlusion queries over entity lists
    manager: SceneManager builder coordinating primitives and materials
    cornell_box: Reference scenes (Cornell box, glass sphere in a box)

Scenes are built once by a SceneManager and never mutated while rendering;
moving a light or the camera means building a new Scene.
"""

from .cornell_box import (
    BOX_SIZE,
    CornellBoxParams,
    create_cornell_box_scene,
    create_glass_sphere_scene,
)
from .entities import LightSource, Scene, Solid
from .intersection import SceneHit, is_occluded, nearest_hit
from .manager import LightInfo, SceneManager, SolidInfo

__all__ = [
    # Entities
    "Solid",
    "LightSource",
    "Scene",
    # Intersection module
    "SceneHit",
    "nearest_hit",
    "is_occluded",
    # Manager module
    "SceneManager",
    "SolidInfo",
    "LightInfo",
    # Reference scenes
    "CornellBoxParams",
    "create_cornell_box_scene",
    "create_glass_sphere_scene",
    "BOX_SIZE",
]
