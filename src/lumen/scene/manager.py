"""Scene builder coordinating primitives, materials and lights.

This module provides a high-level scene construction API. Materials are
registered once and referred to by a material ID, so several solids can
share one Material instance. Primitives are added with a material ID and
wrapped into Solids; area lights and the ambient term are set separately.

Once everything is added, build() produces the immutable Scene snapshot
handed to the tracer. The builder itself stays mutable and can be edited
and built again, for example after moving the light.

The SceneManager maintains:
- A material_id space indexing the registered materials
- Ordered lists of solids and lights
- Bookkeeping records describing what was added (for logging and tests)

Example:
    >>> from src.lumen.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> red = manager.add_lambertian_material(albedo=(0.8, 0.3, 0.3))
    >>> manager.add_sphere(center=(0, 0, -1), radius=0.5, material_id=red)
    0
    >>> manager.add_light(corner=(-1, 4, -2), edge_right=(2, 0, 0), edge_down=(0, 0, 2), intensity=10.0)
    0
    >>> scene = manager.build()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.lumen.core.radiance import Radiance
from src.lumen.core.ray import as_vec3
from src.lumen.geometry import Box, PlanarPatch, Primitive, Sphere
from src.lumen.materials.material import (
    ColorLike,
    Material,
    as_radiance,
    dielectric,
    lambertian,
    mirror,
)
from src.lumen.materials.texture import Texture
from src.lumen.scene.entities import LightSource, Scene, Solid

logger = logging.getLogger(__name__)

# Type alias for 3-tuples passed in by callers
Point3 = tuple[float, float, float]


@dataclass
class SolidInfo:
    """Information about a solid in the scene.

    Attributes:
        solid_index: The index of the solid in the scene's solid list.
        kind: "sphere" or "patch".
        material_id: The material ID assigned to the solid.
    """

    solid_index: int
    kind: str
    material_id: int


@dataclass
class LightInfo:
    """Information about an area light in the scene.

    Attributes:
        light_index: The index of the light in the scene's light list.
        area: Surface area of the emitting patch.
        intensity: Emitted radiance.
    """

    light_index: int
    area: float
    intensity: Radiance


class SceneManager:
    """Builder for immutable Scene snapshots.

    Attributes:
        materials: Registered materials, indexed by material ID.
        solid_infos: One SolidInfo per added solid.
        light_infos: One LightInfo per added light.
        ambient: The ambient radiance used by the next build().

    Example:
        >>> manager = SceneManager()
        >>> white = manager.add_lambertian_material(albedo=(0.73, 0.73, 0.73))
        >>> glass = manager.add_dielectric_material(refraction_index=1.5)
        >>> manager.add_box((0, 1, 0), (0, 1, 1), (1, 1, 0), (0, 0, 0), white)
        (0, 1, 2, 3, 4, 5)
        >>> manager.add_sphere((0.5, 0.5, 0.5), 0.2, glass)
        6
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[Material] = []
        self.solid_infos: list[SolidInfo] = []
        self.light_infos: list[LightInfo] = []
        self.ambient = Radiance.zero()
        self._solids: list[Solid] = []
        self._lights: list[LightSource] = []

    def clear(self) -> None:
        """Remove all materials, solids and lights and reset the ambient term."""
        self.materials.clear()
        self.solid_infos.clear()
        self.light_infos.clear()
        self.ambient = Radiance.zero()
        self._solids.clear()
        self._lights.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(self, material: Material) -> int:
        """Register a material and return its material ID."""
        material_id = len(self.materials)
        self.materials.append(material)
        return material_id

    def add_lambertian_material(
        self,
        albedo: ColorLike,
        texture: Texture | None = None,
    ) -> int:
        """Add a purely diffuse material.

        Args:
            albedo: The diffuse reflectance as (R, G, B), a gray level or a Radiance.
            texture: Optional texture multiplied into the albedo.

        Returns:
            The material ID.
        """
        return self.add_material(lambertian(albedo, texture=texture))

    def add_mirror_material(self, weight: ColorLike = 1.0, albedo: ColorLike = 0.0) -> int:
        """Add a mirror material, optionally mixed with a diffuse component."""
        return self.add_material(mirror(weight, albedo))

    def add_dielectric_material(
        self,
        refraction_index: float = 1.5,
        transmission: ColorLike = 0.9,
        reflection: ColorLike = 0.0,
    ) -> int:
        """Add a transparent material.

        Args:
            refraction_index: Index of refraction.
                Common values: Air=1.0, Water=1.33, Glass=1.5
            transmission: Fraction of light passed through the surface.
            reflection: Fraction of light reflected specularly.

        Returns:
            The material ID.
        """
        return self.add_material(dielectric(refraction_index, transmission, reflection))

    def get_material(self, material_id: int) -> Material:
        """Look up a registered material.

        Raises:
            ValueError: If material_id is invalid.
        """
        if material_id < 0 or material_id >= len(self.materials):
            raise ValueError(f"Invalid material_id: {material_id}")
        return self.materials[material_id]

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def _add_solid(self, primitive: Primitive, kind: str, material_id: int) -> int:
        material = self.get_material(material_id)
        solid_index = len(self._solids)
        self._solids.append(Solid(primitive, material))
        self.solid_infos.append(SolidInfo(solid_index, kind, material_id))
        return solid_index

    def add_sphere(self, center: Point3, radius: float, material_id: int) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere (must be positive).
            material_id: The material ID to assign to the sphere.

        Returns:
            The index of the added solid.

        Raises:
            ValueError: If the radius is not positive or material_id is invalid.
        """
        return self._add_solid(Sphere(as_vec3(center), radius), "sphere", material_id)

    def add_patch(
        self,
        corner: Point3,
        edge_right: Point3,
        edge_down: Point3,
        material_id: int,
    ) -> int:
        """Add a rectangular patch to the scene.

        The patch spans corner, corner+edge_right, corner+edge_down and
        corner+edge_right+edge_down. Its normal is edge_down x edge_right.

        Args:
            corner: The top-left corner as (x, y, z).
            edge_right: The edge vector toward the top-right corner.
            edge_down: The edge vector toward the bottom-left corner.
            material_id: The material ID to assign to the patch.

        Returns:
            The index of the added solid.

        Raises:
            ValueError: If the edges are degenerate or material_id is invalid.
        """
        patch = PlanarPatch(as_vec3(corner), as_vec3(edge_right), as_vec3(edge_down))
        return self._add_solid(patch, "patch", material_id)

    def add_box(
        self,
        top_left_front: Point3,
        top_left_back: Point3,
        top_right_front: Point3,
        bottom_left_front: Point3,
        material_id: int,
    ) -> tuple[int, ...]:
        """Add the six faces of a box as separate solids sharing one material.

        Returns:
            The solid indices of the faces (front, back, left, right, top, bottom).
        """
        box = Box.from_corners(
            as_vec3(top_left_front),
            as_vec3(top_left_back),
            as_vec3(top_right_front),
            as_vec3(bottom_left_front),
        )
        return tuple(self._add_solid(face, "patch", material_id) for face in box.faces())

    # =========================================================================
    # Lights and Ambient
    # =========================================================================

    def add_light(
        self,
        corner: Point3,
        edge_right: Point3,
        edge_down: Point3,
        intensity: ColorLike,
    ) -> int:
        """Add a rectangular area light.

        Args:
            corner: The top-left corner as (x, y, z).
            edge_right: The edge vector toward the top-right corner.
            edge_down: The edge vector toward the bottom-left corner.
            intensity: Emitted radiance, as (R, G, B), a gray level or a Radiance.
                Values above 1.0 are expected.

        Returns:
            The index of the added light.
        """
        patch = PlanarPatch(as_vec3(corner), as_vec3(edge_right), as_vec3(edge_down))
        emitted = as_radiance(intensity)
        light_index = len(self._lights)
        self._lights.append(LightSource(patch, emitted))
        self.light_infos.append(LightInfo(light_index, patch.area, emitted))
        return light_index

    def set_ambient(self, ambient: ColorLike) -> None:
        """Set the constant ambient radiance."""
        self.ambient = as_radiance(ambient)

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_solid_count(self) -> int:
        return len(self._solids)

    def get_light_count(self) -> int:
        return len(self._lights)

    def get_material_count(self) -> int:
        return len(self.materials)

    def build(self) -> Scene:
        """Freeze the current contents into an immutable Scene.

        Returns:
            A Scene holding the solids and lights added so far.

        Raises:
            RuntimeError: If neither solids nor lights were added.
        """
        if not self._solids and not self._lights:
            raise RuntimeError("Cannot build an empty scene: add solids or lights first")
        logger.info(
            "Built scene with %d solids, %d lights, %d materials",
            len(self._solids),
            len(self._lights),
            len(self.materials),
        )
        if not self._lights:
            logger.warning("Scene has no light sources; only ambient light will be visible")
        return Scene(solids=tuple(self._solids), lights=tuple(self._lights), ambient=self.ambient)
