"""Reference scene configurations.

This module provides factory functions for the two standard test scenes:

Cornell box:
- A closed box of white patches with a red left wall and a green right wall
- An area light just below the ceiling
- Three spheres with different materials (diffuse, mirror, glass)

Glass sphere:
- A fully transparent sphere (refraction index 1.33) inside an enclosing
  white box, lit from above. Rays through the sphere bend at both the entry
  and exit surfaces, which makes this scene a check of the refraction path.

The Cornell box uses the classic scale where the box spans 0 to 555 in
each dimension, with the camera positioned outside looking in through the
open front. Light intensities are plain radiance values: a white wall facing
the light head-on reflects about albedo * intensity.

Example:
    >>> from src.lumen.scene.cornell_box import create_cornell_box_scene
    >>> scene, camera = create_cornell_box_scene()
    >>> len(scene.lights)
    1
"""

from __future__ import annotations

from dataclasses import dataclass

from src.lumen.camera.pinhole import PinholeCamera
from src.lumen.materials.material import WATER_INDEX
from src.lumen.scene.entities import Scene
from src.lumen.scene.manager import SceneManager

# =============================================================================
# Cornell Box Parameters
# =============================================================================


@dataclass
class CornellBoxParams:
    """Parameters for configuring a Cornell box scene.

    All parameters have defaults matching the classic Cornell box
    configuration.

    Attributes:
        light_intensity: The brightness of the area light.
        light_color: RGB color of the light (each component in [0, 1]).
            Default is white (1.0, 1.0, 1.0).
        left_wall_color: RGB albedo of the left wall.
            Default is red (0.65, 0.05, 0.05).
        right_wall_color: RGB albedo of the right wall.
            Default is green (0.12, 0.45, 0.15).
        back_wall_color: RGB albedo of the back wall, floor and ceiling.
            Default is white (0.73, 0.73, 0.73).
        ambient: Gray level of the ambient light.

    Example:
        >>> params = CornellBoxParams()
        >>> params.light_intensity
        1.2
        >>> # Warm light, blue left wall
        >>> custom = CornellBoxParams(
        ...     light_color=(1.0, 0.9, 0.8),
        ...     left_wall_color=(0.2, 0.2, 0.8),
        ... )
    """

    light_intensity: float = 1.2
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    left_wall_color: tuple[float, float, float] = (0.65, 0.05, 0.05)
    right_wall_color: tuple[float, float, float] = (0.12, 0.45, 0.15)
    back_wall_color: tuple[float, float, float] = (0.73, 0.73, 0.73)
    ambient: float = 0.05


# =============================================================================
# Cornell Box Constants
# =============================================================================

# Classic Cornell box dimensions (approximately 555x555x555 units)
BOX_SIZE = 555.0

# Classic Cornell box light is ~130x105 units
LIGHT_WIDTH = 130.0
LIGHT_DEPTH = 105.0

# Sphere materials
DIFFUSE_SPHERE_ALBEDO = (0.73, 0.73, 0.73)
MIRROR_SPHERE_WEIGHT = (0.95, 0.93, 0.88)
GLASS_SPHERE_IOR = 1.5

SPHERE_RADIUS = 80.0


def create_cornell_box_scene(
    box_size: float = BOX_SIZE,
    params: CornellBoxParams | None = None,
    aspect_ratio: float = 1.0,
) -> tuple[Scene, PinholeCamera]:
    """Create a Cornell box scene with standard configuration.

    The coordinate system places the box origin at (0, 0, 0) with:
    - X-axis: right to left as seen by the camera (0 to box_size)
    - Y-axis: floor to ceiling (0 to box_size)
    - Z-axis: front to back (0 to box_size), camera looks toward +Z

    The front face is left open so the camera outside can see in.

    Args:
        box_size: The size of the box in each dimension.
        params: Optional CornellBoxParams for customizing light and wall colors.
            If None, uses default CornellBoxParams().
        aspect_ratio: Aspect ratio of the returned camera.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    if params is None:
        params = CornellBoxParams()

    manager = SceneManager()

    left_mat = manager.add_lambertian_material(params.left_wall_color)
    right_mat = manager.add_lambertian_material(params.right_wall_color)
    white_mat = manager.add_lambertian_material(params.back_wall_color)
    diffuse_mat = manager.add_lambertian_material(DIFFUSE_SPHERE_ALBEDO)
    mirror_mat = manager.add_mirror_material(MIRROR_SPHERE_WEIGHT)
    glass_mat = manager.add_dielectric_material(
        refraction_index=GLASS_SPHERE_IOR, transmission=0.9, reflection=0.1
    )

    s = box_size

    # =========================================================================
    # Walls (5 patches, the front is open). The camera looks toward +Z, so
    # +X is on the left of the image. Normals face into the box.
    # =========================================================================

    # Left wall - YZ plane at x=s
    manager.add_patch((s, s, 0.0), (0.0, 0.0, s), (0.0, -s, 0.0), left_mat)
    # Right wall - YZ plane at x=0
    manager.add_patch((0.0, s, s), (0.0, 0.0, -s), (0.0, -s, 0.0), right_mat)
    # Back wall - XY plane at z=s
    manager.add_patch((s, s, s), (-s, 0.0, 0.0), (0.0, -s, 0.0), white_mat)
    # Floor - XZ plane at y=0
    manager.add_patch((s, 0.0, s), (-s, 0.0, 0.0), (0.0, 0.0, -s), white_mat)
    # Ceiling - XZ plane at y=s
    manager.add_patch((s, s, 0.0), (-s, 0.0, 0.0), (0.0, 0.0, s), white_mat)

    # =========================================================================
    # Area Light (just below the ceiling, facing down)
    # =========================================================================

    light_x = (s - LIGHT_WIDTH) / 2.0
    light_z = (s - LIGHT_DEPTH) / 2.0
    light_y = s - 1.0
    r, g, b = params.light_color
    manager.add_light(
        corner=(light_x + LIGHT_WIDTH, light_y, light_z),
        edge_right=(-LIGHT_WIDTH, 0.0, 0.0),
        edge_down=(0.0, 0.0, LIGHT_DEPTH),
        intensity=(
            r * params.light_intensity,
            g * params.light_intensity,
            b * params.light_intensity,
        ),
    )

    # =========================================================================
    # Spheres resting on the floor
    # =========================================================================

    manager.add_sphere((s * 0.27, SPHERE_RADIUS, s * 0.35), SPHERE_RADIUS, diffuse_mat)
    manager.add_sphere((s * 0.73, SPHERE_RADIUS, s * 0.35), SPHERE_RADIUS, mirror_mat)
    manager.add_sphere((s * 0.5, SPHERE_RADIUS, s * 0.65), SPHERE_RADIUS, glass_mat)

    manager.set_ambient(params.ambient)

    # Camera outside the box, looking in through the open front
    camera = PinholeCamera(
        lookfrom=(s / 2.0, s / 2.0, -800.0 * s / BOX_SIZE),
        lookat=(s / 2.0, s / 2.0, s / 2.0),
        vup=(0.0, 1.0, 0.0),
        vfov=40.0,
        aspect_ratio=aspect_ratio,
    )

    return manager.build(), camera


def create_glass_sphere_scene(
    refraction_index: float = WATER_INDEX,
    transmission: float = 0.9,
    aspect_ratio: float = 1.0,
) -> tuple[Scene, PinholeCamera]:
    """Create a transparent sphere inside an enclosing box lit from above.

    The box spans -2 to 2 on every axis; the sphere of radius 0.8 sits at
    the origin and the camera looks at it from inside the box.

    Args:
        refraction_index: Index of refraction of the sphere.
        transmission: Transmission weight of the sphere (no mirror term).
        aspect_ratio: Aspect ratio of the returned camera.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    manager = SceneManager()

    wall_mat = manager.add_lambertian_material((0.73, 0.73, 0.73))
    floor_mat = manager.add_lambertian_material((0.2, 0.3, 0.6))
    glass_mat = manager.add_dielectric_material(
        refraction_index=refraction_index, transmission=transmission
    )

    manager.add_box(
        top_left_front=(-2.0, 2.0, 2.0),
        top_left_back=(-2.0, 2.0, -2.0),
        top_right_front=(2.0, 2.0, 2.0),
        bottom_left_front=(-2.0, -2.0, 2.0),
        material_id=wall_mat,
    )
    # Colored floor drawn just above the box's bottom face
    manager.add_patch((-2.0, -1.99, -2.0), (4.0, 0.0, 0.0), (0.0, 0.0, 4.0), floor_mat)

    manager.add_light(
        corner=(-0.5, 1.95, -0.5),
        edge_right=(1.0, 0.0, 0.0),
        edge_down=(0.0, 0.0, 1.0),
        intensity=1.5,
    )
    manager.add_sphere((0.0, 0.0, 0.0), 0.8, glass_mat)
    manager.set_ambient(0.05)

    camera = PinholeCamera(
        lookfrom=(0.0, 0.3, 1.9),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=70.0,
        aspect_ratio=aspect_ratio,
    )

    return manager.build(), camera
