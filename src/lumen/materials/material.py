"""Composite surface material.

A single Material describes how a surface splits incoming light between
three transport paths, each weighted per color channel:

    diffuse       Lambertian scattering (direct light, ambient and indirect)
    mirror        Ideal specular reflection: R = I - 2 (I . N) N
    transmission  Refraction through the surface following Snell's law

The weights are independent; a surface with all three non-zero spawns a
reflected ray, a refracted ray and shadow rays at every hit. An optional
texture is multiplied into the diffuse term.

Example:
    >>> from src.lumen.materials.material import dielectric, lambertian
    >>> wall = lambertian((0.73, 0.73, 0.73))
    >>> water = dielectric(refraction_index=1.33, transmission=0.9)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from src.lumen.core.radiance import Radiance
from src.lumen.geometry import Primitive, texture_coordinates
from src.lumen.materials.texture import Texture

if TYPE_CHECKING:
    from src.lumen.core.ray import Vec3

# Anything accepted where a color weight is expected
ColorLike = Union[Radiance, tuple[float, float, float], float]

# Common refraction indices
AIR_INDEX = 1.0
WATER_INDEX = 1.33
GLASS_INDEX = 1.5


def as_radiance(value: ColorLike) -> Radiance:
    """Convert a Radiance, an (R, G, B) tuple or a gray level to a Radiance."""
    if isinstance(value, Radiance):
        return value
    if isinstance(value, (int, float)):
        return Radiance.gray(float(value))
    red, green, blue = value
    return Radiance(float(red), float(green), float(blue))


@dataclass(frozen=True, eq=False)
class Material:
    """Per-surface optical parameters.

    Attributes:
        diffuse: Diffuse albedo, the fraction of light scattered diffusely.
        mirror: Weight of the ideal specular reflection.
        transmission: Weight of the refracted contribution.
        refraction_index: Index of refraction of the material (air is 1.0).
        texture: Optional texture multiplied into the diffuse albedo.

    Raises:
        ValueError: If a weight has a negative channel or the refraction
            index is not positive.
    """

    diffuse: Radiance = Radiance(1.0, 1.0, 1.0)
    mirror: Radiance = Radiance()
    transmission: Radiance = Radiance()
    refraction_index: float = AIR_INDEX
    texture: Texture | None = None

    def __post_init__(self) -> None:
        for name in ("diffuse", "mirror", "transmission"):
            weight = as_radiance(getattr(self, name))
            if min(weight.as_tuple()) < 0.0:
                raise ValueError(f"Material {name} weight must be non-negative, got {weight}")
            object.__setattr__(self, name, weight)
        if not self.refraction_index > 0.0:
            raise ValueError(
                f"Refraction index must be positive, got {self.refraction_index}"
            )

    @property
    def is_reflective(self) -> bool:
        return not self.mirror.is_zero()

    @property
    def is_transmissive(self) -> bool:
        return not self.transmission.is_zero()


def lambertian(albedo: ColorLike, texture: Texture | None = None) -> Material:
    """Create a purely diffuse material."""
    return Material(diffuse=as_radiance(albedo), texture=texture)


def mirror(weight: ColorLike = 1.0, albedo: ColorLike = 0.0) -> Material:
    """Create a mirror, optionally with a diffuse component.

    Args:
        weight: Fraction of light reflected specularly.
        albedo: Diffuse albedo mixed in with the reflection.
    """
    return Material(diffuse=as_radiance(albedo), mirror=as_radiance(weight))


def dielectric(
    refraction_index: float = GLASS_INDEX,
    transmission: ColorLike = 0.9,
    reflection: ColorLike = 0.0,
    albedo: ColorLike = 0.0,
) -> Material:
    """Create a transparent material such as glass or water.

    Args:
        refraction_index: Index of refraction. Water is 1.33, glass 1.5.
        transmission: Fraction of light passed through the surface.
        reflection: Fraction of light reflected specularly.
        albedo: Diffuse albedo.
    """
    return Material(
        diffuse=as_radiance(albedo),
        mirror=as_radiance(reflection),
        transmission=as_radiance(transmission),
        refraction_index=refraction_index,
    )


def diffuse_albedo_at(primitive: Primitive, material: Material, point: Vec3) -> Radiance:
    """Compute the diffuse albedo of a material at a point on a primitive.

    Without a texture this is simply the material's diffuse albedo; with one,
    the texel under the point is multiplied in.
    """
    if material.texture is None:
        return material.diffuse
    u, v = texture_coordinates(primitive, point)
    return material.diffuse * material.texture.sample(u, v)
