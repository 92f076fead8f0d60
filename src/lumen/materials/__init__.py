"""Materials module for surface optics.

Components:
    material: Composite Material (diffuse, mirror, transmission weights plus
        a refraction index) and the lambertian/mirror/dielectric presets
    texture: Read-only nearest-texel texture sampler

Texture lookup is a function of (primitive, material, point), see
diffuse_albedo_at(); materials never know which primitive they are on.
"""

from .material import (
    AIR_INDEX,
    GLASS_INDEX,
    WATER_INDEX,
    ColorLike,
    Material,
    as_radiance,
    dielectric,
    diffuse_albedo_at,
    lambertian,
    mirror,
)
from .texture import Texture

__all__ = [
    "Material",
    "ColorLike",
    "as_radiance",
    "lambertian",
    "mirror",
    "dielectric",
    "diffuse_albedo_at",
    "Texture",
    "AIR_INDEX",
    "WATER_INDEX",
    "GLASS_INDEX",
]
