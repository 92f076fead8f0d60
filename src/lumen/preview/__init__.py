"""Preview module for rendered output.

Components:
    export: Exposure tone mapping of HDR arrays and PNG export via Pillow

Example:
    >>> from src.lumen.preview import save_png
    >>> save_png(renderer.render(), "output.png", exposure=1.0)
"""

from src.lumen.preview.export import image_to_uint8, save_png

__all__ = [
    "save_png",
    "image_to_uint8",
]
