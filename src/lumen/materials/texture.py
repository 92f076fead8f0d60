"""Read-only 2-D texture sampler.

A Texture wraps an immutable ``(height, width, 3)`` uint8 buffer. Lookups
use nearest-texel sampling on normalized (u, v) coordinates, where (0, 0) is
the top-left texel. Coordinates outside [0, 1] are clamped to the edge.

Textures are pre-loaded by the caller; this module never touches the file
system.

Example:
    >>> import numpy as np
    >>> from src.lumen.materials.texture import Texture
    >>> checker = Texture(np.array([[[255, 255, 255], [0, 0, 0]]], dtype=np.uint8))
    >>> checker.sample(0.0, 0.0)
    Radiance(red=1.0, green=1.0, blue=1.0)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from src.lumen.core.radiance import Radiance

if TYPE_CHECKING:
    from PIL import Image as PILImage


class Texture:
    """Nearest-texel sampler over an immutable RGB buffer.

    Attributes:
        width: Texture width in texels.
        height: Texture height in texels.
    """

    def __init__(self, pixels: npt.ArrayLike) -> None:
        """Wrap an RGB buffer.

        Args:
            pixels: Array of shape (height, width, 3) with values in [0, 255].
                A read-only copy is kept.

        Raises:
            ValueError: If the buffer has the wrong shape or is empty.
        """
        buffer = np.array(pixels, dtype=np.uint8)
        if buffer.ndim != 3 or buffer.shape[2] != 3:
            raise ValueError(
                f"Texture buffer must have shape (height, width, 3), got {buffer.shape}"
            )
        if buffer.shape[0] == 0 or buffer.shape[1] == 0:
            raise ValueError("Texture buffer must not be empty")
        buffer.setflags(write=False)
        self._pixels = buffer

    @classmethod
    def from_image(cls, image: PILImage.Image) -> Texture:
        """Create a texture from an already loaded Pillow image."""
        return cls(np.asarray(image.convert("RGB"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> npt.NDArray[np.uint8]:
        """The read-only texel buffer."""
        return self._pixels

    def texel_index(self, u: float, v: float) -> tuple[int, int]:
        """Return the (column, row) of the texel nearest to (u, v)."""
        column = int(round(u * self.width))
        row = int(round(v * self.height))
        column = min(max(column, 0), self.width - 1)
        row = min(max(row, 0), self.height - 1)
        return column, row

    def sample(self, u: float, v: float) -> Radiance:
        """Look up the texel at normalized coordinates (u, v).

        Args:
            u: Horizontal coordinate, 0 at the left edge and 1 at the right.
            v: Vertical coordinate, 0 at the top edge and 1 at the bottom.

        Returns:
            The texel color as a Radiance with 255 mapped to 1.0.
        """
        column, row = self.texel_index(u, v)
        red, green, blue = self._pixels[row, column]
        return Radiance.from_rgb8(int(red), int(green), int(blue))

    def __repr__(self) -> str:
        return f"Texture(width={self.width}, height={self.height})"
