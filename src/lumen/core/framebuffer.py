"""HDR frame buffer with Taichi tone mapping.

The frame buffer stores one unbounded RGB radiance per pixel in a Taichi
field of shape (height, width), row 0 being the top of the image. Tone
mapping runs as a Taichi kernel and applies the same rule as
Radiance.to_rgb: divide by the exposure, scale 1.0 to 255, truncate and
clamp to [0, 255].

Taichi must be initialized (ti.init) before a FrameBuffer is created.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.core.framebuffer import FrameBuffer
    >>> buffer = FrameBuffer(4, 2)
    >>> buffer.write(np.full((2, 4, 3), 0.5))
    >>> buffer.tone_map(exposure=1.0)[0, 0]
    array([127, 127, 127], dtype=uint8)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.lumen.core.radiance import MAX_DISPLAY_VALUE, Radiance


@ti.kernel
def _tone_map_kernel(source: ti.template(), target: ti.template(), exposure: ti.f32):
    for i, j in source:
        for c in ti.static(range(3)):
            # Clamp in float space; casting an out-of-range f32 to i32 wraps.
            scaled = source[i, j][c] / exposure * MAX_DISPLAY_VALUE
            value = tm.clamp(scaled, 0.0, float(MAX_DISPLAY_VALUE))
            target[i, j][c] = ti.cast(value, ti.i32)


class FrameBuffer:
    """Per-pixel HDR radiance storage.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the buffers.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: If a dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame buffer dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._color = ti.Vector.field(3, dtype=ti.f32, shape=(height, width))
        self._display = ti.Vector.field(3, dtype=ti.i32, shape=(height, width))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        """Reset every pixel to zero radiance."""
        self._color.fill(0.0)

    def write(self, image: npt.ArrayLike) -> None:
        """Replace the buffer contents with an HDR image.

        Args:
            image: Array of shape (height, width, 3).

        Raises:
            ValueError: If the shape does not match the buffer.
        """
        array = np.asarray(image, dtype=np.float32)
        expected = (self._height, self._width, 3)
        if array.shape != expected:
            raise ValueError(f"Image shape {array.shape} does not match frame buffer {expected}")
        self._color.from_numpy(array)

    def set_pixel(self, x: int, y: int, radiance: Radiance) -> None:
        """Store the radiance of one pixel (x = column, y = row from the top)."""
        self._color[y, x] = radiance.as_tuple()

    def get_pixel(self, x: int, y: int) -> Radiance:
        red, green, blue = self._color[y, x]
        return Radiance(float(red), float(green), float(blue))

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return the HDR image as a (height, width, 3) float32 array."""
        return self._color.to_numpy()

    def tone_map(self, exposure: float = 1.0) -> npt.NDArray[np.uint8]:
        """Convert the buffer to displayable 8-bit colors.

        Args:
            exposure: Intensity that maps to full brightness. Must be positive.

        Returns:
            Array of shape (height, width, 3) with dtype uint8.

        Raises:
            ValueError: If exposure is not positive.
        """
        if exposure <= 0.0:
            raise ValueError(f"Exposure must be positive, got {exposure}")
        _tone_map_kernel(self._color, self._display, exposure)
        return self._display.to_numpy().astype(np.uint8)
