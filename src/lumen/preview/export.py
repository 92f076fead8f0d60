"""Image export utilities for rendered images.

This module converts HDR images to 8-bit colors with the exposure rule
used everywhere in the renderer (divide by exposure, scale 1.0 to 255,
truncate, clamp) and saves them with Pillow.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.lumen.preview.export import save_png
    >>> frame = renderer.render()
    >>> save_png(frame, "output.png", exposure=1.0)
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.lumen.core.framebuffer import FrameBuffer
from src.lumen.core.radiance import MAX_DISPLAY_VALUE

logger = logging.getLogger(__name__)


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear HDR image to uint8 for display/export.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        exposure: Intensity that maps to full brightness. Must be positive.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If exposure is not positive.
    """
    if exposure <= 0.0:
        raise ValueError(f"Exposure must be positive, got {exposure}")
    scaled = np.trunc(np.asarray(image, dtype=np.float64) / exposure * MAX_DISPLAY_VALUE)
    return np.clip(scaled, 0, MAX_DISPLAY_VALUE).astype(np.uint8)


def save_png(
    image: FrameBuffer | npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    exposure: float = 1.0,
) -> None:
    """Save a rendered image as a PNG file.

    Frame buffers are tone-mapped by their Taichi kernel; plain HDR arrays
    go through image_to_uint8().

    Args:
        image: A FrameBuffer or a linear HDR array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        exposure: Intensity that maps to full brightness.

    Raises:
        ValueError: If exposure is not positive.
    """
    if isinstance(image, FrameBuffer):
        pixels = image.tone_map(exposure)
    else:
        pixels = image_to_uint8(image, exposure=exposure)

    pil_image = PILImage.fromarray(pixels)
    pil_image.save(filepath)
    logger.info("Saved %dx%d image to %s", pixels.shape[1], pixels.shape[0], filepath)
