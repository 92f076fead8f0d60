"""Full-frame renderer driving the tracer over every pixel.

The renderer asks the camera for one primary ray per pixel, traces it and
stores the resulting radiance in a FrameBuffer. Work is split into pixel
columns. Every column draws from its own generator, spawned from a single
numpy SeedSequence, so a seeded render produces the same image whether the
columns are traced in this process or spread over a process pool.

Every call to render() recomputes the whole canvas; nothing is reused
between frames.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.core.renderer import Renderer
    >>> from src.lumen.core.tracer import Tracer, TracerConfig
    >>> from src.lumen.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> tracer = Tracer(scene, TracerConfig(shadow_samples=4))
    >>> renderer = Renderer(tracer, camera, width=64, height=64, workers=4, seed=1)
    >>> frame = renderer.render()
    >>> pixels = frame.tone_map(exposure=1.0)
"""

from __future__ import annotations

import logging
import multiprocessing as mp
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from src.lumen.core.framebuffer import FrameBuffer
from src.lumen.core.radiance import Radiance

if TYPE_CHECKING:
    from src.lumen.camera.pinhole import PinholeCamera
    from src.lumen.core.tracer import Tracer

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (columns_done, total_columns)
ProgressCallback = Callable[[int, int], None]

# Chunks handed to each worker, for load balancing
CHUNKS_PER_WORKER = 4


class Renderer:
    """Renders complete frames with a tracer and a camera.

    Attributes:
        tracer: The tracer evaluating each primary ray.
        camera: The camera producing primary rays.
        width: Image width in pixels.
        height: Image height in pixels.
        workers: Number of worker processes (1 renders in-process).
        seed: Seed for the per-column generators; None draws fresh entropy.
    """

    def __init__(
        self,
        tracer: Tracer,
        camera: PinholeCamera,
        width: int,
        height: int,
        workers: int = 1,
        seed: int | None = None,
    ) -> None:
        """Initialize the renderer.

        Raises:
            ValueError: If a dimension or the worker count is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.tracer = tracer
        self.camera = camera
        self.width = width
        self.height = height
        self.workers = workers
        self.seed = seed

    def render_pixel(self, x: int, y: int, rng: np.random.Generator | None = None) -> Radiance:
        """Trace the primary ray of pixel (x, y), with y counted from the top."""
        ray = self.camera.get_ray_for_pixel(x, y, self.width, self.height)
        return self.tracer.trace(ray, 0, rng)

    def render_column(self, x: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
        """Trace every pixel of column x and return a (height, 3) array."""
        column = np.zeros((self.height, 3), dtype=np.float64)
        for y in range(self.height):
            column[y] = self.render_pixel(x, y, rng).as_tuple()
        return column

    def column_seeds(self) -> list[np.random.SeedSequence]:
        """Spawn one independent seed sequence per column."""
        return np.random.SeedSequence(self.seed).spawn(self.width)

    def render_array(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.float64]:
        """Render the frame into a (height, width, 3) HDR array.

        Args:
            callback: Optional callback receiving (columns_done, total_columns)
                after each finished chunk of columns.

        Returns:
            The unclamped radiance of every pixel.
        """
        start = time.perf_counter()
        seeds = self.column_seeds()
        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        logger.info(
            "Rendering %dx%d frame with %d worker(s)", self.width, self.height, self.workers
        )

        if self.workers == 1:
            for x in range(self.width):
                image[:, x] = self.render_column(x, np.random.default_rng(seeds[x]))
                if callback is not None:
                    callback(x + 1, self.width)
        else:
            chunks = self._chunks(seeds)
            logger.debug("Divided %d columns into %d chunks", self.width, len(chunks))
            done = 0
            with mp.Pool(self.workers) as pool:
                for columns, pixels in pool.imap(_render_chunk, chunks):
                    image[:, columns[0] : columns[-1] + 1] = pixels
                    done += len(columns)
                    if callback is not None:
                        callback(done, self.width)

        logger.info("Frame finished in %.2fs", time.perf_counter() - start)
        return image

    def render(
        self,
        frame: FrameBuffer | None = None,
        callback: ProgressCallback | None = None,
    ) -> FrameBuffer:
        """Render the frame into a frame buffer.

        Args:
            frame: Buffer to overwrite; a new one is allocated when omitted.
            callback: Optional progress callback, see render_array().

        Returns:
            The frame buffer holding the HDR image.

        Raises:
            ValueError: If the given frame buffer has a different size.
        """
        if frame is None:
            frame = FrameBuffer(self.width, self.height)
        frame.write(self.render_array(callback))
        return frame

    def _chunks(self, seeds: Sequence[np.random.SeedSequence]) -> list[tuple]:
        columns_per_chunk = max(1, self.width // (self.workers * CHUNKS_PER_WORKER))
        chunks = []
        for x_start in range(0, self.width, columns_per_chunk):
            x_end = min(x_start + columns_per_chunk, self.width)
            columns = list(range(x_start, x_end))
            chunks.append((self, columns, [seeds[x] for x in columns]))
        return chunks


def _render_chunk(args: tuple) -> tuple[list[int], npt.NDArray[np.float64]]:
    """Worker function rendering a contiguous range of columns."""
    renderer, columns, seeds = args
    pixels = np.zeros((renderer.height, len(columns), 3), dtype=np.float64)
    for i, (x, seed) in enumerate(zip(columns, seeds)):
        pixels[:, i] = renderer.render_column(x, np.random.default_rng(seed))
    return columns, pixels
