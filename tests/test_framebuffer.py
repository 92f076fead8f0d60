"""Unit tests for the HDR frame buffer.

Tests cover:
- Allocation and validation
- Pixel writes and whole-image writes
- Tone mapping through the Taichi kernel
"""

import numpy as np
import pytest


class TestFrameBufferStorage:
    """Tests for storing radiance."""

    def test_dimensions(self):
        """Test width and height, and that a new buffer is black."""
        from src.lumen.core.framebuffer import FrameBuffer

        buffer = FrameBuffer(4, 3)
        assert (buffer.width, buffer.height) == (4, 3)
        assert buffer.to_numpy().shape == (3, 4, 3)
        assert np.all(buffer.to_numpy() == 0.0)

    @pytest.mark.parametrize("width,height", [(0, 3), (3, 0), (-1, 2)])
    def test_invalid_dimensions(self, width, height):
        """Test non-positive dimensions raise."""
        from src.lumen.core.framebuffer import FrameBuffer

        with pytest.raises(ValueError):
            FrameBuffer(width, height)

    def test_set_and_get_pixel(self):
        """Test a pixel written by (x, y) lands in row y, column x."""
        from src.lumen.core.framebuffer import FrameBuffer
        from src.lumen.core.radiance import Radiance

        buffer = FrameBuffer(4, 3)
        buffer.set_pixel(3, 1, Radiance(0.5, 2.5, 0.125))
        assert buffer.get_pixel(3, 1).as_tuple() == pytest.approx((0.5, 2.5, 0.125))
        np.testing.assert_allclose(buffer.to_numpy()[1, 3], [0.5, 2.5, 0.125])
        assert buffer.get_pixel(0, 0).is_zero()

    def test_write_and_clear(self):
        """Test whole-image writes and clearing."""
        from src.lumen.core.framebuffer import FrameBuffer

        buffer = FrameBuffer(2, 2)
        image = np.arange(12, dtype=np.float64).reshape(2, 2, 3)
        buffer.write(image)
        np.testing.assert_allclose(buffer.to_numpy(), image)
        buffer.clear()
        assert np.all(buffer.to_numpy() == 0.0)

    def test_write_shape_mismatch(self):
        """Test writing an image of another size raises."""
        from src.lumen.core.framebuffer import FrameBuffer

        buffer = FrameBuffer(2, 2)
        with pytest.raises(ValueError, match="does not match"):
            buffer.write(np.zeros((2, 3, 3)))


class TestFrameBufferToneMap:
    """Tests for tone_map()."""

    def test_truncate_and_clamp(self):
        """Test the kernel truncates, saturates and clips negatives."""
        from src.lumen.core.framebuffer import FrameBuffer

        buffer = FrameBuffer(2, 1)
        buffer.write(np.array([[[0.25, 2.0, -1.0], [0.5, 1.0, 0.0]]]))
        pixels = buffer.tone_map()

        assert pixels.dtype == np.uint8
        assert pixels[0, 0].tolist() == [63, 255, 0]
        assert pixels[0, 1].tolist() == [127, 255, 0]

    def test_exposure(self):
        """Test a larger exposure darkens the image."""
        from src.lumen.core.framebuffer import FrameBuffer

        buffer = FrameBuffer(1, 1)
        buffer.write(np.array([[[2.0, 1.0, 0.5]]]))
        assert buffer.tone_map(exposure=4.0)[0, 0].tolist() == [127, 63, 31]

    def test_matches_radiance_to_rgb(self, rng):
        """Test the kernel agrees with Radiance.to_rgb on exactly representable values."""
        from src.lumen.core.framebuffer import FrameBuffer
        from src.lumen.core.radiance import Radiance

        buffer = FrameBuffer(5, 1)
        values = rng.integers(0, 1024, size=(1, 5, 3)) / 512.0
        buffer.write(values)
        pixels = buffer.tone_map()
        for x in range(5):
            expected = Radiance(*values[0, x]).to_rgb()
            assert tuple(pixels[0, x].tolist()) == expected

    @pytest.mark.parametrize("exposure", [0.0, -2.0])
    def test_invalid_exposure(self, exposure):
        """Test non-positive exposure raises."""
        from src.lumen.core.framebuffer import FrameBuffer

        with pytest.raises(ValueError, match="Exposure"):
            FrameBuffer(1, 1).tone_map(exposure=exposure)

    def test_very_bright_values_saturate(self):
        """Test radiance far beyond the i32 range still maps to full brightness."""
        from src.lumen.core.framebuffer import FrameBuffer
        from src.lumen.core.radiance import Radiance

        buffer = FrameBuffer(2, 1)
        buffer.write(np.array([[[1e8, 1e8, 1e8], [1e12, 5.0, 0.0]]]))
        pixels = buffer.tone_map(exposure=1.0)

        assert pixels[0, 0].tolist() == [255, 255, 255]
        assert pixels[0, 1].tolist() == [255, 255, 0]
        assert tuple(pixels[0, 1].tolist()) == Radiance(1e12, 5.0, 0.0).to_rgb()

    def test_kernel_annotations_evaluated_eagerly(self):
        """Test the kernel module does not postpone annotations, which Taichi cannot resolve."""
        import __future__

        from src.lumen.core import framebuffer

        assert getattr(framebuffer, "annotations", None) is not __future__.annotations
