"""Unit tests for the full-frame renderer.

Tests cover:
- Parameter validation
- Seeded renders are reproducible, with and without worker processes
- Progress callbacks
- Rendering into a frame buffer
"""

import numpy as np
import pytest


@pytest.fixture
def small_renderer(unit_sphere_scene):
    """Factory for small renderers of the unit sphere scene."""
    from src.lumen.camera.pinhole import PinholeCamera
    from src.lumen.core.renderer import Renderer
    from src.lumen.core.tracer import Tracer, TracerConfig

    scene, _, _ = unit_sphere_scene
    tracer = Tracer(scene, TracerConfig(shadow_samples=2, gi_samples=2, max_depth=1))
    camera = PinholeCamera(lookfrom=(0.0, 1.0, 4.0), lookat=(0.0, 0.0, 0.0), vfov=40.0, aspect_ratio=1.5)

    def make(**kwargs):
        params = {"width": 9, "height": 6, "seed": 1234}
        params.update(kwargs)
        return Renderer(tracer, camera, **params)

    return make


class TestRendererValidation:
    """Tests for constructor checks."""

    @pytest.mark.parametrize("kwargs", [{"width": 0}, {"height": -1}, {"workers": 0}])
    def test_invalid_parameters(self, small_renderer, kwargs):
        """Test invalid sizes and worker counts raise."""
        with pytest.raises(ValueError):
            small_renderer(**kwargs)


class TestRendering:
    """Tests for render_array() and render()."""

    def test_shape_and_content(self, small_renderer):
        """Test the image shape and that the sphere is visible in the center."""
        image = small_renderer().render_array()
        assert image.shape == (6, 9, 3)
        assert np.all(image >= 0.0)
        assert np.any(image[2:4, 3:6] > 0.0)
        # Corner rays miss the sphere and see nothing
        assert np.all(image[0, 0] == 0.0)

    def test_seeded_render_reproducible(self, small_renderer):
        """Test two renders with the same seed are identical."""
        first = small_renderer().render_array()
        second = small_renderer().render_array()
        np.testing.assert_array_equal(first, second)

    def test_workers_match_serial(self, small_renderer):
        """Test a process pool produces exactly the serial image."""
        serial = small_renderer(workers=1).render_array()
        parallel = small_renderer(workers=2).render_array()
        np.testing.assert_array_equal(serial, parallel)

    def test_column_seeds(self, small_renderer):
        """Test one seed sequence is spawned per column."""
        seeds = small_renderer().column_seeds()
        assert len(seeds) == 9
        assert len({seed.spawn_key for seed in seeds}) == 9

    def test_render_pixel_matches_tracer(self, small_renderer, unit_sphere_scene):
        """Test render_pixel traces the camera's pixel ray."""
        renderer = small_renderer()
        ray = renderer.camera.get_ray_for_pixel(4, 3, 9, 6)
        expected = renderer.tracer.trace(ray, rng=np.random.default_rng(5))
        assert renderer.render_pixel(4, 3, rng=np.random.default_rng(5)) == expected

    @pytest.mark.parametrize("workers", [1, 2])
    def test_progress_callback(self, small_renderer, workers):
        """Test progress reports are increasing and end at the width."""
        calls = []
        small_renderer(workers=workers).render_array(callback=lambda done, total: calls.append((done, total)))

        assert calls
        assert all(total == 9 for _, total in calls)
        done = [d for d, _ in calls]
        assert done == sorted(done)
        assert done[-1] == 9

    def test_render_into_frame_buffer(self, small_renderer):
        """Test render() fills a frame buffer with the HDR image."""
        from src.lumen.core.framebuffer import FrameBuffer

        renderer = small_renderer()
        expected = renderer.render_array()
        frame = FrameBuffer(9, 6)
        result = renderer.render(frame)

        assert result is frame
        np.testing.assert_allclose(frame.to_numpy(), expected, rtol=1e-6)

    def test_render_wrong_frame_size(self, small_renderer):
        """Test a frame buffer of another size is rejected."""
        from src.lumen.core.framebuffer import FrameBuffer

        with pytest.raises(ValueError):
            small_renderer(width=2, height=2).render(FrameBuffer(3, 3))
