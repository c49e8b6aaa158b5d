"""Tests for the row-parallel render driver.

Tests cover:
- Output buffer layout
- Determinism for a fixed seed
- Image orientation (row 0 at the top)
- Progress reporting
- Settings validation
"""

import numpy as np
import pytest


def _settings(**overrides):
    from toy_raytracer.config import RenderSettings

    params = dict(width=24, height=16, samples_per_pixel=2, max_depth=5, seed=3, rows_per_batch=4)
    params.update(overrides)
    return RenderSettings(**params)


def _empty_scene():
    from toy_raytracer.camera import SimpleCamera
    from toy_raytracer.scene.manager import Scene

    return SimpleCamera(aspect_ratio=1.5), Scene()


class TestRenderer:
    """Tests for Renderer."""

    def test_pixel_buffer_layout(self):
        from toy_raytracer.core.render import Renderer

        camera, scene = _empty_scene()
        renderer = Renderer(_settings())
        pixels = renderer.render(camera, scene)

        assert isinstance(pixels, bytes)
        assert len(pixels) == 24 * 16 * 3
        assert renderer.get_image_numpy().shape == (16, 24, 3)

    def test_sky_is_bluer_at_the_top(self):
        """Row 0 is the top of the image, where the sky is bluest."""
        from toy_raytracer.core.render import Renderer

        camera, scene = _empty_scene()
        renderer = Renderer(_settings())
        renderer.render(camera, scene)
        image = renderer.get_image_uint8().astype(int)

        top, bottom = image[0], image[-1]
        assert np.all(top[:, 2] == 255)
        assert np.all(bottom[:, 2] == 255)
        assert top[:, 0].mean() < bottom[:, 0].mean()

    def test_values_are_gamma_corrected(self):
        """Stored colors are the square root of the averaged radiance."""
        from toy_raytracer.core.render import Renderer

        camera, scene = _empty_scene()
        renderer = Renderer(_settings())
        renderer.render(camera, scene)
        image = renderer.get_image_numpy()

        assert np.all(image >= 0.0)
        assert np.all(image <= 1.0)
        # Linear sky red never drops below 0.5
        assert image[..., 0].min() >= np.sqrt(0.5) - 1e-5

    def test_same_seed_same_image(self):
        from toy_raytracer.core.render import Renderer
        from toy_raytracer.scene.presets import create_scene

        preset = create_scene("fuzzy-metal", 1.5)
        first = Renderer(_settings(seed=99)).render(preset.camera, preset.scene, preset.integrator)
        second = Renderer(_settings(seed=99, rows_per_batch=7)).render(
            preset.camera, preset.scene, preset.integrator
        )
        assert first == second

    def test_different_seed_different_image(self):
        from toy_raytracer.core.render import Renderer
        from toy_raytracer.scene.presets import create_scene

        preset = create_scene("fuzzy-metal", 1.5)
        first = Renderer(_settings(seed=1)).render(preset.camera, preset.scene, preset.integrator)
        second = Renderer(_settings(seed=2)).render(preset.camera, preset.scene, preset.integrator)
        assert first != second

    def test_zero_depth_renders_black(self):
        from toy_raytracer.core.render import Renderer

        camera, scene = _empty_scene()
        pixels = Renderer(_settings(max_depth=0)).render(camera, scene)
        assert pixels == bytes(24 * 16 * 3)

    def test_zero_depth_renders_black_with_spheres(self):
        from toy_raytracer.core.render import Renderer
        from toy_raytracer.scene.presets import create_scene

        preset = create_scene("shiny-metal", 1.5)
        pixels = Renderer(_settings(max_depth=0)).render(
            preset.camera, preset.scene, preset.integrator
        )
        assert pixels == bytes(24 * 16 * 3)

    def test_progress_callback(self):
        from toy_raytracer.core.render import Renderer

        camera, scene = _empty_scene()
        updates = []
        renderer = Renderer(_settings(rows_per_batch=5))
        renderer.render(camera, scene, callback=lambda done, total: updates.append((done, total)))

        assert updates == [(5, 16), (10, 16), (15, 16), (16, 16)]
        assert renderer.rows_done == 16

    def test_render_progressive(self):
        from toy_raytracer.core.render import Renderer

        camera, scene = _empty_scene()
        renderer = Renderer(_settings(rows_per_batch=8))
        progress = list(renderer.render_progressive(camera, scene))

        assert progress == [(8, 16), (16, 16)]
        assert len(renderer.get_pixel_bytes()) == 24 * 16 * 3

    def test_no_image_before_render(self):
        from toy_raytracer.core.render import Renderer

        renderer = Renderer(_settings())
        with pytest.raises(RuntimeError, match="No completed render"):
            renderer.get_image_numpy()

    def test_repr(self):
        from toy_raytracer.core.render import Renderer

        renderer = Renderer(_settings())
        assert repr(renderer) == (
            "Renderer(width=24, height=16, samples_per_pixel=2, max_depth=5)"
        )


class TestRenderSettings:
    """Tests for RenderSettings validation."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"width": 1},
            {"height": 1},
            {"width": 4096},
            {"height": 4096},
            {"samples_per_pixel": 0},
            {"max_depth": -1},
            {"rows_per_batch": 0},
        ],
    )
    def test_invalid_settings(self, overrides):
        with pytest.raises(ValueError):
            _settings(**overrides)

    def test_image_height_for(self):
        from toy_raytracer.config import image_height_for

        assert image_height_for(1200, 1.5) == 800
        assert image_height_for(300, 1.5) == 200
        assert image_height_for(100, 3.0) == 33
