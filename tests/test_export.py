"""Tests for PNG export.

These tests do not touch Taichi.
"""

import os
import tempfile

import numpy as np
import pytest
from PIL import Image as PILImage


class TestImageToUint8:
    """Tests for quantisation of float images."""

    def test_output_type_and_shape(self):
        from toy_raytracer.output.export import image_to_uint8

        image = np.random.rand(4, 5, 3).astype(np.float32)
        result = image_to_uint8(image)

        assert result.dtype == np.uint8
        assert result.shape == (4, 5, 3)

    def test_rounds_half_up(self):
        from toy_raytracer.output.export import image_to_uint8

        image = np.array([[[0.0, 0.5 / 255.0, 1.0]]])
        assert image_to_uint8(image).tolist() == [[[0, 1, 255]]]

    def test_clamps_out_of_range_values(self):
        from toy_raytracer.output.export import image_to_uint8

        image = np.array([[[-0.5, 1.5, 0.25]]])
        assert image_to_uint8(image).tolist() == [[[0, 255, 64]]]


class TestWritePng:
    """Tests for write_png and read_png."""

    def test_write_and_read_back(self):
        from toy_raytracer.output.export import read_png, write_png

        width, height = 4, 3
        pixels = bytes(range(width * height * 3))

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            filepath = f.name

        try:
            write_png(filepath, width, height, pixels)

            img = PILImage.open(filepath)
            assert img.size == (width, height)
            assert img.mode == "RGB"
            # Top row first
            assert img.getpixel((0, 0)) == (0, 1, 2)
            assert img.getpixel((1, 0)) == (3, 4, 5)
            img.close()

            assert read_png(filepath) == (width, height, pixels)
        finally:
            if os.path.exists(filepath):
                os.remove(filepath)

    def test_accepts_path_objects(self, tmp_path):
        from toy_raytracer.output.export import write_png

        output = tmp_path / "black.png"
        write_png(output, 2, 2, bytes(12))
        assert output.exists()

    def test_length_mismatch(self, tmp_path):
        from toy_raytracer.output.export import write_png

        with pytest.raises(ValueError, match="expected 12"):
            write_png(tmp_path / "short.png", 2, 2, bytes(11))
        assert not (tmp_path / "short.png").exists()

    def test_invalid_dimensions(self, tmp_path):
        from toy_raytracer.output.export import write_png

        with pytest.raises(ValueError, match="positive"):
            write_png(tmp_path / "empty.png", 0, 2, b"")

    def test_unwritable_path(self, tmp_path):
        from toy_raytracer.output.export import ImageExportError, write_png

        missing_dir = tmp_path / "does-not-exist" / "out.png"
        with pytest.raises(ImageExportError):
            write_png(missing_dir, 2, 2, bytes(12))

    def test_read_missing_file(self, tmp_path):
        from toy_raytracer.output.export import ImageExportError, read_png

        with pytest.raises(ImageExportError):
            read_png(tmp_path / "missing.png")

    def test_rendered_image_round_trip(self, tmp_path):
        """A quantised float image survives encoding unchanged."""
        from toy_raytracer.output.export import image_to_uint8, read_png, write_png

        image = np.zeros((8, 16, 3), dtype=np.float32)
        image[:, :, 0] = np.linspace(0.0, 1.0, 16)
        image[:, :, 2] = 1.0
        pixels = image_to_uint8(image).tobytes()

        write_png(tmp_path / "gradient.png", 16, 8, pixels)
        width, height, data = read_png(tmp_path / "gradient.png")

        assert (width, height) == (16, 8)
        decoded = np.frombuffer(data, dtype=np.uint8).reshape(8, 16, 3)
        assert decoded[0, 0].tolist() == [0, 0, 255]
        assert decoded[0, -1].tolist() == [255, 0, 255]
