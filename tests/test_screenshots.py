"""Tests for screenshot resizing and encoding."""

import pytest
from PIL import Image, UnidentifiedImageError

from generator.screenshots import resize_to_width, save_screenshots


class TestResizeToWidth:
    """Tests for resize_to_width."""

    def test_scales_down_keeping_aspect_ratio(self):
        """Test wide images are scaled to the max width."""
        image = Image.new("RGB", (1792, 1008))
        resized = resize_to_width(image, 800)
        assert resized.size == (800, 450)

    def test_never_upscales(self):
        """Test narrow images keep their size."""
        image = Image.new("RGB", (640, 360))
        assert resize_to_width(image, 1600).size == (640, 360)


class TestSaveScreenshots:
    """Tests for save_screenshots."""

    def test_writes_both_variants(self, tmp_path, png_screenshot):
        """Test the @2x and standard WebP files are written at their widths."""
        hires = tmp_path / "_images" / "site.dev@2x.webp"
        standard = tmp_path / "_images" / "site.dev.webp"

        save_screenshots(png_screenshot, hires, standard)

        with Image.open(hires) as img:
            assert img.format == "WEBP"
            assert img.size == (1600, 900)
        with Image.open(standard) as img:
            assert img.format == "WEBP"
            assert img.size == (800, 450)

    def test_custom_widths(self, tmp_path, png_screenshot):
        """Test widths can be overridden."""
        hires = tmp_path / "a.webp"
        standard = tmp_path / "b.webp"

        save_screenshots(png_screenshot, hires, standard, hires_width=400, standard_width=200)

        with Image.open(standard) as img:
            assert img.width == 200

    def test_invalid_buffer_raises(self, tmp_path):
        """Test non-image data raises and writes nothing."""
        hires = tmp_path / "a.webp"
        standard = tmp_path / "b.webp"

        with pytest.raises(UnidentifiedImageError):
            save_screenshots(b"not an image", hires, standard)

        assert not hires.exists()
        assert not standard.exists()
