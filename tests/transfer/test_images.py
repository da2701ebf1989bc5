"""Unit tests for transfer.images module."""

import pytest
from PIL import Image as PILImage

from media_flattener.transfer.images import convert_to_jpeg, resize_to_width, scaled_size


class TestScaledSize:
    """Tests for scaled_size() function."""

    def test_wider_image_scaled_down(self):
        assert scaled_size((4000, 3000), 1920) == (1920, 1440)

    def test_portrait_image(self):
        assert scaled_size((3000, 4000), 1500) == (1500, 2000)

    def test_narrower_image_not_upscaled(self):
        assert scaled_size((800, 600), 1920) == (800, 600)

    def test_exact_width_unchanged(self):
        assert scaled_size((1920, 1080), 1920) == (1920, 1080)

    def test_height_never_zero(self):
        assert scaled_size((10000, 1), 100) == (100, 1)


@pytest.mark.integration
class TestResizeToWidth:
    """Tests for resize_to_width() on real JPEG files."""

    def test_resizes_in_place(self, tmp_path):
        path = tmp_path / "wide.jpg"
        PILImage.new("RGB", (400, 300), color="red").save(path, "JPEG")

        assert resize_to_width(path, 200) is True

        with PILImage.open(path) as img:
            assert img.size == (200, 150)
            assert img.format == "JPEG"
        assert not (tmp_path / "wide.jpg.part").exists()

    def test_narrow_image_untouched(self, tmp_path):
        path = tmp_path / "narrow.jpg"
        PILImage.new("RGB", (100, 80), color="blue").save(path, "JPEG")
        before = path.read_bytes()

        assert resize_to_width(path, 200) is False
        assert path.read_bytes() == before

    def test_not_an_image_raises(self, tmp_path):
        path = tmp_path / "fake.jpg"
        path.write_text("not an image")

        with pytest.raises(OSError):
            resize_to_width(path, 200)
        assert path.read_text() == "not an image"


@pytest.mark.integration
class TestConvertToJpeg:
    """Tests for convert_to_jpeg() function."""

    def test_png_with_alpha_to_jpeg(self, tmp_path):
        source = tmp_path / "in.png"
        PILImage.new("RGBA", (50, 40), color=(0, 255, 0, 128)).save(source, "PNG")
        destination = tmp_path / "out.jpg"

        convert_to_jpeg(source, destination)

        with PILImage.open(destination) as img:
            assert img.format == "JPEG"
            assert img.mode == "RGB"
            assert img.size == (50, 40)

    def test_undecodable_source_leaves_nothing(self, tmp_path):
        source = tmp_path / "broken.heic"
        source.write_bytes(b"garbage bytes, not an image")
        destination = tmp_path / "out.jpg"

        with pytest.raises(OSError):
            convert_to_jpeg(source, destination)
        assert not destination.exists()
