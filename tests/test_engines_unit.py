from io import BytesIO

import pytest
from PIL import Image

from akira.services.image_engine import ImageEngine, get_engine
from akira.services.opencv_engine import OpenCVEngine
from akira.services.pillow_engine import PillowEngine
from akira.utils import ImageEngineError, OutputFormat
from tests.conftest import make_image_bytes


@pytest.fixture(params=["pillow", "opencv"])
def engine(request) -> ImageEngine:
    return get_engine(request.param)


def _open(data: bytes) -> Image.Image:
    img = Image.open(BytesIO(data))
    img.load()
    return img


class TestEngineRegistry:
    def test_known_engines(self):
        assert isinstance(get_engine("pillow"), PillowEngine)
        assert isinstance(get_engine("opencv"), OpenCVEngine)

    def test_unknown_engine(self):
        with pytest.raises(ValueError):
            get_engine("imagemagick")


class TestEngineContract:
    """Both bindings behave the same through the capability interface."""

    def test_natural_dimensions(self, engine):
        image = engine.decode(make_image_bytes(30, 20))
        assert engine.natural_dimensions(image) == (30, 20)

    def test_decode_garbage(self, engine):
        with pytest.raises(ImageEngineError):
            engine.decode(b"\x00\x01 not an image")

    def test_decode_empty(self, engine):
        with pytest.raises(ImageEngineError):
            engine.decode(b"")

    def test_resize_is_exact(self, engine):
        image = engine.decode(make_image_bytes(100, 100))
        image = engine.resize(image, 50, 25)
        assert engine.natural_dimensions(image) == (50, 25)

    def test_enlarge_is_exact(self, engine):
        image = engine.decode(make_image_bytes(10, 10))
        image = engine.enlarge(image, 40, 60)
        assert engine.natural_dimensions(image) == (40, 60)

    @pytest.mark.parametrize("output_format", [OutputFormat.JPEG, OutputFormat.WEBP])
    def test_encode_roundtrip_dimensions(self, engine, output_format):
        image = engine.decode(make_image_bytes(32, 16))
        image = engine.convert_format(image, output_format)
        data = engine.encode_with_quality(image, output_format, 75)
        img = _open(data)
        assert img.format == output_format.pillow_name
        assert img.size == (32, 16)

    def test_alpha_is_flattened_for_jpeg(self, engine):
        image = engine.decode(make_image_bytes(16, 16, mode="RGBA"))
        image = engine.convert_format(image, OutputFormat.JPEG)
        img = _open(engine.encode_with_quality(image, OutputFormat.JPEG, 90))
        assert img.mode == "RGB"

    def test_quality_extremes(self, engine):
        image = engine.convert_format(engine.decode(make_image_bytes(48, 48)), OutputFormat.JPEG)
        low = engine.encode_with_quality(image, OutputFormat.JPEG, 0)
        high = engine.encode_with_quality(image, OutputFormat.JPEG, 100)
        assert len(low) < len(high)


class TestOutputFormat:
    def test_mime_types(self):
        assert OutputFormat.JPEG.mime_type == "image/jpeg"
        assert OutputFormat.WEBP.mime_type == "image/webp"

    def test_extensions(self):
        assert OutputFormat.JPEG.extension == ".jpg"
        assert OutputFormat.WEBP.extension == ".webp"
