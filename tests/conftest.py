# tests/conftest.py
from __future__ import annotations

import base64
import threading
import time
from io import BytesIO

import pytest
from PIL import Image
from fastapi.testclient import TestClient

from akira.services.image_engine import ImageEngine
from akira.utils import ImageEngineError


def make_image_bytes(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    """Encode a gradient image so lossy encoders have real detail to work with."""
    img = Image.new(mode, (width, height))
    px = img.load()
    for x in range(width):
        for y in range(height):
            r = (x * 255) // max(width - 1, 1)
            g = (y * 255) // max(height - 1, 1)
            b = ((x * 7 + y * 13) * 37) % 256
            if mode == "RGBA":
                px[x, y] = (r, g, b, (x * 31) % 256)
            else:
                px[x, y] = (r, g, b)
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def decode_data_uri(uri: str) -> tuple[str, Image.Image]:
    header, _, payload = uri.partition(",")
    assert header.startswith("data:") and header.endswith(";base64")
    mime = header[len("data:"):-len(";base64")]
    img = Image.open(BytesIO(base64.b64decode(payload)))
    img.load()
    return mime, img


class RecordingEngine(ImageEngine):
    """
    Engine double that never touches pixels. Handles are dicts; every call
    is recorded so tests can assert which path a transform took.
    """
    name = "recording"

    def __init__(self, natural=(100, 100), fail_on: dict[str, set[int]] | None = None, delay: float = 0.0):
        self.natural = natural
        self.fail_on = fail_on or {}
        self.delay = delay
        self.calls: list[tuple] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def _maybe_fail(self, step: str, width: int | None = None):
        if width is not None and width in self.fail_on.get(step, set()):
            raise ImageEngineError(f"{step} refused width {width}")

    def decode(self, data: bytes):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            self._record("decode")
            if self.delay:
                time.sleep(self.delay)
            if data == b"corrupt":
                raise ImageEngineError("corrupt input")
            return {"size": self.natural}
        finally:
            with self._lock:
                self.active -= 1

    def natural_dimensions(self, image):
        return image["size"]

    def convert_format(self, image, output_format):
        self._record("convert_format", output_format)
        return dict(image, format=output_format)

    def resize(self, image, width, height):
        self._record("resize", width, height)
        self._maybe_fail("resize", width)
        return dict(image, size=(width, height))

    def enlarge(self, image, width, height):
        self._record("enlarge", width, height)
        self._maybe_fail("enlarge", width)
        return dict(image, size=(width, height))

    def encode_with_quality(self, image, output_format, quality):
        self._record("encode_with_quality", output_format, quality)
        w, h = image["size"]
        return f"{w}x{h}@{quality}".encode()

    def count(self, step: str) -> int:
        return sum(1 for call in self.calls if call[0] == step)


@pytest.fixture
def recording_engine():
    return RecordingEngine()


@pytest.fixture
def png_100():
    return make_image_bytes(100, 100)


@pytest.fixture
def client():
    from akira.core.register import register_app

    with TestClient(register_app()) as c:
        yield c
