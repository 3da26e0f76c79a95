# akira/services/image_engine.py
from abc import ABC, abstractmethod
from typing import Any, Tuple

from akira.utils import OutputFormat


class ImageEngine(ABC):
    """
    Capabilities the resize pipeline needs from an image library.

    ``image`` values are opaque handles owned by the engine; the pipeline
    only passes them back into the same engine. Every method raises
    :class:`~akira.utils.ImageEngineError` when the library fails.
    Implementations must be safe to call from several threads at once as
    long as no handle is shared between calls.
    """
    name: str = "abstract"

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Decode an encoded image (JPEG, PNG, WebP, ...) into a handle."""

    @abstractmethod
    def natural_dimensions(self, image: Any) -> Tuple[int, int]:
        """Return ``(width, height)`` in pixels."""

    @abstractmethod
    def convert_format(self, image: Any, output_format: OutputFormat) -> Any:
        """Prepare the image for ``output_format`` (colour mode, alpha, metadata)."""

    @abstractmethod
    def resize(self, image: Any, width: int, height: int) -> Any:
        """Downscale to exactly ``width`` x ``height``."""

    @abstractmethod
    def enlarge(self, image: Any, width: int, height: int) -> Any:
        """Upscale to exactly ``width`` x ``height``."""

    @abstractmethod
    def encode_with_quality(self, image: Any, output_format: OutputFormat, quality: int) -> bytes:
        """Encode into ``output_format`` bytes using ``quality`` (0-100)."""


def get_engine(name: str) -> ImageEngine:
    """
    Build the engine registered under ``name``.

    :param name: ``"pillow"`` or ``"opencv"``
    :return: a new engine instance
    """
    if name == "pillow":
        from .pillow_engine import PillowEngine
        return PillowEngine()
    if name == "opencv":
        from .opencv_engine import OpenCVEngine
        return OpenCVEngine()
    raise ValueError(f"Unknown image engine: {name}")
