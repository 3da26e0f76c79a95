# akira/services/pillow_engine.py
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from akira.utils import ImageEngineError, OutputFormat
from .image_engine import ImageEngine

_ALPHA_MODES = ("RGBA", "LA", "P", "PA")


class PillowEngine(ImageEngine):
    name = "pillow"

    def decode(self, data: bytes) -> Image.Image:
        try:
            img = Image.open(BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageEngineError(f"Pillow cannot decode image: {e}") from e
        return img

    def natural_dimensions(self, image: Image.Image) -> Tuple[int, int]:
        return image.size

    def convert_format(self, image: Image.Image, output_format: OutputFormat) -> Image.Image:
        img = image
        try:
            if output_format is OutputFormat.JPEG:
                # JPEG has no alpha channel, flatten onto white
                if img.mode in _ALPHA_MODES:
                    img = img.convert("RGBA")
                    background = Image.new("RGB", img.size, (255, 255, 255))
                    background.paste(img, mask=img.getchannel("A"))
                    return background
                if img.mode not in ("RGB", "L"):
                    return img.convert("RGB")
                return img
            if img.mode not in ("RGB", "RGBA"):
                return img.convert("RGBA" if img.mode in _ALPHA_MODES else "RGB")
            return img
        except (OSError, ValueError) as e:
            raise ImageEngineError(f"Pillow cannot convert image to {output_format.value}: {e}") from e

    def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        return self._resample(image, width, height, Image.Resampling.LANCZOS)

    def enlarge(self, image: Image.Image, width: int, height: int) -> Image.Image:
        return self._resample(image, width, height, Image.Resampling.BICUBIC)

    @staticmethod
    def _resample(image: Image.Image, width: int, height: int, method) -> Image.Image:
        try:
            return image.resize((width, height), method)
        except (OSError, ValueError, MemoryError) as e:
            raise ImageEngineError(f"Pillow cannot resample to {width}x{height}: {e}") from e

    def encode_with_quality(self, image: Image.Image, output_format: OutputFormat, quality: int) -> bytes:
        buffer = BytesIO()
        try:
            image.save(buffer, format=output_format.pillow_name, quality=quality)
        except (OSError, ValueError, KeyError) as e:
            raise ImageEngineError(f"Pillow cannot encode {output_format.value}: {e}") from e
        return buffer.getvalue()
