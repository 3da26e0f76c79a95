# akira/services/opencv_engine.py
from typing import Tuple

import cv2
import numpy as np

from akira.utils import ImageEngineError, OutputFormat
from .image_engine import ImageEngine


class OpenCVEngine(ImageEngine):
    """
    OpenCV binding. Images are ``np.ndarray`` in BGR(A) channel order, as
    returned by ``cv2.imdecode``.
    """
    name = "opencv"

    def decode(self, data: bytes) -> np.ndarray:
        buffer = np.frombuffer(data, np.uint8)
        try:
            img = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
        except cv2.error as e:
            raise ImageEngineError(f"OpenCV cannot decode image: {e}") from e
        if img is None:
            raise ImageEngineError("OpenCV cannot decode image")
        return img

    def natural_dimensions(self, image: np.ndarray) -> Tuple[int, int]:
        h, w = image.shape[:2]
        return w, h

    def convert_format(self, image: np.ndarray, output_format: OutputFormat) -> np.ndarray:
        try:
            if image.dtype == np.uint16:
                # 16-bit PNG/TIFF sources
                image = cv2.convertScaleAbs(image, alpha=255.0 / 65535.0)
            if image.ndim == 3 and image.shape[2] == 4 and output_format is OutputFormat.JPEG:
                # JPEG has no alpha channel, flatten onto white
                alpha = image[:, :, 3:4].astype(np.float32) / 255.0
                bgr = image[:, :, :3].astype(np.float32)
                flat = bgr * alpha + 255.0 * (1.0 - alpha)
                return np.clip(flat, 0, 255).round().astype(np.uint8)
            return image
        except cv2.error as e:
            raise ImageEngineError(f"OpenCV cannot convert image to {output_format.value}: {e}") from e

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        return self._resample(image, width, height, cv2.INTER_AREA)

    def enlarge(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        return self._resample(image, width, height, cv2.INTER_CUBIC)

    @staticmethod
    def _resample(image: np.ndarray, width: int, height: int, interpolation: int) -> np.ndarray:
        try:
            return cv2.resize(image, (width, height), interpolation=interpolation)
        except cv2.error as e:
            raise ImageEngineError(f"OpenCV cannot resample to {width}x{height}: {e}") from e

    def encode_with_quality(self, image: np.ndarray, output_format: OutputFormat, quality: int) -> bytes:
        if output_format is OutputFormat.JPEG:
            params = [cv2.IMWRITE_JPEG_QUALITY, quality]
        else:
            # libwebp through OpenCV takes 1-100, anything above 100 means lossless
            params = [cv2.IMWRITE_WEBP_QUALITY, max(1, quality)]
        try:
            ok, encoded = cv2.imencode(output_format.extension, image, params)
        except cv2.error as e:
            raise ImageEngineError(f"OpenCV cannot encode {output_format.value}: {e}") from e
        if not ok:
            raise ImageEngineError(f"OpenCV cannot encode {output_format.value}")
        return encoded.tobytes()
