# akira/services/resize_service.py
import time

from starlette.datastructures import UploadFile

from akira.logger import logger
from akira.models import ImageItem, ResizeRequest, ResizeResponse
from akira.utils import ImageReadError
from .dispatcher import Dispatcher, failed_labels, filter_results
from .size_parser import split_sizes
from .validation import parse_quality, require_size

READ_FAILED = "Something went wrong while trying to read the image."


class ResizeService:
    def __init__(
        self,
        dispatcher: Dispatcher,
        default_quality: int = 100,
        size_delimiter: str = ";",
        report_partial_failure: bool = False,
    ):
        self.dispatcher = dispatcher
        self.default_quality = default_quality
        self.size_delimiter = size_delimiter
        self.report_partial_failure = report_partial_failure

    async def build_request(self, image: UploadFile | None, size: str | None, quality: str | None) -> ResizeRequest:
        """
        Validate the form fields and read the upload.

        Raises InvalidRequest for a missing size or a bad quality, and
        ImageReadError when the image cannot be read. Nothing is dispatched
        before all three succeed.
        """
        size = require_size(size)
        parsed_quality = parse_quality(quality, self.default_quality)
        sizes = split_sizes(size, self.size_delimiter)

        if image is None:
            logger.error("[Resize] No image part in the request")
            raise ImageReadError(READ_FAILED)

        start = time.perf_counter()
        try:
            data = await image.read()
        except (OSError, RuntimeError) as e:
            logger.error(f"[Resize] Failed to read uploaded image {image.filename}: {e}")
            raise ImageReadError(READ_FAILED) from e
        finally:
            await image.close()
        logger.info(f"Read image in {time.perf_counter() - start:.3f}s")

        return ResizeRequest(image=data, sizes=sizes, quality=parsed_quality)

    async def resize(self, request: ResizeRequest) -> ResizeResponse:
        start = time.perf_counter()
        results = await self.dispatcher.resize_all(request.image, request.sizes, request.quality)

        images = [ImageItem(size=item.label, base64=item.payload) for item in filter_results(results)]
        response = ResizeResponse(images=images, error=False)

        failed = failed_labels(results)
        if failed:
            logger.warning(f"[Resize] Dropped sizes {failed}")
        if self.report_partial_failure:
            response.failed = failed
            response.error = bool(failed)

        logger.info(f"Request took {time.perf_counter() - start:.3f}s to complete. Sizes requested: {request.sizes}")
        return response

    async def handle(self, image: UploadFile | None, size: str | None, quality: str | None) -> ResizeResponse:
        request = await self.build_request(image, size, quality)
        return await self.resize(request)
