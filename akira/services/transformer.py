# akira/services/transformer.py
import base64
import time
from enum import Enum
from typing import Tuple

from akira.logger import logger
from akira.models import Dimensions, ResultItem
from akira.utils import (
    CancelToken,
    ConvertFailed,
    DecodeFailed,
    EncodeFailed,
    ImageEngineError,
    OutputFormat,
    ResizeFailed,
)
from .image_engine import ImageEngine
from .size_parser import is_blank, parse_dimensions


class Operation(str, Enum):
    DOWNSCALE = "downscale"
    ENLARGE = "enlarge"


def choose_operation(natural: Tuple[int, int], target: Dimensions) -> Operation:
    """
    Downscale when the source reaches the target on either axis, enlarge
    only when it is smaller on both.

    A source that is wider but shorter than the target (or the reverse) is
    therefore downscaled.
    """
    w0, h0 = natural
    if w0 >= target.width or h0 >= target.height:
        return Operation.DOWNSCALE
    return Operation.ENLARGE


def to_data_uri(data: bytes, output_format: OutputFormat) -> str:
    return f"data:{output_format.mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def transform(
    engine: ImageEngine,
    raw_image: bytes,
    token: str,
    quality: int,
    output_format: OutputFormat = OutputFormat.JPEG,
    cancel_token: CancelToken | None = None,
) -> ResultItem:
    """
    Produce one resized copy of ``raw_image`` for a single size token.

    Blocking; meant to run on an executor thread. The cancel token is
    checked between engine steps.

    Args:
        engine (ImageEngine): Image library binding.
        raw_image (bytes): Encoded source image, never mutated.
        token (str): Size token such as ``"128x128"``, or ``""``.
        quality (int): Encoder quality, 0-100.
        output_format (OutputFormat): Container of the result.
        cancel_token (CancelToken): Optional request cancellation flag.
    Returns:
        ResultItem labelled with ``token``; empty payload for a blank token.
    Raises:
        TransformError: one of InvalidSizeToken, DecodeFailed, ConvertFailed,
            ResizeFailed, EncodeFailed or TransformCancelled.
    """
    if is_blank(token):
        return ResultItem(label=token)

    cancel = cancel_token or CancelToken()
    target = parse_dimensions(token)

    cancel.raise_if_cancelled(token)
    try:
        image = engine.decode(raw_image)
    except ImageEngineError as e:
        raise DecodeFailed(token, str(e)) from e
    natural = engine.natural_dimensions(image)

    cancel.raise_if_cancelled(token)
    try:
        image = engine.convert_format(image, output_format)
    except ImageEngineError as e:
        raise ConvertFailed(token, str(e)) from e

    cancel.raise_if_cancelled(token)
    operation = choose_operation(natural, target)
    try:
        if operation is Operation.DOWNSCALE:
            image = engine.resize(image, target.width, target.height)
        else:
            image = engine.enlarge(image, target.width, target.height)
    except ImageEngineError as e:
        raise ResizeFailed(token, str(e)) from e
    logger.debug(f"[Transformer] {operation.value} {natural[0]}x{natural[1]} -> {target}")

    cancel.raise_if_cancelled(token)
    start = time.perf_counter()
    try:
        encoded = engine.encode_with_quality(image, output_format, quality)
    except ImageEngineError as e:
        raise EncodeFailed(token, str(e)) from e
    logger.debug(f"[Transformer] Encoded {token} as {output_format.value} q={quality} "
                 f"({len(encoded)} bytes) in {time.perf_counter() - start:.3f}s")

    return ResultItem(label=token, payload=to_data_uri(encoded, output_format))
