# akira/utils/errors.py
from fastapi import status


class AkiraError(Exception):
    """Base class for every error raised by the service."""


class RequestError(AkiraError):
    """
    Request-level failure. Raised before any transform job is dispatched and
    rendered as ``{"message": ..., "error": true}`` with ``status_code``.
    """
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(RequestError):
    status_code = status.HTTP_400_BAD_REQUEST


class ImageReadError(RequestError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ImageEngineError(AkiraError):
    """Raised by an image engine binding when the underlying library fails."""


class TransformError(AkiraError):
    """Failure of a single size job. Never aborts sibling jobs."""
    kind: str = "transform_failed"

    def __init__(self, token: str, reason: str = ""):
        self.token = token
        self.reason = reason
        message = f"{self.kind} for size {token!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidSizeToken(TransformError):
    kind = "invalid_size"


class DecodeFailed(TransformError):
    kind = "decode_failed"


class ConvertFailed(TransformError):
    kind = "convert_failed"


class ResizeFailed(TransformError):
    kind = "resize_failed"


class EncodeFailed(TransformError):
    kind = "encode_failed"


class TransformCancelled(TransformError):
    kind = "cancelled"


class ExecutorShutdown(AkiraError):
    """The transform executor stopped before a submitted job could run."""
