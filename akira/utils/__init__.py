from .cancel import CancelToken
from .errors import (
    AkiraError,
    RequestError,
    InvalidRequest,
    ImageReadError,
    ImageEngineError,
    ExecutorShutdown,
    TransformError,
    InvalidSizeToken,
    DecodeFailed,
    ConvertFailed,
    ResizeFailed,
    EncodeFailed,
    TransformCancelled,
)
from .route_utils import ensure_unique_route_names, simplify_operation_ids
from .output_format import OutputFormat
