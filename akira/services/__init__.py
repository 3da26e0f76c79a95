from .image_engine import ImageEngine, get_engine
from .size_parser import split_sizes, parse_dimensions, is_blank
from .transformer import transform, choose_operation, Operation
from .executor import TransformExecutor
from .dispatcher import Dispatcher, filter_results, failed_labels
from .resize_service import ResizeService
