from .request_model import ResizeRequest
from .resize_model import Dimensions, ResultItem
from .response_model import MessageResponse, ImageItem, ResizeResponse
