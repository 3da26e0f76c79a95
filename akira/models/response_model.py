from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
    error: bool = False


class ImageItem(BaseModel):
    size: str
    base64: str


class ResizeResponse(BaseModel):
    images: list[ImageItem]
    error: bool = False
    failed: list[str] | None = None
