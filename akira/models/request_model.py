# akira/models/request_model.py
from pydantic import BaseModel, Field


class ResizeRequest(BaseModel):
    image: bytes = Field(..., repr=False)
    sizes: list[str]
    quality: int = Field(100, ge=0, le=100, description="Encoder quality from 0 to 100")
