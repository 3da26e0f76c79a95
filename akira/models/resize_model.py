# akira/models/resize_model.py
from pydantic import BaseModel, ConfigDict, PositiveInt


class Dimensions(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: PositiveInt
    height: PositiveInt

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class ResultItem(BaseModel):
    """
    Outcome of one size job. ``payload`` is a data URI, or an empty string
    when the token was blank or the transform failed.
    """
    model_config = ConfigDict(frozen=True)

    label: str
    payload: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.payload)

    @property
    def failed(self) -> bool:
        return self.error is not None
