# akira/services/size_parser.py
import re

from pydantic import ValidationError

from akira.core import settings
from akira.models import Dimensions
from akira.utils import InvalidSizeToken

_INTEGER = re.compile(r"[+-]?\d+")


def split_sizes(raw: str, delimiter: str = ";") -> list[str]:
    """
    Split ``"64x64;128x128;;512x512"`` into its tokens, blanks included.

    Tokens are not validated here; each one is parsed by its own job so a
    malformed token only costs that job.
    """
    return raw.split(delimiter)


def is_blank(token: str) -> bool:
    return token == ""


def _parse_side(token: str, part: str, name: str, max_dimension: int) -> int:
    if not _INTEGER.fullmatch(part):
        raise InvalidSizeToken(token, f"{name} {part!r} is not a number")
    value = int(part)
    if value > max_dimension:
        raise InvalidSizeToken(token, f"{name} {value} exceeds the maximum of {max_dimension}")
    return value


def parse_dimensions(token: str, max_dimension: int | None = None) -> Dimensions:
    """
    Parse ``"<width>x<height>"`` into :class:`Dimensions`.

    :param token: raw size token, echoed back in any error
    :param max_dimension: upper bound for either side, defaults to ``settings.MAX_DIMENSION``
    :raises InvalidSizeToken: on a missing separator, non-numeric or non-positive sides
    """
    if max_dimension is None:
        max_dimension = settings.MAX_DIMENSION

    width_part, sep, height_part = token.partition("x")
    if not sep:
        raise InvalidSizeToken(token, "expected <width>x<height>")

    width = _parse_side(token, width_part, "width", max_dimension)
    height = _parse_side(token, height_part, "height", max_dimension)
    try:
        return Dimensions(width=width, height=height)
    except ValidationError:
        raise InvalidSizeToken(token, "width and height must be positive") from None
