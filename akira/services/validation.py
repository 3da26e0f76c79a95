# akira/services/validation.py
import re

from akira.utils import InvalidRequest

MISSING_SIZE = "You need to provide an image and a size."
QUALITY_NOT_NUMBER = "Quality must be a number."
QUALITY_OUT_OF_RANGE = "Quality must be between 0 and 100."

_INTEGER = re.compile(r"[+-]?\d+")


def require_size(size: str | None) -> str:
    """The size field must be present; an empty value is allowed and yields no images."""
    if size is None:
        raise InvalidRequest(MISSING_SIZE)
    return size


def parse_quality(raw: str | None, default: int = 100) -> int:
    """
    Parse the optional quality form field.

    :param raw: field value, ``None`` when the field was not sent
    :param default: quality used when the field is absent
    :return: quality in [0, 100]
    :raises InvalidRequest: non-numeric or out of range
    """
    if raw is None:
        return default
    if not _INTEGER.fullmatch(raw):
        raise InvalidRequest(QUALITY_NOT_NUMBER)
    quality = int(raw)
    if quality > 100 or quality < 0:
        raise InvalidRequest(QUALITY_OUT_OF_RANGE)
    return quality
