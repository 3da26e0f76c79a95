import pytest

from akira.models import Dimensions
from akira.services.size_parser import is_blank, parse_dimensions, split_sizes
from akira.services.validation import (
    MISSING_SIZE,
    QUALITY_NOT_NUMBER,
    QUALITY_OUT_OF_RANGE,
    parse_quality,
    require_size,
)
from akira.utils import InvalidRequest, InvalidSizeToken, TransformError


class TestSplitSizes:
    """Splitting the size field into tokens."""

    def test_keeps_order_and_blanks(self):
        assert split_sizes("64x64;128x128;;512x512") == ["64x64", "128x128", "", "512x512"]

    def test_trailing_delimiter_yields_blank(self):
        assert split_sizes("5x5;20x20;") == ["5x5", "20x20", ""]

    def test_empty_field_is_one_blank_token(self):
        assert split_sizes("") == [""]

    def test_malformed_tokens_are_not_rejected_here(self):
        assert split_sizes("abc;10x10") == ["abc", "10x10"]

    def test_custom_delimiter(self):
        assert split_sizes("1x1,2x2", ",") == ["1x1", "2x2"]

    def test_is_blank(self):
        assert is_blank("")
        assert not is_blank("1x1")


class TestParseDimensions:
    """Parsing one token into width and height."""

    def test_valid_token(self):
        assert parse_dimensions("64x32") == Dimensions(width=64, height=32)

    def test_signed_plus_is_accepted(self):
        assert parse_dimensions("+8x8") == Dimensions(width=8, height=8)

    @pytest.mark.parametrize("token", ["abc", "64", "64x", "x64", "ax64", "64xb", "6 4x64", "64x64x64", "1.5x2"])
    def test_malformed_tokens(self, token):
        with pytest.raises(InvalidSizeToken) as exc_info:
            parse_dimensions(token)
        assert exc_info.value.token == token
        assert isinstance(exc_info.value, TransformError)

    @pytest.mark.parametrize("token", ["0x10", "10x0", "-5x10"])
    def test_non_positive_sides(self, token):
        with pytest.raises(InvalidSizeToken):
            parse_dimensions(token)

    def test_max_dimension(self):
        assert parse_dimensions("100x100", max_dimension=100).width == 100
        with pytest.raises(InvalidSizeToken):
            parse_dimensions("101x100", max_dimension=100)


class TestRequestValidation:
    """Request-level checks performed before any job runs."""

    def test_missing_size(self):
        with pytest.raises(InvalidRequest) as exc_info:
            require_size(None)
        assert exc_info.value.message == MISSING_SIZE
        assert exc_info.value.status_code == 400

    def test_empty_size_is_present(self):
        assert require_size("") == ""

    def test_quality_defaults_to_100(self):
        assert parse_quality(None) == 100

    @pytest.mark.parametrize("raw,expected", [("0", 0), ("100", 100), ("80", 80), ("+7", 7)])
    def test_quality_in_range(self, raw, expected):
        assert parse_quality(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "12.5", " 80"])
    def test_quality_not_a_number(self, raw):
        with pytest.raises(InvalidRequest) as exc_info:
            parse_quality(raw)
        assert exc_info.value.message == QUALITY_NOT_NUMBER

    @pytest.mark.parametrize("raw", ["150", "101", "-1"])
    def test_quality_out_of_range(self, raw):
        with pytest.raises(InvalidRequest) as exc_info:
            parse_quality(raw)
        assert exc_info.value.message == QUALITY_OUT_OF_RANGE
