import pytest

from gateway.core.tezos.amounts import (
    MAX_UINT256,
    format_units,
    parse_units,
    token_value_to_string,
)
from gateway.core.tezos.models import TokenValue


class TestFormatUnits:
    def test_pads_to_decimals(self):
        assert format_units(1_000_000, 6) == "1.000000"
        assert format_units(2_500_000, 6) == "2.500000"
        assert format_units(5, 6) == "0.000005"
        assert format_units(0, 6) == "0.000000"

    def test_zero_decimals_is_plain_integer(self):
        assert format_units(42, 0) == "42"

    def test_max_uint256(self):
        rendered = format_units(MAX_UINT256, 6)
        integer, fraction = rendered.split(".")
        assert len(fraction) == 6
        assert int(integer + fraction) == MAX_UINT256

    def test_token_value(self):
        assert token_value_to_string(TokenValue(value=123456789, decimals=8)) == "1.23456789"


class TestParseUnits:
    def test_scales_fraction(self):
        assert parse_units("1.5", 6) == 1_500_000

    def test_whole_number(self):
        assert parse_units("3", 8) == 300_000_000

    def test_large_value_keeps_precision(self):
        assert parse_units("123456789012345678901234567890.5", 18) == 123456789012345678901234567890500000000000000000

    def test_max_uint256_is_exact(self):
        assert parse_units(str(MAX_UINT256), 0) == MAX_UINT256
        assert parse_units(format_units(MAX_UINT256, 18), 18) == MAX_UINT256

    def test_long_amount_is_rejected_not_rounded(self):
        amount = "1" * 95 + ".123456789012345678"
        with pytest.raises(ValueError):
            parse_units(amount, 18)

    def test_above_max_uint256(self):
        with pytest.raises(ValueError):
            parse_units(str(MAX_UINT256 + 1), 0)

    def test_too_many_decimals(self):
        with pytest.raises(ValueError):
            parse_units("1.0000001", 6)

    @pytest.mark.parametrize("raw", ["abc", "", "NaN", "Infinity"])
    def test_rejects_non_numeric(self, raw):
        with pytest.raises(ValueError):
            parse_units(raw, 6)
