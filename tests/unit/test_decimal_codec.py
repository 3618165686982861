"""
Tests for DecimalCodec

Checks:
1. US and EU separator conventions give the same decimal
2. max_places caps the fractional region
3. Mixed and stray separators
4. format_decimal agrees with extract_decimal on the meaning of scale
"""

import pytest

from xsdkit.core.math import (
    AUTODETECT_PLACES,
    DecimalExtraction,
    extract_decimal,
    format_decimal,
)


CURRENCY_INPUTS = ["1800.25", "1800,25", "$1,800.25", "1,800.25 USD", "€ 1.800,25", "1.800,25 EUR"]
THREE_PLACE_INPUTS = ["180.025", "180,025.", ".180,025"]
MIXED_INPUTS = ["180.025", "180,.025.", ".180 025"]


def assert_extraction(text: str, places: int, expected: tuple) -> None:
    display, mantissa, scale = extract_decimal(text, places)
    assert (display, mantissa, scale) == expected
    assert format_decimal(mantissa, scale) == display


# =============================================================================
# EXTRACTION
# =============================================================================


class TestExtractCurrency:
    """Currency strings in both separator conventions"""

    @pytest.mark.parametrize("text", CURRENCY_INPUTS)
    def test_autodetect(self, text: str) -> None:
        """Closest separator to the end is the decimal point"""
        assert_extraction(text, AUTODETECT_PLACES, ("1800.25", 180025, 2))

    @pytest.mark.parametrize("text", CURRENCY_INPUTS)
    def test_two_places(self, text: str) -> None:
        assert_extraction(text, 2, ("1800.25", 180025, 2))

    @pytest.mark.parametrize("text", CURRENCY_INPUTS)
    def test_one_place_drops_separators(self, text: str) -> None:
        """Two fractional digits exceed the budget: no decimal point"""
        assert_extraction(text, 1, ("180025", 180025, 0))

    def test_us_and_eu_agree(self) -> None:
        assert tuple(extract_decimal("1,800.25")) == ("1800.25", 180025, 2)
        assert tuple(extract_decimal("1.800,25")) == ("1800.25", 180025, 2)


class TestExtractThreePlaces:
    """Three fractional digits and stray separators"""

    @pytest.mark.parametrize("text", THREE_PLACE_INPUTS)
    def test_autodetect(self, text: str) -> None:
        """Trailing separator before any digit is skipped"""
        assert_extraction(text, AUTODETECT_PLACES, ("180.025", 180025, 3))

    @pytest.mark.parametrize("text", THREE_PLACE_INPUTS)
    def test_two_places(self, text: str) -> None:
        assert_extraction(text, 2, ("180025", 180025, 0))

    @pytest.mark.parametrize("text", THREE_PLACE_INPUTS)
    def test_three_places(self, text: str) -> None:
        assert_extraction(text, 3, ("180.025", 180025, 3))

    @pytest.mark.parametrize("text", MIXED_INPUTS)
    def test_mixed_separators_two_places(self, text: str) -> None:
        assert_extraction(text, 2, ("180025", 180025, 0))


class TestExtractEdgeCases:
    """Inputs without separators, digits or fraction budget"""

    def test_no_separator(self) -> None:
        assert tuple(extract_decimal("abc 1 2 3")) == ("123", 123, 0)

    def test_empty_input(self) -> None:
        assert tuple(extract_decimal("")) == ("", 0, 0)

    def test_no_digits(self) -> None:
        """Malformed input is not an error"""
        assert tuple(extract_decimal("n/a, ., ,")) == ("", 0, 0)

    @pytest.mark.parametrize("text", CURRENCY_INPUTS + THREE_PLACE_INPUTS + ["1.2.3,4,5", "7"])
    def test_zero_places_keeps_every_digit(self, text: str) -> None:
        digits = "".join(c for c in text if c.isdigit())
        display, mantissa, scale = extract_decimal(text, 0)
        assert scale == 0
        assert display == digits
        assert mantissa == int(digits)

    def test_only_first_separator_from_right_is_decimal_point(self) -> None:
        assert tuple(extract_decimal("1.234.567,891")) == ("1234567.891", 1234567891, 3)
        assert tuple(extract_decimal("1,234,567.8")) == ("1234567.8", 12345678, 1)

    def test_leading_decimal_point(self) -> None:
        assert tuple(extract_decimal(".25")) == (".25", 25, 2)

    def test_large_values_are_exact(self) -> None:
        display, mantissa, scale = extract_decimal("123,456,789,012,345,678.99")
        assert display == "123456789012345678.99"
        assert mantissa == 12345678901234567899
        assert scale == 2

    def test_result_type(self) -> None:
        result = extract_decimal("1,5")
        assert isinstance(result, DecimalExtraction)
        assert result.display == "1.5"
        assert result.mantissa == 15
        assert result.scale == 1


# =============================================================================
# FORMATTING
# =============================================================================


class TestFormatDecimal:
    """format_decimal"""

    @pytest.mark.parametrize("scale", [0, 1, 2, 5])
    def test_zero_is_always_zero(self, scale: int) -> None:
        assert format_decimal(0, scale) == "0"

    def test_basic(self) -> None:
        assert format_decimal(180025, 2) == "1800.25"
        assert format_decimal(180025, 0) == "180025"
        assert format_decimal(15, 1) == "1.5"

    def test_scale_equal_to_digit_count(self) -> None:
        """Point lands before the most significant digit, no leading zero"""
        assert format_decimal(25, 2) == ".25"

    def test_scale_beyond_digit_count_is_not_padded(self) -> None:
        assert format_decimal(5, 3) == "5"

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be >= 0"):
            format_decimal(-1, 0)
        with pytest.raises(ValueError, match="must be >= 0"):
            format_decimal(1, -1)


class TestRoundTrip:
    """format_decimal(extract_decimal(s)) reproduces the display string"""

    @pytest.mark.parametrize("places", [-1, 0, 1, 2, 3])
    @pytest.mark.parametrize(
        "text",
        CURRENCY_INPUTS + THREE_PLACE_INPUTS + MIXED_INPUTS + ["42", "9.99", "1 000 000,5"],
    )
    def test_round_trip(self, text: str, places: int) -> None:
        display, mantissa, scale = extract_decimal(text, places)
        assert format_decimal(mantissa, scale) == display
