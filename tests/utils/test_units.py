"""
Tests for unit parsing and conversion helpers.
"""

import pytest

from stylequill.utils import (
    ErrorKind,
    StyleValidationError,
    format_value_with_unit,
    parse_percentage,
    parse_value_with_unit,
    points_to_twips,
    twips_to_points,
    points_to_half_points,
    points_to_eighths,
    line_spacing_to_ooxml,
    ooxml_to_line_spacing,
)


class TestParseValueWithUnit:
    """Test cases for length parsing."""

    @pytest.mark.parametrize("text, expected", [
        ("12pt", 12.0),
        ("14", 14.0),
        ("1in", 72.0),
        ("2.5cm", 70.875),
        ("10mm", 28.35),
        ("16px", 12.0),
        ("-3pt", -3.0),
        (" 8 pt ", 8.0),
    ])
    def test_units(self, text, expected):
        assert parse_value_with_unit(text) == pytest.approx(expected)

    def test_unit_is_case_insensitive(self):
        assert parse_value_with_unit("1IN") == pytest.approx(72.0)

    @pytest.mark.parametrize("text", ["", "   ", "pt", "abc"])
    def test_missing_number(self, text):
        with pytest.raises(StyleValidationError) as exc_info:
            parse_value_with_unit(text)
        assert exc_info.value.kind is ErrorKind.INVALID_UNIT

    def test_unknown_unit(self):
        with pytest.raises(StyleValidationError) as exc_info:
            parse_value_with_unit("12xyz")
        assert exc_info.value.kind is ErrorKind.INVALID_UNIT
        assert exc_info.value.field_value == "xyz"

    def test_malformed_number(self):
        with pytest.raises(StyleValidationError) as exc_info:
            parse_value_with_unit("1.2.3pt")
        assert isinstance(exc_info.value.cause, ValueError)


class TestFormatAndPercentage:
    """Test cases for formatting and percentages."""

    def test_format_default_unit(self):
        assert format_value_with_unit(12) == "12.0pt"

    def test_format_custom_unit(self):
        assert format_value_with_unit(2.54, "cm") == "2.5cm"

    def test_parse_percentage(self):
        assert parse_percentage("50%") == pytest.approx(0.5)
        assert parse_percentage("150%") == pytest.approx(1.5)

    @pytest.mark.parametrize("text", ["50", "", "%", "abc%"])
    def test_parse_percentage_invalid(self, text):
        with pytest.raises(StyleValidationError):
            parse_percentage(text)


class TestNativeUnits:
    """Test cases for WordprocessingML unit conversions."""

    def test_twips(self):
        assert points_to_twips(12) == 240
        assert twips_to_points(120) == 6.0

    def test_half_points_round(self):
        assert points_to_half_points(10.5) == 21
        assert points_to_half_points(11.26) == 23

    def test_eighths(self):
        assert points_to_eighths(1) == 8
        assert points_to_eighths(0.5) == 4

    def test_line_spacing(self):
        assert line_spacing_to_ooxml(1.5) == 360
        assert ooxml_to_line_spacing(276) == pytest.approx(1.15)
