"""
Unit parsing and conversion for style values.

Handles length strings with units, percentages, and the native
WordprocessingML units (twips, half-points, eighths of a point, 240ths of a line).
"""

from typing import Dict, Tuple
import logging

from .exceptions import ErrorKind, StyleValidationError

logger = logging.getLogger(__name__)

# Points per unit. An empty unit means points.
UNIT_TO_POINTS: Dict[str, float] = {
    '': 1.0,
    'pt': 1.0,
    'px': 0.75,
    'in': 72.0,
    'cm': 28.35,
    'mm': 2.835,
}

TWIPS_PER_POINT = 20
HALF_POINTS_PER_POINT = 2
EIGHTHS_PER_POINT = 8
LINE_SPACING_UNIT = 240


def split_value_and_unit(text: str) -> Tuple[str, str]:
    """
    Split a length string into its numeric prefix and unit suffix.

    Args:
        text: Value such as ``"12pt"`` or ``"-0.5in"``

    Returns:
        Tuple of (number part, unit part), both stripped
    """
    text = text.strip()
    index = 0
    while index < len(text) and (text[index].isdigit() or text[index] in '.-'):
        index += 1
    return text[:index], text[index:].strip()


def parse_value_with_unit(text: str) -> float:
    """
    Parse a length with an optional unit and convert it to points.

    Args:
        text: Value such as ``"12pt"``, ``"1in"``, ``"2.5cm"`` or ``"14"``

    Returns:
        Value in points

    Raises:
        StyleValidationError: If the value is empty, has no number or uses an unknown unit
    """
    if text is None or not str(text).strip():
        raise StyleValidationError(
            "Empty value string", kind=ErrorKind.INVALID_UNIT,
            field_name='value', field_value=text,
            context={'operation': 'parse_value_with_unit'},
        )

    number_part, unit = split_value_and_unit(str(text))
    if not number_part:
        raise StyleValidationError(
            f"No numeric value found in '{text}'", kind=ErrorKind.INVALID_UNIT,
            field_name='value', field_value=text,
            context={'operation': 'parse_value_with_unit'},
        )

    try:
        number = float(number_part)
    except ValueError as e:
        raise StyleValidationError(
            f"Invalid numeric value in '{text}'", kind=ErrorKind.INVALID_UNIT,
            field_name='value', field_value=text,
            context={'operation': 'parse_value_with_unit'}, cause=e,
        ) from e

    unit = unit.lower()
    if unit not in UNIT_TO_POINTS:
        raise StyleValidationError(
            f"Unsupported unit '{unit}' in '{text}'", kind=ErrorKind.INVALID_UNIT,
            field_name='unit', field_value=unit,
            context={'operation': 'parse_value_with_unit'},
        )

    points = number * UNIT_TO_POINTS[unit]
    logger.debug(f"Parsed '{text}' -> {points}pt")
    return points


def format_value_with_unit(value: float, unit: str = 'pt') -> str:
    """Format a number with one decimal and a unit suffix, e.g. ``12.0pt``."""
    return f"{value:.1f}{unit}"


def parse_percentage(text: str) -> float:
    """
    Parse a percentage string into a fraction.

    Args:
        text: Value such as ``"50%"``

    Returns:
        Fraction, e.g. ``0.5``

    Raises:
        StyleValidationError: If the value is empty, lacks ``%`` or is not numeric
    """
    if text is None or not str(text).strip():
        raise StyleValidationError(
            "Empty percentage string", kind=ErrorKind.INVALID_UNIT,
            field_name='percentage', field_value=text,
            context={'operation': 'parse_percentage'},
        )
    text = str(text).strip()
    if not text.endswith('%'):
        raise StyleValidationError(
            f"Percentage must end with '%': '{text}'", kind=ErrorKind.INVALID_UNIT,
            field_name='percentage', field_value=text,
            context={'operation': 'parse_percentage'},
        )
    try:
        return float(text[:-1].strip()) / 100.0
    except ValueError as e:
        raise StyleValidationError(
            f"Invalid percentage value: '{text}'", kind=ErrorKind.INVALID_UNIT,
            field_name='percentage', field_value=text,
            context={'operation': 'parse_percentage'}, cause=e,
        ) from e


def points_to_twips(points: float) -> int:
    return int(round(points * TWIPS_PER_POINT))


def twips_to_points(twips: float) -> float:
    return float(twips) / TWIPS_PER_POINT


def points_to_half_points(points: float) -> int:
    return int(round(points * HALF_POINTS_PER_POINT))


def half_points_to_points(half_points: float) -> float:
    return float(half_points) / HALF_POINTS_PER_POINT


def points_to_eighths(points: float) -> int:
    return int(round(points * EIGHTHS_PER_POINT))


def eighths_to_points(eighths: float) -> float:
    return float(eighths) / EIGHTHS_PER_POINT


def line_spacing_to_ooxml(multiplier: float) -> int:
    """Convert a line-spacing multiplier (1.5) to ``w:line`` units (360)."""
    return int(round(multiplier * LINE_SPACING_UNIT))


def ooxml_to_line_spacing(value: float) -> float:
    return float(value) / LINE_SPACING_UNIT
