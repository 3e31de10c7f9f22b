"""
Utils module for the style system.

This module contains unit parsing, colour handling, XML helpers,
enumerations, exceptions and logging setup.
"""

from .units import (
    parse_value_with_unit,
    format_value_with_unit,
    parse_percentage,
    points_to_twips,
    twips_to_points,
    points_to_half_points,
    half_points_to_points,
    points_to_eighths,
    eighths_to_points,
    line_spacing_to_ooxml,
    ooxml_to_line_spacing,
)
from .color_utils import parse_color, is_hex_color, normalize_hex_color
from .logger import get_logger, setup_logging
from .enums import (
    StyleType,
    AlignmentType,
    ListType,
    HighlightColor,
    FormattingFlag,
    BorderStyle,
    BuiltInStyleCategory,
)
from .exceptions import (
    ErrorCategory,
    ErrorKind,
    DocumentError,
    ParsingError,
    StyleError,
    StyleNotFoundError,
    StyleAlreadyExistsError,
    StylePropertyError,
    StyleInheritanceCycleError,
    StyleDependencyError,
    StyleValidationError,
    StyleParseError,
    StyleApplicationError,
)

__all__ = [
    'parse_value_with_unit',
    'format_value_with_unit',
    'parse_percentage',
    'points_to_twips',
    'twips_to_points',
    'points_to_half_points',
    'half_points_to_points',
    'points_to_eighths',
    'eighths_to_points',
    'line_spacing_to_ooxml',
    'ooxml_to_line_spacing',
    'parse_color',
    'is_hex_color',
    'normalize_hex_color',
    'get_logger',
    'setup_logging',
    'StyleType',
    'AlignmentType',
    'ListType',
    'HighlightColor',
    'FormattingFlag',
    'BorderStyle',
    'BuiltInStyleCategory',
    'ErrorCategory',
    'ErrorKind',
    'DocumentError',
    'ParsingError',
    'StyleError',
    'StyleNotFoundError',
    'StyleAlreadyExistsError',
    'StylePropertyError',
    'StyleInheritanceCycleError',
    'StyleDependencyError',
    'StyleValidationError',
    'StyleParseError',
    'StyleApplicationError',
]
