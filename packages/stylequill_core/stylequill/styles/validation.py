"""Value checks shared by styles and the markup writers."""

from __future__ import annotations

from ..config import DEFAULT_CONFIG, StyleConfig
from ..utils.color_utils import normalize_hex_color
from ..utils.enums import AlignmentType, BorderStyle, FormattingFlag, HighlightColor, ListType
from ..utils.exceptions import ErrorKind, StyleValidationError
from .properties import CharacterStyleProperties, ParagraphStyleProperties, TableStyleProperties

TABLE_ALIGNMENTS = ("left", "center", "right")


def check_non_negative(value: float, field_name: str, kind: ErrorKind = ErrorKind.INVALID_SPACING) -> float:
    if value < 0:
        raise StyleValidationError(
            f"{field_name} must not be negative (got {value})",
            kind=kind, field_name=field_name, field_value=value,
        )
    return value


def check_font_name(name: str) -> str:
    if not name or not str(name).strip():
        raise StyleValidationError(
            "Font name cannot be empty", kind=ErrorKind.INVALID_ARGUMENT,
            field_name="font_name", field_value=name,
        )
    return name


def check_font_size(size: float, config: StyleConfig = DEFAULT_CONFIG) -> float:
    if size <= 0 or size > config.max_font_size_pts:
        raise StyleValidationError(
            f"Font size must be in (0, {config.max_font_size_pts:g}] points (got {size})",
            kind=ErrorKind.INVALID_FONT_SIZE, field_name="font_size_pts", field_value=size,
        )
    return size


def check_line_spacing(value: float) -> float:
    if value <= 0:
        raise StyleValidationError(
            f"Line spacing must be positive (got {value})",
            kind=ErrorKind.INVALID_SPACING, field_name="line_spacing", field_value=value,
        )
    return value


def check_list_level(level: int, config: StyleConfig = DEFAULT_CONFIG) -> int:
    if level < 0 or level > config.max_list_level:
        raise StyleValidationError(
            f"List level must be between 0 and {config.max_list_level} (got {level})",
            kind=ErrorKind.INVALID_ARGUMENT, field_name="list_level", field_value=level,
        )
    return level


def check_table_width(width: float, config: StyleConfig = DEFAULT_CONFIG) -> float:
    if width <= 0 or width > config.max_table_width_pts:
        raise StyleValidationError(
            f"Table width must be in (0, {config.max_table_width_pts:g}] points (got {width})",
            kind=ErrorKind.INVALID_WIDTH, field_name="table_width_pts", field_value=width,
        )
    return width


def check_table_alignment(alignment: str) -> str:
    token = str(alignment).strip().lower()
    if token not in TABLE_ALIGNMENTS:
        raise StyleValidationError(
            f"Table alignment must be one of {', '.join(TABLE_ALIGNMENTS)} (got '{alignment}')",
            kind=ErrorKind.INVALID_ALIGNMENT, field_name="table_alignment", field_value=alignment,
        )
    return token


def check_border_style(style: str) -> str:
    token = str(style).strip().lower()
    try:
        return BorderStyle(token).value
    except ValueError as e:
        raise StyleValidationError(
            f"Unsupported border style '{style}'",
            kind=ErrorKind.INVALID_BORDER, field_name="border_style", field_value=style, cause=e,
        ) from e


def check_border_width(width: float, config: StyleConfig = DEFAULT_CONFIG) -> float:
    if width < 0 or width > config.max_border_width_pts:
        raise StyleValidationError(
            f"Border width must be between 0 and {config.max_border_width_pts:g} points (got {width})",
            kind=ErrorKind.INVALID_BORDER, field_name="border_width_pts", field_value=width,
        )
    return width


def check_enum(value, enum_type, field_name: str, kind: ErrorKind):
    if not isinstance(value, enum_type):
        raise StyleValidationError(
            f"{field_name} must be a {enum_type.__name__} (got {value!r})",
            kind=kind, field_name=field_name, field_value=value,
        )
    return value


def validate_paragraph_properties(props: ParagraphStyleProperties,
                                  config: StyleConfig = DEFAULT_CONFIG) -> ParagraphStyleProperties:
    """Check every set field and return a normalized copy."""
    if props.alignment is not None:
        check_enum(props.alignment, AlignmentType, "alignment", ErrorKind.INVALID_ALIGNMENT)
    if props.space_before_pts is not None:
        check_non_negative(props.space_before_pts, "space_before_pts")
    if props.space_after_pts is not None:
        check_non_negative(props.space_after_pts, "space_after_pts")
    if props.line_spacing is not None:
        check_line_spacing(props.line_spacing)
    if props.left_indent_pts is not None:
        check_non_negative(props.left_indent_pts, "left_indent_pts")
    if props.right_indent_pts is not None:
        check_non_negative(props.right_indent_pts, "right_indent_pts")
    if props.list_type is not None:
        check_enum(props.list_type, ListType, "list_type", ErrorKind.INVALID_ARGUMENT)
    if props.list_level is not None:
        check_list_level(props.list_level, config)
    return props.copy()


def validate_character_properties(props: CharacterStyleProperties,
                                  config: StyleConfig = DEFAULT_CONFIG) -> CharacterStyleProperties:
    """Check every set field and return a copy with the colour normalized."""
    result = props.copy()
    if props.font_name is not None:
        check_font_name(props.font_name)
    if props.font_size_pts is not None:
        check_font_size(props.font_size_pts, config)
    if props.font_color_hex is not None:
        result.font_color_hex = normalize_hex_color(props.font_color_hex, "font_color_hex")
    if props.highlight_color is not None:
        check_enum(props.highlight_color, HighlightColor, "highlight_color", ErrorKind.INVALID_ARGUMENT)
    if props.formatting_flags is not None:
        result.formatting_flags = FormattingFlag(int(props.formatting_flags))
    return result


def validate_table_properties(props: TableStyleProperties,
                              config: StyleConfig = DEFAULT_CONFIG) -> TableStyleProperties:
    """Check every set field and return a normalized copy."""
    result = props.copy()
    if props.border_style is not None:
        result.border_style = check_border_style(props.border_style)
    if props.border_width_pts is not None:
        check_border_width(props.border_width_pts, config)
    if props.border_color_hex is not None:
        result.border_color_hex = normalize_hex_color(props.border_color_hex, "border_color_hex")
    if props.cell_padding_pts is not None:
        check_non_negative(props.cell_padding_pts, "cell_padding_pts", ErrorKind.INVALID_MARGIN)
    if props.table_width_pts is not None:
        check_table_width(props.table_width_pts, config)
    if props.table_alignment is not None:
        result.table_alignment = check_table_alignment(props.table_alignment)
    return result
