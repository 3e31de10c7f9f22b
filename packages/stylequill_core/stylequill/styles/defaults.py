"""Built-in style library, grouped by category."""

from __future__ import annotations

from typing import Callable, Dict, List, TYPE_CHECKING

from ..utils.enums import AlignmentType, BuiltInStyleCategory, FormattingFlag
from .properties import CharacterStyleProperties, ParagraphStyleProperties

if TYPE_CHECKING:
    from .style_manager import StyleManager

HEADING_LEVELS = range(1, 7)

BUILT_IN_STYLE_NAMES: Dict[BuiltInStyleCategory, List[str]] = {
    BuiltInStyleCategory.HEADING: [f"Heading {level}" for level in HEADING_LEVELS],
    BuiltInStyleCategory.BODY_TEXT: ["Normal"],
    BuiltInStyleCategory.LIST: [],
    BuiltInStyleCategory.TABLE: [],
    BuiltInStyleCategory.TECHNICAL: ["Code"],
}


def heading_font_size(level: int) -> float:
    return 16.0 - (level - 1) * 2


def _load_heading_styles(manager: "StyleManager") -> None:
    font = manager.config.default_font
    for level in HEADING_LEVELS:
        style = manager.create_mixed_style(f"Heading {level}")
        style.set_paragraph_properties(ParagraphStyleProperties(
            alignment=AlignmentType.LEFT,
            space_before_pts=12.0,
            space_after_pts=6.0,
        ))
        style.set_character_properties(CharacterStyleProperties(
            font_name=font,
            font_size_pts=heading_font_size(level),
            formatting_flags=FormattingFlag.BOLD,
        ))
        style._mark_built_in()


def _load_body_text_styles(manager: "StyleManager") -> None:
    style = manager.create_mixed_style("Normal")
    style.set_paragraph_properties(ParagraphStyleProperties(
        alignment=AlignmentType.LEFT,
        space_after_pts=6.0,
    ))
    style.set_character_properties(CharacterStyleProperties(
        font_name=manager.config.default_font,
        font_size_pts=11.0,
    ))
    style._mark_built_in()


def _load_technical_styles(manager: "StyleManager") -> None:
    style = manager.create_character_style("Code")
    style.set_character_properties(CharacterStyleProperties(
        font_name=manager.config.code_font,
        font_size_pts=10.0,
        font_color_hex="333333",
    ))
    style._mark_built_in()


def _load_nothing(manager: "StyleManager") -> None:
    # LIST and TABLE categories ship no styles yet.
    return None


BUILT_IN_LOADERS: Dict[BuiltInStyleCategory, Callable[["StyleManager"], None]] = {
    BuiltInStyleCategory.HEADING: _load_heading_styles,
    BuiltInStyleCategory.BODY_TEXT: _load_body_text_styles,
    BuiltInStyleCategory.LIST: _load_nothing,
    BuiltInStyleCategory.TABLE: _load_nothing,
    BuiltInStyleCategory.TECHNICAL: _load_technical_styles,
}

BUILT_IN_ORDER = (
    BuiltInStyleCategory.HEADING,
    BuiltInStyleCategory.BODY_TEXT,
    BuiltInStyleCategory.LIST,
    BuiltInStyleCategory.TABLE,
    BuiltInStyleCategory.TECHNICAL,
)
