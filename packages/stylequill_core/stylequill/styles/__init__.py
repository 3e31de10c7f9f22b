"""
Styles module: property bags, named styles, style sets and the style manager.
"""

from .properties import CharacterStyleProperties, ParagraphStyleProperties, TableStyleProperties
from .style import Style
from .style_set import StyleSet
from .style_cascade_engine import StyleCascadeEngine
from .style_manager import StyleManager, StyleApplicationReport

__all__ = [
    "ParagraphStyleProperties",
    "CharacterStyleProperties",
    "TableStyleProperties",
    "Style",
    "StyleSet",
    "StyleCascadeEngine",
    "StyleManager",
    "StyleApplicationReport",
]
