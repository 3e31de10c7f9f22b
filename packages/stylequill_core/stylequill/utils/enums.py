"""Common enumerations used across the style system."""

from __future__ import annotations

from enum import Enum, IntFlag
from typing import Optional


class StyleType(str, Enum):
    """Style families a named style can target."""

    PARAGRAPH = "paragraph"
    CHARACTER = "character"
    TABLE = "table"
    NUMBERING = "numbering"
    MIXED = "mixed"

    @classmethod
    def parse(cls, value: str) -> Optional["StyleType"]:
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def ooxml_type(self) -> str:
        """Value written to ``w:style/@w:type``."""
        if self in (StyleType.CHARACTER, StyleType.TABLE):
            return self.value
        return StyleType.PARAGRAPH.value

    def accepts_paragraph(self) -> bool:
        return self in (StyleType.PARAGRAPH, StyleType.MIXED)

    def accepts_character(self) -> bool:
        return self in (StyleType.CHARACTER, StyleType.MIXED)

    def accepts_table(self) -> bool:
        return self in (StyleType.TABLE, StyleType.MIXED)


class AlignmentType(str, Enum):
    """Horizontal alignment modes; values are the ``w:jc`` tokens."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    BOTH = "both"

    @classmethod
    def parse(cls, value: str) -> Optional["AlignmentType"]:
        token = value.strip().lower()
        if token == "justify":
            return cls.BOTH
        if token == "start":
            return cls.LEFT
        if token == "end":
            return cls.RIGHT
        try:
            return cls(token)
        except ValueError:
            return None


class ListType(str, Enum):
    """List kinds a paragraph style can request."""

    NONE = "none"
    BULLET = "bullet"
    NUMBER = "number"

    @classmethod
    def parse(cls, value: str) -> Optional["ListType"]:
        token = value.strip().lower()
        aliases = {
            "none": cls.NONE,
            "bullet": cls.BULLET,
            "unordered": cls.BULLET,
            "number": cls.NUMBER,
            "numbered": cls.NUMBER,
            "ordered": cls.NUMBER,
            "decimal": cls.NUMBER,
        }
        return aliases.get(token)


class HighlightColor(str, Enum):
    """Text highlight colours; values are the ``w:highlight`` tokens."""

    NONE = "none"
    BLACK = "black"
    BLUE = "blue"
    CYAN = "cyan"
    GREEN = "green"
    MAGENTA = "magenta"
    RED = "red"
    YELLOW = "yellow"
    WHITE = "white"
    DARK_BLUE = "darkBlue"
    DARK_CYAN = "darkCyan"
    DARK_GREEN = "darkGreen"
    DARK_MAGENTA = "darkMagenta"
    DARK_RED = "darkRed"
    DARK_YELLOW = "darkYellow"
    DARK_GRAY = "darkGray"
    LIGHT_GRAY = "lightGray"

    @classmethod
    def parse(cls, value: str) -> Optional["HighlightColor"]:
        """Accept ``lightGray``, ``light-gray``, ``light_grey`` and friends."""
        token = value.strip().lower().replace("-", "").replace("_", "").replace("grey", "gray")
        for member in cls:
            if member.value.lower() == token:
                return member
        return None


class FormattingFlag(IntFlag):
    """Bit set of run formatting toggles."""

    NONE = 0
    BOLD = 1
    ITALIC = 2
    UNDERLINE = 4
    STRIKETHROUGH = 8
    SUPERSCRIPT = 16
    SUBSCRIPT = 32
    SMALLCAPS = 64
    SHADOW = 128


class BorderStyle(str, Enum):
    """Table border line styles understood by the element layer."""

    SINGLE = "single"
    DOUBLE = "double"
    DASHED = "dashed"
    DOTTED = "dotted"
    NONE = "none"


class BuiltInStyleCategory(str, Enum):
    """Groups of styles shipped with the manager."""

    HEADING = "heading"
    BODY_TEXT = "body_text"
    LIST = "list"
    TABLE = "table"
    TECHNICAL = "technical"
