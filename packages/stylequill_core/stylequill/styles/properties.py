"""Property bags for paragraph, character and table styles."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, TypeVar

from ..utils.enums import AlignmentType, FormattingFlag, HighlightColor, ListType

BagT = TypeVar("BagT", bound="PropertyBag")


class PropertyBag:
    """Mixin for partially specified property sets; ``None`` means unset."""

    def set_fields(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def is_empty(self) -> bool:
        return not self.set_fields()

    def overlay(self: BagT, other: Optional[BagT]) -> BagT:
        """Return a new bag where ``other``'s set fields win over this bag's."""
        if other is None:
            return self.copy()
        return replace(self, **other.set_fields())

    def copy(self: BagT) -> BagT:
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in self.set_fields().items():
            if isinstance(value, FormattingFlag):
                result[key] = [flag.name.lower() for flag in FormattingFlag if flag and flag in value]
            elif hasattr(value, "value"):
                result[key] = value.value
            else:
                result[key] = value
        return result


@dataclass
class ParagraphStyleProperties(PropertyBag):
    alignment: Optional[AlignmentType] = None
    space_before_pts: Optional[float] = None
    space_after_pts: Optional[float] = None
    line_spacing: Optional[float] = None
    left_indent_pts: Optional[float] = None
    right_indent_pts: Optional[float] = None
    first_line_indent_pts: Optional[float] = None
    list_type: Optional[ListType] = None
    list_level: Optional[int] = None


@dataclass
class CharacterStyleProperties(PropertyBag):
    font_name: Optional[str] = None
    font_size_pts: Optional[float] = None
    font_color_hex: Optional[str] = None
    highlight_color: Optional[HighlightColor] = None
    formatting_flags: Optional[FormattingFlag] = None

    def has_flag(self, flag: FormattingFlag) -> bool:
        return self.formatting_flags is not None and bool(self.formatting_flags & flag)


@dataclass
class TableStyleProperties(PropertyBag):
    border_style: Optional[str] = None
    border_width_pts: Optional[float] = None
    border_color_hex: Optional[str] = None
    cell_padding_pts: Optional[float] = None
    table_width_pts: Optional[float] = None
    table_alignment: Optional[str] = None
