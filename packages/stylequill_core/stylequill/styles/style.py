"""
Named style definition.

A style bundles partially specified paragraph, character and table
properties, an optional base style, and serializes itself to a
``w:style`` element.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from lxml import etree

from ..config import DEFAULT_CONFIG, StyleConfig
from ..utils import xml_utils as xu
from ..utils.color_utils import normalize_hex_color
from ..utils.enums import AlignmentType, FormattingFlag, StyleType
from ..utils.exceptions import (
    ErrorKind,
    StyleInheritanceCycleError,
    StylePropertyError,
    StyleValidationError,
)
from . import property_mapper as mapper
from . import validation
from .properties import CharacterStyleProperties, ParagraphStyleProperties, TableStyleProperties

logger = logging.getLogger(__name__)


class Style:
    """
    Named, typed style with an optional base style.

    Styles are created through :class:`StyleManager` factories, which own
    them. Property getters return copies; use the setters to change a style
    so that type compatibility and value ranges are enforced.
    """

    def __init__(self, name: str, style_type: StyleType, config: Optional[StyleConfig] = None):
        """
        Initialize style.

        Args:
            name: Unique style name (also used as the style id)
            style_type: Family the style targets
            config: Limits used for validation
        """
        self._name = name
        self._type = style_type
        self._config = config or DEFAULT_CONFIG
        self._base_style: Optional[str] = None
        self._is_built_in = False
        self._paragraph = ParagraphStyleProperties()
        self._character = CharacterStyleProperties()
        self._table = TableStyleProperties()

    def __repr__(self) -> str:
        return f"Style(name={self._name!r}, type={self._type.value}, base={self._base_style!r})"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> StyleType:
        return self._type

    @property
    def is_built_in(self) -> bool:
        return self._is_built_in

    @property
    def is_custom(self) -> bool:
        return not self._is_built_in

    def _mark_built_in(self) -> None:
        # Only the manager's built-in loader calls this.
        self._is_built_in = True

    @property
    def base_style(self) -> Optional[str]:
        return self._base_style

    def set_base_style(self, base_style_name: str) -> None:
        """
        Set the style this one inherits from.

        Args:
            base_style_name: Name of the base style

        Raises:
            StyleValidationError: If the name is empty
            StyleInheritanceCycleError: If the style would inherit from itself
        """
        if not base_style_name:
            raise StyleValidationError(
                "Base style name cannot be empty", kind=ErrorKind.INVALID_ARGUMENT,
                field_name="base_style", field_value=base_style_name,
                context={"operation": "set_base_style", "style_name": self._name},
            )
        if base_style_name == self._name:
            raise StyleInheritanceCycleError(
                f"Style '{self._name}' cannot inherit from itself",
                context={"operation": "set_base_style", "style_name": self._name},
            )
        self._base_style = base_style_name
        logger.debug(f"Style '{self._name}' now based on '{base_style_name}'")

    def clear_base_style(self) -> None:
        self._base_style = None

    # ------------------------------------------------------------------
    # Property bags
    # ------------------------------------------------------------------
    @property
    def paragraph_properties(self) -> ParagraphStyleProperties:
        return self._paragraph.copy()

    @property
    def character_properties(self) -> CharacterStyleProperties:
        return self._character.copy()

    @property
    def table_properties(self) -> TableStyleProperties:
        return self._table.copy()

    def _require(self, accepted: bool, bag: str, operation: str) -> None:
        if not accepted:
            raise StylePropertyError(
                f"Cannot set {bag} properties on {self._type.value} style '{self._name}'",
                context={"operation": operation, "style_name": self._name},
            )

    def _with_context(self, error: StyleValidationError, operation: str) -> StyleValidationError:
        error.context.setdefault("operation", operation)
        error.context.setdefault("style_name", self._name)
        return error

    def set_paragraph_properties(self, props: ParagraphStyleProperties) -> None:
        """
        Replace the paragraph properties.

        Raises:
            StylePropertyError: If the style is not PARAGRAPH or MIXED
            StyleValidationError: If a set value is out of range
        """
        self._require(self._type.accepts_paragraph(), "paragraph", "set_paragraph_properties")
        try:
            self._paragraph = validation.validate_paragraph_properties(props, self._config)
        except StyleValidationError as e:
            raise self._with_context(e, "set_paragraph_properties")

    def set_character_properties(self, props: CharacterStyleProperties) -> None:
        """
        Replace the character properties.

        Raises:
            StylePropertyError: If the style is not CHARACTER or MIXED
            StyleValidationError: If a set value is out of range
        """
        self._require(self._type.accepts_character(), "character", "set_character_properties")
        try:
            self._character = validation.validate_character_properties(props, self._config)
        except StyleValidationError as e:
            raise self._with_context(e, "set_character_properties")

    def set_table_properties(self, props: TableStyleProperties) -> None:
        """
        Replace the table properties.

        Raises:
            StylePropertyError: If the style is not TABLE or MIXED
            StyleValidationError: If a set value is out of range
        """
        self._require(self._type.accepts_table(), "table", "set_table_properties")
        try:
            self._table = validation.validate_table_properties(props, self._config)
        except StyleValidationError as e:
            raise self._with_context(e, "set_table_properties")

    # ------------------------------------------------------------------
    # Convenience setters
    # ------------------------------------------------------------------
    def set_font(self, font_name: str, size_pts: float) -> None:
        self._require(self._type.accepts_character(), "character", "set_font")
        updated = self._character.copy()
        updated.font_name = font_name
        updated.font_size_pts = size_pts
        self.set_character_properties(updated)

    def set_color(self, color_hex: str) -> None:
        self._require(self._type.accepts_character(), "character", "set_color")
        try:
            color = normalize_hex_color(color_hex, "font_color_hex")
        except StyleValidationError as e:
            raise self._with_context(e, "set_color")
        updated = self._character.copy()
        updated.font_color_hex = color
        self.set_character_properties(updated)

    def set_formatting(self, flags: FormattingFlag) -> None:
        self._require(self._type.accepts_character(), "character", "set_formatting")
        updated = self._character.copy()
        updated.formatting_flags = flags
        self.set_character_properties(updated)

    def set_alignment(self, alignment: AlignmentType) -> None:
        self._require(self._type.accepts_paragraph(), "paragraph", "set_alignment")
        updated = self._paragraph.copy()
        updated.alignment = alignment
        self.set_paragraph_properties(updated)

    def set_spacing(self, before_pts: float, after_pts: float) -> None:
        self._require(self._type.accepts_paragraph(), "paragraph", "set_spacing")
        updated = self._paragraph.copy()
        updated.space_before_pts = before_pts
        updated.space_after_pts = after_pts
        self.set_paragraph_properties(updated)

    def set_indentation(self, left_pts: Optional[float] = None, right_pts: Optional[float] = None,
                        first_line_pts: Optional[float] = None) -> None:
        self._require(self._type.accepts_paragraph(), "paragraph", "set_indentation")
        updated = self._paragraph.copy()
        if left_pts is not None:
            updated.left_indent_pts = left_pts
        if right_pts is not None:
            updated.right_indent_pts = right_pts
        if first_line_pts is not None:
            updated.first_line_indent_pts = first_line_pts
        self.set_paragraph_properties(updated)

    # ------------------------------------------------------------------
    # Validation and serialization
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Check the name and every set property value.

        Raises:
            StyleValidationError: On the first invalid value
        """
        if not self._name or not self._name.strip():
            raise StyleValidationError(
                "Style name cannot be empty", kind=ErrorKind.VALIDATION_FAILED,
                field_name="name", field_value=self._name,
                context={"operation": "validate"},
            )
        try:
            validation.validate_paragraph_properties(self._paragraph, self._config)
            validation.validate_character_properties(self._character, self._config)
            validation.validate_table_properties(self._table, self._config)
        except StyleValidationError as e:
            raise self._with_context(e, "validate")

    def to_element(self) -> etree._Element:
        """Build the ``w:style`` element for this style."""
        style_el = xu.make_element("w:style", {"w:type": self._type.ooxml_type, "w:styleId": self._name})
        xu.set_attr(etree.SubElement(style_el, xu.qn("w:name")), "w:val", self._name)
        if self._base_style:
            xu.set_attr(etree.SubElement(style_el, xu.qn("w:basedOn")), "w:val", self._base_style)

        if self._type.accepts_paragraph() and not self._paragraph.is_empty():
            pPr = etree.SubElement(style_el, xu.qn("w:pPr"))
            mapper.write_paragraph_properties(pPr, self._paragraph, self._config)
        if self._type.accepts_character() and not self._character.is_empty():
            rPr = etree.SubElement(style_el, xu.qn("w:rPr"))
            mapper.write_character_properties(rPr, self._character, self._config)
        if self._type.accepts_table() and not self._table.is_empty():
            tblPr = etree.SubElement(style_el, xu.qn("w:tblPr"))
            mapper.write_table_properties(tblPr, self._table, self._config)
        return style_el

    def to_xml(self) -> str:
        return xu.to_string(self.to_element())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "type": self._type.value,
            "base_style": self._base_style,
            "built_in": self._is_built_in,
            "paragraph": self._paragraph.to_dict(),
            "character": self._character.to_dict(),
            "table": self._table.to_dict(),
        }
