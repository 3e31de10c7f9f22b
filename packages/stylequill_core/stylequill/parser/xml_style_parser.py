"""
Style definition parser.

Handles loading of ``StyleSheet`` documents (styles and style sets) from
files or strings, root validation, and per-node conversion into Style and
StyleSet objects.

Example document::

    <StyleSheet xmlns="http://duckx.org/styles" version="1.0">
      <Style name="Title" type="paragraph" base="Normal">
        <Paragraph><Alignment>center</Alignment><SpaceAfter>12pt</SpaceAfter></Paragraph>
        <Character><Font name="Arial" size="18pt"/><Format bold="true"/></Character>
      </Style>
      <StyleSet name="Report"><Include>Title</Include></StyleSet>
    </StyleSheet>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union
import logging

from lxml import etree

from ..config import DEFAULT_CONFIG, StyleConfig
from ..styles.properties import CharacterStyleProperties, ParagraphStyleProperties, TableStyleProperties
from ..styles.style import Style
from ..styles.style_set import StyleSet
from ..utils.color_utils import parse_color
from ..utils.enums import AlignmentType, FormattingFlag, HighlightColor, ListType, StyleType
from ..utils.exceptions import ErrorKind, StyleError, StyleParseError
from ..utils.units import parse_percentage, parse_value_with_unit

if TYPE_CHECKING:
    from ..styles.style_manager import StyleManager

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes")

FORMAT_ATTRIBUTES = (
    ("bold", FormattingFlag.BOLD),
    ("italic", FormattingFlag.ITALIC),
    ("underline", FormattingFlag.UNDERLINE),
    ("strikethrough", FormattingFlag.STRIKETHROUGH),
    ("smallCaps", FormattingFlag.SMALLCAPS),
    ("shadow", FormattingFlag.SHADOW),
    ("subscript", FormattingFlag.SUBSCRIPT),
    ("superscript", FormattingFlag.SUPERSCRIPT),
)


@dataclass
class StyleSheetDefinition:
    """Styles and style sets loaded from one definition document."""

    styles: List[Style] = field(default_factory=list)
    style_sets: List[StyleSet] = field(default_factory=list)

    def register_into(self, manager: "StyleManager") -> None:
        """Register every style, then every style set, with ``manager``."""
        for style in self.styles:
            manager.register_style(style)
        for style_set in self.style_sets:
            manager.register_style_set(style_set)


class XmlStyleParser:
    """
    Parser for style definition documents.

    Handles root validation, style parsing, style set parsing, and error wrapping.
    """

    def __init__(self, config: Optional[StyleConfig] = None):
        """
        Initialize style definition parser.

        Args:
            config: Expected namespace and schema version, plus value limits
        """
        self.config = config or DEFAULT_CONFIG
        self._ns = self.config.stylesheet_namespace

    def get_supported_schema_version(self) -> str:
        return self.config.schema_version

    def get_xml_namespace(self) -> str:
        return self._ns

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    def load_from_file(self, path: Union[str, Path]) -> StyleSheetDefinition:
        """
        Load styles and style sets from a file.

        Raises:
            StyleParseError: If the file is missing, malformed or invalid
        """
        return self._parse_root(self._read_file(path), str(path))

    def load_from_string(self, xml_text: Union[str, bytes]) -> StyleSheetDefinition:
        return self._parse_root(self._parse_text(xml_text), None)

    def load_styles_from_file(self, path: Union[str, Path]) -> List[Style]:
        return self.load_from_file(path).styles

    def load_styles_from_string(self, xml_text: Union[str, bytes]) -> List[Style]:
        return self.load_from_string(xml_text).styles

    def load_style_sets_from_file(self, path: Union[str, Path]) -> List[StyleSet]:
        return self.load_from_file(path).style_sets

    def load_style_sets_from_string(self, xml_text: Union[str, bytes]) -> List[StyleSet]:
        return self.load_from_string(xml_text).style_sets

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------
    def _read_file(self, path: Union[str, Path]) -> etree._Element:
        path = Path(path)
        if not path.is_file():
            raise StyleParseError(
                f"Style definition file not found: {path}",
                kind=ErrorKind.FILE_NOT_FOUND, file_path=str(path),
                context={"operation": "load_from_file"},
            )
        logger.debug(f"Reading style definitions from {path}")
        return self._parse_text(path.read_bytes(), str(path))

    def _parse_text(self, xml_text: Union[str, bytes], file_path: Optional[str] = None) -> etree._Element:
        if isinstance(xml_text, str):
            xml_text = xml_text.encode("utf-8")
        try:
            return etree.fromstring(xml_text)
        except etree.XMLSyntaxError as e:
            raise StyleParseError(
                f"Malformed style definition XML: {e}",
                kind=ErrorKind.XML_PARSE_ERROR, file_path=file_path,
                line_number=getattr(e, "lineno", None),
                context={"operation": "parse_xml"}, cause=e,
            ) from e

    def validate_style_xml(self, root: etree._Element) -> None:
        """
        Check the root element name, namespace and schema version.

        Raises:
            StyleParseError: On the first mismatch
        """
        qname = etree.QName(root)
        context = {"operation": "validate_style_xml"}
        if qname.localname != "StyleSheet":
            raise StyleParseError(
                f"Root element must be StyleSheet, found '{qname.localname}'",
                kind=ErrorKind.XML_INVALID_STRUCTURE, context=context,
            )
        if qname.namespace != self._ns:
            raise StyleParseError(
                f"Invalid namespace '{qname.namespace or ''}', expected '{self._ns}'",
                kind=ErrorKind.XML_NAMESPACE_ERROR, context=context,
            )
        version = root.get("version")
        if version is None:
            raise StyleParseError(
                "StyleSheet is missing the version attribute",
                kind=ErrorKind.XML_ATTRIBUTE_MISSING, context=context,
            )
        if version != self.config.schema_version:
            raise StyleParseError(
                f"Unsupported schema version '{version}', expected '{self.config.schema_version}'",
                kind=ErrorKind.UNSUPPORTED_VERSION, context=context,
            )

    def _parse_root(self, root: etree._Element, file_path: Optional[str]) -> StyleSheetDefinition:
        self.validate_style_xml(root)
        definition = StyleSheetDefinition()
        try:
            for node in root.iterchildren(self._tag("Style")):
                definition.styles.append(self._parse_style(node))
            for node in root.iterchildren(self._tag("StyleSet")):
                definition.style_sets.append(self._parse_style_set(node))
        except StyleError as e:
            raise StyleParseError(
                f"Failed to load style definitions: {e.message}",
                kind=e.kind, file_path=file_path,
                context={"operation": "load_style_definitions"}, cause=e,
            ) from e
        logger.info(f"Loaded {len(definition.styles)} styles and "
                     f"{len(definition.style_sets)} style sets")
        return definition

    # ------------------------------------------------------------------
    # Node level
    # ------------------------------------------------------------------
    def _tag(self, local: str) -> str:
        return f"{{{self._ns}}}{local}"

    def _child(self, node: etree._Element, local: str) -> Optional[etree._Element]:
        return node.find(self._tag(local))

    @staticmethod
    def _text(node: Optional[etree._Element]) -> Optional[str]:
        if node is None or node.text is None:
            return None
        text = node.text.strip()
        return text or None

    @staticmethod
    def _require_attribute(node: etree._Element, name: str, element: str) -> str:
        value = node.get(name)
        if not value:
            raise StyleParseError(
                f"{element} element is missing the '{name}' attribute",
                kind=ErrorKind.XML_ATTRIBUTE_MISSING,
                line_number=node.sourceline,
                context={"operation": f"parse_{element.lower()}", "attribute": name},
            )
        return value

    def _parse_style(self, node: etree._Element) -> Style:
        name = self._require_attribute(node, "name", "Style")
        type_text = self._require_attribute(node, "type", "Style")
        style_type = StyleType.parse(type_text)
        if style_type is None:
            raise StyleParseError(
                f"Unknown style type '{type_text}' for style '{name}'",
                kind=ErrorKind.XML_INVALID_STRUCTURE, line_number=node.sourceline,
                context={"operation": "parse_style", "style_name": name},
            )

        style = Style(name, style_type, self.config)
        try:
            base = node.get("base")
            if base:
                style.set_base_style(base)

            paragraph_node = self._child(node, "Paragraph")
            if paragraph_node is not None:
                style.set_paragraph_properties(self._parse_paragraph(paragraph_node))
            character_node = self._child(node, "Character")
            if character_node is not None:
                style.set_character_properties(self._parse_character(character_node, name))
            table_node = self._child(node, "Table")
            if table_node is not None:
                style.set_table_properties(self._parse_table(table_node))

            style.validate()
        except StyleError as e:
            raise StyleParseError(
                f"Invalid style '{name}': {e.message}",
                kind=e.kind, line_number=node.sourceline,
                context={"operation": "parse_style", "style_name": name}, cause=e,
            ) from e

        logger.debug(f"Parsed style '{name}' ({style_type.value})")
        return style

    def _parse_style_set(self, node: etree._Element) -> StyleSet:
        name = self._require_attribute(node, "name", "StyleSet")
        style_set = StyleSet(name, node.get("description", ""))
        for include in node.iterchildren(self._tag("Include")):
            style_name = self._text(include)
            if not style_name:
                raise StyleParseError(
                    f"Empty Include in style set '{name}'",
                    kind=ErrorKind.XML_INVALID_STRUCTURE, line_number=include.sourceline,
                    context={"operation": "parse_style_set", "style_set": name},
                )
            style_set.add_style(style_name)
        if not len(style_set):
            raise StyleParseError(
                f"Style set '{name}' includes no styles",
                kind=ErrorKind.EMPTY_STYLE_SET, line_number=node.sourceline,
                context={"operation": "parse_style_set", "style_set": name},
            )
        return style_set

    def _parse_paragraph(self, node: etree._Element) -> ParagraphStyleProperties:
        props = ParagraphStyleProperties()

        alignment_text = self._text(self._child(node, "Alignment"))
        if alignment_text:
            props.alignment = AlignmentType.parse(alignment_text)
            if props.alignment is None:
                raise StyleParseError(
                    f"Unknown alignment '{alignment_text}'",
                    kind=ErrorKind.INVALID_ALIGNMENT, context={"operation": "parse_paragraph"},
                )

        before = self._text(self._child(node, "SpaceBefore"))
        if before:
            props.space_before_pts = parse_value_with_unit(before)
        after = self._text(self._child(node, "SpaceAfter"))
        if after:
            props.space_after_pts = parse_value_with_unit(after)

        line_spacing = self._text(self._child(node, "LineSpacing"))
        if line_spacing:
            props.line_spacing = self._parse_line_spacing(line_spacing)

        indentation = self._child(node, "Indentation")
        if indentation is not None:
            if indentation.get("left"):
                props.left_indent_pts = parse_value_with_unit(indentation.get("left"))
            if indentation.get("right"):
                props.right_indent_pts = parse_value_with_unit(indentation.get("right"))
            if indentation.get("firstLine"):
                props.first_line_indent_pts = parse_value_with_unit(indentation.get("firstLine"))

        list_node = self._child(node, "List")
        if list_node is not None:
            type_text = list_node.get("type") or self._text(list_node) or ""
            props.list_type = ListType.parse(type_text)
            if props.list_type is None:
                raise StyleParseError(
                    f"Unknown list type '{type_text}'",
                    kind=ErrorKind.XML_INVALID_STRUCTURE, context={"operation": "parse_paragraph"},
                )
            level = list_node.get("level")
            if level:
                props.list_level = self._parse_int(level, "List level")
        return props

    @staticmethod
    def _parse_line_spacing(text: str) -> float:
        if text.endswith("%"):
            return parse_percentage(text)
        try:
            return float(text)
        except ValueError as e:
            raise StyleParseError(
                f"Invalid line spacing '{text}'",
                kind=ErrorKind.INVALID_SPACING, context={"operation": "parse_paragraph"}, cause=e,
            ) from e

    @staticmethod
    def _parse_int(text: str, label: str) -> int:
        try:
            return int(text)
        except ValueError as e:
            raise StyleParseError(
                f"{label} must be an integer, got '{text}'",
                kind=ErrorKind.XML_INVALID_STRUCTURE, cause=e,
            ) from e

    def _parse_character(self, node: etree._Element, style_name: str) -> CharacterStyleProperties:
        props = CharacterStyleProperties()

        font = self._child(node, "Font")
        if font is not None:
            if font.get("name"):
                props.font_name = font.get("name")
            if font.get("size"):
                props.font_size_pts = parse_value_with_unit(font.get("size"))

        color = self._text(self._child(node, "Color"))
        if color:
            props.font_color_hex = parse_color(color)

        highlight = self._text(self._child(node, "Highlight"))
        if highlight:
            props.highlight_color = HighlightColor.parse(highlight)
            if props.highlight_color is None:
                logger.warning(f"Ignoring unknown highlight '{highlight}' in style '{style_name}'")

        format_node = self._child(node, "Format")
        if format_node is not None:
            flags = FormattingFlag.NONE
            for attribute, flag in FORMAT_ATTRIBUTES:
                if (format_node.get(attribute) or "").strip().lower() in TRUE_VALUES:
                    flags |= flag
            if flags:
                props.formatting_flags = flags
            else:
                logger.warning(f"Format block of style '{style_name}' enables nothing; ignored")
        return props

    def _parse_table(self, node: etree._Element) -> TableStyleProperties:
        props = TableStyleProperties()

        width = self._text(self._child(node, "Width"))
        if width:
            if width.endswith("%"):
                props.table_width_pts = parse_percentage(width) * self.config.percent_width_base_pts
            else:
                props.table_width_pts = parse_value_with_unit(width)

        alignment = self._text(self._child(node, "Alignment"))
        if alignment:
            props.table_alignment = alignment.lower()

        borders = self._child(node, "Borders")
        if borders is not None:
            if borders.get("style"):
                props.border_style = borders.get("style").lower()
            if borders.get("width"):
                props.border_width_pts = parse_value_with_unit(borders.get("width"))
            if borders.get("color"):
                props.border_color_hex = parse_color(borders.get("color"))

        padding = self._text(self._child(node, "CellPadding"))
        if padding:
            props.cell_padding_pts = parse_value_with_unit(padding)
        return props
