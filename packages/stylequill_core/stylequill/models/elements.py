"""
Document element wrappers over WordprocessingML markup.

Paragraph, Run and Table wrap live lxml elements of a ``w:document`` tree;
every setter writes straight into the tree, so serializing the document
afterwards reflects all applied formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional
import logging

from lxml import etree

from ..config import DEFAULT_CONFIG, StyleConfig
from ..styles import property_mapper as mapper
from ..styles.properties import CharacterStyleProperties, ParagraphStyleProperties, TableStyleProperties
from ..utils import xml_utils as xu
from ..utils.enums import AlignmentType, FormattingFlag, HighlightColor, ListType

logger = logging.getLogger(__name__)


class _MarkupElement:
    """Common plumbing for wrappers that own a ``*Pr`` properties child."""

    properties_tag = ""
    style_tag = ""
    properties_order: tuple = ()

    def __init__(self, element: etree._Element, config: Optional[StyleConfig] = None):
        self._element = element
        self._config = config or DEFAULT_CONFIG

    @property
    def element(self) -> etree._Element:
        return self._element

    def _properties(self, create: bool = True) -> Optional[etree._Element]:
        if create:
            return xu.get_or_add_child(self._element, self.properties_tag, first=True)
        return xu.find_child(self._element, self.properties_tag)

    def get_style(self) -> Optional[str]:
        return xu.get_child_attr(self._properties(create=False), self.style_tag)

    def has_style(self) -> bool:
        return bool(self.get_style())

    def set_style(self, style_name: Optional[str]) -> None:
        """Write the style reference; an empty name removes it."""
        if not style_name:
            props = self._properties(create=False)
            if props is not None:
                xu.remove_child(props, self.style_tag)
            return
        mapper.set_style_reference(self._properties(), self.style_tag, style_name, self.properties_order)

    def __eq__(self, other) -> bool:
        return isinstance(other, type(self)) and other._element is self._element

    def __hash__(self) -> int:
        return hash(id(self._element))


class Run(_MarkupElement):
    """Wrapper around ``w:r``."""

    properties_tag = "w:rPr"
    style_tag = "w:rStyle"
    properties_order = mapper.RPR_ORDER

    @property
    def text(self) -> str:
        return "".join(t.text or "" for t in self._element.iter(xu.qn("w:t")))

    def set_font(self, font_name: str) -> None:
        mapper.set_font(self._properties(), font_name)

    def set_font_size(self, size_pts: float) -> None:
        mapper.set_font_size(self._properties(), size_pts, self._config)

    def set_font_color(self, color_hex: str) -> None:
        mapper.set_font_color(self._properties(), color_hex)

    def set_highlight(self, highlight: HighlightColor) -> None:
        mapper.set_highlight(self._properties(), highlight)

    def set_formatting(self, flags: FormattingFlag) -> None:
        mapper.set_formatting(self._properties(), flags)

    def get_formatting(self) -> FormattingFlag:
        return mapper.get_formatting(self._properties(create=False))

    def get_properties(self) -> CharacterStyleProperties:
        return mapper.read_character_properties(self._properties(create=False))


class Paragraph(_MarkupElement):
    """Wrapper around ``w:p``."""

    properties_tag = "w:pPr"
    style_tag = "w:pStyle"
    properties_order = mapper.PPR_ORDER

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs())

    def runs(self) -> List[Run]:
        return [Run(r, self._config) for r in self._element.iter(xu.qn("w:r"))]

    def add_run(self, text: str = "") -> Run:
        run_el = etree.SubElement(self._element, xu.qn("w:r"))
        if text:
            text_el = etree.SubElement(run_el, xu.qn("w:t"))
            text_el.text = text
            if text != text.strip():
                text_el.set("{http://www.w3.org/XML/1998/namespace}space", "preserve")
        return Run(run_el, self._config)

    def set_alignment(self, alignment: AlignmentType) -> None:
        mapper.set_paragraph_alignment(self._properties(), alignment)

    def get_alignment(self) -> Optional[AlignmentType]:
        return mapper.get_paragraph_alignment(self._properties(create=False))

    def set_spacing(self, before_pts: Optional[float] = None, after_pts: Optional[float] = None) -> None:
        mapper.set_paragraph_spacing(self._properties(), before_pts, after_pts)

    def set_line_spacing(self, multiplier: float) -> None:
        mapper.set_line_spacing(self._properties(), multiplier)

    def set_indentation(self, left_pts: Optional[float] = None, right_pts: Optional[float] = None,
                        first_line_pts: Optional[float] = None) -> None:
        mapper.set_indentation(self._properties(), left_pts, right_pts, first_line_pts)

    def set_list_style(self, list_type: ListType, level: int = 0) -> None:
        mapper.set_list_style(self._properties(), list_type, level, self._config)

    def get_properties(self) -> ParagraphStyleProperties:
        return mapper.read_paragraph_properties(self._properties(create=False), self._config)


class TableCell:
    """Wrapper around ``w:tc``."""

    def __init__(self, element: etree._Element, config: Optional[StyleConfig] = None):
        self._element = element
        self._config = config or DEFAULT_CONFIG

    @property
    def element(self) -> etree._Element:
        return self._element

    def paragraphs(self) -> List[Paragraph]:
        return [Paragraph(p, self._config) for p in self._element.findall(xu.qn("w:p"))]


class TableRow:
    """Wrapper around ``w:tr``."""

    def __init__(self, element: etree._Element, config: Optional[StyleConfig] = None):
        self._element = element
        self._config = config or DEFAULT_CONFIG

    def cells(self) -> List[TableCell]:
        return [TableCell(tc, self._config) for tc in self._element.findall(xu.qn("w:tc"))]


class Table(_MarkupElement):
    """Wrapper around ``w:tbl``."""

    properties_tag = "w:tblPr"
    style_tag = "w:tblStyle"
    properties_order = mapper.TBLPR_ORDER

    def rows(self) -> List[TableRow]:
        return [TableRow(tr, self._config) for tr in self._element.findall(xu.qn("w:tr"))]

    def set_width(self, width_pts: float) -> None:
        mapper.set_table_width(self._properties(), width_pts, self._config)

    def set_alignment(self, alignment: str) -> None:
        mapper.set_table_alignment(self._properties(), alignment)

    def set_border_style(self, style: str) -> None:
        mapper.set_border_style(self._properties(), style)

    def set_border_width(self, width_pts: float) -> None:
        mapper.set_border_width(self._properties(), width_pts, self._config)

    def set_border_color(self, color_hex: str) -> None:
        mapper.set_border_color(self._properties(), color_hex)

    def set_cell_margins(self, padding_pts: float) -> None:
        mapper.set_cell_margins(self._properties(), padding_pts)

    def get_properties(self) -> TableStyleProperties:
        return mapper.read_table_properties(self._properties(create=False))


class Document:
    """
    Wrapper around a ``w:document`` tree.

    Handles element traversal and creation of paragraphs and tables in the body.
    """

    def __init__(self, root: etree._Element, config: Optional[StyleConfig] = None):
        """
        Initialize document.

        Args:
            root: ``w:document`` or ``w:body`` element
            config: Limits passed to the element wrappers
        """
        self._config = config or DEFAULT_CONFIG
        self._root = root
        if root.tag == xu.qn("w:body"):
            self._body = root
        else:
            self._body = xu.get_or_add_child(root, "w:body")

    @classmethod
    def new(cls, config: Optional[StyleConfig] = None) -> "Document":
        root = xu.make_element("w:document")
        etree.SubElement(root, xu.qn("w:body"))
        return cls(root, config)

    @classmethod
    def from_xml(cls, xml_text, config: Optional[StyleConfig] = None) -> "Document":
        """
        Parse ``document.xml`` content.

        Args:
            xml_text: Markup as ``str`` or ``bytes``
            config: Limits passed to the element wrappers
        """
        if isinstance(xml_text, str):
            xml_text = xml_text.encode("utf-8")
        parser = etree.XMLParser(remove_blank_text=True)
        return cls(etree.fromstring(xml_text, parser), config)

    @property
    def body(self) -> etree._Element:
        return self._body

    def add_paragraph(self, text: str = "", style: Optional[str] = None) -> Paragraph:
        paragraph = Paragraph(etree.SubElement(self._body, xu.qn("w:p")), self._config)
        if style:
            paragraph.set_style(style)
        if text:
            paragraph.add_run(text)
        return paragraph

    def add_table(self, rows: int, cols: int) -> Table:
        tbl = etree.SubElement(self._body, xu.qn("w:tbl"))
        etree.SubElement(tbl, xu.qn("w:tblPr"))
        grid = etree.SubElement(tbl, xu.qn("w:tblGrid"))
        for _ in range(cols):
            etree.SubElement(grid, xu.qn("w:gridCol"))
        for _ in range(rows):
            tr = etree.SubElement(tbl, xu.qn("w:tr"))
            for _ in range(cols):
                tc = etree.SubElement(tr, xu.qn("w:tc"))
                etree.SubElement(tc, xu.qn("w:p"))
        return Table(tbl, self._config)

    def iter_paragraphs(self) -> Iterator[Paragraph]:
        for p in self._body.iter(xu.qn("w:p")):
            yield Paragraph(p, self._config)

    def paragraphs(self) -> List[Paragraph]:
        """All paragraphs in document order, table-cell paragraphs included."""
        return list(self.iter_paragraphs())

    def runs(self) -> List[Run]:
        return [Run(r, self._config) for r in self._body.iter(xu.qn("w:r"))]

    def tables(self) -> List[Table]:
        return [Table(t, self._config) for t in self._body.iter(xu.qn("w:tbl"))]

    def to_xml(self) -> str:
        return xu.to_string(self._root)


class TargetKind(str, Enum):
    PARAGRAPH = "paragraph"
    RUN = "run"
    TABLE = "table"


@dataclass(frozen=True)
class StyleTarget:
    """
    An element a style can be applied to, tagged with its kind.

    Build one with :meth:`paragraph`, :meth:`run` or :meth:`table`.
    """

    kind: TargetKind
    element: object

    @classmethod
    def paragraph(cls, paragraph: Paragraph) -> "StyleTarget":
        return cls(TargetKind.PARAGRAPH, paragraph)

    @classmethod
    def run(cls, run: Run) -> "StyleTarget":
        return cls(TargetKind.RUN, run)

    @classmethod
    def table(cls, table: Table) -> "StyleTarget":
        return cls(TargetKind.TABLE, table)
