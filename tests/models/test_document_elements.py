"""
Tests for the document element wrappers.
"""

import pytest
from lxml import etree

from stylequill import (
    AlignmentType,
    Document,
    FormattingFlag,
    HighlightColor,
    ListType,
    StyleTarget,
    StyleValidationError,
    TargetKind,
)
from stylequill.utils.xml_utils import NAMESPACES, qn


class TestDocument:
    """Test cases for Document traversal and creation."""

    def test_sample_traversal(self, sample_document):
        assert [p.text for p in sample_document.paragraphs()] == [
            "Introduction", "Plain body text", "x = 1", "Cell",
        ]
        assert len(sample_document.runs()) == 4
        assert len(sample_document.tables()) == 1

    def test_table_structure(self, sample_document):
        table = sample_document.tables()[0]

        rows = table.rows()
        assert len(rows) == 1
        cells = rows[0].cells()
        assert [p.text for p in cells[0].paragraphs()] == ["Cell"]

    def test_new_document(self):
        document = Document.new()
        document.add_paragraph("One", style="Normal")
        document.add_table(2, 3)

        root = etree.fromstring(document.to_xml().encode("utf-8"))
        assert root.tag == qn("w:document")
        assert len(root.xpath("//w:tc", namespaces=NAMESPACES)) == 6
        assert document.paragraphs()[0].get_style() == "Normal"

    def test_body_root(self, sample_document):
        body = Document(sample_document.body)

        assert len(body.paragraphs()) == 4

    def test_leading_space_is_preserved(self):
        run = Document.new().add_paragraph().add_run(" padded")

        text = run.element.find(qn("w:t"))
        assert text.get("{http://www.w3.org/XML/1998/namespace}space") == "preserve"


class TestParagraph:
    """Test cases for paragraph formatting."""

    def test_style_reference(self):
        paragraph = Document.new().add_paragraph("text")

        assert not paragraph.has_style()
        paragraph.set_style("Quote")
        assert paragraph.get_style() == "Quote"
        paragraph.set_style(None)
        assert paragraph.get_style() is None

    def test_properties_element_comes_first(self):
        paragraph = Document.new().add_paragraph("text")
        paragraph.set_alignment(AlignmentType.RIGHT)

        assert paragraph.element[0].tag == qn("w:pPr")

    def test_children_follow_schema_order(self):
        paragraph = Document.new().add_paragraph("text")
        paragraph.set_alignment(AlignmentType.CENTER)
        paragraph.set_indentation(left_pts=10.0)
        paragraph.set_style("Quote")

        tags = [child.tag for child in paragraph.element[0]]
        assert tags == [qn("w:pStyle"), qn("w:ind"), qn("w:jc")]

    def test_spacing_in_twips(self):
        paragraph = Document.new().add_paragraph()
        paragraph.set_spacing(before_pts=6.0)
        paragraph.set_line_spacing(1.5)

        spacing = paragraph.element.find("w:pPr/w:spacing", NAMESPACES)
        assert spacing.get(qn("w:before")) == "120"
        assert spacing.get(qn("w:line")) == "360"
        assert spacing.get(qn("w:lineRule")) == "auto"
        assert spacing.get(qn("w:after")) is None

    def test_hanging_indent(self):
        paragraph = Document.new().add_paragraph()
        paragraph.set_indentation(left_pts=36.0, first_line_pts=-18.0)

        ind = paragraph.element.find("w:pPr/w:ind", NAMESPACES)
        assert ind.get(qn("w:hanging")) == "360"
        assert ind.get(qn("w:firstLine")) is None

    def test_list_style_and_removal(self):
        paragraph = Document.new().add_paragraph()
        paragraph.set_list_style(ListType.NUMBER, 3)

        props = paragraph.get_properties()
        assert props.list_type is ListType.NUMBER
        assert props.list_level == 3

        paragraph.set_list_style(ListType.NONE)
        assert paragraph.element.find("w:pPr/w:numPr", NAMESPACES) is None

    def test_negative_spacing_rejected(self):
        paragraph = Document.new().add_paragraph()

        with pytest.raises(StyleValidationError):
            paragraph.set_spacing(before_pts=-1.0)

    def test_list_level_out_of_range(self):
        paragraph = Document.new().add_paragraph()

        with pytest.raises(StyleValidationError):
            paragraph.set_list_style(ListType.BULLET, 9)


class TestRun:
    """Test cases for run formatting."""

    def test_font_markup(self):
        run = Document.new().add_paragraph().add_run("word")
        run.set_font("Arial")
        run.set_font_size(10.5)

        fonts = run.element.find("w:rPr/w:rFonts", NAMESPACES)
        assert {fonts.get(qn(f"w:{a}")) for a in ("ascii", "hAnsi", "eastAsia", "cs")} == {"Arial"}
        assert run.element.find("w:rPr/w:sz", NAMESPACES).get(qn("w:val")) == "21"
        assert run.element.find("w:rPr/w:szCs", NAMESPACES).get(qn("w:val")) == "21"

    def test_color_and_highlight(self):
        run = Document.new().add_paragraph().add_run("word")
        run.set_font_color("#ff8800")
        run.set_highlight(HighlightColor.YELLOW)

        props = run.get_properties()
        assert props.font_color_hex == "FF8800"
        assert props.highlight_color is HighlightColor.YELLOW

        run.set_highlight(HighlightColor.NONE)
        assert run.get_properties().highlight_color is None

    def test_formatting_replaces_previous_flags(self):
        run = Document.new().add_paragraph().add_run("word")
        run.set_formatting(FormattingFlag.BOLD | FormattingFlag.SUBSCRIPT)
        run.set_formatting(FormattingFlag.ITALIC)

        assert run.get_formatting() == FormattingFlag.ITALIC
        assert run.element.find("w:rPr/w:b", NAMESPACES) is None
        assert run.element.find("w:rPr/w:vertAlign", NAMESPACES) is None

    def test_formatting_children_follow_schema_order(self):
        run = Document.new().add_paragraph().add_run("word")
        run.set_font_color("000000")
        run.set_formatting(FormattingFlag.STRIKETHROUGH | FormattingFlag.SMALLCAPS | FormattingFlag.BOLD)

        tags = [etree.QName(child).localname for child in run.element.find(qn("w:rPr"))]
        assert tags == ["b", "bCs", "smallCaps", "strike", "color"]

    def test_explicit_off_toggle(self, sample_document):
        run = sample_document.runs()[0]
        rPr = etree.SubElement(run.element, qn("w:rPr"))
        etree.SubElement(rPr, qn("w:b")).set(qn("w:val"), "0")

        assert run.get_formatting() == FormattingFlag.NONE

    def test_bad_color(self):
        run = Document.new().add_paragraph().add_run("word")

        with pytest.raises(StyleValidationError):
            run.set_font_color("orange-ish")


class TestTable:
    """Test cases for table formatting."""

    def test_borders_on_every_edge(self):
        table = Document.new().add_table(1, 1)
        table.set_border_style("single")
        table.set_border_width(0.75)
        table.set_border_color("FF0000")

        edges = table.element.find("w:tblPr/w:tblBorders", NAMESPACES)
        assert [etree.QName(edge).localname for edge in edges] == [
            "top", "left", "bottom", "right", "insideH", "insideV",
        ]
        for edge in edges:
            assert edge.get(qn("w:val")) == "single"
            assert edge.get(qn("w:sz")) == "6"
            assert edge.get(qn("w:color")) == "FF0000"

    def test_width_and_alignment(self):
        table = Document.new().add_table(1, 1)
        table.set_width(300.0)
        table.set_alignment("Center")

        tbl_w = table.element.find("w:tblPr/w:tblW", NAMESPACES)
        assert tbl_w.get(qn("w:w")) == "6000"
        assert tbl_w.get(qn("w:type")) == "dxa"
        assert table.get_properties().table_alignment == "center"

    def test_cell_margins(self):
        table = Document.new().add_table(1, 1)
        table.set_cell_margins(5.0)

        margins = table.element.find("w:tblPr/w:tblCellMar", NAMESPACES)
        assert len(margins) == 4
        assert table.get_properties().cell_padding_pts == 5.0

    def test_invalid_border_style(self):
        table = Document.new().add_table(1, 1)

        with pytest.raises(StyleValidationError):
            table.set_border_style("wavy")

    def test_width_limit(self):
        table = Document.new().add_table(1, 1)

        with pytest.raises(StyleValidationError):
            table.set_width(5000.0)


class TestStyleTarget:
    """Test cases for StyleTarget constructors."""

    def test_kinds(self, sample_document):
        paragraph = sample_document.paragraphs()[0]

        assert StyleTarget.paragraph(paragraph).kind is TargetKind.PARAGRAPH
        assert StyleTarget.run(paragraph.runs()[0]).kind is TargetKind.RUN
        assert StyleTarget.table(sample_document.tables()[0]).kind is TargetKind.TABLE

    def test_wrappers_compare_by_element(self, sample_document):
        assert sample_document.paragraphs()[1] == sample_document.paragraphs()[1]
        assert sample_document.paragraphs()[0] != sample_document.paragraphs()[1]
