"""
Tests for styles.xml generation.
"""

from lxml import etree

from stylequill import FormattingFlag, TableStyleProperties
from stylequill.utils.xml_utils import NAMESPACES, qn


def _parse(xml):
    return etree.fromstring(xml.encode("utf-8"))


class TestGenerateStylesXml:
    """Test cases for generate_styles_xml and write_styles_xml."""

    def test_empty_manager(self, style_manager):
        root = _parse(style_manager.generate_styles_xml())

        assert root.tag == qn("w:styles")
        assert len(root) == 0

    def test_declaration(self, style_manager):
        first_line = style_manager.generate_styles_xml().splitlines()[0]

        assert first_line.startswith("<?xml")
        assert "UTF-8" in first_line
        assert "standalone" in first_line

    def test_built_in_styles_sorted_by_name(self, builtin_manager):
        root = _parse(builtin_manager.generate_styles_xml())

        ids = [style.get(qn("w:styleId")) for style in root]
        assert ids == ["Code"] + [f"Heading {level}" for level in range(1, 7)] + ["Normal"]

    def test_heading_markup(self, builtin_manager):
        root = _parse(builtin_manager.generate_styles_xml())
        heading = root.xpath("w:style[@w:styleId='Heading 1']", namespaces=NAMESPACES)[0]

        assert heading.get(qn("w:type")) == "paragraph"
        assert heading.find(qn("w:name")).get(qn("w:val")) == "Heading 1"
        assert heading.xpath("w:pPr/w:spacing/@w:before", namespaces=NAMESPACES) == ["240"]
        assert heading.xpath("w:rPr/w:sz/@w:val", namespaces=NAMESPACES) == ["32"]
        assert heading.xpath("w:rPr/w:b", namespaces=NAMESPACES)

    def test_character_and_table_styles(self, style_manager):
        emphasis = style_manager.create_character_style("Emphasis")
        emphasis.set_formatting(FormattingFlag.ITALIC)
        grid = style_manager.create_table_style("Grid")
        grid.set_table_properties(TableStyleProperties(table_width_pts=200.0, border_style="single"))
        wide = style_manager.create_table_style("Wide Grid")
        wide.set_base_style("Grid")

        root = _parse(style_manager.generate_styles_xml())
        by_id = {style.get(qn("w:styleId")): style for style in root}

        assert by_id["Emphasis"].get(qn("w:type")) == "character"
        assert by_id["Emphasis"].xpath("w:rPr/w:i", namespaces=NAMESPACES)
        assert by_id["Grid"].get(qn("w:type")) == "table"
        assert by_id["Grid"].xpath("w:tblPr/w:tblW/@w:w", namespaces=NAMESPACES) == ["4000"]
        assert by_id["Wide Grid"].find(qn("w:basedOn")).get(qn("w:val")) == "Grid"
        assert by_id["Wide Grid"].find(qn("w:tblPr")) is None

    def test_write_styles_xml(self, builtin_manager, temp_dir):
        path = builtin_manager.write_styles_xml(temp_dir / "styles.xml")

        assert path.exists()
        assert path.read_text(encoding="utf-8") == builtin_manager.generate_styles_xml()
