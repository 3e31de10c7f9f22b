"""
Tests for enumeration parsing helpers.
"""

import pytest

from stylequill.utils import AlignmentType, FormattingFlag, HighlightColor, ListType, StyleType


class TestAlignmentType:

    @pytest.mark.parametrize("text, expected", [
        ("left", AlignmentType.LEFT),
        ("CENTER", AlignmentType.CENTER),
        ("right", AlignmentType.RIGHT),
        ("both", AlignmentType.BOTH),
        ("Justify", AlignmentType.BOTH),
    ])
    def test_parse(self, text, expected):
        assert AlignmentType.parse(text) is expected

    def test_parse_unknown(self):
        assert AlignmentType.parse("diagonal") is None


class TestListType:

    @pytest.mark.parametrize("text, expected", [
        ("bullet", ListType.BULLET),
        ("unordered", ListType.BULLET),
        ("numbered", ListType.NUMBER),
        ("ordered", ListType.NUMBER),
        ("decimal", ListType.NUMBER),
        ("none", ListType.NONE),
    ])
    def test_parse_aliases(self, text, expected):
        assert ListType.parse(text) is expected


class TestHighlightColor:

    @pytest.mark.parametrize("text", ["lightGray", "lightgray", "light-gray", "light_grey", "lightgrey"])
    def test_light_gray_spellings(self, text):
        assert HighlightColor.parse(text) is HighlightColor.LIGHT_GRAY

    def test_dark_variants(self):
        assert HighlightColor.parse("dark-blue") is HighlightColor.DARK_BLUE
        assert HighlightColor.DARK_BLUE.value == "darkBlue"

    def test_unknown(self):
        assert HighlightColor.parse("sparkly") is None


class TestStyleType:

    def test_ooxml_type(self):
        assert StyleType.MIXED.ooxml_type == "paragraph"
        assert StyleType.NUMBERING.ooxml_type == "paragraph"
        assert StyleType.CHARACTER.ooxml_type == "character"
        assert StyleType.TABLE.ooxml_type == "table"

    def test_compatibility(self):
        assert StyleType.MIXED.accepts_paragraph()
        assert StyleType.MIXED.accepts_character()
        assert StyleType.MIXED.accepts_table()
        assert not StyleType.PARAGRAPH.accepts_character()
        assert not StyleType.CHARACTER.accepts_table()


class TestFormattingFlag:

    def test_bit_values(self):
        assert int(FormattingFlag.BOLD) == 1
        assert int(FormattingFlag.ITALIC) == 2
        assert int(FormattingFlag.UNDERLINE) == 4
        assert int(FormattingFlag.SHADOW) == 128

    def test_combination(self):
        flags = FormattingFlag.BOLD | FormattingFlag.UNDERLINE
        assert FormattingFlag.BOLD in flags
        assert FormattingFlag.ITALIC not in flags
        assert int(flags) == 5
