"""
Tests for property bag overlay semantics.
"""

from stylequill import (
    AlignmentType,
    CharacterStyleProperties,
    FormattingFlag,
    ParagraphStyleProperties,
    TableStyleProperties,
)


class TestPropertyBags:
    """Test cases for unset-versus-set handling."""

    def test_new_bag_is_empty(self):
        assert ParagraphStyleProperties().is_empty()
        assert CharacterStyleProperties().is_empty()
        assert TableStyleProperties().is_empty()

    def test_zero_is_set(self):
        props = ParagraphStyleProperties(space_before_pts=0.0)

        assert not props.is_empty()
        assert props.set_fields() == {"space_before_pts": 0.0}

    def test_overlay_prefers_other_set_fields(self):
        base = ParagraphStyleProperties(alignment=AlignmentType.LEFT, space_after_pts=6.0)
        top = ParagraphStyleProperties(alignment=AlignmentType.CENTER)

        result = base.overlay(top)

        assert result.alignment is AlignmentType.CENTER
        assert result.space_after_pts == 6.0
        assert base.alignment is AlignmentType.LEFT

    def test_overlay_with_none_copies(self):
        base = CharacterStyleProperties(font_name="Arial")
        result = base.overlay(None)

        assert result == base
        assert result is not base

    def test_to_dict_expands_flags(self):
        props = CharacterStyleProperties(formatting_flags=FormattingFlag.BOLD | FormattingFlag.ITALIC)

        assert props.to_dict() == {"formatting_flags": ["bold", "italic"]}
        assert props.has_flag(FormattingFlag.BOLD)
        assert not props.has_flag(FormattingFlag.UNDERLINE)
