"""
Tests for the style error hierarchy.
"""

from stylequill.utils import (
    DocumentError,
    ErrorCategory,
    ErrorKind,
    ParsingError,
    StyleApplicationError,
    StyleError,
    StyleNotFoundError,
    StyleParseError,
    StyleValidationError,
)


class TestStyleErrors:
    """Test cases for error kinds, context and chaining."""

    def test_defaults_from_class(self):
        error = StyleNotFoundError("missing", context={"operation": "get_style", "style_name": "X"})

        assert isinstance(error, StyleError)
        assert isinstance(error, DocumentError)
        assert error.kind is ErrorKind.STYLE_NOT_FOUND
        assert error.category is ErrorCategory.STYLE_SYSTEM
        assert error.operation == "get_style"
        assert error.style_name == "X"
        assert str(error) == "StyleNotFoundError: missing"

    def test_validation_error_records_field(self):
        error = StyleValidationError("bad size", kind=ErrorKind.INVALID_FONT_SIZE,
                                     field_name="font_size_pts", field_value=-1)

        assert error.category is ErrorCategory.VALIDATION
        assert error.context["field_name"] == "font_size_pts"
        assert error.context["field_value"] == -1

    def test_parse_error_is_parsing_error(self):
        error = StyleParseError("bad", kind=ErrorKind.XML_NAMESPACE_ERROR, file_path="a.xml")

        assert isinstance(error, ParsingError)
        assert error.category is ErrorCategory.XML_PARSING
        assert error.get_error_info()["file_path"] == "a.xml"
        assert error.get_error_info()["kind"] == "xml_namespace_error"

    def test_caused_by_chain(self):
        root = ValueError("not a number")
        middle = StyleValidationError("bad unit", kind=ErrorKind.INVALID_UNIT, cause=root)
        outer = StyleParseError("style 'A' invalid", kind=middle.kind, cause=middle)

        assert outer.caused_by_chain() == ["style 'A' invalid", "bad unit", "not a number"]
        assert outer.__cause__ is middle
        assert outer.get_error_info()["caused_by"] == ["bad unit", "not a number"]

    def test_application_error_chains_first_failure(self):
        first = StyleNotFoundError("one")
        second = StyleNotFoundError("two")
        error = StyleApplicationError("two failures", failures=[first, second])

        assert error.kind is ErrorKind.STYLE_APPLICATION_FAILED
        assert error.category is ErrorCategory.ELEMENT_OPERATION
        assert error.cause is first
        assert error.failures == [first, second]
