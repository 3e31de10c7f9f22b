"""
Exceptions for the style system.

Handles the exception hierarchy, error categories and kinds, error context, and exception chaining.
"""

from enum import Enum
from typing import Optional, Any, Dict, List
import traceback


class ErrorCategory(str, Enum):
    """Subsystem an error originated in."""

    STYLE_SYSTEM = "style_system"
    VALIDATION = "validation"
    XML_PARSING = "xml_parsing"
    ELEMENT_OPERATION = "element_operation"


class ErrorKind(str, Enum):
    """Specific failure reported by a style operation."""

    STYLE_NOT_FOUND = "style_not_found"
    STYLE_ALREADY_EXISTS = "style_already_exists"
    STYLE_PROPERTY_INVALID = "style_property_invalid"
    STYLE_INHERITANCE_CYCLE = "style_inheritance_cycle"
    STYLE_DEPENDENCY_MISSING = "style_dependency_missing"
    STYLE_APPLICATION_FAILED = "style_application_failed"

    VALIDATION_FAILED = "validation_failed"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_FONT_SIZE = "invalid_font_size"
    INVALID_COLOR_FORMAT = "invalid_color_format"
    INVALID_ALIGNMENT = "invalid_alignment"
    INVALID_SPACING = "invalid_spacing"
    INVALID_TABLE_DIMENSION = "invalid_table_dimension"
    INVALID_BORDER = "invalid_border"
    INVALID_MARGIN = "invalid_margin"
    INVALID_WIDTH = "invalid_width"
    INVALID_HEIGHT = "invalid_height"
    INVALID_UNIT = "invalid_unit"

    XML_PARSE_ERROR = "xml_parse_error"
    XML_INVALID_STRUCTURE = "xml_invalid_structure"
    XML_ATTRIBUTE_MISSING = "xml_attribute_missing"
    XML_NAMESPACE_ERROR = "xml_namespace_error"
    UNSUPPORTED_VERSION = "unsupported_version"
    EMPTY_STYLE_SET = "empty_style_set"
    FILE_NOT_FOUND = "file_not_found"


class DocumentError(Exception):
    """
    Base exception for document-related errors.

    Handles document error functionality, error handling, and error messages.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize document error.

        Args:
            message: Error message
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.error_code = error_code
        self.details = details or {}
        self.traceback = traceback.format_exc() if cause is not None else None
        if cause is not None:
            self.__cause__ = cause

    def get_error_info(self) -> Dict[str, Any]:
        """
        Get error information.

        Returns:
            Dictionary with error information
        """
        return {
            'message': self.message,
            'cause': str(self.cause) if self.cause else None,
            'error_code': self.error_code,
            'details': self.details,
            'traceback': self.traceback
        }

    def __str__(self) -> str:
        """String representation of exception."""
        return f"{self.__class__.__name__}: {self.message}"


class ParsingError(DocumentError):
    """
    Exception for parsing-related errors.

    Handles parsing error functionality, parsing error handling, and parsing error messages.
    """

    def __init__(self, message: str, file_path: Optional[str] = None,
                 line_number: Optional[int] = None,
                 cause: Optional[Exception] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, cause, error_code, details)
        self.file_path = file_path
        self.line_number = line_number

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'file_path': self.file_path,
            'line_number': self.line_number,
        })
        return info


class StyleError(DocumentError):
    """
    Base exception for style system errors.

    Every style error carries a category, a kind, an operation context and,
    optionally, the lower-level error it wraps.
    """

    default_kind = ErrorKind.VALIDATION_FAILED
    default_category = ErrorCategory.STYLE_SYSTEM

    def __init__(self, message: str, kind: Optional[ErrorKind] = None,
                 category: Optional[ErrorCategory] = None,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """
        Initialize style error.

        Args:
            message: Error message
            kind: Specific error kind (defaults to the class kind)
            category: Originating subsystem (defaults to the class category)
            context: Operation context (operation, style_name, field_name, ...)
            cause: Causing exception
        """
        self.kind = kind or self.default_kind
        self.category = category or self.default_category
        self.context: Dict[str, Any] = dict(context or {})
        super().__init__(message, cause=cause, error_code=self.kind.value, details=self.context)

    @property
    def operation(self) -> Optional[str]:
        return self.context.get('operation')

    @property
    def style_name(self) -> Optional[str]:
        return self.context.get('style_name')

    def caused_by_chain(self) -> List[str]:
        """
        Collect messages from this error down to the root cause.

        Returns:
            List of messages, outermost first
        """
        chain: List[str] = []
        current: Optional[BaseException] = self
        seen = set()
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            chain.append(getattr(current, 'message', None) or str(current))
            current = getattr(current, 'cause', None) or current.__cause__
        return chain

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            'kind': self.kind.value,
            'category': self.category.value,
            'caused_by': self.caused_by_chain()[1:],
        })
        return info


class StyleNotFoundError(StyleError):
    """Raised when a named style or style set is not registered."""

    default_kind = ErrorKind.STYLE_NOT_FOUND


class StyleAlreadyExistsError(StyleError):
    """Raised when registering a name that is already taken."""

    default_kind = ErrorKind.STYLE_ALREADY_EXISTS


class StylePropertyError(StyleError):
    """Raised when a property bag does not fit the style or target element."""

    default_kind = ErrorKind.STYLE_PROPERTY_INVALID


class StyleInheritanceCycleError(StyleError):
    """Raised when a base-style chain loops back on itself."""

    default_kind = ErrorKind.STYLE_INHERITANCE_CYCLE


class StyleDependencyError(StyleError):
    """Raised when an operation would break, or relies on, a missing style reference."""

    default_kind = ErrorKind.STYLE_DEPENDENCY_MISSING


class StyleValidationError(StyleError):
    """
    Exception for invalid property values and arguments.

    Handles validation error functionality and keeps the offending field.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(self, message: str, kind: Optional[ErrorKind] = None,
                 field_name: Optional[str] = None, field_value: Any = None,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        context = dict(context or {})
        if field_name is not None:
            context.setdefault('field_name', field_name)
            context.setdefault('field_value', field_value)
        super().__init__(message, kind=kind, context=context, cause=cause)
        self.field_name = field_name
        self.field_value = field_value


class StyleParseError(StyleError, ParsingError):
    """Raised for malformed or unsupported style definition documents."""

    default_kind = ErrorKind.XML_PARSE_ERROR
    default_category = ErrorCategory.XML_PARSING

    def __init__(self, message: str, kind: Optional[ErrorKind] = None,
                 file_path: Optional[str] = None, line_number: Optional[int] = None,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        StyleError.__init__(self, message, kind=kind, context=context, cause=cause)
        self.file_path = file_path
        self.line_number = line_number


class StyleApplicationError(StyleError):
    """
    Raised after a multi-element operation finished with failures.

    The operation keeps going past per-element failures; this error collects
    them in ``failures`` and chains the first one as its cause.
    """

    default_kind = ErrorKind.STYLE_APPLICATION_FAILED
    default_category = ErrorCategory.ELEMENT_OPERATION

    def __init__(self, message: str, failures: Optional[List[StyleError]] = None,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None, report: Any = None):
        self.failures: List[StyleError] = list(failures or [])
        self.report = report
        if cause is None and self.failures:
            cause = self.failures[0]
        super().__init__(message, context=context, cause=cause)
