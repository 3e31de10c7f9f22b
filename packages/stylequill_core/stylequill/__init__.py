"""
stylequill - style management for DOCX documents.

Define named paragraph, character and table styles, resolve them through
base-style chains, apply them to WordprocessingML elements one at a time
or as cascading style sets, load them from XML definition documents and
serialize them to ``styles.xml``.

Quick Start:
    from stylequill import StyleManager, Document

    manager = StyleManager()
    manager.load_all_built_in_styles()

    doc = Document.new()
    doc.add_paragraph("Title", style="Heading 1")
    doc.add_paragraph("Body text")
    manager.apply_style_mappings(doc, {"normal": "Normal"})
    print(manager.generate_styles_xml())
"""

from .version import __version__, __version_info__

from .config import StyleConfig
from .styles import (
    ParagraphStyleProperties,
    CharacterStyleProperties,
    TableStyleProperties,
    Style,
    StyleSet,
    StyleManager,
    StyleApplicationReport,
)
from .models import Document, Paragraph, Run, Table, StyleTarget, TargetKind
from .parser import XmlStyleParser, StyleSheetDefinition
from .utils import (
    StyleType,
    AlignmentType,
    ListType,
    HighlightColor,
    FormattingFlag,
    BuiltInStyleCategory,
    ErrorCategory,
    ErrorKind,
    StyleError,
    StyleNotFoundError,
    StyleAlreadyExistsError,
    StylePropertyError,
    StyleInheritanceCycleError,
    StyleDependencyError,
    StyleValidationError,
    StyleParseError,
    StyleApplicationError,
    parse_value_with_unit,
    format_value_with_unit,
    parse_percentage,
    parse_color,
)

__all__ = [
    "__version__",
    "__version_info__",
    "StyleConfig",
    "ParagraphStyleProperties",
    "CharacterStyleProperties",
    "TableStyleProperties",
    "Style",
    "StyleSet",
    "StyleManager",
    "StyleApplicationReport",
    "Document",
    "Paragraph",
    "Run",
    "Table",
    "StyleTarget",
    "TargetKind",
    "XmlStyleParser",
    "StyleSheetDefinition",
    "StyleType",
    "AlignmentType",
    "ListType",
    "HighlightColor",
    "FormattingFlag",
    "BuiltInStyleCategory",
    "ErrorCategory",
    "ErrorKind",
    "StyleError",
    "StyleNotFoundError",
    "StyleAlreadyExistsError",
    "StylePropertyError",
    "StyleInheritanceCycleError",
    "StyleDependencyError",
    "StyleValidationError",
    "StyleParseError",
    "StyleApplicationError",
    "parse_value_with_unit",
    "format_value_with_unit",
    "parse_percentage",
    "parse_color",
]
