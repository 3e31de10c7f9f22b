"""Parsers for style definition documents."""

from .xml_style_parser import XmlStyleParser, StyleSheetDefinition

__all__ = ["XmlStyleParser", "StyleSheetDefinition"]
