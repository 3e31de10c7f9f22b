"""
Style manager for DOCX documents.

Owns the style registry and style sets, loads built-in styles, resolves
inheritance, applies styles to document elements and serializes ``styles.xml``.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Set, Union
import logging
import re

from lxml import etree

from ..config import DEFAULT_CONFIG, StyleConfig
from ..models.elements import Document, Paragraph, Run, StyleTarget, Table, TargetKind
from ..utils import xml_utils as xu
from ..utils.enums import BuiltInStyleCategory, StyleType
from ..utils.exceptions import (
    ErrorKind,
    StyleAlreadyExistsError,
    StyleApplicationError,
    StyleDependencyError,
    StyleError,
    StyleNotFoundError,
    StylePropertyError,
    StyleValidationError,
)
from .defaults import BUILT_IN_LOADERS, BUILT_IN_ORDER, BUILT_IN_STYLE_NAMES
from .properties import CharacterStyleProperties, ParagraphStyleProperties, TableStyleProperties
from .style import Style
from .style_cascade_engine import StyleCascadeEngine
from .style_set import StyleSet

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[StyleError], None]

_HEADING_PATTERN = re.compile(r"^(?:heading|h)\s*([1-9])$")


@dataclass
class StyleApplicationReport:
    """Outcome of a multi-element style operation."""

    operation: str
    target: str
    tables_styled: int = 0
    paragraphs_styled: int = 0
    runs_styled: int = 0
    failures: List[StyleError] = field(default_factory=list)

    @property
    def total_styled(self) -> int:
        return self.tables_styled + self.paragraphs_styled + self.runs_styled

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def count(self, kind: TargetKind) -> None:
        if kind is TargetKind.TABLE:
            self.tables_styled += 1
        elif kind is TargetKind.PARAGRAPH:
            self.paragraphs_styled += 1
        else:
            self.runs_styled += 1


class StyleManager:
    """
    Registry of named styles and style sets.

    Styles returned by lookups are the live registry entries: they stay
    valid while the manager exists and the style is neither removed nor
    cleared. The manager is not thread-safe; callers serialize mutation.
    """

    def __init__(self, config: Optional[StyleConfig] = None):
        """
        Initialize style manager.

        Args:
            config: Limits and constants; defaults are used when omitted
        """
        self.config = config or DEFAULT_CONFIG
        self._styles: Dict[str, Style] = {}
        self._style_sets: Dict[str, StyleSet] = {}
        self._loaded_categories: Set[BuiltInStyleCategory] = set()
        self._cascade = StyleCascadeEngine(self._styles.get)

        logger.debug("Style manager initialized")

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    def _validate_style_name(self, name: str, operation: str) -> None:
        if not name:
            raise StyleValidationError(
                "Style name cannot be empty", kind=ErrorKind.INVALID_ARGUMENT,
                field_name="name", field_value=name, context={"operation": operation},
            )
        if len(name) > self.config.max_style_name_length:
            raise StyleValidationError(
                f"Style name exceeds {self.config.max_style_name_length} characters",
                kind=ErrorKind.INVALID_ARGUMENT, field_name="name", field_value=name,
                context={"operation": operation},
            )
        if name in self._styles:
            raise StyleAlreadyExistsError(
                f"Style '{name}' already exists",
                context={"operation": operation, "style_name": name},
            )

    def _create_style(self, name: str, style_type: StyleType) -> Style:
        operation = f"create_{style_type.value}_style"
        self._validate_style_name(name, operation)
        style = Style(name, style_type, self.config)
        self._styles[name] = style
        logger.debug(f"Created {style_type.value} style '{name}'")
        return style

    def create_paragraph_style(self, name: str) -> Style:
        return self._create_style(name, StyleType.PARAGRAPH)

    def create_character_style(self, name: str) -> Style:
        return self._create_style(name, StyleType.CHARACTER)

    def create_table_style(self, name: str) -> Style:
        return self._create_style(name, StyleType.TABLE)

    def create_mixed_style(self, name: str) -> Style:
        return self._create_style(name, StyleType.MIXED)

    def register_style(self, style: Style) -> Style:
        """
        Adopt a style built outside the manager, e.g. by the definition parser.

        Raises:
            StyleValidationError: If the name is empty or too long
            StyleAlreadyExistsError: If the name is taken
        """
        self._validate_style_name(style.name, "register_style")
        self._styles[style.name] = style
        logger.debug(f"Registered style '{style.name}'")
        return style

    def get_style(self, name: str) -> Style:
        """
        Get style by name.

        Raises:
            StyleNotFoundError: If no style has this name
        """
        style = self._styles.get(name)
        if style is None:
            raise StyleNotFoundError(
                f"Style '{name}' not found",
                context={"operation": "get_style", "style_name": name},
            )
        return style

    def has_style(self, name: str) -> bool:
        return name in self._styles

    def style_count(self) -> int:
        return len(self._styles)

    def remove_style(self, name: str) -> None:
        """
        Remove a style.

        Raises:
            StyleNotFoundError: If no style has this name
            StyleDependencyError: If another style uses it as its base
        """
        if name not in self._styles:
            raise StyleNotFoundError(
                f"Style '{name}' not found",
                context={"operation": "remove_style", "style_name": name},
            )
        for other in self._styles.values():
            if other.base_style == name:
                raise StyleDependencyError(
                    f"Cannot remove style '{name}': style '{other.name}' is based on it",
                    context={"operation": "remove_style", "style_name": name, "dependent_style": other.name},
                )
        del self._styles[name]
        logger.debug(f"Removed style '{name}'")

    def get_all_style_names(self) -> List[str]:
        return sorted(self._styles)

    def get_style_names_by_type(self, style_type: StyleType) -> List[str]:
        return sorted(name for name, style in self._styles.items() if style.type is style_type)

    def clear_all_styles(self) -> None:
        self._styles.clear()
        self._style_sets.clear()
        self._loaded_categories.clear()
        logger.debug("Cleared all styles and style sets")

    def validate_all_styles(self) -> None:
        """
        Validate every registered style.

        Raises:
            StylePropertyError: Wrapping the first style that fails validation
        """
        for name in sorted(self._styles):
            try:
                self._styles[name].validate()
            except StyleValidationError as e:
                raise StylePropertyError(
                    f"Style validation failed for '{name}'",
                    context={"operation": "validate_all_styles", "style_name": name},
                    cause=e,
                ) from e

    # ------------------------------------------------------------------
    # Built-in styles
    # ------------------------------------------------------------------
    def load_built_in_styles(self, category: BuiltInStyleCategory) -> None:
        """
        Create the styles of ``category``; loading a category twice is a no-op.

        Raises:
            StyleAlreadyExistsError: If a built-in name is already registered
                (nothing is created)
        """
        if category in self._loaded_categories:
            logger.debug(f"Built-in category '{category.value}' already loaded")
            return
        for name in BUILT_IN_STYLE_NAMES[category]:
            if name in self._styles:
                raise StyleAlreadyExistsError(
                    f"Cannot load built-in category '{category.value}': style '{name}' already exists",
                    context={"operation": "load_built_in_styles", "style_name": name,
                             "category": category.value},
                )
        BUILT_IN_LOADERS[category](self)
        self._loaded_categories.add(category)
        logger.info(f"Loaded built-in styles: {category.value}")

    def load_all_built_in_styles(self) -> None:
        for category in BUILT_IN_ORDER:
            self.load_built_in_styles(category)

    def is_category_loaded(self, category: BuiltInStyleCategory) -> bool:
        return category in self._loaded_categories

    @staticmethod
    def get_built_in_style_names(category: Optional[BuiltInStyleCategory] = None) -> List[str]:
        if category is not None:
            return list(BUILT_IN_STYLE_NAMES[category])
        return [name for cat in BUILT_IN_ORDER for name in BUILT_IN_STYLE_NAMES[cat]]

    # ------------------------------------------------------------------
    # Inheritance resolution
    # ------------------------------------------------------------------
    def resolve_paragraph_inheritance(self, start: ParagraphStyleProperties,
                                      style_name: str) -> ParagraphStyleProperties:
        """
        Resolve paragraph properties of ``style_name`` through its base chain.

        Args:
            start: Properties to start from
            style_name: Style to resolve; an unknown name returns ``start``

        Returns:
            New bag; the nearest style in the chain wins each set field

        Raises:
            StyleInheritanceCycleError: If the base chain loops
        """
        return self._cascade.resolve_paragraph(start, style_name)

    def resolve_character_inheritance(self, start: CharacterStyleProperties,
                                      style_name: str) -> CharacterStyleProperties:
        return self._cascade.resolve_character(start, style_name)

    def resolve_table_inheritance(self, start: TableStyleProperties,
                                  style_name: str) -> TableStyleProperties:
        return self._cascade.resolve_table(start, style_name)

    def get_inheritance_chain(self, style_name: str) -> List[str]:
        return self._cascade.get_inheritance_chain(style_name)

    def get_effective_paragraph_properties(self, paragraph: Paragraph) -> ParagraphStyleProperties:
        """
        Direct paragraph formatting resolved through the attached style.

        The style chain overrides the direct markup field by field; fields
        the chain leaves unset keep their direct values.
        """
        direct = paragraph.get_properties()
        style_name = paragraph.get_style()
        if not style_name:
            return direct
        return self.resolve_paragraph_inheritance(direct, style_name)

    def get_effective_character_properties(self, run: Run) -> CharacterStyleProperties:
        direct = run.get_properties()
        style_name = run.get_style()
        if not style_name:
            return direct
        return self.resolve_character_inheritance(direct, style_name)

    def get_effective_table_properties(self, table: Table) -> TableStyleProperties:
        direct = table.get_properties()
        style_name = table.get_style()
        if not style_name:
            return direct
        return self.resolve_table_inheritance(direct, style_name)

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------
    @contextmanager
    def _element_operation(self, operation: str, style_name: Optional[str] = None) -> Iterator[None]:
        try:
            yield
        except Exception as e:
            context = {"operation": operation}
            if style_name:
                context["style_name"] = style_name
            raise StyleApplicationError(
                f"{operation} failed: {e}", context=context, cause=e,
            ) from e

    def apply_paragraph_properties(self, paragraph: Paragraph, props: ParagraphStyleProperties) -> None:
        """
        Write every set field of ``props`` to the paragraph.

        Raises:
            StyleApplicationError: If the element rejects a value
        """
        with self._element_operation("apply_paragraph_properties"):
            if props.alignment is not None:
                paragraph.set_alignment(props.alignment)
            if props.space_before_pts is not None or props.space_after_pts is not None:
                paragraph.set_spacing(props.space_before_pts, props.space_after_pts)
            if props.line_spacing is not None:
                paragraph.set_line_spacing(props.line_spacing)
            if any(v is not None for v in (props.left_indent_pts, props.right_indent_pts,
                                           props.first_line_indent_pts)):
                paragraph.set_indentation(props.left_indent_pts, props.right_indent_pts,
                                          props.first_line_indent_pts)
            if props.list_type is not None:
                paragraph.set_list_style(props.list_type, props.list_level or 0)

    def apply_character_properties(self, run: Run, props: CharacterStyleProperties) -> None:
        with self._element_operation("apply_character_properties"):
            if props.font_name is not None:
                run.set_font(props.font_name)
            if props.font_size_pts is not None:
                run.set_font_size(props.font_size_pts)
            if props.font_color_hex is not None:
                run.set_font_color(props.font_color_hex)
            if props.highlight_color is not None:
                run.set_highlight(props.highlight_color)
            if props.formatting_flags is not None:
                run.set_formatting(props.formatting_flags)

    def apply_table_properties(self, table: Table, props: TableStyleProperties) -> None:
        with self._element_operation("apply_table_properties"):
            if props.table_width_pts is not None:
                table.set_width(props.table_width_pts)
            if props.table_alignment is not None:
                table.set_alignment(props.table_alignment)
            if props.border_style is not None:
                table.set_border_style(props.border_style)
            if props.border_width_pts is not None:
                table.set_border_width(props.border_width_pts)
            if props.border_color_hex is not None:
                table.set_border_color(props.border_color_hex)
            if props.cell_padding_pts is not None:
                table.set_cell_margins(props.cell_padding_pts)

    @staticmethod
    def _require_compatible(style: Style, accepted: bool, target: str, operation: str) -> None:
        if not accepted:
            raise StylePropertyError(
                f"Style '{style.name}' of type {style.type.value} cannot be applied to a {target}",
                context={"operation": operation, "style_name": style.name},
            )

    def apply_paragraph_style(self, paragraph: Paragraph, style_name: str) -> None:
        """
        Attach a PARAGRAPH or MIXED style to a paragraph and write its paragraph properties.

        Raises:
            StyleNotFoundError: If the style does not exist
            StylePropertyError: If the style type does not fit a paragraph
            StyleApplicationError: If the element rejects a value
        """
        style = self.get_style(style_name)
        self._require_compatible(style, style.type.accepts_paragraph(), "paragraph", "apply_paragraph_style")
        with self._element_operation("apply_paragraph_style", style_name):
            paragraph.set_style(style_name)
        self.apply_paragraph_properties(paragraph, style.paragraph_properties)
        logger.debug(f"Applied paragraph style '{style_name}'")

    def apply_character_style(self, run: Run, style_name: str) -> None:
        style = self.get_style(style_name)
        self._require_compatible(style, style.type.accepts_character(), "run", "apply_character_style")
        with self._element_operation("apply_character_style", style_name):
            run.set_style(style_name)
        self.apply_character_properties(run, style.character_properties)
        logger.debug(f"Applied character style '{style_name}'")

    def apply_table_style(self, table: Table, style_name: str) -> None:
        style = self.get_style(style_name)
        self._require_compatible(style, style.type.accepts_table(), "table", "apply_table_style")
        with self._element_operation("apply_table_style", style_name):
            table.set_style(style_name)
        self.apply_table_properties(table, style.table_properties)
        logger.debug(f"Applied table style '{style_name}'")

    def apply_style(self, target: StyleTarget, style_name: str) -> None:
        """Apply ``style_name`` to a tagged paragraph, run or table."""
        if target.kind is TargetKind.PARAGRAPH:
            self.apply_paragraph_style(target.element, style_name)
        elif target.kind is TargetKind.RUN:
            self.apply_character_style(target.element, style_name)
        else:
            self.apply_table_style(target.element, style_name)

    # ------------------------------------------------------------------
    # Style sets
    # ------------------------------------------------------------------
    def register_style_set(self, style_set: StyleSet) -> None:
        """
        Register a style set; a copy is stored.

        Raises:
            StyleAlreadyExistsError: If a set with this name exists
            StyleNotFoundError: If an included style is not registered
        """
        if style_set.name in self._style_sets:
            raise StyleAlreadyExistsError(
                f"Style set '{style_set.name}' already exists",
                context={"operation": "register_style_set", "style_set": style_set.name},
            )
        for style_name in style_set:
            if style_name not in self._styles:
                raise StyleNotFoundError(
                    f"Style '{style_name}' referenced by style set '{style_set.name}' not found",
                    context={"operation": "register_style_set", "style_set": style_set.name,
                             "style_name": style_name},
                )
        self._style_sets[style_set.name] = style_set.copy()
        logger.debug(f"Registered style set '{style_set.name}' with {len(style_set)} styles")

    def get_style_set(self, name: str) -> StyleSet:
        style_set = self._style_sets.get(name)
        if style_set is None:
            raise StyleNotFoundError(
                f"Style set '{name}' not found",
                context={"operation": "get_style_set", "style_set": name},
            )
        return style_set

    def has_style_set(self, name: str) -> bool:
        return name in self._style_sets

    def list_style_sets(self) -> List[str]:
        return sorted(self._style_sets)

    def remove_style_set(self, name: str) -> None:
        self.get_style_set(name)
        del self._style_sets[name]
        logger.debug(f"Removed style set '{name}'")

    def _attempt(self, report: StyleApplicationReport, target: StyleTarget, style_name: str,
                 error_handler: Optional[ErrorHandler]) -> None:
        try:
            self.apply_style(target, style_name)
        except StyleError as e:
            report.failures.append(e)
            logger.error(f"{report.operation}: applying '{style_name}' to {target.kind.value} failed: {e.message}")
            if error_handler is not None:
                error_handler(e)
        else:
            report.count(target.kind)

    def _finish(self, report: StyleApplicationReport) -> StyleApplicationReport:
        if report.failures:
            raise StyleApplicationError(
                f"{report.operation} '{report.target}' finished with {len(report.failures)} failure(s)",
                failures=report.failures,
                context={"operation": report.operation, "target": report.target},
                report=report,
            )
        logger.info(f"{report.operation} '{report.target}': styled {report.tables_styled} tables, "
                    f"{report.paragraphs_styled} paragraphs, {report.runs_styled} runs")
        return report

    def apply_style_set(self, set_name: str, document: Document,
                        error_handler: Optional[ErrorHandler] = None) -> StyleApplicationReport:
        """
        Apply a style set to a document in three phases.

        Tables receive every TABLE style of the set. Paragraphs without a
        style reference receive the first PARAGRAPH or MIXED style of the
        set; runs without a style reference receive the first CHARACTER
        style. Per-element failures do not stop the run; they are passed to
        ``error_handler`` and raised together at the end. Changes already
        made are kept.

        Args:
            set_name: Registered style set
            document: Target document
            error_handler: Called once per per-element failure

        Returns:
            Report with per-kind counts

        Raises:
            StyleNotFoundError: If the set does not exist
            StyleDependencyError: If an included style was removed (no element is touched)
            StyleApplicationError: If any element failed
        """
        style_set = self.get_style_set(set_name)
        styles: List[Style] = []
        for style_name in style_set:
            style = self._styles.get(style_name)
            if style is None:
                raise StyleDependencyError(
                    f"Style '{style_name}' in style set '{set_name}' no longer exists",
                    context={"operation": "apply_style_set", "style_set": set_name, "style_name": style_name},
                )
            styles.append(style)

        report = StyleApplicationReport("apply_style_set", set_name)

        for style in (s for s in styles if s.type is StyleType.TABLE):
            for table in document.tables():
                self._attempt(report, StyleTarget.table(table), style.name, error_handler)

        for style in (s for s in styles if s.type.accepts_paragraph()):
            for paragraph in document.paragraphs():
                if not paragraph.has_style():
                    self._attempt(report, StyleTarget.paragraph(paragraph), style.name, error_handler)

        for style in (s for s in styles if s.type is StyleType.CHARACTER):
            for run in document.runs():
                if not run.has_style():
                    self._attempt(report, StyleTarget.run(run), style.name, error_handler)

        return self._finish(report)

    def _select_mapping_targets(self, document: Document, pattern: str) -> List[StyleTarget]:
        key = pattern.strip().lower()
        heading = _HEADING_PATTERN.match(key)
        paragraphs = document.paragraphs()
        if heading:
            wanted = f"Heading {heading.group(1)}"
            return [StyleTarget.paragraph(p) for p in paragraphs if p.get_style() == wanted]
        if key in ("heading*", "h*"):
            return [StyleTarget.paragraph(p) for p in paragraphs
                    if (p.get_style() or "").startswith("Heading")]
        if key in ("table", "tables"):
            return [StyleTarget.table(t) for t in document.tables()]
        if key in ("normal", "body"):
            return [StyleTarget.paragraph(p) for p in paragraphs if p.get_style() in (None, "", "Normal")]
        if key == "code":
            return ([StyleTarget.paragraph(p) for p in paragraphs if p.get_style() == "Code"]
                    + [StyleTarget.run(r) for r in document.runs() if r.get_style() == "Code"])
        return ([StyleTarget.paragraph(p) for p in paragraphs if p.get_style() == pattern]
                + [StyleTarget.run(r) for r in document.runs() if r.get_style() == pattern]
                + [StyleTarget.table(t) for t in document.tables() if t.get_style() == pattern])

    def apply_style_mappings(self, document: Document, mappings: Dict[str, str],
                             error_handler: Optional[ErrorHandler] = None) -> StyleApplicationReport:
        """
        Restyle elements selected by pattern.

        Patterns: ``heading1``/``h1`` (paragraphs styled "Heading 1"),
        ``heading*``/``h*``, ``table``/``tables``, ``normal``/``body``
        (paragraphs styled "Normal" or unstyled), ``code``, or an exact
        current style name. Targets are selected for all patterns before
        anything is changed.

        Raises:
            StyleNotFoundError: If a target style does not exist (nothing is changed)
            StyleApplicationError: If any element failed
        """
        for target_style in mappings.values():
            if target_style not in self._styles:
                raise StyleNotFoundError(
                    f"Target style '{target_style}' not found",
                    context={"operation": "apply_style_mappings", "style_name": target_style},
                )

        selections = [(self._select_mapping_targets(document, pattern), target_style)
                      for pattern, target_style in mappings.items()]

        report = StyleApplicationReport("apply_style_mappings", ", ".join(mappings))
        for targets, target_style in selections:
            for target in targets:
                self._attempt(report, target, target_style, error_handler)
        return self._finish(report)

    # ------------------------------------------------------------------
    # Extraction and comparison
    # ------------------------------------------------------------------
    def extract_style_from_element(self, target: StyleTarget, new_style_name: str) -> Style:
        """
        Create a style from an element's direct formatting.

        Paragraphs yield PARAGRAPH styles, runs CHARACTER styles and tables
        TABLE styles. The new style is discarded if the markup holds values
        a style cannot carry.
        """
        if target.kind is TargetKind.PARAGRAPH:
            style = self.create_paragraph_style(new_style_name)
            setter, props = style.set_paragraph_properties, target.element.get_properties()
        elif target.kind is TargetKind.RUN:
            style = self.create_character_style(new_style_name)
            setter, props = style.set_character_properties, target.element.get_properties()
        else:
            style = self.create_table_style(new_style_name)
            setter, props = style.set_table_properties, target.element.get_properties()

        try:
            setter(props)
        except StyleError:
            del self._styles[new_style_name]
            raise
        logger.debug(f"Extracted style '{new_style_name}' from {target.kind.value}")
        return style

    def compare_styles(self, first_name: str, second_name: str) -> str:
        """
        Describe the differences between two styles.

        Returns:
            Multi-line report; says the styles are identical when nothing differs
        """
        first = self.get_style(first_name)
        second = self.get_style(second_name)
        lines = [f"Comparing '{first_name}' with '{second_name}':"]

        if first.type is not second.type:
            lines.append(f"  type: {first.type.value} vs {second.type.value}")
        if first.base_style != second.base_style:
            lines.append(f"  base style: {first.base_style or '(none)'} vs {second.base_style or '(none)'}")

        for group, bag_a, bag_b in (
            ("paragraph", first.paragraph_properties, second.paragraph_properties),
            ("character", first.character_properties, second.character_properties),
            ("table", first.table_properties, second.table_properties),
        ):
            values_a, values_b = bag_a.to_dict(), bag_b.to_dict()
            for f in fields(bag_a):
                a, b = values_a.get(f.name), values_b.get(f.name)
                if a != b:
                    lines.append(f"  {group}.{f.name}: {_describe(a)} vs {_describe(b)}")

        if len(lines) == 1:
            lines.append("  Styles are identical")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def generate_styles_xml(self) -> str:
        """Serialize every registered style as a ``styles.xml`` part."""
        root = xu.make_element("w:styles")
        for name in sorted(self._styles):
            root.append(self._styles[name].to_element())
        xml = etree.tostring(root, xml_declaration=True, encoding="UTF-8",
                             standalone=True, pretty_print=True)
        return xml.decode("utf-8")

    def write_styles_xml(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.write_text(self.generate_styles_xml(), encoding="utf-8")
        logger.info(f"Wrote {len(self._styles)} styles to {path}")
        return path


def _describe(value) -> str:
    if value is None:
        return "(unset)"
    if isinstance(value, list):
        return "+".join(value) or "none"
    return str(value)


