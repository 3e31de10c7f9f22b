"""
Property mapper between style property bags and WordprocessingML markup.

Handles reading and writing of ``w:pPr``, ``w:rPr`` and ``w:tblPr`` containers.
Element wrappers and style serialization both go through these functions, so a
value written for a paragraph reads back the same way it is written for a style.
"""

from typing import Optional
import logging

from lxml import etree

from ..config import DEFAULT_CONFIG, StyleConfig
from ..utils import xml_utils as xu
from ..utils.enums import AlignmentType, FormattingFlag, HighlightColor, ListType
from ..utils.units import (
    eighths_to_points,
    half_points_to_points,
    line_spacing_to_ooxml,
    ooxml_to_line_spacing,
    points_to_eighths,
    points_to_half_points,
    points_to_twips,
    twips_to_points,
)
from ..utils.color_utils import normalize_hex_color
from ..utils.exceptions import ErrorKind
from .properties import CharacterStyleProperties, ParagraphStyleProperties, TableStyleProperties
from . import validation

logger = logging.getLogger(__name__)

PPR_ORDER = ('w:pStyle', 'w:numPr', 'w:spacing', 'w:ind', 'w:jc')
RPR_ORDER = (
    'w:rStyle', 'w:rFonts', 'w:b', 'w:bCs', 'w:i', 'w:iCs', 'w:smallCaps',
    'w:strike', 'w:shadow', 'w:color', 'w:sz', 'w:szCs', 'w:highlight',
    'w:u', 'w:vertAlign',
)
TBLPR_ORDER = ('w:tblStyle', 'w:tblW', 'w:jc', 'w:tblBorders', 'w:tblCellMar')
BORDER_EDGES = ('top', 'left', 'bottom', 'right', 'insideH', 'insideV')
MARGIN_EDGES = ('top', 'left', 'bottom', 'right')

# Toggle elements written for each flag; the first tag is the one read back.
FLAG_TAGS = (
    (FormattingFlag.BOLD, ('w:b', 'w:bCs')),
    (FormattingFlag.ITALIC, ('w:i', 'w:iCs')),
    (FormattingFlag.STRIKETHROUGH, ('w:strike',)),
    (FormattingFlag.SMALLCAPS, ('w:smallCaps',)),
    (FormattingFlag.SHADOW, ('w:shadow',)),
)


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric markup value '{value}'")
        return None


# ----------------------------------------------------------------------
# Paragraph properties
# ----------------------------------------------------------------------
def set_style_reference(container: etree._Element, tag: str, style_name: Optional[str], order) -> None:
    """Write or clear a ``w:pStyle``/``w:rStyle``/``w:tblStyle`` reference."""
    if style_name:
        child = xu.get_or_add_child(container, tag, order=order)
        xu.set_attr(child, 'w:val', style_name)
    else:
        xu.remove_child(container, tag)


def set_paragraph_alignment(pPr: etree._Element, alignment: AlignmentType) -> None:
    validation.check_enum(alignment, AlignmentType, 'alignment', ErrorKind.INVALID_ALIGNMENT)
    xu.set_attr(xu.get_or_add_child(pPr, 'w:jc', order=PPR_ORDER), 'w:val', alignment.value)


def get_paragraph_alignment(pPr: Optional[etree._Element]) -> Optional[AlignmentType]:
    value = xu.get_child_attr(pPr, 'w:jc')
    return AlignmentType.parse(value) if value else None


def set_paragraph_spacing(pPr: etree._Element, before: Optional[float] = None,
                          after: Optional[float] = None) -> None:
    if before is not None:
        validation.check_non_negative(before, 'space_before_pts')
    if after is not None:
        validation.check_non_negative(after, 'space_after_pts')
    spacing = xu.get_or_add_child(pPr, 'w:spacing', order=PPR_ORDER)
    if before is not None:
        xu.set_attr(spacing, 'w:before', points_to_twips(before))
    if after is not None:
        xu.set_attr(spacing, 'w:after', points_to_twips(after))


def set_line_spacing(pPr: etree._Element, multiplier: float) -> None:
    validation.check_line_spacing(multiplier)
    spacing = xu.get_or_add_child(pPr, 'w:spacing', order=PPR_ORDER)
    xu.set_attr(spacing, 'w:line', line_spacing_to_ooxml(multiplier))
    xu.set_attr(spacing, 'w:lineRule', 'auto')


def set_indentation(pPr: etree._Element, left: Optional[float] = None, right: Optional[float] = None,
                    first_line: Optional[float] = None) -> None:
    """Write ``w:ind``; a negative first-line indent becomes ``w:hanging``."""
    if left is not None:
        validation.check_non_negative(left, 'left_indent_pts')
    if right is not None:
        validation.check_non_negative(right, 'right_indent_pts')
    ind = xu.get_or_add_child(pPr, 'w:ind', order=PPR_ORDER)
    if left is not None:
        xu.set_attr(ind, 'w:left', points_to_twips(left))
    if right is not None:
        xu.set_attr(ind, 'w:right', points_to_twips(right))
    if first_line is not None:
        ind.attrib.pop(xu.qn('w:firstLine'), None)
        ind.attrib.pop(xu.qn('w:hanging'), None)
        if first_line < 0:
            xu.set_attr(ind, 'w:hanging', points_to_twips(-first_line))
        else:
            xu.set_attr(ind, 'w:firstLine', points_to_twips(first_line))


def set_list_style(pPr: etree._Element, list_type: ListType, level: int = 0,
                   config: StyleConfig = DEFAULT_CONFIG) -> None:
    """Attach numbering; ``ListType.NONE`` removes it."""
    validation.check_enum(list_type, ListType, 'list_type', ErrorKind.INVALID_ARGUMENT)
    if list_type is ListType.NONE:
        xu.remove_child(pPr, 'w:numPr')
        return
    validation.check_list_level(level, config)
    num_pr = xu.get_or_add_child(pPr, 'w:numPr', order=PPR_ORDER)
    num_id = config.bullet_num_id if list_type is ListType.BULLET else config.numbered_num_id
    xu.set_child_val(num_pr, 'w:ilvl', level)
    xu.set_child_val(num_pr, 'w:numId', num_id)


def write_paragraph_properties(pPr: etree._Element, props: ParagraphStyleProperties,
                               config: StyleConfig = DEFAULT_CONFIG) -> None:
    """Write every set field of ``props`` into ``pPr``."""
    if props.alignment is not None:
        set_paragraph_alignment(pPr, props.alignment)
    if props.space_before_pts is not None or props.space_after_pts is not None:
        set_paragraph_spacing(pPr, props.space_before_pts, props.space_after_pts)
    if props.line_spacing is not None:
        set_line_spacing(pPr, props.line_spacing)
    if any(v is not None for v in (props.left_indent_pts, props.right_indent_pts, props.first_line_indent_pts)):
        set_indentation(pPr, props.left_indent_pts, props.right_indent_pts, props.first_line_indent_pts)
    if props.list_type is not None:
        set_list_style(pPr, props.list_type, props.list_level or 0, config)


def read_paragraph_properties(pPr: Optional[etree._Element],
                              config: StyleConfig = DEFAULT_CONFIG) -> ParagraphStyleProperties:
    """Build a bag from direct paragraph markup; absent markup stays unset."""
    props = ParagraphStyleProperties()
    if pPr is None:
        return props

    props.alignment = get_paragraph_alignment(pPr)

    spacing = xu.find_child(pPr, 'w:spacing')
    if spacing is not None:
        before = _to_float(xu.get_attr(spacing, 'w:before'))
        after = _to_float(xu.get_attr(spacing, 'w:after'))
        line = _to_float(xu.get_attr(spacing, 'w:line'))
        rule = xu.get_attr(spacing, 'w:lineRule')
        props.space_before_pts = twips_to_points(before) if before is not None else None
        props.space_after_pts = twips_to_points(after) if after is not None else None
        if line is not None and rule in (None, 'auto'):
            props.line_spacing = ooxml_to_line_spacing(line)

    ind = xu.find_child(pPr, 'w:ind')
    if ind is not None:
        left = _to_float(xu.get_attr(ind, 'w:left') or xu.get_attr(ind, 'w:start'))
        right = _to_float(xu.get_attr(ind, 'w:right') or xu.get_attr(ind, 'w:end'))
        first = _to_float(xu.get_attr(ind, 'w:firstLine'))
        hanging = _to_float(xu.get_attr(ind, 'w:hanging'))
        props.left_indent_pts = twips_to_points(left) if left is not None else None
        props.right_indent_pts = twips_to_points(right) if right is not None else None
        if hanging is not None:
            props.first_line_indent_pts = -twips_to_points(hanging)
        elif first is not None:
            props.first_line_indent_pts = twips_to_points(first)

    num_pr = xu.find_child(pPr, 'w:numPr')
    if num_pr is not None:
        num_id = xu.get_child_attr(num_pr, 'w:numId')
        level = xu.get_child_attr(num_pr, 'w:ilvl')
        if num_id == '0':
            props.list_type = ListType.NONE
        elif num_id is not None:
            props.list_type = ListType.BULLET if num_id == str(config.bullet_num_id) else ListType.NUMBER
        if level is not None and level.isdigit():
            props.list_level = int(level)
    return props


# ----------------------------------------------------------------------
# Character properties
# ----------------------------------------------------------------------
def set_font(rPr: etree._Element, font_name: str) -> None:
    validation.check_font_name(font_name)
    fonts = xu.get_or_add_child(rPr, 'w:rFonts', order=RPR_ORDER)
    for attr in ('w:ascii', 'w:hAnsi', 'w:eastAsia', 'w:cs'):
        xu.set_attr(fonts, attr, font_name)


def set_font_size(rPr: etree._Element, size_pts: float, config: StyleConfig = DEFAULT_CONFIG) -> None:
    validation.check_font_size(size_pts, config)
    half_points = points_to_half_points(size_pts)
    xu.set_attr(xu.get_or_add_child(rPr, 'w:sz', order=RPR_ORDER), 'w:val', half_points)
    xu.set_attr(xu.get_or_add_child(rPr, 'w:szCs', order=RPR_ORDER), 'w:val', half_points)


def set_font_color(rPr: etree._Element, color_hex: str) -> None:
    color = normalize_hex_color(color_hex, 'font_color_hex')
    xu.set_attr(xu.get_or_add_child(rPr, 'w:color', order=RPR_ORDER), 'w:val', color)


def set_highlight(rPr: etree._Element, highlight: HighlightColor) -> None:
    validation.check_enum(highlight, HighlightColor, 'highlight_color', ErrorKind.INVALID_ARGUMENT)
    if highlight is HighlightColor.NONE:
        xu.remove_child(rPr, 'w:highlight')
        return
    xu.set_attr(xu.get_or_add_child(rPr, 'w:highlight', order=RPR_ORDER), 'w:val', highlight.value)


def set_formatting(rPr: etree._Element, flags: FormattingFlag) -> None:
    """Make the toggle markup of ``rPr`` match ``flags`` exactly."""
    flags = FormattingFlag(int(flags))
    for flag, tags in FLAG_TAGS:
        for tag in tags:
            if flag in flags:
                child = xu.get_or_add_child(rPr, tag, order=RPR_ORDER)
                child.attrib.pop(xu.qn('w:val'), None)
            else:
                xu.remove_child(rPr, tag)

    if FormattingFlag.UNDERLINE in flags:
        xu.set_attr(xu.get_or_add_child(rPr, 'w:u', order=RPR_ORDER), 'w:val', 'single')
    else:
        xu.remove_child(rPr, 'w:u')

    if FormattingFlag.SUPERSCRIPT in flags:
        xu.set_attr(xu.get_or_add_child(rPr, 'w:vertAlign', order=RPR_ORDER), 'w:val', 'superscript')
    elif FormattingFlag.SUBSCRIPT in flags:
        xu.set_attr(xu.get_or_add_child(rPr, 'w:vertAlign', order=RPR_ORDER), 'w:val', 'subscript')
    else:
        xu.remove_child(rPr, 'w:vertAlign')


def get_formatting(rPr: Optional[etree._Element]) -> FormattingFlag:
    flags = FormattingFlag.NONE
    if rPr is None:
        return flags
    for flag, tags in FLAG_TAGS:
        if xu.is_on(xu.find_child(rPr, tags[0])):
            flags |= flag
    underline = xu.get_child_attr(rPr, 'w:u')
    if xu.find_child(rPr, 'w:u') is not None and underline != 'none':
        flags |= FormattingFlag.UNDERLINE
    vert_align = xu.get_child_attr(rPr, 'w:vertAlign')
    if vert_align == 'superscript':
        flags |= FormattingFlag.SUPERSCRIPT
    elif vert_align == 'subscript':
        flags |= FormattingFlag.SUBSCRIPT
    return flags


def _has_formatting_markup(rPr: etree._Element) -> bool:
    tags = [tag for _, group in FLAG_TAGS for tag in group] + ['w:u', 'w:vertAlign']
    return any(xu.find_child(rPr, tag) is not None for tag in tags)


def write_character_properties(rPr: etree._Element, props: CharacterStyleProperties,
                               config: StyleConfig = DEFAULT_CONFIG) -> None:
    """Write every set field of ``props`` into ``rPr``."""
    if props.font_name is not None:
        set_font(rPr, props.font_name)
    if props.font_size_pts is not None:
        set_font_size(rPr, props.font_size_pts, config)
    if props.font_color_hex is not None:
        set_font_color(rPr, props.font_color_hex)
    if props.highlight_color is not None:
        set_highlight(rPr, props.highlight_color)
    if props.formatting_flags is not None:
        set_formatting(rPr, props.formatting_flags)


def read_character_properties(rPr: Optional[etree._Element]) -> CharacterStyleProperties:
    """Build a bag from direct run markup; absent markup stays unset."""
    props = CharacterStyleProperties()
    if rPr is None:
        return props

    fonts = xu.find_child(rPr, 'w:rFonts')
    if fonts is not None:
        props.font_name = xu.get_attr(fonts, 'w:ascii') or xu.get_attr(fonts, 'w:hAnsi')

    size = _to_float(xu.get_child_attr(rPr, 'w:sz'))
    if size is not None:
        props.font_size_pts = half_points_to_points(size)

    color = xu.get_child_attr(rPr, 'w:color')
    if color and color.lower() != 'auto':
        props.font_color_hex = color.upper()

    highlight = xu.get_child_attr(rPr, 'w:highlight')
    if highlight:
        props.highlight_color = HighlightColor.parse(highlight)

    if _has_formatting_markup(rPr):
        props.formatting_flags = get_formatting(rPr)
    return props


# ----------------------------------------------------------------------
# Table properties
# ----------------------------------------------------------------------
def set_table_width(tblPr: etree._Element, width_pts: float, config: StyleConfig = DEFAULT_CONFIG) -> None:
    validation.check_table_width(width_pts, config)
    tbl_w = xu.get_or_add_child(tblPr, 'w:tblW', order=TBLPR_ORDER)
    xu.set_attr(tbl_w, 'w:w', points_to_twips(width_pts))
    xu.set_attr(tbl_w, 'w:type', 'dxa')


def set_table_alignment(tblPr: etree._Element, alignment: str) -> None:
    token = validation.check_table_alignment(alignment)
    xu.set_attr(xu.get_or_add_child(tblPr, 'w:jc', order=TBLPR_ORDER), 'w:val', token)


def _border_edges(tblPr: etree._Element):
    borders = xu.get_or_add_child(tblPr, 'w:tblBorders', order=TBLPR_ORDER)
    return [xu.get_or_add_child(borders, edge, order=tuple(f'w:{e}' for e in BORDER_EDGES))
            for edge in (f'w:{e}' for e in BORDER_EDGES)]


def set_border_style(tblPr: etree._Element, style: str) -> None:
    token = validation.check_border_style(style)
    for edge in _border_edges(tblPr):
        xu.set_attr(edge, "w:val", token)


def set_border_width(tblPr: etree._Element, width_pts: float, config: StyleConfig = DEFAULT_CONFIG) -> None:
    validation.check_border_width(width_pts, config)
    for edge in _border_edges(tblPr):
        xu.set_attr(edge, 'w:sz', points_to_eighths(width_pts))


def set_border_color(tblPr: etree._Element, color_hex: str) -> None:
    color = normalize_hex_color(color_hex, 'border_color_hex')
    for edge in _border_edges(tblPr):
        xu.set_attr(edge, 'w:color', color)


def set_cell_margins(tblPr: etree._Element, padding_pts: float) -> None:
    validation.check_non_negative(padding_pts, 'cell_padding_pts', ErrorKind.INVALID_MARGIN)
    margins = xu.get_or_add_child(tblPr, 'w:tblCellMar', order=TBLPR_ORDER)
    for edge in MARGIN_EDGES:
        child = xu.get_or_add_child(margins, f'w:{edge}')
        xu.set_attr(child, 'w:w', points_to_twips(padding_pts))
        xu.set_attr(child, 'w:type', 'dxa')


def write_table_properties(tblPr: etree._Element, props: TableStyleProperties,
                           config: StyleConfig = DEFAULT_CONFIG) -> None:
    """Write every set field of ``props`` into ``tblPr``."""
    if props.table_width_pts is not None:
        set_table_width(tblPr, props.table_width_pts, config)
    if props.table_alignment is not None:
        set_table_alignment(tblPr, props.table_alignment)
    if props.border_style is not None:
        set_border_style(tblPr, props.border_style)
    if props.border_width_pts is not None:
        set_border_width(tblPr, props.border_width_pts, config)
    if props.border_color_hex is not None:
        set_border_color(tblPr, props.border_color_hex)
    if props.cell_padding_pts is not None:
        set_cell_margins(tblPr, props.cell_padding_pts)


def read_table_properties(tblPr: Optional[etree._Element]) -> TableStyleProperties:
    """Build a bag from direct table markup; absent markup stays unset."""
    props = TableStyleProperties()
    if tblPr is None:
        return props

    tbl_w = xu.find_child(tblPr, 'w:tblW')
    if tbl_w is not None and xu.get_attr(tbl_w, 'w:type') in (None, 'dxa'):
        width = _to_float(xu.get_attr(tbl_w, 'w:w'))
        if width:
            props.table_width_pts = twips_to_points(width)

    alignment = xu.get_child_attr(tblPr, 'w:jc')
    if alignment:
        props.table_alignment = alignment

    borders = xu.find_child(tblPr, 'w:tblBorders')
    if borders is not None:
        edge = next((child for child in borders if xu.get_attr(child, 'w:val') is not None), None)
        if edge is not None:
            style = xu.get_attr(edge, 'w:val')
            props.border_style = 'none' if style == 'nil' else style
            size = _to_float(xu.get_attr(edge, 'w:sz'))
            if size is not None:
                props.border_width_pts = eighths_to_points(size)
            color = xu.get_attr(edge, 'w:color')
            if color and color.lower() != 'auto':
                props.border_color_hex = color.upper()

    margins = xu.find_child(tblPr, 'w:tblCellMar')
    if margins is not None:
        top = xu.find_child(margins, 'w:top')
        source = top if top is not None else next(iter(margins), None)
        padding = _to_float(xu.get_attr(source, 'w:w'))
        if padding is not None:
            props.cell_padding_pts = twips_to_points(padding)
    return props
