"""
XML utilities for WordprocessingML markup.

Handles namespace handling, qualified names, and child lookup/creation on lxml trees.
"""

from typing import Dict, Optional, Sequence
import logging

from lxml import etree

logger = logging.getLogger(__name__)

W_NAMESPACE = 'http://schemas.openxmlformats.org/wordprocessingml/2006/main'

NAMESPACES: Dict[str, str] = {
    'w': W_NAMESPACE,
    'r': 'http://schemas.openxmlformats.org/officeDocument/2006/relationships',
}


def qn(tag: str) -> str:
    """
    Expand a prefixed tag such as ``w:pPr`` to Clark notation.

    Args:
        tag: Tag with a known prefix, or an unprefixed local name

    Returns:
        ``{namespace}local`` string usable with lxml
    """
    if ':' not in tag:
        return tag
    prefix, local = tag.split(':', 1)
    return f"{{{NAMESPACES[prefix]}}}{local}"


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def make_element(tag: str, attrs: Optional[Dict[str, str]] = None) -> etree._Element:
    """Create a detached element in the ``w`` namespace map."""
    element = etree.Element(qn(tag), nsmap={'w': W_NAMESPACE})
    for key, value in (attrs or {}).items():
        element.set(qn(key), str(value))
    return element


def find_child(parent: etree._Element, tag: str) -> Optional[etree._Element]:
    return parent.find(qn(tag))


def get_or_add_child(parent: etree._Element, tag: str, first: bool = False,
                     order: Optional[Sequence[str]] = None) -> etree._Element:
    """
    Return the child with ``tag``, creating it when absent.

    Args:
        parent: Parent element
        tag: Prefixed tag of the child
        first: Insert a new child as the first child instead of appending
        order: Schema order of sibling tags; a new child goes before the
            first existing sibling that must follow it

    Returns:
        Existing or newly created child
    """
    child = parent.find(qn(tag))
    if child is not None:
        return child

    child = etree.SubElement(parent, qn(tag)) if not first and not order else etree.Element(qn(tag))
    if first:
        parent.insert(0, child)
    elif order:
        followers = {qn(t) for t in order[order.index(tag) + 1:]} if tag in order else set()
        for index, sibling in enumerate(parent):
            if sibling.tag in followers:
                parent.insert(index, child)
                break
        else:
            parent.append(child)
    return child


def remove_child(parent: etree._Element, tag: str) -> bool:
    """Remove every child with ``tag``; returns True if anything was removed."""
    removed = False
    for child in parent.findall(qn(tag)):
        parent.remove(child)
        removed = True
    return removed


def get_attr(element: Optional[etree._Element], name: str) -> Optional[str]:
    if element is None:
        return None
    return element.get(qn(name))


def set_attr(element: etree._Element, name: str, value) -> None:
    element.set(qn(name), str(value))


def get_child_attr(parent: Optional[etree._Element], tag: str, name: str = 'w:val') -> Optional[str]:
    """Read ``name`` from the ``tag`` child of ``parent``; None when either is missing."""
    if parent is None:
        return None
    return get_attr(parent.find(qn(tag)), name)


def set_child_val(parent: etree._Element, tag: str, value) -> etree._Element:
    """Create or update ``<tag w:val=value/>`` under ``parent``."""
    child = get_or_add_child(parent, tag)
    set_attr(child, 'w:val', value)
    return child


def is_on(element: Optional[etree._Element]) -> bool:
    """Evaluate a toggle property such as ``<w:b/>`` or ``<w:b w:val="0"/>``."""
    if element is None:
        return False
    value = element.get(qn('w:val'))
    return value is None or value.lower() not in ('0', 'false', 'off', 'none')


def to_string(element: etree._Element, pretty_print: bool = True) -> str:
    return etree.tostring(element, encoding='unicode', pretty_print=pretty_print)
