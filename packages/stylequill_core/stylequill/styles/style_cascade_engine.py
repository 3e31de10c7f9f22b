"""Inheritance resolution along base-style chains."""

from __future__ import annotations

from typing import Callable, FrozenSet, List, Optional, TypeVar
import logging

from ..utils.exceptions import StyleInheritanceCycleError
from .properties import (
    CharacterStyleProperties,
    ParagraphStyleProperties,
    PropertyBag,
    TableStyleProperties,
)
from .style import Style

logger = logging.getLogger(__name__)

BagT = TypeVar("BagT", bound=PropertyBag)
StyleLookup = Callable[[str], Optional[Style]]


class StyleCascadeEngine:
    """Compose effective property bags from a style and its ancestors."""

    def __init__(self, lookup: StyleLookup) -> None:
        self._lookup = lookup

    # ------------------------------------------------------------------
    def resolve_paragraph(self, start: ParagraphStyleProperties, style_name: str) -> ParagraphStyleProperties:
        return self._resolve(start, style_name, lambda s: s.paragraph_properties, frozenset())

    def resolve_character(self, start: CharacterStyleProperties, style_name: str) -> CharacterStyleProperties:
        return self._resolve(start, style_name, lambda s: s.character_properties, frozenset())

    def resolve_table(self, start: TableStyleProperties, style_name: str) -> TableStyleProperties:
        return self._resolve(start, style_name, lambda s: s.table_properties, frozenset())

    # ------------------------------------------------------------------
    def merge_style_properties(self, base: BagT, override: Optional[BagT]) -> BagT:
        return base.overlay(override)

    # ------------------------------------------------------------------
    def get_inheritance_chain(self, style_name: str) -> List[str]:
        """
        List ``style_name`` followed by its ancestors, nearest first.

        A missing ancestor ends the chain.

        Raises:
            StyleInheritanceCycleError: If the chain revisits a style
        """
        chain: List[str] = []
        current: Optional[str] = style_name
        while current:
            if current in chain:
                raise self._cycle_error(current, chain + [current])
            style = self._lookup(current)
            if style is None:
                if chain:
                    logger.warning(f"Base style '{current}' of '{chain[-1]}' is not registered")
                break
            chain.append(current)
            current = style.base_style
        return chain

    # ------------------------------------------------------------------
    def _resolve(self, start: BagT, style_name: str, bag_of: Callable[[Style], BagT],
                 visited: FrozenSet[str]) -> BagT:
        style = self._lookup(style_name)
        if style is None:
            logger.warning(f"Style '{style_name}' not found during inheritance resolution")
            return start.copy()
        if style_name in visited:
            raise self._cycle_error(style_name, sorted(visited) + [style_name])

        own = bag_of(style)
        if style.base_style:
            # The base chain starts again from the caller's bag, then this style wins.
            inherited = self._resolve(start, style.base_style, bag_of, visited | {style_name})
            return inherited.overlay(own)
        return start.overlay(own)

    @staticmethod
    def _cycle_error(style_name: str, path: List[str]) -> StyleInheritanceCycleError:
        return StyleInheritanceCycleError(
            f"Inheritance cycle detected at style '{style_name}': {' -> '.join(path)}",
            context={"operation": "resolve_inheritance", "style_name": style_name, "path": path},
        )
