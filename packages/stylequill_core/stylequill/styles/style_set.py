"""Named, ordered collections of style names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List


@dataclass
class StyleSet:
    """
    Ordered list of style names applied together.

    A set only holds names; the styles themselves live in the manager,
    which checks them when the set is registered and again when it is applied.
    """

    name: str
    description: str = ""
    included_styles: List[str] = field(default_factory=list)

    def add_style(self, style_name: str) -> None:
        if style_name not in self.included_styles:
            self.included_styles.append(style_name)

    def contains(self, style_name: str) -> bool:
        return style_name in self.included_styles

    def copy(self) -> "StyleSet":
        return StyleSet(self.name, self.description, list(self.included_styles))

    def __len__(self) -> int:
        return len(self.included_styles)

    def __iter__(self) -> Iterator[str]:
        return iter(self.included_styles)
