"""Per-session category colour assignment.

Each distinct category gets the next colour of a fixed palette in first-seen
order, cycling when the palette runs out. The mapping lives on an explicit
session object so that two analyses never share colour state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)

PASTEL_COLORS: tuple[str, ...] = (
    "#FFB3BA",  # light pink
    "#FFDFBA",  # light peach
    "#FFFFBA",  # light yellow
    "#BAFFC9",  # light mint
    "#BAE1FF",  # light blue
    "#E0BBE4",  # light lavender
    "#FFDAC1",  # light apricot
    "#BEE7E8",  # light aqua
    "#FFC8DD",  # pastel pink
    "#D3E8D3",  # pastel green
    "#FCE8B2",  # pastel gold
    "#C7CEEA",  # periwinkle
)


class CategoryColorAssigner:
    """Memoized category -> colour mapping for one analysis session.

    Example:
        >>> colors = CategoryColorAssigner()
        >>> colors.color_for("PERSON")
        '#FFB3BA'
        >>> colors.color_for("LOCATION")
        '#FFDFBA'
        >>> colors.color_for("PERSON")
        '#FFB3BA'
    """

    def __init__(self, palette: Sequence[str] = PASTEL_COLORS) -> None:
        if not palette:
            raise ValueError("palette must contain at least one colour")
        self.palette: tuple[str, ...] = tuple(palette)
        self._colors: dict[str, str] = {}
        self._next_index = 0

    def color_for(self, category: str) -> str:
        """Return the colour for *category*, assigning the next one if unseen."""
        color = self._colors.get(category)
        if color is None:
            color = self.palette[self._next_index % len(self.palette)]
            self._colors[category] = color
            self._next_index += 1
            logger.debug("[Colors] %s -> %s", category, color)
        return color

    def get(self, category: str) -> str | None:
        """Look up a colour without registering the category."""
        return self._colors.get(category)

    def reset(self) -> None:
        """Forget all assignments and restart from the first palette slot."""
        self._colors.clear()
        self._next_index = 0

    @property
    def categories(self) -> list[str]:
        """Registered categories in first-seen order."""
        return list(self._colors)

    def __contains__(self, category: object) -> bool:
        return category in self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._colors)
