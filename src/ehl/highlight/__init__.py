"""Entity alignment, colour assignment and rendering."""

from ehl.highlight.colors import PASTEL_COLORS, CategoryColorAssigner
from ehl.highlight.partition import TextSegment, locate, partition
from ehl.highlight.render import (
    NO_TEXT_MARKER,
    HighlightSpan,
    LegendEntry,
    build_legend,
    highlight,
    render,
    render_empty_html,
    render_html,
    render_legend_html,
)

__all__ = [
    "PASTEL_COLORS",
    "CategoryColorAssigner",
    "TextSegment",
    "locate",
    "partition",
    "NO_TEXT_MARKER",
    "HighlightSpan",
    "LegendEntry",
    "build_legend",
    "highlight",
    "render",
    "render_empty_html",
    "render_html",
    "render_legend_html",
]
