"""Turn text segments into coloured display units and HTML markup."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from html import escape

from ehl.extraction.types import Entity
from ehl.highlight.colors import CategoryColorAssigner
from ehl.highlight.partition import TextSegment, partition

NO_TEXT_MARKER = "No text provided yet."


@dataclass(frozen=True)
class HighlightSpan:
    """One display unit: plain text, or entity text with its category colour."""

    text: str
    category: str | None = None
    color: str | None = None

    @property
    def is_entity(self) -> bool:
        return self.category is not None

    @property
    def label(self) -> str | None:
        return self.category


@dataclass(frozen=True)
class LegendEntry:
    category: str
    color: str


def build_legend(
    entities: Iterable[Entity], colors: CategoryColorAssigner
) -> list[LegendEntry]:
    """Register every category in first-seen entity order and list its colour.

    This is the pass that assigns colours; render() only looks them up.
    """
    legend: list[LegendEntry] = []
    seen: set[str] = set()
    for entity in entities:
        if entity.category in seen:
            continue
        seen.add(entity.category)
        legend.append(LegendEntry(entity.category, colors.color_for(entity.category)))
    return legend


def render(
    segments: Sequence[TextSegment], colors: CategoryColorAssigner
) -> list[HighlightSpan]:
    """Pair each segment with its visual treatment.

    Raises:
        KeyError: If an entity segment's category was never registered,
            i.e. build_legend() was not run for these entities.
    """
    spans: list[HighlightSpan] = []
    for segment in segments:
        if segment.is_entity and segment.category is not None:
            color = colors.get(segment.category)
            if color is None:
                raise KeyError(
                    f"No colour registered for category {segment.category!r}; "
                    "call build_legend() first"
                )
            spans.append(HighlightSpan(segment.text, segment.category, color))
        else:
            spans.append(HighlightSpan(segment.text))
    return spans


def render_html(spans: Sequence[HighlightSpan]) -> str:
    """Render spans as an HTML fragment. Whitespace is kept with pre-wrap."""
    parts: list[str] = []
    for span in spans:
        if span.is_entity:
            category = escape(span.category or "", quote=True)
            parts.append(
                f"<mark class='ehl-entity' data-category='{category}' "
                f"style='background-color: {span.color}' "
                f"title='Category: {category}'>{escape(span.text)}</mark>"
            )
        else:
            parts.append(f"<span>{escape(span.text)}</span>")
    return (
        "<div class='ehl-highlighted' style='white-space: pre-wrap'>"
        + "".join(parts)
        + "</div>"
    )


def render_legend_html(legend: Sequence[LegendEntry]) -> str:
    if not legend:
        return ""
    badges = "".join(
        f"<span class='ehl-badge' style='background-color: {entry.color}'>"
        f"{escape(entry.category)}</span>"
        for entry in legend
    )
    return f"<div class='ehl-legend'>{badges}</div>"


def render_empty_html() -> str:
    return f"<p class='ehl-empty'><em>{escape(NO_TEXT_MARKER)}</em></p>"


def highlight(
    text: str, entities: Sequence[Entity], colors: CategoryColorAssigner
) -> tuple[list[LegendEntry], list[HighlightSpan]]:
    """Legend and display spans for *text*; no spans when the text is blank."""
    if not text.strip():
        return [], []
    legend = build_legend(entities, colors)
    return legend, render(partition(text, entities), colors)
