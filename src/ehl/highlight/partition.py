"""Align entity mentions to the source text and split it into segments.

The recognizer returns surface strings only, never character offsets, so the
text is aligned by literal substring search:

1. Drop entities whose text is empty or never occurs in the source.
2. Order the rest longest first, ties broken by first occurrence.
3. Starting from one plain segment, split every still-plain segment at all
   non-overlapping occurrences of each entity in turn. Tagged segments are
   never split again, so longer and earlier entities win.

Concatenating the returned segments always reproduces the source text.
Identical strings with different categories all take the category of the
first one processed, and no unicode normalization is applied.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ehl.extraction.types import Entity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextSegment:
    """A contiguous run of the source text, plain or tagged with a category."""

    text: str
    is_entity: bool = False
    category: str | None = None


def locate(original_text: str, entities: Iterable[Entity]) -> list[tuple[Entity, int]]:
    """Return (entity, first index) for every entity found in the text.

    The result is sorted longest text first, then by first occurrence.
    """
    located: list[tuple[Entity, int]] = []
    for entity in entities:
        if not entity.text:
            logger.debug("[Partition] Skipping entity with empty text")
            continue
        index = original_text.find(entity.text)
        if index == -1:
            logger.debug("[Partition] %r not found in text, skipping", entity.text)
            continue
        located.append((entity, index))

    located.sort(key=lambda item: (-len(item[0].text), item[1]))
    return located


def _split_segment(segment: TextSegment, entity: Entity) -> list[TextSegment]:
    needle = entity.text
    pieces: list[TextSegment] = []
    cursor = 0

    while True:
        hit = segment.text.find(needle, cursor)
        if hit == -1:
            break
        if hit > cursor:
            pieces.append(TextSegment(segment.text[cursor:hit]))
        pieces.append(TextSegment(needle, is_entity=True, category=entity.category))
        cursor = hit + len(needle)

    if cursor == 0:
        return [segment]
    if cursor < len(segment.text):
        pieces.append(TextSegment(segment.text[cursor:]))
    return pieces


def partition(original_text: str, entities: Iterable[Entity]) -> list[TextSegment]:
    """Split *original_text* into plain and entity-tagged segments.

    Args:
        original_text: The text that was analyzed.
        entities: Extracted entities. Entities that are empty or absent from
            the text are ignored rather than rejected.

    Returns:
        Ordered segments whose texts concatenate to *original_text*. An empty
        text yields an empty list.
    """
    if not original_text:
        return []

    segments = [TextSegment(original_text)]
    for entity, _ in locate(original_text, entities):
        next_segments: list[TextSegment] = []
        for segment in segments:
            if segment.is_entity:
                next_segments.append(segment)
            else:
                next_segments.extend(_split_segment(segment, entity))
        segments = next_segments

    return segments
