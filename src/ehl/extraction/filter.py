"""Confidence filter collaborator.

Keeps the entities whose confidence is at or above the threshold, in their
original order. The only failure mode is malformed input.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from numbers import Real
from typing import Protocol, runtime_checkable

from ehl.errors import FilterError
from ehl.extraction.types import TypedEntity

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("text", "type", "confidence")


@runtime_checkable
class EntityFilter(Protocol):
    """Protocol for filter collaborators."""

    async def filter(
        self, entities: list[TypedEntity], confidence_threshold: float
    ) -> list[TypedEntity]:
        ...


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def filter_low_confidence(
    entities: Sequence[TypedEntity], confidence_threshold: float
) -> list[TypedEntity]:
    """Return the entities with confidence >= confidence_threshold.

    Raises:
        FilterError: The threshold is not a number in [0, 1], or an entity is
            missing a field or has a non-numeric confidence.
    """
    if not _is_number(confidence_threshold) or not 0.0 <= confidence_threshold <= 1.0:
        raise FilterError(f"confidence_threshold must be in [0, 1], got {confidence_threshold!r}")

    for i, entity in enumerate(entities):
        missing = [key for key in _REQUIRED_KEYS if key not in entity]
        if missing:
            raise FilterError(f"Entity {i} is missing {', '.join(missing)}")
        if not _is_number(entity["confidence"]):
            raise FilterError(
                f"Entity {i} has non-numeric confidence {entity['confidence']!r}"
            )

    return [e for e in entities if e["confidence"] >= confidence_threshold]


class ConfidenceFilter:
    """Async adapter around filter_low_confidence()."""

    async def filter(
        self, entities: list[TypedEntity], confidence_threshold: float
    ) -> list[TypedEntity]:
        kept = filter_low_confidence(entities, confidence_threshold)
        logger.debug(
            "[Filter] kept %d/%d entities at threshold %.2f",
            len(kept),
            len(entities),
            confidence_threshold,
        )
        return kept
