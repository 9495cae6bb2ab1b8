"""LLM response parsing for entity extraction."""

from __future__ import annotations

import json
import re

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ehl.errors import ExtractionError
from ehl.extraction.types import Entity


class ExtractedEntityModel(BaseModel):
    """Schema for one entity in the model's JSON output."""
    text: str
    category: str
    confidence: float = Field(..., ge=0.0, le=1.0)


_ENTITY_LIST = TypeAdapter(list[ExtractedEntityModel])

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)
_DECODER = json.JSONDecoder()


def _as_entity_list(parsed: object) -> list | None:
    if isinstance(parsed, dict) and "entities" in parsed:
        parsed = parsed["entities"]
    if isinstance(parsed, list) and all(isinstance(item, dict) for item in parsed):
        return parsed
    return None


def _find_entity_list(response: str) -> list | None:
    fence = _FENCE_RE.search(response)
    payloads = [fence.group(1).strip()] if fence else []
    payloads.append(response)
    for payload in payloads:
        try:
            found = _as_entity_list(json.loads(payload))
        except json.JSONDecodeError:
            continue
        if found is not None:
            return found

    # Embedded in prose: decode from each opening bracket in turn so stray
    # brackets like "[1]" or "[docs]" are skipped.
    for idx, char in enumerate(response):
        if char not in "[{":
            continue
        try:
            parsed, _ = _DECODER.raw_decode(response, idx)
        except json.JSONDecodeError:
            continue
        found = _as_entity_list(parsed)
        if found is not None:
            return found
    return None


def parse_entities_json(response: str) -> list[Entity]:
    """Parse the extraction response into entities.

    Accepts a bare JSON array, an array wrapped in a ```json fence or in
    surrounding prose, or an object of the form {"entities": [...]}.

    Raises:
        ExtractionError: No JSON payload was found, or any item fails schema
            validation. A single bad item rejects the whole response.
    """
    response = response.strip()
    if not response:
        raise ExtractionError("Empty extraction response")

    parsed = _find_entity_list(response)
    if parsed is None:
        raise ExtractionError(f"No JSON entity array in extraction response: {response[:200]!r}")

    try:
        items = _ENTITY_LIST.validate_python(parsed)
    except PydanticValidationError as e:
        raise ExtractionError(f"Malformed entity in extraction response: {e}") from e
    return [Entity(item.text, item.category, item.confidence) for item in items]
