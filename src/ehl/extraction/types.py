"""Entity types shared by extraction, filtering and highlighting.

Entity is the in-process value object. TypedEntity is the filter
collaborator's wire shape, where the category travels under "type".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


@dataclass(frozen=True)
class Entity:
    """A recognized mention: surface text, open category label, confidence."""

    text: str
    category: str
    confidence: float

    def to_typed(self) -> TypedEntity:
        return {"text": self.text, "type": self.category, "confidence": self.confidence}

    @classmethod
    def from_typed(cls, item: TypedEntity) -> "Entity":
        return cls(text=item["text"], category=item["type"], confidence=item["confidence"])


class TypedEntity(TypedDict):
    """Entity as sent to and returned by the confidence filter."""
    text: str
    type: str
    confidence: float
