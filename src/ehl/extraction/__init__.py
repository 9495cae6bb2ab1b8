"""Entity extraction and confidence filtering collaborators."""
from .extractor import EntityExtractor, LLMEntityExtractor
from .filter import ConfidenceFilter, EntityFilter, filter_low_confidence
from .parsing import parse_entities_json
from .types import Entity, TypedEntity

__all__ = [
    "Entity",
    "TypedEntity",
    "EntityExtractor",
    "LLMEntityExtractor",
    "EntityFilter",
    "ConfidenceFilter",
    "filter_low_confidence",
    "parse_entities_json",
]
