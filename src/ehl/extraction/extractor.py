"""Entity extraction collaborator backed by an LLM provider.

Provides:
- EntityExtractor: the protocol the pipeline depends on
- LLMEntityExtractor: prompt -> provider -> JSON parsing
"""

from __future__ import annotations

import logging
import time
from typing import Protocol, runtime_checkable

from ehl.config import DEFAULT_MODEL
from ehl.errors import ExtractionError
from ehl.extraction.parsing import parse_entities_json
from ehl.extraction.prompts import EXTRACT_ENTITIES_PROMPT
from ehl.extraction.types import Entity
from ehl.shared.llm.base import LLMError, LLMProvider

logger = logging.getLogger(__name__)


@runtime_checkable
class EntityExtractor(Protocol):
    """Protocol for extraction collaborators.

    Request is the raw text, response the ordered list of entities, possibly
    empty. Any failure must surface as an exception.
    """

    async def extract(self, text: str) -> list[Entity]:
        ...


class LLMEntityExtractor:
    """Extract entities by prompting an LLM and parsing its JSON answer."""

    def __init__(
        self,
        provider: LLMProvider,
        model: str = DEFAULT_MODEL,
        timeout: int = 90,
        max_tokens: int = 2000,
    ) -> None:
        self.provider = provider
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens

    async def extract(self, text: str) -> list[Entity]:
        """Extract entities from *text*.

        Raises:
            ExtractionError: The provider failed or its answer was malformed.
        """
        prompt = EXTRACT_ENTITIES_PROMPT.format(text=text)
        start = time.time()
        try:
            response = await self.provider.generate(
                prompt,
                model=self.model,
                timeout=self.timeout,
                max_tokens=self.max_tokens,
            )
        except LLMError as e:
            raise ExtractionError(f"LLM call failed: {e}") from e

        entities = parse_entities_json(response)
        logger.info(
            "[Extractor] %d entities from %d chars in %.2fs (model=%s)",
            len(entities),
            len(text),
            time.time() - start,
            self.model,
        )
        return entities
