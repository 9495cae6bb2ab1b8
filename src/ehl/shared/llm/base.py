"""Base LLM provider interface and provider registry.

This module defines the abstract LLMProvider interface and get_provider(),
which returns a cached provider instance by name.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------


class LLMError(RuntimeError):
    """Raised when a provider cannot produce a completion."""


class LLMProvider(ABC):
    """Abstract base for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g. 'anthropic')."""
        ...

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str,
        timeout: int = 90,
        max_tokens: int = 2000,
        temperature: float = 0.0,
    ) -> str:
        """Generate a text completion.

        Args:
            prompt: User prompt text.
            model: Model name or alias (e.g. 'haiku', 'claude-sonnet-4-5').
            timeout: Request timeout in seconds.
            max_tokens: Maximum output tokens.
            temperature: Sampling temperature (0.0-1.0).

        Returns:
            Generated text.

        Raises:
            LLMError: The request failed after all retries.
        """
        ...


# ---------------------------------------------------------------------------
# Provider registry
# ---------------------------------------------------------------------------

_provider_cache: dict[str, LLMProvider] = {}


def get_provider(name: str = "anthropic") -> LLMProvider:
    """Return the (cached) provider registered under *name*."""
    if name not in _provider_cache:
        if name != "anthropic":
            raise ValueError(f"Unknown LLM provider: {name!r}")
        from .anthropic_provider import AnthropicProvider
        logger.debug("Creating AnthropicProvider")
        _provider_cache[name] = AnthropicProvider()
    return _provider_cache[name]

