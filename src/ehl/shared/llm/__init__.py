"""LLM provider abstraction."""
from .base import LLMError, LLMProvider, get_provider
from .anthropic_provider import AnthropicProvider

__all__ = ["get_provider", "LLMError", "LLMProvider", "AnthropicProvider"]
