"""Anthropic (Claude) LLM provider over the Messages API.

Authentication uses the ANTHROPIC_API_KEY environment variable, or an API key
passed explicitly. Requests go through httpx.AsyncClient and are retried with
exponential backoff on rate limits, overload, timeouts and connection errors.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import random
import time
from typing import Any

import httpx

from .base import LLMError, LLMProvider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Retry configuration
# ---------------------------------------------------------------------------

DEFAULT_MAX_RETRIES = 5
DEFAULT_INITIAL_BACKOFF = 1.0
DEFAULT_MAX_BACKOFF = 60.0
DEFAULT_BACKOFF_MULTIPLIER = 2.0
JITTER_FACTOR = 0.1
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 529}

# ---------------------------------------------------------------------------
# Model aliases
# ---------------------------------------------------------------------------

MODEL_MAP: dict[str, str] = {
    "haiku": "claude-3-5-haiku-latest",
    "claude-haiku": "claude-3-5-haiku-latest",
    "claude-haiku-4-5": "claude-haiku-4-5-20251001",
    "sonnet": "claude-sonnet-4-5-20250929",
    "claude-sonnet": "claude-sonnet-4-5-20250929",
    "claude-sonnet-4-5": "claude-sonnet-4-5-20250929",
    "opus": "claude-opus-4-1-20250805",
}


async def _sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider.

    Args:
        api_key: API key. Defaults to the ANTHROPIC_API_KEY environment variable.
        max_retries: Attempts per request before giving up.
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests).

    Raises:
        ValueError: No API key was given or found in the environment.
    """

    API_ENDPOINT = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"

    def __init__(
        self,
        api_key: str | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError(
                "Anthropic API key not found.\n"
                "Set ANTHROPIC_API_KEY or pass api_key explicitly."
            )
        self._api_key = api_key
        self.max_retries = max_retries
        self._transport = transport

    @property
    def name(self) -> str:
        return "anthropic"

    @staticmethod
    def _resolve_model(model: str) -> str:
        resolved = MODEL_MAP.get(model, model)
        if resolved != model:
            logger.debug("Model alias: %s -> %s", model, resolved)
        return resolved

    # -- retry helpers ------------------------------------------------------

    @staticmethod
    def _calculate_backoff(attempt: int, retry_after: float | None) -> float:
        if retry_after is not None:
            return min(retry_after, DEFAULT_MAX_BACKOFF)
        backoff = DEFAULT_INITIAL_BACKOFF * (DEFAULT_BACKOFF_MULTIPLIER ** attempt)
        backoff = min(backoff, DEFAULT_MAX_BACKOFF)
        return backoff + backoff * JITTER_FACTOR * random.random()

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float | None:
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass
        return None

    @staticmethod
    def _extract_text(data: Any) -> str | None:
        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, list):
            return None
        parts = [
            str(block.get("text", ""))
            for block in content
            if isinstance(block, dict) and block.get("type") == "text"
        ]
        return "\n".join(parts).strip() if parts else None

    # -- main generate ------------------------------------------------------

    async def generate(
        self,
        prompt: str,
        model: str = "claude-haiku-4-5",
        timeout: int = 90,
        max_tokens: int = 2000,
        temperature: float = 0.0,
    ) -> str:
        """Generate text using the Anthropic Messages API.

        Raises:
            LLMError: Non-retryable HTTP error, unexpected payload, or retries
                exhausted.
        """
        resolved_model = self._resolve_model(model)
        logger.debug(
            "[anthropic] model=%s prompt_len=%d timeout=%ds",
            resolved_model,
            len(prompt),
            timeout,
        )

        request_body: dict[str, Any] = {
            "model": resolved_model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": self.API_VERSION,
            "content-type": "application/json",
        }

        start_time = time.time()
        last_error = "no attempts made"

        async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
            for attempt in range(self.max_retries):
                try:
                    response = await client.post(
                        self.API_ENDPOINT, json=request_body, headers=headers
                    )
                except (httpx.TimeoutException, httpx.TransportError) as e:
                    last_error = f"{type(e).__name__}: {e}"
                    if attempt < self.max_retries - 1:
                        backoff = self._calculate_backoff(attempt, None)
                        logger.info(
                            "[anthropic] RETRY %s | attempt=%d/%d | wait=%.1fs",
                            type(e).__name__,
                            attempt + 1,
                            self.max_retries,
                            backoff,
                        )
                        await _sleep(backoff)
                    continue

                elapsed = time.time() - start_time

                if response.status_code in RETRYABLE_STATUS_CODES:
                    last_error = f"HTTP {response.status_code}"
                    if attempt < self.max_retries - 1:
                        backoff = self._calculate_backoff(
                            attempt, self._parse_retry_after(response)
                        )
                        logger.info(
                            "[anthropic] RETRY %d | attempt=%d/%d | model=%s | "
                            "wait=%.1fs | elapsed=%.1fs",
                            response.status_code,
                            attempt + 1,
                            self.max_retries,
                            resolved_model,
                            backoff,
                            elapsed,
                        )
                        await _sleep(backoff)
                    continue

                if not response.is_success:
                    logger.error(
                        "[anthropic] FAILED %d | model=%s | elapsed=%.1fs | %s",
                        response.status_code,
                        resolved_model,
                        elapsed,
                        response.text[:300],
                    )
                    raise LLMError(
                        f"Anthropic API returned {response.status_code}: {response.text[:300]}"
                    )

                try:
                    data = response.json()
                except json.JSONDecodeError as e:
                    raise LLMError(
                        f"Anthropic API returned invalid JSON: {response.text[:300]}"
                    ) from e
                usage = data.get("usage") if isinstance(data, dict) else None
                usage = usage if isinstance(usage, dict) else {}
                logger.debug(
                    "[anthropic] OK | model=%s | in=%d out=%d | %.1fs",
                    resolved_model,
                    usage.get("input_tokens", 0),
                    usage.get("output_tokens", 0),
                    elapsed,
                )

                text = self._extract_text(data)
                if text is None:
                    raise LLMError(f"Unexpected response: {json.dumps(data)[:500]}")
                if attempt > 0:
                    logger.info(
                        "[anthropic] RECOVERED after %d retries | model=%s | total=%.1fs",
                        attempt,
                        resolved_model,
                        elapsed,
                    )
                return text

        logger.error(
            "[anthropic] EXHAUSTED %d retries | model=%s | last=%s",
            self.max_retries,
            resolved_model,
            last_error,
        )
        raise LLMError(f"Anthropic request failed after {self.max_retries} attempts: {last_error}")
