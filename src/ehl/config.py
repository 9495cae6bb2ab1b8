"""Runtime configuration read from environment variables.

Environment variables:
- EHL_MODEL: LLM model name or alias (default: claude-haiku-4-5)
- EHL_CONFIDENCE_THRESHOLD: default threshold for new analyses (default: 0.5)
- EHL_LLM_TIMEOUT: per-request timeout in seconds (default: 90)
- EHL_LLM_MAX_TOKENS: maximum output tokens for extraction (default: 2000)
- EHL_LOG_LEVEL: logging level for the service (default: INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MODEL = "claude-haiku-4-5"
DEFAULT_CONFIDENCE_THRESHOLD = 0.5
THRESHOLD_STEP = 0.05


@dataclass(frozen=True)
class Settings:
    """Settings shared by the service and the CLI."""

    model: str = DEFAULT_MODEL
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    llm_timeout: int = 90
    llm_max_tokens: int = 2000
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(
                f"confidence_threshold must be in [0, 1], got {self.confidence_threshold}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            model=os.environ.get("EHL_MODEL", DEFAULT_MODEL),
            confidence_threshold=float(
                os.environ.get("EHL_CONFIDENCE_THRESHOLD", str(DEFAULT_CONFIDENCE_THRESHOLD))
            ),
            llm_timeout=int(os.environ.get("EHL_LLM_TIMEOUT", "90")),
            llm_max_tokens=int(os.environ.get("EHL_LLM_MAX_TOKENS", "2000")),
            log_level=os.environ.get("EHL_LOG_LEVEL", "INFO").upper(),
        )
