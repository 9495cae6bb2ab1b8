"""Error taxonomy for the analysis pipeline.

- ValidationError: submitted text rejected before any collaborator call
- AnalysisInProgressError: a second submission while one is still running
- CollaboratorError: extraction or filter call failed (recovered by the pipeline)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ehl.pipeline import Notice


class EhlError(Exception):
    """Base class for all entity highlighter errors."""


class ValidationError(EhlError):
    """Raised when the submitted text is empty or whitespace-only."""

    def __init__(self, message: str, notice: Notice | None = None) -> None:
        super().__init__(message)
        self.notice = notice


class AnalysisInProgressError(EhlError):
    """Raised when analyze() is called while a previous call has not settled."""


class CollaboratorError(EhlError):
    """An external collaborator (extractor or filter) failed."""


class ExtractionError(CollaboratorError):
    """The entity extraction call failed or returned a malformed response."""


class FilterError(CollaboratorError):
    """The confidence filter received malformed input."""
