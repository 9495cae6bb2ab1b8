"""Analysis pipeline: extract -> filter -> partition -> render.

States:
    IDLE -> ANALYZING -> SUCCEEDED | FAILED

FAILED drops back to IDLE once its notice is issued. SUCCEEDED holds until
the next submission. Changing the threshold never starts an analysis.

Usage:
    pipeline = AnalysisPipeline(LLMEntityExtractor(provider), ConfidenceFilter())
    result = await pipeline.analyze("Ada Lovelace lived in London.")
    result.status, result.legend, result.spans
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from ehl.config import DEFAULT_CONFIDENCE_THRESHOLD
from ehl.errors import AnalysisInProgressError, ValidationError
from ehl.extraction.extractor import EntityExtractor
from ehl.extraction.filter import EntityFilter
from ehl.extraction.types import Entity
from ehl.highlight.colors import CategoryColorAssigner
from ehl.highlight.partition import TextSegment, partition
from ehl.highlight.render import HighlightSpan, LegendEntry, build_legend, render

logger = logging.getLogger(__name__)


class AnalysisState(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AnalysisStatus(str, Enum):
    SUCCEEDED = "succeeded"
    NO_ENTITIES = "no_entities"
    FAILED = "failed"


@dataclass(frozen=True)
class Notice:
    """Transient user-facing message."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


INPUT_REQUIRED = Notice(
    "Input Required", "Please enter some text to analyze.", "destructive"
)
ANALYSIS_FAILED = Notice(
    "Analysis Failed",
    "An error occurred while processing the text. Please try again.",
    "destructive",
)


@dataclass
class AnalysisResult:
    """Everything the output view needs for one analysis."""

    status: AnalysisStatus
    text: str
    threshold: float
    notice: Notice
    entities: list[Entity] = field(default_factory=list)
    legend: list[LegendEntry] = field(default_factory=list)
    segments: list[TextSegment] = field(default_factory=list)
    spans: list[HighlightSpan] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is not AnalysisStatus.FAILED


def _validate_threshold(value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"confidence threshold must be in [0, 1], got {value}")
    return float(value)


class AnalysisPipeline:
    """Sequences the extraction and filter collaborators for one session.

    The colour assigner belongs to this pipeline; give concurrent sessions
    their own pipeline instances.
    """

    def __init__(
        self,
        extractor: EntityExtractor,
        entity_filter: EntityFilter,
        colors: CategoryColorAssigner | None = None,
        threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    ) -> None:
        self.extractor = extractor
        self.entity_filter = entity_filter
        self.colors = colors or CategoryColorAssigner()
        self._threshold = _validate_threshold(threshold)
        self._state = AnalysisState.IDLE
        self.last_result: AnalysisResult | None = None

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def threshold(self) -> float:
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self._threshold = _validate_threshold(value)

    def _transition(self, state: AnalysisState) -> None:
        logger.debug("[Pipeline] %s -> %s", self._state.value, state.value)
        self._state = state

    async def _extract_and_filter(self, text: str) -> list[Entity]:
        raw = await self.extractor.extract(text)
        filtered = await self.entity_filter.filter(
            [entity.to_typed() for entity in raw], self._threshold
        )
        logger.info(
            "[Pipeline] %d extracted, %d kept at threshold %.2f",
            len(raw),
            len(filtered),
            self._threshold,
        )
        return [Entity.from_typed(item) for item in filtered]

    async def analyze(self, text: str) -> AnalysisResult:
        """Run one analysis of *text* at the current threshold.

        Collaborator failures do not propagate; they produce a FAILED result.

        Raises:
            ValidationError: *text* is empty or whitespace-only.
            AnalysisInProgressError: A previous analyze() has not settled.
        """
        if not text.strip():
            raise ValidationError("Text to analyze must not be empty", INPUT_REQUIRED)
        if self._state is AnalysisState.ANALYZING:
            raise AnalysisInProgressError("An analysis is already running")

        if self._state is not AnalysisState.IDLE:
            self._transition(AnalysisState.IDLE)
        self.last_result = None
        self.colors.reset()
        snapshot = text
        threshold = self._threshold
        self._transition(AnalysisState.ANALYZING)

        try:
            entities = await self._extract_and_filter(snapshot)
        except Exception:
            logger.exception("[Pipeline] Analysis failed")
            self.colors.reset()
            self._transition(AnalysisState.FAILED)
            result = AnalysisResult(
                status=AnalysisStatus.FAILED,
                text=snapshot,
                threshold=threshold,
                notice=ANALYSIS_FAILED,
            )
            self.last_result = result
            self._transition(AnalysisState.IDLE)
            return result

        legend = build_legend(entities, self.colors)
        segments = partition(snapshot, entities)
        spans = render(segments, self.colors)

        if entities:
            status = AnalysisStatus.SUCCEEDED
            notice = Notice("Analysis Complete", f"{len(entities)} entities highlighted.")
        else:
            status = AnalysisStatus.NO_ENTITIES
            notice = Notice(
                "No Entities Found",
                f"No entities were found with confidence >= {threshold}. "
                "Try lowering the threshold.",
            )

        result = AnalysisResult(
            status=status,
            text=snapshot,
            threshold=threshold,
            notice=notice,
            entities=entities,
            legend=legend,
            segments=segments,
            spans=spans,
        )
        self.last_result = result
        self._transition(AnalysisState.SUCCEEDED)
        return result
