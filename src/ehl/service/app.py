"""FastAPI application for the entity highlighter.

Endpoints:
- GET / - Browser page with text input, threshold slider and output view
- POST /analyze - Extract, filter and highlight entities in a text
- GET /health - Service health status

Each request gets its own AnalysisPipeline and colour session, so
concurrent requests never share colour assignments.

Usage:
    uv run uvicorn ehl.service.app:app --port 8000
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from ehl.config import Settings
from ehl.errors import ValidationError
from ehl.extraction.extractor import EntityExtractor, LLMEntityExtractor
from ehl.extraction.filter import ConfidenceFilter, EntityFilter
from ehl.highlight.render import (
    HighlightSpan,
    render_empty_html,
    render_html,
    render_legend_html,
)
from ehl.pipeline import AnalysisPipeline, AnalysisResult, AnalysisStatus, Notice
from ehl.service.page import render_page
from ehl.shared.llm import get_provider

logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    """Request body for /analyze endpoint."""
    text: str = Field(..., description="Text to analyze")
    confidence_threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Minimum confidence; defaults to EHL_CONFIDENCE_THRESHOLD",
    )


class EntityModel(BaseModel):
    text: str
    category: str
    confidence: float


class SegmentModel(BaseModel):
    """One display unit of the highlighted text."""
    text: str
    is_entity: bool
    category: str | None
    color: str | None


class LegendModel(BaseModel):
    category: str
    color: str


class NoticeModel(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"]


class AnalyzeResponse(BaseModel):
    """Response body for /analyze endpoint."""
    status: Literal["succeeded", "no_entities"]
    text: str
    confidence_threshold: float
    entities: list[EntityModel]
    legend: list[LegendModel]
    segments: list[SegmentModel]
    html: str
    legend_html: str
    notice: NoticeModel
    elapsed_ms: float


class HealthResponse(BaseModel):
    """Response body for /health endpoint."""
    status: str = Field(..., description="'ready' or 'starting'")
    model: str


def _notice_dict(notice: Notice | None) -> dict:
    if notice is None:
        return {"title": "Error", "description": "Invalid request.", "variant": "destructive"}
    return {"title": notice.title, "description": notice.description, "variant": notice.variant}


def _to_response(result: AnalysisResult, elapsed_ms: float) -> AnalyzeResponse:
    return AnalyzeResponse(
        status=result.status.value,
        text=result.text,
        confidence_threshold=result.threshold,
        entities=[
            EntityModel(text=e.text, category=e.category, confidence=e.confidence)
            for e in result.entities
        ],
        legend=[
            LegendModel(category=entry.category, color=entry.color)
            for entry in result.legend
        ],
        segments=[
            SegmentModel(text=s.text, is_entity=s.is_entity, category=s.category, color=s.color)
            for s in result.spans
        ],
        html=render_html(result.spans) if result.spans else render_empty_html(),
        legend_html=render_legend_html(result.legend),
        notice=NoticeModel(**_notice_dict(result.notice)),
        elapsed_ms=elapsed_ms,
    )


def create_app(
    extractor: EntityExtractor | None = None,
    entity_filter: EntityFilter | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        extractor: Extraction collaborator. Defaults to an LLMEntityExtractor
            over the default provider, created at startup.
        entity_filter: Filter collaborator. Defaults to ConfidenceFilter.
        settings: Defaults to Settings.from_env().
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings or Settings.from_env()
        logging.basicConfig(
            level=app.state.settings.log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        if extractor is None:
            app.state.extractor = LLMEntityExtractor(
                get_provider(),
                model=app.state.settings.model,
                timeout=app.state.settings.llm_timeout,
                max_tokens=app.state.settings.llm_max_tokens,
            )
        else:
            app.state.extractor = extractor
        app.state.entity_filter = entity_filter or ConfidenceFilter()

        logger.info("[Service] Startup complete (model=%s)", app.state.settings.model)
        yield
        logger.info("[Service] Shutdown complete")

    app = FastAPI(
        title="Entity Highlighter",
        description="LLM named-entity recognition with colour-coded highlighting",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        """Browser page for pasting text and viewing highlighted entities."""
        return HTMLResponse(render_page(request.app.state.settings.confidence_threshold))

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(body: AnalyzeRequest, request: Request) -> AnalyzeResponse:
        """Extract, filter and highlight entities.

        Returns 422 for empty text and 502 when a collaborator fails; the
        response detail carries the user-facing notice in both cases. A 502
        detail also carries `html`, the submitted text without highlights.
        """
        state = request.app.state
        threshold = (
            body.confidence_threshold
            if body.confidence_threshold is not None
            else state.settings.confidence_threshold
        )
        pipeline = AnalysisPipeline(state.extractor, state.entity_filter, threshold=threshold)

        start_time = time.time()
        try:
            result = await pipeline.analyze(body.text)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=_notice_dict(e.notice))

        if result.status is AnalysisStatus.FAILED:
            detail = _notice_dict(result.notice)
            # No entity state survives a failure; the submitted text is shown plain.
            detail["html"] = render_html([HighlightSpan(result.text)])
            raise HTTPException(status_code=502, detail=detail)

        return _to_response(result, (time.time() - start_time) * 1000)

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        state = request.app.state
        ready = getattr(state, "extractor", None) is not None
        return HealthResponse(
            status="ready" if ready else "starting",
            model=state.settings.model,
        )

    return app


app = create_app()
