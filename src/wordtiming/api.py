"""HTTP API for wordtiming."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException

from wordtiming import __version__
from wordtiming.config import load_config
from wordtiming.core import apply_text_edit, needs_recalculation, retime
from wordtiming.models import (
    CaptionSegment,
    HealthResponse,
    RecalculationCheckRequest,
    RecalculationCheckResponse,
    RetimeRequest,
    RetimeResponse,
    SegmentEditRequest,
)


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="wordtiming",
        version=__version__,
        description="Word-level timing preservation for edited captions.",
    )
    config = load_config()

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, env=config.env)

    @app.post("/v1/retime", response_model=RetimeResponse, tags=["timing"])
    def retime_words(request: RetimeRequest) -> RetimeResponse:
        try:
            return retime(request, default_threshold=config.similarity_threshold)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    @app.post(
        "/v1/needs-recalculation",
        response_model=RecalculationCheckResponse,
        tags=["timing"],
    )
    def check_recalculation(request: RecalculationCheckRequest) -> RecalculationCheckResponse:
        return RecalculationCheckResponse(
            needs_recalculation=needs_recalculation(request.old_text, request.new_text)
        )

    @app.post("/v1/segments/edit", response_model=CaptionSegment, tags=["timing"])
    def edit_segment(request: SegmentEditRequest) -> CaptionSegment:
        return apply_text_edit(
            request.segment,
            request.text,
            similarity_threshold=config.similarity_threshold,
        )

    return app


app = create_app()
