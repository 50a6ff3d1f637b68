"""POST /api/extract — selection → payload + cost estimate, no LLM call."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from designlens.dependencies import get_pipeline
from designlens.engine.pipeline import AnalysisPipeline
from designlens.host.document import SceneGraph
from designlens.models.requests import ExtractRequest
from designlens.models.responses import ExtractResponse

router = APIRouter()


@router.post("/extract", response_model=ExtractResponse)
async def extract(req: ExtractRequest, pipeline: AnalysisPipeline = Depends(get_pipeline)) -> ExtractResponse:
    start = time.perf_counter()

    graph = SceneGraph.from_snapshot(req.snapshot)
    payload = pipeline.extract(graph, req.selection, req.images)

    elapsed = (time.perf_counter() - start) * 1000
    return ExtractResponse(
        payload=payload,
        estimate=pipeline.estimate(payload),
        processing_time_ms=round(elapsed, 1),
    )
