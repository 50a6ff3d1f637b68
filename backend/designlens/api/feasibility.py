"""POST /api/feasibility — full analysis (standard + streaming)."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from designlens.dependencies import get_pipeline
from designlens.engine.pipeline import AnalysisPipeline
from designlens.errors import DesignLensError
from designlens.host.document import SceneGraph
from designlens.models.requests import FeasibilityRequest
from designlens.models.responses import FeasibilityResponse

router = APIRouter()


@router.post("/feasibility", response_model=FeasibilityResponse)
async def feasibility(
    req: FeasibilityRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> FeasibilityResponse:
    graph = SceneGraph.from_snapshot(req.snapshot)
    run = await pipeline.run(
        graph,
        req.selection,
        analysis_type=req.analysis_type,
        priority=req.priority,
        api_key=req.api_key,
        images=req.images,
    )
    return FeasibilityResponse(
        result=run.result,
        estimate=run.estimate,
        processing_time_ms=run.elapsed_ms,
    )


async def _stream_feasibility(req: FeasibilityRequest, pipeline: AnalysisPipeline) -> AsyncGenerator[str, None]:
    """Relay pipeline stage events as SSE, then a closing done event."""
    try:
        graph = SceneGraph.from_snapshot(req.snapshot)
    except DesignLensError as e:
        yield f"event: error\ndata: {json.dumps({'type': 'error', **e.to_dict()})}\n\n"
        yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"
        return

    async for event in pipeline.run_events(
        graph,
        req.selection,
        analysis_type=req.analysis_type,
        priority=req.priority,
        api_key=req.api_key,
        images=req.images,
    ):
        yield f"event: {event['type']}\ndata: {json.dumps(event)}\n\n"

    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.post("/feasibility/stream")
async def feasibility_stream(
    req: FeasibilityRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> StreamingResponse:
    return StreamingResponse(
        _stream_feasibility(req, pipeline),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
