"""Analysis pipeline — selection → payload → LLM → validated result.

``run`` returns the final result; ``run_events`` yields a progress dict per
stage so the caller can show staged progress. Every attempt ends in exactly
one terminal event: ``result`` or ``error``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncGenerator, Sequence
from dataclasses import dataclass
from typing import Any

from designlens.config import Settings, settings as default_settings
from designlens.engine.assembler import build_payload
from designlens.errors import DesignLensError, NoSelectionError
from designlens.host.document import SceneGraph
from designlens.llm.client import request_analysis, resolve_api_key
from designlens.llm.cost import estimate_cost
from designlens.llm.prompts import AnalysisType, Priority, build_prompt_blocks
from designlens.llm.response_parser import validate_response
from designlens.models.payload import AnalysisPayload, CostEstimate, ImageSnapshot
from designlens.models.result import AnalysisResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisRun:
    payload: AnalysisPayload
    estimate: CostEstimate
    result: AnalysisResult
    elapsed_ms: float


class AnalysisPipeline:
    """Runs one analysis per call. Holds configuration only, no request state."""

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or default_settings

    def extract(
        self,
        graph: SceneGraph,
        selection: Sequence[str],
        images: Sequence[ImageSnapshot] | None = None,
    ) -> AnalysisPayload:
        return build_payload(graph, selection, images)

    def estimate(self, payload: AnalysisPayload) -> CostEstimate:
        return estimate_cost(payload, self.config)

    async def analyze(
        self,
        payload: AnalysisPayload,
        analysis_type: AnalysisType = "full",
        priority: Priority = "all",
        api_key: str | None = None,
    ) -> AnalysisResult:
        key = resolve_api_key(api_key, self.config)
        blocks = build_prompt_blocks(
            payload,
            analysis_type,
            priority,
            max_images=self.config.max_image_attachments,
        )
        text = await request_analysis(blocks, key, self.config)
        return validate_response(text)

    async def run(
        self,
        graph: SceneGraph,
        selection: Sequence[str],
        *,
        analysis_type: AnalysisType = "full",
        priority: Priority = "all",
        api_key: str | None = None,
        images: Sequence[ImageSnapshot] | None = None,
    ) -> AnalysisRun:
        start = time.perf_counter()
        payload = self.extract(graph, selection, images)
        estimate = self.estimate(payload)
        result = await self.analyze(payload, analysis_type, priority, api_key)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("Analysis complete in %.0fms (confidence %.2f)", elapsed, result.confidence)
        return AnalysisRun(payload=payload, estimate=estimate, result=result, elapsed_ms=round(elapsed, 1))

    async def run_events(
        self,
        graph: SceneGraph,
        selection: Sequence[str],
        *,
        analysis_type: AnalysisType = "full",
        priority: Priority = "all",
        api_key: str | None = None,
        images: Sequence[ImageSnapshot] | None = None,
    ) -> AsyncGenerator[dict[str, Any], None]:
        """Yield extraction_started, payload_ready, then result or error."""
        start = time.perf_counter()

        if not selection:
            yield _error_event(NoSelectionError())
            return

        yield {"type": "extraction_started", "selection": list(selection)}

        try:
            payload = self.extract(graph, selection, images)
            estimate = self.estimate(payload)
        except DesignLensError as e:
            logger.warning("Extraction failed: %s", e.message)
            yield _error_event(e)
            return

        yield {
            "type": "payload_ready",
            "estimate": estimate.model_dump(by_alias=True),
            "layout_score": payload.layout.score,
            "node_count": sum(root.subtree_size for page in payload.pages for root in page.children),
            "component_count": len(payload.components),
        }

        try:
            result = await self.analyze(payload, analysis_type, priority, api_key)
        except DesignLensError as e:
            logger.warning("Analysis failed: %s", e.message)
            yield _error_event(e)
            return

        yield {
            "type": "result",
            "result": result.model_dump(by_alias=True),
            "estimate": estimate.model_dump(by_alias=True),
            "processing_time_ms": round((time.perf_counter() - start) * 1000, 1),
        }


def _error_event(error: DesignLensError) -> dict[str, Any]:
    return {"type": "error", **error.to_dict()}
