"""Analysis assembler — extractor + tokens + complexity → AnalysisPayload."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from designlens.engine.complexity import analyze_layout, analyze_responsive
from designlens.engine.extractor import extract_selection
from designlens.engine.tokens import harvest_tokens
from designlens.errors import ExtractionError
from designlens.host.document import SceneGraph
from designlens.models.payload import AnalysisPayload, ImageSnapshot

logger = logging.getLogger(__name__)


def build_payload(
    graph: SceneGraph,
    selection: Sequence[str],
    images: Sequence[ImageSnapshot] | None = None,
) -> AnalysisPayload:
    """Build the payload for one selection. Raises before returning anything partial."""
    extraction = extract_selection(graph, selection)
    try:
        styles = harvest_tokens(graph)
    except (KeyError, TypeError, ValueError) as e:
        raise ExtractionError(None, f"style catalog unreadable: {e}") from e

    payload = AnalysisPayload(
        pages=extraction.pages,
        components=extraction.components,
        instances=extraction.instances,
        styles=styles,
        interactions=extraction.interactions,
        layout=analyze_layout(extraction.roots),
        responsive=analyze_responsive(extraction.roots),
        images=list(images) if images else None,
    )
    logger.info(
        "Payload assembled: %d pages, layout score %d, %d images",
        len(payload.pages),
        payload.layout.score,
        len(payload.images or []),
    )
    return payload
