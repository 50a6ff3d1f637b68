"""Token and cost estimate for a payload. Informational only, never a gate."""

from __future__ import annotations

import math

from designlens.config import Settings, settings as default_settings
from designlens.models.payload import AnalysisPayload, CostEstimate

_BYTES_PER_TOKEN = 4


def estimate_cost(payload: AnalysisPayload, config: Settings | None = None) -> CostEstimate:
    config = config or default_settings
    serialized = payload.to_json(include_images=False)
    input_tokens = math.ceil(len(serialized.encode("utf-8")) / _BYTES_PER_TOKEN) + config.prompt_overhead_tokens
    output_tokens = config.max_output_tokens
    return CostEstimate(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        estimated_cost=input_tokens * config.input_token_cost + output_tokens * config.output_token_cost,
    )
