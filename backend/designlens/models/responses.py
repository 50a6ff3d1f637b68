"""API response models."""

from __future__ import annotations

from pydantic import BaseModel

from designlens.models.payload import AnalysisPayload, CostEstimate
from designlens.models.result import AnalysisResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    prompt_version: str = ""


class ExtractResponse(BaseModel):
    payload: AnalysisPayload
    estimate: CostEstimate
    processing_time_ms: float = 0.0


class FeasibilityResponse(BaseModel):
    result: AnalysisResult
    estimate: CostEstimate
    processing_time_ms: float = 0.0


class CredentialCheckResponse(BaseModel):
    valid: bool
