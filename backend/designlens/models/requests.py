"""API request models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from designlens.models.payload import ImageSnapshot


class ExtractRequest(BaseModel):
    snapshot: dict[str, Any] = Field(..., description="Host document snapshot (document + style catalogs)")
    selection: list[str] = Field(..., description="Selected node ids, in selection order")
    images: list[ImageSnapshot] = Field(
        default_factory=list,
        description="Optional rendered snapshots (base64 PNG)",
    )


class FeasibilityRequest(ExtractRequest):
    analysis_type: Literal["full", "component", "layout"] = "full"
    priority: Literal["feasibility", "effort", "coordination", "all"] = "all"
    api_key: str | None = Field(default=None, description="Anthropic API key; falls back to server config")


class CredentialCheckRequest(BaseModel):
    api_key: str = Field(..., description="Anthropic API key to check")
