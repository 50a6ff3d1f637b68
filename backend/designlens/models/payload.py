"""AnalysisPayload — the bounded, self-contained unit sent to the LLM."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from designlens.errors import ExtractionError
from designlens.models.base import Record
from designlens.models.scene import (
    ComponentRecord,
    InstanceRecord,
    InteractiveElementRecord,
    PageRecord,
)
from designlens.models.tokens import DesignTokenSet


class LayoutComplexity(Record):
    nesting_depth: int = 0
    auto_layout_usage: int = 0
    constraint_patterns: list[str] = Field(default_factory=list)
    responsive_elements: int = 0
    score: int = Field(default=1, ge=1, le=10)


class BreakpointData(Record):
    name: str
    width: float
    adaptations: list[str] = Field(default_factory=list)


class ResponsiveBehavior(Record):
    breakpoints: list[BreakpointData] = Field(default_factory=list)
    adaptive_components: list[str] = Field(default_factory=list)
    content_reflow: list[str] = Field(default_factory=list)


class ImageSnapshot(Record):
    id: str
    description: str = ""
    data: str = Field(..., description="Base64-encoded PNG")
    context: Literal["layout", "component", "responsive", "custom"] = "custom"


class AnalysisPayload(Record):
    pages: list[PageRecord] = Field(default_factory=list)
    components: list[ComponentRecord] = Field(default_factory=list)
    instances: list[InstanceRecord] = Field(default_factory=list)
    styles: DesignTokenSet = Field(default_factory=DesignTokenSet)
    interactions: list[InteractiveElementRecord] = Field(default_factory=list)
    layout: LayoutComplexity = Field(default_factory=LayoutComplexity)
    responsive: ResponsiveBehavior = Field(default_factory=ResponsiveBehavior)
    images: list[ImageSnapshot] | None = None

    def to_json(self, *, include_images: bool = True, indent: int | None = None) -> str:
        """Serialize with camelCase keys; the result re-parses to an equal payload."""
        exclude = None if include_images else {"images"}
        try:
            return self.model_dump_json(by_alias=True, exclude=exclude, indent=indent)
        except (ValueError, RecursionError) as e:
            # pydantic caps the nesting depth of recursive models
            raise ExtractionError(None, f"payload cannot be serialized: {e}") from e

    @classmethod
    def from_json(cls, text: str | bytes) -> AnalysisPayload:
        return cls.model_validate_json(text)


class CostEstimate(Record):
    input_tokens: int
    output_tokens: int
    estimated_cost: float
