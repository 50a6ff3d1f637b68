"""Design-token summary harvested from the document style catalogs."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from designlens.models.base import Record
from designlens.models.scene import RGB


class ColorToken(Record):
    name: str
    value: RGB = Field(default_factory=RGB)
    usage_count: int = 0


class TypographyToken(Record):
    name: str
    font_family: str = "Inter"
    font_size: float = 16.0
    font_weight: int = 400
    line_height: float = 1.2
    usage_count: int = 0


class SpacingToken(Record):
    name: str
    value: float
    usage_count: int = 0


class EffectToken(Record):
    name: str
    type: str = "UNKNOWN"
    properties: dict[str, Any] = Field(default_factory=dict)
    usage_count: int = 0


class TokenUsageStats(Record):
    system_tokens: int = 0
    custom_values: int = 0
    consistency_score: float = Field(default=0.0, ge=0.0, le=1.0)


class DesignTokenSet(Record):
    colors: list[ColorToken] = Field(default_factory=list)
    typography: list[TypographyToken] = Field(default_factory=list)
    spacing: list[SpacingToken] = Field(default_factory=list)
    effects: list[EffectToken] = Field(default_factory=list)
    usage: TokenUsageStats = Field(default_factory=TokenUsageStats)
