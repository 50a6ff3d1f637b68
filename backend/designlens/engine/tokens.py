"""Design-token harvester — document style catalogs → DesignTokenSet.

Independent of the selection: catalogs and usage counts are document-wide.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from designlens.host.document import SceneGraph
from designlens.models.scene import RGB
from designlens.models.tokens import (
    ColorToken,
    DesignTokenSet,
    EffectToken,
    SpacingToken,
    TokenUsageStats,
    TypographyToken,
)

logger = logging.getLogger(__name__)

_DEFAULT_LINE_HEIGHT = 1.2


def harvest_tokens(graph: SceneGraph) -> DesignTokenSet:
    refs = Counter()
    spacing = Counter()
    system_tokens = 0
    custom_values = 0

    for node in graph.walk(graph.root):
        bound = graph.style_refs(node)
        for style_id in bound.values():
            refs[style_id] += 1
        system_tokens += len(bound)

        # Ad-hoc values: visible paints/effects or text styling with no catalog binding
        if "fill" not in bound and graph.paint_list(node, "fills"):
            custom_values += 1
        if "effect" not in bound and graph.paint_list(node, "effects"):
            custom_values += 1
        if "text" not in bound and graph.kind(node) == "TEXT":
            custom_values += 1

        layout = graph.auto_layout(node)
        if layout is not None and layout["spacing"] > 0:
            spacing[layout["spacing"]] += 1

    total = system_tokens + custom_values
    usage = TokenUsageStats(
        system_tokens=system_tokens,
        custom_values=custom_values,
        consistency_score=round(system_tokens / total, 3) if total else 0.0,
    )

    tokens = DesignTokenSet(
        colors=[_color_token(s, refs) for s in graph.paint_styles],
        typography=[_typography_token(s, refs) for s in graph.text_styles],
        spacing=[
            SpacingToken(name=f"space-{_format_number(value)}", value=value, usage_count=count)
            for value, count in sorted(spacing.items())
        ],
        effects=[_effect_token(s, refs) for s in graph.effect_styles],
        usage=usage,
    )
    logger.debug(
        "Harvested %d colors, %d text styles, %d effects (consistency %.2f)",
        len(tokens.colors),
        len(tokens.typography),
        len(tokens.effects),
        usage.consistency_score,
    )
    return tokens


def _color_token(style: dict[str, Any], refs: Counter) -> ColorToken:
    paints = style.get("paints") or []
    first = paints[0] if paints and isinstance(paints[0], dict) else {}
    value = first.get("color") if first.get("type") == "SOLID" else None
    return ColorToken(
        name=str(style.get("name", "")),
        value=value or RGB(),
        usage_count=refs[str(style.get("id", ""))],
    )


def _typography_token(style: dict[str, Any], refs: Counter) -> TypographyToken:
    font_name = style.get("fontName") if isinstance(style.get("fontName"), dict) else {}
    line_height = style.get("lineHeight")
    if isinstance(line_height, dict):
        line_height = line_height.get("value") or _DEFAULT_LINE_HEIGHT
    elif not isinstance(line_height, (int, float)):
        line_height = _DEFAULT_LINE_HEIGHT
    return TypographyToken(
        name=str(style.get("name", "")),
        font_family=str(font_name.get("family", style.get("fontFamily", "Inter"))),
        font_size=float(style.get("fontSize", 16) or 16),
        font_weight=int(style.get("fontWeight", 400) or 400),
        line_height=float(line_height),
        usage_count=refs[str(style.get("id", ""))],
    )


def _effect_token(style: dict[str, Any], refs: Counter) -> EffectToken:
    effects = style.get("effects") or []
    first = effects[0] if effects and isinstance(effects[0], dict) else {}
    return EffectToken(
        name=str(style.get("name", "")),
        type=str(first.get("type", "UNKNOWN")),
        properties=first,
        usage_count=refs[str(style.get("id", ""))],
    )


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
