"""Layout complexity and responsive behavior over extracted records.

Pure functions: they only read SceneNodeRecord trees, never the host graph.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from designlens.models.payload import BreakpointData, LayoutComplexity, ResponsiveBehavior
from designlens.models.scene import SceneNodeRecord

# Score caps per signal; the sum is clamped to 10
_DEPTH_STEP, _DEPTH_CAP = 3, 3
_LAYOUT_STEP, _LAYOUT_CAP = 5, 2
_PATTERN_STEP, _PATTERN_CAP = 2, 2
_RESPONSIVE_STEP, _RESPONSIVE_CAP = 3, 2

_MOBILE_MAX_WIDTH = 768
_TABLET_MAX_WIDTH = 1024

_ADAPTIVE_CONSTRAINTS = frozenset({"LEFT_RIGHT", "SCALE", "STRETCH"})
_REFLOW_SIZING = frozenset({"AUTO", "HUG", "FILL"})


def iter_records(roots: Iterable[SceneNodeRecord]) -> Iterator[SceneNodeRecord]:
    for root in roots:
        yield from root.walk()


def complexity_score(
    nesting_depth: int,
    auto_layout_usage: int,
    pattern_count: int,
    responsive_elements: int,
) -> int:
    """Composite 1-10 score, non-decreasing in every signal."""
    score = 1
    score += min(_DEPTH_CAP, nesting_depth // _DEPTH_STEP)
    score += min(_LAYOUT_CAP, auto_layout_usage // _LAYOUT_STEP)
    score += min(_PATTERN_CAP, pattern_count // _PATTERN_STEP)
    score += min(_RESPONSIVE_CAP, responsive_elements // _RESPONSIVE_STEP)
    return min(10, score)


def analyze_layout(roots: Iterable[SceneNodeRecord]) -> LayoutComplexity:
    records = list(iter_records(roots))
    nesting_depth = max((r.depth for r in records), default=0)
    auto_layout_usage = sum(1 for r in records if r.auto_layout is not None)
    constrained = [r for r in records if r.has_constraints]
    patterns = sorted({r.constraints.pattern for r in constrained})

    return LayoutComplexity(
        nesting_depth=nesting_depth,
        auto_layout_usage=auto_layout_usage,
        constraint_patterns=patterns,
        responsive_elements=len(constrained),
        score=complexity_score(nesting_depth, auto_layout_usage, len(patterns), len(constrained)),
    )


def _breakpoint_name(width: float) -> str:
    if width < _MOBILE_MAX_WIDTH:
        return "mobile"
    if width < _TABLET_MAX_WIDTH:
        return "tablet"
    return "desktop"


def analyze_responsive(roots: Iterable[SceneNodeRecord]) -> ResponsiveBehavior:
    """Infer breakpoints from top-level frame widths and flag adaptive nodes."""
    roots = list(roots)
    breakpoints: list[BreakpointData] = []
    for root in roots:
        if root.kind not in ("FRAME", "COMPONENT", "INSTANCE", "SECTION"):
            continue
        width = root.dimensions.width
        if width <= 0:
            continue
        adaptations = [
            child.name
            for child in root.children
            if child.constraints.horizontal in _ADAPTIVE_CONSTRAINTS
        ]
        breakpoints.append(BreakpointData(name=_breakpoint_name(width), width=width, adaptations=adaptations))

    adaptive: list[str] = []
    reflow: list[str] = []
    for record in iter_records(roots):
        if record.has_constraints and record.constraints.horizontal in _ADAPTIVE_CONSTRAINTS:
            adaptive.append(record.id)
        layout = record.auto_layout
        if layout is not None and (
            layout.primary_axis_sizing_mode in _REFLOW_SIZING
            or layout.counter_axis_sizing_mode in _REFLOW_SIZING
        ):
            reflow.append(record.id)

    return ResponsiveBehavior(breakpoints=breakpoints, adaptive_components=adaptive, content_reflow=reflow)
