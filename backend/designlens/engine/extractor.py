"""Tree extractor — selection → immutable node records + side collections.

A pre-order pass over each selected subtree collects instances and
interactive elements, then the SceneNodeRecord tree is built bottom-up.
Both passes use an explicit stack, so nesting depth is not bound by the
interpreter recursion limit.

Components are enumerated document-wide because the cost of building one
depends on how often it is reused, not only on the current selection.

Extraction is all-or-nothing: any accessor failure aborts with an
ExtractionError naming the node, and nothing partial is returned.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

from designlens.engine.classify import classify_interactive, is_interactive
from designlens.errors import ExtractionError, NoSelectionError
from designlens.host.document import Node, SceneGraph
from designlens.models.scene import (
    AccessibilityData,
    AutoLayout,
    ComplexityScore,
    ComponentRecord,
    Dimensions,
    Effect,
    InstanceRecord,
    InteractiveElementRecord,
    LayoutConstraints,
    PageRecord,
    Paint,
    SceneNodeRecord,
    Stroke,
    TextData,
    VariantRecord,
)

logger = logging.getLogger(__name__)

_COMPONENT_KINDS = ("COMPONENT", "COMPONENT_SET")


@dataclass(frozen=True)
class ExtractionResult:
    pages: list[PageRecord]
    roots: list[SceneNodeRecord]
    components: list[ComponentRecord] = field(default_factory=list)
    instances: list[InstanceRecord] = field(default_factory=list)
    interactions: list[InteractiveElementRecord] = field(default_factory=list)


@dataclass
class _WalkState:
    instances: list[InstanceRecord] = field(default_factory=list)
    interactions: list[InteractiveElementRecord] = field(default_factory=list)
    visited: int = 0


def extract_selection(graph: SceneGraph, selection: Sequence[str]) -> ExtractionResult:
    """Extract the selected subtrees of ``graph``.

    Raises:
        NoSelectionError: ``selection`` is empty.
        ExtractionError: a selected id is unknown or a node cannot be read.
    """
    if not selection:
        raise NoSelectionError()

    roots = _resolve_roots(graph, selection)
    state = _WalkState()
    records: list[SceneNodeRecord] = []
    grouped: dict[str, tuple[Node, list[SceneNodeRecord]]] = {}

    for root in roots:
        record = _extract_tree(graph, root, state)
        records.append(record)
        page = graph.page_of(root) or graph.root
        grouped.setdefault(graph.node_id(page), (page, []))[1].append(record)

    pages = [
        PageRecord(id=graph.node_id(page), name=graph.name(page), children=children)
        for page, children in grouped.values()
    ]
    components = extract_components(graph)

    logger.info(
        "Extracted %d nodes from %d roots (%d instances, %d interactive, %d components)",
        state.visited,
        len(records),
        len(state.instances),
        len(state.interactions),
        len(components),
    )
    return ExtractionResult(
        pages=pages,
        roots=records,
        components=components,
        instances=state.instances,
        interactions=state.interactions,
    )


def _resolve_roots(graph: SceneGraph, selection: Sequence[str]) -> list[Node]:
    """Look up selected ids, expanding pages and dropping nested duplicates."""
    candidates: list[Node] = []
    for node_id in selection:
        node_id = str(node_id)
        if node_id not in graph:
            raise ExtractionError(node_id, "node not found in document")
        node = graph.get(node_id)
        kind = graph.kind(node)
        if kind == "DOCUMENT":
            raise ExtractionError(node_id, "the document root cannot be selected")
        if kind == "PAGE":
            candidates.extend(graph.children(node))
        else:
            candidates.append(node)

    seen: set[str] = set()
    roots: list[Node] = []
    for node in candidates:
        node_id = graph.node_id(node)
        if node_id in seen:
            continue
        seen.add(node_id)
        roots.append(node)
    selected = {graph.node_id(n) for n in roots}
    kept = [n for n in roots if not any(graph.is_descendant(n, other) for other in selected)]
    if len(kept) != len(roots):
        logger.debug("Dropped %d selected nodes nested in other selected nodes", len(roots) - len(kept))
    return kept


def _extract_tree(graph: SceneGraph, root: Node, state: _WalkState) -> SceneNodeRecord:
    """Build one selected subtree bottom-up from an explicit pre-order stack.

    Side collections are filled in pre-order during the first pass; records
    are built in reverse pre-order so every child exists before its parent.
    """
    order: list[tuple[Node, int]] = []
    stack: list[tuple[Node, int]] = [(root, graph.page_depth(root))]
    while stack:
        node, depth = stack.pop()
        order.append((node, depth))
        with _reading(node):
            _collect(graph, node, depth, state)
            children = graph.children(node)
        stack.extend((child, depth + 1) for child in reversed(children))
    state.visited += len(order)

    built: dict[str, SceneNodeRecord] = {}
    for node, depth in reversed(order):
        with _reading(node):
            children = [built.pop(graph.node_id(child)) for child in graph.children(node)]
            built[graph.node_id(node)] = _node_record(graph, node, depth, children)
    return built[graph.node_id(root)]


@contextmanager
def _reading(node: Node) -> Iterator[None]:
    try:
        yield
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        node_id = str(node.get("id")) if isinstance(node, dict) else None
        raise ExtractionError(node_id, str(e)) from e


def _collect(graph: SceneGraph, node: Node, depth: int, state: _WalkState) -> None:
    if graph.kind(node) == "INSTANCE":
        state.instances.append(_instance_record(graph, node, depth))
    if is_interactive(graph.name(node)):
        state.interactions.append(_interactive_record(graph, node))


def _node_record(
    graph: SceneGraph,
    node: Node,
    depth: int,
    children: list[SceneNodeRecord],
) -> SceneNodeRecord:
    kind = graph.kind(node)
    constraints = graph.constraints(node)
    layout = graph.auto_layout(node)
    fills = graph.paint_list(node, "fills")
    strokes = graph.paint_list(node, "strokes")
    effects = graph.paint_list(node, "effects")

    return SceneNodeRecord(
        id=graph.node_id(node),
        name=graph.name(node),
        kind=kind,
        visible=graph.visible(node),
        locked=graph.locked(node),
        dimensions=Dimensions(**graph.bounds(node)),
        constraints=LayoutConstraints(**constraints) if constraints else LayoutConstraints(),
        has_constraints=constraints is not None,
        depth=depth,
        auto_layout=AutoLayout(**layout) if layout else None,
        fills=[_paint(p) for p in fills] if fills is not None else None,
        strokes=[_stroke(s, node) for s in strokes] if strokes is not None else None,
        effects=[_effect(e) for e in effects] if effects is not None else None,
        text=_text(graph, node) if kind == "TEXT" else None,
        children=children,
    )


def _paint(raw: dict) -> Paint:
    kind = str(raw.get("type", "UNKNOWN"))
    color = raw.get("color") if kind == "SOLID" else None
    return Paint(type=kind, color=color, opacity=raw.get("opacity"))


def _stroke(raw: dict, node: Node) -> Stroke:
    return Stroke(
        type=str(raw.get("type", "UNKNOWN")),
        color=raw.get("color"),
        weight=float(node.get("strokeWeight", 0) or 0),
    )


def _effect(raw: dict) -> Effect:
    return Effect(
        type=str(raw.get("type", "UNKNOWN")),
        visible=bool(raw.get("visible", True)),
        radius=raw.get("radius"),
        offset=raw.get("offset"),
        color=raw.get("color"),
    )


def _text(graph: SceneGraph, node: Node) -> TextData:
    metrics = graph.text_metrics(node)
    return TextData(
        characters=metrics["characters"],
        font_name=metrics["font_name"],
        font_size=metrics["font_size"],
    )


def _instance_record(graph: SceneGraph, node: Node, depth: int) -> InstanceRecord:
    raw = node.get("overrides")
    if isinstance(raw, list):
        overrides = {
            str(o.get("id")): o.get("overriddenFields", []) for o in raw if isinstance(o, dict)
        }
    elif isinstance(raw, dict):
        overrides = raw
    else:
        overrides = {}
    return InstanceRecord(
        id=graph.node_id(node),
        component_id=graph.component_id(node),
        overrides=overrides,
        is_nested=any(graph.kind(a) == "INSTANCE" for a in graph.ancestors(node)),
        depth=depth,
    )


def _interactive_record(graph: SceneGraph, node: Node) -> InteractiveElementRecord:
    description = graph.description(node)
    return InteractiveElementRecord(
        id=graph.node_id(node),
        name=graph.name(node),
        type=classify_interactive(graph.name(node)),
        accessibility=AccessibilityData(
            has_alt_text=bool(description),
            focusable=True,
            aria_label=description or None,
        ),
    )


# ----------------------------------------------------------------------
# Components
# ----------------------------------------------------------------------


def component_complexity(descendants: int, has_interactions: bool, variant_axes: int) -> ComplexityScore:
    """Score one component from its subtree size, interactivity and variant axes."""
    structure = min(10, descendants // 5 + 1)
    interactions = 3 if has_interactions else 1
    variants = min(3, max(0, variant_axes))
    overall = max(1, min(10, (structure + interactions + variants) // 3))
    return ComplexityScore(
        structure=structure,
        interactions=interactions,
        variants=variants,
        overall=overall,
    )


def extract_components(graph: SceneGraph) -> list[ComponentRecord]:
    """Every component and component set in the document, with reuse counts."""
    usage = Counter(
        graph.component_id(n) for n in graph.find_all(lambda n: graph.kind(n) == "INSTANCE")
    )

    components: list[ComponentRecord] = []
    for node in graph.find_all(lambda n: graph.kind(n) in _COMPONENT_KINDS):
        node_id = graph.node_id(node)
        try:
            kind = graph.kind(node)
            subtree = list(graph.walk(node))
            instance_count = usage[node_id]
            variants: list[VariantRecord] = []
            if kind == "COMPONENT_SET":
                for child in graph.children(node):
                    instance_count += usage[graph.node_id(child)]
                    props = graph.variant_properties(child)
                    if props:
                        variants.append(VariantRecord(name=graph.name(child), properties=props))

            components.append(
                ComponentRecord(
                    id=node_id,
                    name=graph.name(node),
                    description=graph.description(node),
                    kind=kind,
                    variants=variants,
                    instance_count=instance_count,
                    complexity=component_complexity(
                        len(subtree),
                        any(is_interactive(graph.name(n)) for n in subtree),
                        len(graph.variant_axes(node)),
                    ),
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ExtractionError(node_id, str(e)) from e

    return components
