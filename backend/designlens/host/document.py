"""SceneGraph — read-only accessors over a host document snapshot.

The host posts its document as JSON using the Figma node vocabulary
(plugin-style ``x/y/width/height`` or REST-style ``absoluteBoundingBox``).
A SceneGraph is built once per request and passed explicitly to every
extraction step; nothing here reads ambient global state.

Snapshot shape::

    {
      "document": {"id": "0:0", "type": "DOCUMENT", "children": [...pages]},
      "paintStyles": [{"id": "S:1", "name": "Brand/Primary", "paints": [...]}],
      "textStyles": [{"id": "S:2", "name": "Body", "fontName": {...}, "fontSize": 16}],
      "effectStyles": [{"id": "S:3", "name": "Shadow/Card", "effects": [...]}]
    }
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

from designlens.errors import DocumentError

logger = logging.getLogger(__name__)

Node = dict[str, Any]

_KIND_ALIASES = {
    "CANVAS": "PAGE",
    "REGULAR_POLYGON": "POLYGON",
}

_KNOWN_KINDS = frozenset({
    "DOCUMENT",
    "PAGE",
    "FRAME",
    "GROUP",
    "SECTION",
    "TEXT",
    "RECTANGLE",
    "ELLIPSE",
    "LINE",
    "VECTOR",
    "POLYGON",
    "STAR",
    "BOOLEAN_OPERATION",
    "COMPONENT",
    "COMPONENT_SET",
    "INSTANCE",
    "SLICE",
})

_ACTIVE_LAYOUT_MODES = frozenset({"HORIZONTAL", "VERTICAL", "GRID"})


class SceneGraph:
    """Indexed, read-only view of one document snapshot."""

    def __init__(
        self,
        root: Node,
        paint_styles: list[dict[str, Any]] | None = None,
        text_styles: list[dict[str, Any]] | None = None,
        effect_styles: list[dict[str, Any]] | None = None,
    ) -> None:
        if not isinstance(root, dict):
            raise DocumentError("Document root must be an object")
        self.root = root
        self.paint_styles = list(paint_styles or [])
        self.text_styles = list(text_styles or [])
        self.effect_styles = list(effect_styles or [])
        self._nodes: dict[str, Node] = {}
        self._parents: dict[str, str | None] = {}
        self._index(root)
        logger.debug("Indexed %d nodes", len(self._nodes))

    @classmethod
    def from_snapshot(cls, snapshot: dict[str, Any]) -> SceneGraph:
        if not isinstance(snapshot, dict) or not isinstance(snapshot.get("document"), dict):
            raise DocumentError("Snapshot must contain a 'document' node")
        return cls(
            snapshot["document"],
            paint_styles=_style_list(snapshot, "paintStyles"),
            text_styles=_style_list(snapshot, "textStyles"),
            effect_styles=_style_list(snapshot, "effectStyles"),
        )

    def _index(self, root: Node) -> None:
        # Iterative so deeply nested snapshots don't hit the recursion limit.
        stack: list[tuple[Node, str | None]] = [(root, None)]
        while stack:
            node, parent_id = stack.pop()
            if not isinstance(node, dict) or "id" not in node:
                raise DocumentError(f"Node without id under {parent_id}")
            node_id = str(node["id"])
            if node_id in self._nodes:
                raise DocumentError(f"Duplicate node id {node_id}")
            self._nodes[node_id] = node
            self._parents[node_id] = parent_id
            children = node.get("children") or []
            if not isinstance(children, list):
                raise DocumentError(f"Node {node_id} has non-list children")
            for child in reversed(children):
                stack.append((child, node_id))

    # ------------------------------------------------------------------
    # Identity and hierarchy
    # ------------------------------------------------------------------

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, node_id: str) -> Node:
        return self._nodes[node_id]

    @staticmethod
    def node_id(node: Node) -> str:
        return str(node["id"])

    @staticmethod
    def name(node: Node) -> str:
        return str(node.get("name", ""))

    @staticmethod
    def kind(node: Node) -> str:
        raw = str(node.get("type", "")).upper()
        raw = _KIND_ALIASES.get(raw, raw)
        return raw if raw in _KNOWN_KINDS else "OTHER"

    def parent(self, node: Node) -> Node | None:
        parent_id = self._parents.get(self.node_id(node))
        return self._nodes[parent_id] if parent_id is not None else None

    @staticmethod
    def children(node: Node) -> list[Node]:
        return list(node.get("children") or [])

    def ancestors(self, node: Node) -> Iterator[Node]:
        """Yield ancestors bottom-up, stopping before the nearest page."""
        parent = self.parent(node)
        while parent is not None and self.kind(parent) != "PAGE":
            yield parent
            parent = self.parent(parent)

    def page_of(self, node: Node) -> Node | None:
        parent = self.parent(node)
        while parent is not None:
            if self.kind(parent) == "PAGE":
                return parent
            parent = self.parent(parent)
        return None

    def page_depth(self, node: Node) -> int:
        return sum(1 for _ in self.ancestors(node))

    def is_descendant(self, node: Node, ancestor_id: str) -> bool:
        parent_id = self._parents.get(self.node_id(node))
        while parent_id is not None:
            if parent_id == ancestor_id:
                return True
            parent_id = self._parents.get(parent_id)
        return False

    def walk(self, node: Node) -> Iterator[Node]:
        """Pre-order walk of a subtree."""
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.children(current)))

    def find_all(self, predicate: Callable[[Node], bool]) -> list[Node]:
        """Document-wide search, in document order."""
        return [node for node in self.walk(self.root) if predicate(node)]

    # ------------------------------------------------------------------
    # Node properties
    # ------------------------------------------------------------------

    @staticmethod
    def visible(node: Node) -> bool:
        return bool(node.get("visible", True))

    @staticmethod
    def locked(node: Node) -> bool:
        return bool(node.get("locked", False))

    @staticmethod
    def bounds(node: Node) -> dict[str, float]:
        box = node.get("absoluteBoundingBox")
        source = box if isinstance(box, dict) else node
        return {
            "x": float(source.get("x", 0) or 0),
            "y": float(source.get("y", 0) or 0),
            "width": float(source.get("width", 0) or 0),
            "height": float(source.get("height", 0) or 0),
        }

    @staticmethod
    def constraints(node: Node) -> dict[str, str] | None:
        raw = node.get("constraints")
        if not isinstance(raw, dict):
            return None
        return {
            "horizontal": str(raw.get("horizontal", "LEFT")),
            "vertical": str(raw.get("vertical", "TOP")),
        }

    @staticmethod
    def auto_layout(node: Node) -> dict[str, Any] | None:
        """Layout parameters, only when the node declares an active mode."""
        mode = node.get("layoutMode")
        if mode not in _ACTIVE_LAYOUT_MODES:
            return None
        return {
            "mode": mode,
            "spacing": float(node.get("itemSpacing", 0) or 0),
            "padding": {
                "top": float(node.get("paddingTop", 0) or 0),
                "right": float(node.get("paddingRight", 0) or 0),
                "bottom": float(node.get("paddingBottom", 0) or 0),
                "left": float(node.get("paddingLeft", 0) or 0),
            },
            "primary_axis_sizing_mode": str(node.get("primaryAxisSizingMode", "FIXED")),
            "counter_axis_sizing_mode": str(node.get("counterAxisSizingMode", "FIXED")),
        }

    @staticmethod
    def paint_list(node: Node, key: str) -> list[dict[str, Any]] | None:
        value = node.get(key)
        if not isinstance(value, list):
            return None
        return [p for p in value if isinstance(p, dict)]

    @staticmethod
    def text_metrics(node: Node) -> dict[str, Any]:
        style = node.get("style") if isinstance(node.get("style"), dict) else {}
        font_name = node.get("fontName")
        if not isinstance(font_name, dict):
            font_name = {
                "family": style.get("fontFamily", "Inter"),
                "style": style.get("fontPostScriptName") or "Regular",
            }
        font_size = node.get("fontSize", style.get("fontSize"))
        return {
            "characters": str(node.get("characters", "")),
            "font_name": font_name,
            "font_size": font_size if isinstance(font_size, (int, float)) else 16,
        }

    @staticmethod
    def description(node: Node) -> str:
        return str(node.get("description") or "")

    @staticmethod
    def component_id(node: Node) -> str:
        """Resolved main-component id of an instance, or '' when unresolved."""
        main = node.get("mainComponent")
        if isinstance(main, dict) and main.get("id"):
            return str(main["id"])
        return str(node.get("componentId") or "")

    @staticmethod
    def variant_properties(node: Node) -> dict[str, str]:
        props = node.get("variantProperties")
        if not isinstance(props, dict):
            return {}
        return {str(k): str(v) for k, v in props.items()}

    def variant_axes(self, node: Node) -> list[str]:
        """Distinct variant axis names of a component or component set."""
        definitions = node.get("componentPropertyDefinitions")
        if isinstance(definitions, dict):
            axes = [
                name.split("#")[0]
                for name, definition in definitions.items()
                if isinstance(definition, dict) and definition.get("type") == "VARIANT"
            ]
            if axes:
                return axes
        axes = list(self.variant_properties(node))
        for child in self.children(node):
            for axis in self.variant_properties(child):
                if axis not in axes:
                    axes.append(axis)
        return axes

    @staticmethod
    def style_refs(node: Node) -> dict[str, str]:
        """Catalog style ids bound to this node, keyed by fill/stroke/text/effect."""
        refs: dict[str, str] = {}
        styles = node.get("styles")
        if isinstance(styles, dict):
            for key, value in styles.items():
                if value:
                    refs[str(key).rstrip("s").lower()] = str(value)
        for key in ("fill", "stroke", "text", "effect"):
            value = node.get(f"{key}StyleId")
            if isinstance(value, str) and value:
                refs[key] = value
        return refs


def _style_list(snapshot: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = snapshot.get(key) or []
    if not isinstance(value, list):
        raise DocumentError(f"'{key}' must be a list")
    return [s for s in value if isinstance(s, dict)]
