"""Structured records produced by the tree extractor."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from designlens.models.base import Record

NodeKind = Literal[
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
    "OTHER",
]

InteractiveType = Literal["BUTTON", "INPUT", "LINK", "FORM", "NAVIGATION"]


class RGB(Record):
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0


class Dimensions(Record):
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class LayoutConstraints(Record):
    horizontal: str = "LEFT"
    vertical: str = "TOP"

    @property
    def pattern(self) -> str:
        return f"{self.horizontal}-{self.vertical}"


class Padding(Record):
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


class AutoLayout(Record):
    mode: Literal["HORIZONTAL", "VERTICAL", "GRID"]
    spacing: float = 0.0
    padding: Padding = Field(default_factory=Padding)
    primary_axis_sizing_mode: str = "FIXED"
    counter_axis_sizing_mode: str = "FIXED"


class Paint(Record):
    type: str
    color: RGB | None = None
    opacity: float | None = None


class Stroke(Record):
    type: str
    color: RGB | None = None
    weight: float = 0.0


class Effect(Record):
    type: str
    visible: bool = True
    radius: float | None = None
    offset: dict[str, float] | None = None
    color: RGB | None = None


class FontName(Record):
    family: str = "Inter"
    style: str = "Regular"


class TextData(Record):
    characters: str = ""
    font_name: FontName = Field(default_factory=FontName)
    font_size: float = 16.0
    # The host does not expose per-run metrics; these stay fixed.
    font_weight: int = 400
    line_height: float = 1.2
    letter_spacing: float = 0.0


class SceneNodeRecord(Record):
    id: str
    name: str
    kind: NodeKind
    visible: bool = True
    locked: bool = False
    dimensions: Dimensions = Field(default_factory=Dimensions)
    constraints: LayoutConstraints = Field(default_factory=LayoutConstraints)
    has_constraints: bool = False
    depth: int = 0  # hops to the nearest page ancestor
    auto_layout: AutoLayout | None = None
    fills: list[Paint] | None = None
    strokes: list[Stroke] | None = None
    effects: list[Effect] | None = None
    text: TextData | None = None
    children: list[SceneNodeRecord] = Field(default_factory=list)

    def walk(self):
        """Yield this record and every descendant, pre-order."""
        stack = [self]
        while stack:
            record = stack.pop()
            yield record
            stack.extend(reversed(record.children))

    @property
    def subtree_size(self) -> int:
        return sum(1 for _ in self.walk())


class PageRecord(Record):
    id: str
    name: str
    kind: Literal["PAGE"] = "PAGE"
    width: float | None = None
    height: float | None = None
    children: list[SceneNodeRecord] = Field(default_factory=list)


class ComplexityScore(Record):
    structure: int = Field(ge=1, le=10)
    interactions: int = Field(ge=1, le=10)
    variants: int = Field(ge=0, le=3)
    overall: int = Field(ge=1, le=10)


class VariantRecord(Record):
    name: str
    properties: dict[str, str] = Field(default_factory=dict)


class ComponentRecord(Record):
    id: str
    name: str
    description: str = ""
    kind: Literal["COMPONENT", "COMPONENT_SET"] = "COMPONENT"
    variants: list[VariantRecord] = Field(default_factory=list)
    instance_count: int = 0
    complexity: ComplexityScore


class InstanceRecord(Record):
    id: str
    component_id: str = ""
    overrides: dict[str, Any] = Field(default_factory=dict)
    is_nested: bool = False
    depth: int = 0


class AccessibilityData(Record):
    has_alt_text: bool = False
    focusable: bool = True
    aria_label: str | None = None


class InteractiveElementRecord(Record):
    id: str
    name: str = ""
    type: InteractiveType
    states: list[str] = Field(default_factory=lambda: ["Default"])
    actions: list[str] = Field(default_factory=list)
    accessibility: AccessibilityData = Field(default_factory=AccessibilityData)
