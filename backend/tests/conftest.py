"""Shared test fixtures."""

from __future__ import annotations

import copy

import pytest

from designlens.host.document import SceneGraph


def _text(node_id: str, name: str, characters: str, **extra) -> dict:
    return {"id": node_id, "name": name, "type": "TEXT", "characters": characters, **extra}


# Landing page with a button instance (containing a nested icon instance),
# a nav bar, and a components page holding the main components.
LANDING_SNAPSHOT = {
    "document": {
        "id": "0:0",
        "name": "Document",
        "type": "DOCUMENT",
        "children": [
            {
                "id": "1:0",
                "name": "Home",
                "type": "CANVAS",
                "children": [
                    {
                        "id": "1:1",
                        "name": "Landing",
                        "type": "FRAME",
                        "x": 0,
                        "y": 0,
                        "width": 1440,
                        "height": 900,
                        "constraints": {"horizontal": "LEFT", "vertical": "TOP"},
                        "layoutMode": "VERTICAL",
                        "itemSpacing": 24,
                        "paddingTop": 32,
                        "paddingBottom": 32,
                        "primaryAxisSizingMode": "AUTO",
                        "fills": [{"type": "SOLID", "color": {"r": 0.1, "g": 0.2, "b": 0.9, "a": 1}}],
                        "fillStyleId": "S:brand",
                        "children": [
                            _text(
                                "1:2",
                                "Headline",
                                "Welcome",
                                style={"fontFamily": "Inter", "fontSize": 48},
                                constraints={"horizontal": "LEFT_RIGHT", "vertical": "TOP"},
                                styles={"text": "S:text"},
                            ),
                            {
                                "id": "1:3",
                                "name": "Primary Button",
                                "type": "INSTANCE",
                                "componentId": "2:1",
                                "description": "Sign up for an account",
                                "constraints": {"horizontal": "CENTER", "vertical": "TOP"},
                                "effects": [{"type": "DROP_SHADOW", "radius": 4, "visible": True}],
                                "children": [
                                    _text("1:4", "Label", "Sign up"),
                                    {"id": "1:7", "name": "Icon", "type": "INSTANCE", "componentId": "2:5"},
                                ],
                            },
                            {
                                "id": "1:5",
                                "name": "Nav Bar",
                                "type": "FRAME",
                                "layoutMode": "HORIZONTAL",
                                "itemSpacing": 16,
                                "children": [_text("1:6", "Home link", "Home")],
                            },
                        ],
                    },
                    {"id": "1:8", "name": "Backdrop", "type": "RECTANGLE", "layoutMode": "NONE"},
                ],
            },
            {
                "id": "2:0",
                "name": "Components",
                "type": "CANVAS",
                "children": [
                    {
                        "id": "2:1",
                        "name": "Button",
                        "type": "COMPONENT",
                        "description": "Primary action",
                        "children": [_text("2:2", "Label", "Button")],
                    },
                    {
                        "id": "2:3",
                        "name": "Input",
                        "type": "COMPONENT_SET",
                        "componentPropertyDefinitions": {
                            "State": {"type": "VARIANT"},
                            "Size": {"type": "VARIANT"},
                            "Label#12:0": {"type": "TEXT"},
                        },
                        "children": [
                            {
                                "id": "2:4",
                                "name": "State=Default, Size=Md",
                                "type": "COMPONENT",
                                "variantProperties": {"State": "Default", "Size": "Md"},
                            },
                        ],
                    },
                    {"id": "2:5", "name": "Icon", "type": "COMPONENT"},
                ],
            },
        ],
    },
    "paintStyles": [
        {
            "id": "S:brand",
            "name": "Brand/Primary",
            "paints": [{"type": "SOLID", "color": {"r": 0.1, "g": 0.2, "b": 0.9}}],
        },
    ],
    "textStyles": [
        {
            "id": "S:text",
            "name": "Heading/XL",
            "fontName": {"family": "Inter", "style": "Bold"},
            "fontSize": 48,
            "lineHeight": {"unit": "PIXELS", "value": 56},
        },
    ],
    "effectStyles": [
        {
            "id": "S:shadow",
            "name": "Shadow/Card",
            "effects": [{"type": "DROP_SHADOW", "radius": 8, "visible": True}],
        },
    ],
}

SINGLE_TEXT_SNAPSHOT = {
    "document": {
        "id": "0:0",
        "type": "DOCUMENT",
        "children": [
            {
                "id": "1:0",
                "name": "Page 1",
                "type": "PAGE",
                "children": [
                    _text(
                        "1:1",
                        "Caption",
                        "Hello",
                        constraints={"horizontal": "LEFT", "vertical": "TOP"},
                    ),
                ],
            },
        ],
    },
}


def deep_chain_snapshot(depth: int) -> dict:
    """Page holding a chain of nested frames n1 > n2 > ... > n<depth>."""
    leaf: dict = {"id": f"n{depth}", "name": "Leaf", "type": "RECTANGLE"}
    for index in range(depth - 1, 0, -1):
        leaf = {"id": f"n{index}", "name": f"Level {index}", "type": "FRAME", "children": [leaf]}
    page = {"id": "1:0", "name": "Deep", "type": "PAGE", "children": [leaf]}
    return {"document": {"id": "0:0", "type": "DOCUMENT", "children": [page]}}


# 1x1 transparent PNG
PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="

VALID_KEY = "sk-ant-REDACTED"

FULL_RESPONSE = {
    "feasibility": {
        "score": 8,
        "technical": "Standard flexbox layout",
        "challenges": ["Nested instances"],
        "alternatives": [],
    },
    "effort": {
        "hours": 24,
        "storyPoints": 5,
        "complexity": "medium",
        "breakdown": [{"category": "Frontend Development", "hours": 16, "description": "Components"}],
    },
    "coordination": {
        "teams": ["Frontend", "QA"],
        "dependencies": ["Icon library"],
        "timeline": "1 sprint",
        "criticalPath": ["Button component"],
    },
    "recommendations": [
        {"type": "optimization", "priority": "high", "description": "Reuse Button", "impact": "Less code"},
    ],
    "risks": [
        {"category": "design", "severity": "low", "description": "Icon drift", "mitigation": "Token audit"},
    ],
    "confidence": 0.8,
}


@pytest.fixture
def landing_snapshot() -> dict:
    return copy.deepcopy(LANDING_SNAPSHOT)


@pytest.fixture
def landing_graph(landing_snapshot) -> SceneGraph:
    return SceneGraph.from_snapshot(landing_snapshot)


@pytest.fixture
def single_text_graph() -> SceneGraph:
    return SceneGraph.from_snapshot(copy.deepcopy(SINGLE_TEXT_SNAPSHOT))
