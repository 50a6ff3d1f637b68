"""Tests for prompt assembly."""

import json

from designlens.engine.assembler import build_payload
from designlens.llm.prompts import (
    PROMPT_VERSION,
    build_prompt_blocks,
    build_prompt_text,
    get_all_templates,
    get_prompt_template,
)
from designlens.models.payload import ImageSnapshot
from tests.conftest import PNG_BASE64


def _images(count):
    return [
        ImageSnapshot(id=f"img-{i}", description=f"Screen {i}", data=PNG_BASE64, context="layout")
        for i in range(count)
    ]


def test_text_block_only_without_images(landing_graph):
    blocks = build_prompt_blocks(build_payload(landing_graph, ["1:1"]))
    assert len(blocks) == 1
    assert blocks[0]["type"] == "text"


def test_image_blocks_follow_labels(landing_graph):
    payload = build_payload(landing_graph, ["1:1"], _images(2))
    blocks = build_prompt_blocks(payload)
    assert [b["type"] for b in blocks] == ["text", "text", "image", "text", "image"]
    assert blocks[1]["text"] == "\n\nVISUAL CONTEXT - Screen 0:"
    assert blocks[2]["source"] == {"type": "base64", "media_type": "image/png", "data": PNG_BASE64}
    assert blocks[3]["text"] == "\n\nVISUAL CONTEXT - Screen 1:"


def test_at_most_three_images(landing_graph):
    payload = build_payload(landing_graph, ["1:1"], _images(5))
    blocks = build_prompt_blocks(payload)
    images = [b for b in blocks if b["type"] == "image"]
    assert len(images) == 3
    assert "Screen 3" not in "".join(b.get("text", "") for b in blocks)


def test_image_cap_configurable(landing_graph):
    payload = build_payload(landing_graph, ["1:1"], _images(2))
    assert len(build_prompt_blocks(payload, max_images=0)) == 1


def test_prompt_embeds_payload(landing_graph):
    payload = build_payload(landing_graph, ["1:1"], _images(1))
    text = build_prompt_text(payload, "layout", "effort")
    assert payload.to_json(include_images=False, indent=2) in text
    assert PNG_BASE64 not in text
    assert "ANALYSIS TYPE: layout" in text
    assert "PRIORITY FOCUS: effort" in text
    assert "Concentrate on layout" in text


def test_response_shape_is_valid_json():
    template = get_prompt_template()
    start = template.index("{{")
    end = template.rindex("}}") + 2
    shape = template[start:end].replace("{{", "{").replace("}}", "}")
    data = json.loads(shape)
    assert set(data) == {"feasibility", "effort", "coordination", "recommendations", "risks", "confidence"}
    assert "storyPoints" in data["effort"]
    assert "criticalPath" in data["coordination"]


def test_all_templates():
    templates = get_all_templates()
    assert set(templates) == {"feasibility", "focus:full", "focus:component", "focus:layout"}
    assert "{design_data}" in templates["feasibility"]
    assert PROMPT_VERSION.startswith("feasibility")
