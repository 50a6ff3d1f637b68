"""Feasibility prompt template and content-block assembly."""

from __future__ import annotations

from typing import Any, Literal

from designlens.models.payload import AnalysisPayload

AnalysisType = Literal["full", "component", "layout"]
Priority = Literal["feasibility", "effort", "coordination", "all"]

PROMPT_VERSION = "feasibility-v1"

_RESPONSE_SHAPE = """{{
  "feasibility": {{
    "score": 8,
    "technical": "Highly feasible with modern web technologies...",
    "challenges": ["Complex nested layout structure", "Custom animation requirements"],
    "alternatives": ["Consider CSS Grid instead of flexbox", "Use existing component library"]
  }},
  "effort": {{
    "hours": 32,
    "storyPoints": 5,
    "complexity": "medium",
    "breakdown": [
      {{"category": "Frontend Development", "hours": 20, "description": "Component implementation"}},
      {{"category": "Testing", "hours": 8, "description": "Unit and integration tests"}},
      {{"category": "Code Review", "hours": 4, "description": "Review and refinement"}}
    ]
  }},
  "coordination": {{
    "teams": ["Frontend", "Design System", "QA"],
    "dependencies": ["New design tokens", "Icon library updates"],
    "timeline": "2-3 sprints",
    "criticalPath": ["Design system updates", "Component implementation", "Testing"]
  }},
  "recommendations": [
    {{
      "type": "optimization",
      "priority": "high",
      "description": "Break complex component into smaller, reusable parts",
      "impact": "Reduces development time by 25% and improves maintainability"
    }}
  ],
  "risks": [
    {{
      "category": "technical",
      "severity": "medium",
      "description": "Complex animation may impact performance on older devices",
      "mitigation": "Implement progressive enhancement with reduced animations"
    }}
  ],
  "confidence": 0.85
}}"""

_FEASIBILITY_TEMPLATE = """You are a senior software engineer providing technical feasibility analysis for UI designs.

HOW TO READ THE DESIGN DATA:
The design data is extracted from the selected layers of a design file.
- **pages**: the selected layer trees, grouped by page. Each node has kind, size, constraints, auto-layout, fills and text metadata.
- **components**: every reusable component in the file, with instance counts and a 1-10 complexity score.
- **instances**: component instances inside the selection; nested instances sit inside other instances.
- **styles**: design tokens from the file's style catalogs. consistencyScore is the share of style-bound values (1.0 = fully tokenized).
- **interactions**: layers that look interactive by name (buttons, links, inputs, navigation). Name-based, so verify against the structure.
- **layout**: nesting depth, auto-layout usage, constraint patterns and a 1-10 layout complexity score.
- **responsive**: breakpoints inferred from frame widths, adaptive layers and reflowing containers.

DESIGN DATA:
{design_data}

ANALYSIS TYPE: {analysis_type}
PRIORITY FOCUS: {priority}

{focus}

Please analyze this design and provide detailed engineering feedback in the following JSON format:

""" + _RESPONSE_SHAPE + """

ANALYSIS GUIDELINES:
1. Consider modern web development practices (React, Vue, Angular)
2. Evaluate design system integration and component reusability
3. Assess accessibility requirements and compliance
4. Factor in responsive design complexity
5. Consider performance implications
6. Evaluate testing requirements
7. Assess cross-browser compatibility needs
8. Consider maintenance and scalability factors

RULES:
- Output every field shown above. Use the exact key names.
- feasibility.score is 1-10. confidence is 0-1.
- effort.complexity is one of "low", "medium", "high".

Focus on actionable, specific feedback that helps designers understand implementation reality."""

_FOCUS = {
    "full": "Assess the selection as a whole: structure, components, tokens, interactions and responsiveness.",
    "component": "Concentrate on the components: reuse, variant coverage, and what a shared component library needs.",
    "layout": "Concentrate on layout: nesting, auto-layout, constraints and how the design adapts across screen sizes.",
}


def get_prompt_template() -> str:
    return _FEASIBILITY_TEMPLATE


def get_all_templates() -> dict[str, str]:
    """Return the template and focus lines keyed by name."""
    templates = {"feasibility": _FEASIBILITY_TEMPLATE}
    templates.update({f"focus:{name}": text for name, text in _FOCUS.items()})
    return templates


def build_prompt_text(payload: AnalysisPayload, analysis_type: AnalysisType, priority: Priority) -> str:
    return _FEASIBILITY_TEMPLATE.format(
        design_data=payload.to_json(include_images=False, indent=2),
        analysis_type=analysis_type,
        priority=priority,
        focus=_FOCUS.get(analysis_type, _FOCUS["full"]),
    )


def build_prompt_blocks(
    payload: AnalysisPayload,
    analysis_type: AnalysisType = "full",
    priority: Priority = "all",
    max_images: int = 3,
) -> list[dict[str, Any]]:
    """Text block with the instructions, then a label + image block per snapshot.

    Only the first ``max_images`` snapshots are attached.
    """
    blocks: list[dict[str, Any]] = [
        {"type": "text", "text": build_prompt_text(payload, analysis_type, priority)}
    ]
    for image in (payload.images or [])[: max(0, max_images)]:
        blocks.append({"type": "text", "text": f"\n\nVISUAL CONTEXT - {image.description}:"})
        blocks.append({
            "type": "image",
            "source": {"type": "base64", "media_type": "image/png", "data": image.data},
        })
    return blocks
