"""Name-based interactive element classification.

This is a naming heuristic: a layer called "Submit" is treated as a button
whether or not it behaves like one. It never inspects node structure.
"""

from __future__ import annotations

import re

from designlens.models.scene import InteractiveType

INTERACTIVE_PATTERN = re.compile(r"button|btn|click|press|submit|link|nav", re.IGNORECASE)

# First match wins
_TYPE_RULES: tuple[tuple[tuple[str, ...], InteractiveType], ...] = (
    (("button", "btn"), "BUTTON"),
    (("input", "field"), "INPUT"),
    (("link",), "LINK"),
    (("form",), "FORM"),
    (("nav", "menu"), "NAVIGATION"),
)


def is_interactive(name: str) -> bool:
    return INTERACTIVE_PATTERN.search(name) is not None


def classify_interactive(name: str) -> InteractiveType:
    """Map a layer name to an interactive type, defaulting to BUTTON."""
    lowered = name.lower()
    for needles, kind in _TYPE_RULES:
        if any(needle in lowered for needle in needles):
            return kind
    return "BUTTON"
