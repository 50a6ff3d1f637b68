"""Parse free-form LLM output into a fully populated AnalysisResult.

Three stages, each returning a tagged outcome instead of raising:

1. ``locate_span``   — first ``{`` to last ``}`` (the model may add commentary)
2. ``parse_span``    — JSON decode
3. ``complete_result`` — field-by-field validation; any field that is absent
   or ill-shaped is replaced by its documented default while the fields
   next to it are kept. Never fails.

``validate_response`` runs the stages and raises the failure kind of the
first stage that did not succeed.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from designlens.errors import DesignLensError, MalformedResponseError, NoStructuredContentError
from designlens.models.result import (
    AnalysisResult,
    CoordinationRequirements,
    EffortEstimate,
    FeasibilityAnalysis,
    Recommendation,
    Risk,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

DEFAULT_CONFIDENCE = 0.5


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: T | None = None
    error: DesignLensError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def locate_span(text: str) -> Outcome[str]:
    text = text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return Outcome(error=NoStructuredContentError())
    return Outcome(value=text[start : end + 1])


def parse_span(span: str) -> Outcome[dict[str, Any]]:
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        return Outcome(error=MalformedResponseError(f"Invalid response format from LLM API: {e.msg}"))
    except (ValueError, RecursionError) as e:
        # Integer digit limit or nesting beyond the decoder's recursion limit
        return Outcome(error=MalformedResponseError(f"Invalid response format from LLM API: {e}"))
    if not isinstance(data, dict):
        return Outcome(error=MalformedResponseError("LLM response JSON is not an object"))
    return Outcome(value=data)


def _accepts(model: type[BaseModel], name: str, value: Any) -> bool:
    try:
        model.model_validate({name: value})
    except (ValidationError, OverflowError):
        return False
    return True


def _record(raw: dict[str, Any], model: type[M], where: str) -> M:
    """Validate one field at a time; only the fields that fail fall back."""
    kept: dict[str, Any] = {}
    for name, info in model.model_fields.items():
        key = next((k for k in (info.alias, to_camel(name), name) if k and k in raw), None)
        if key is None:
            continue
        value = raw[key]
        if _accepts(model, name, value):
            kept[name] = value
            continue
        items = [item for item in value if _accepts(model, name, [item])] if isinstance(value, list) else []
        if items and _accepts(model, name, items):
            logger.warning("Dropped %d malformed entries from '%s.%s'", len(value) - len(items), where, key)
            kept[name] = items
        else:
            logger.warning("Response field '%s.%s' malformed, using default", where, key)
    return model.model_validate(kept)


def _section(data: dict[str, Any], key: str, model: type[M]) -> M:
    raw = data.get(key)
    if isinstance(raw, dict):
        return _record(raw, model, key)
    if raw is not None:
        logger.warning("Response field '%s' is %s, using default", key, type(raw).__name__)
    else:
        logger.info("Response field '%s' missing, using default", key)
    return model()


def _items(data: dict[str, Any], key: str, model: type[M]) -> list[M]:
    """Objects are completed field by field; bare strings become descriptions."""
    raw = data.get(key)
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Response field '%s' is not a list, using default", key)
        return []
    items = []
    for item in raw:
        if isinstance(item, dict):
            items.append(_record(item, model, key))
        elif isinstance(item, str):
            items.append(model(description=item))
        else:
            logger.warning("Dropping %s entry of type %s", key, type(item).__name__)
    return items


def _confidence(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        if raw is not None:
            logger.warning("Response field 'confidence' is not a number, using default")
        return DEFAULT_CONFIDENCE
    try:
        value = float(raw)
    except OverflowError:
        logger.warning("Response field 'confidence' is out of range, using default")
        return DEFAULT_CONFIDENCE
    if not math.isfinite(value):
        logger.warning("Response field 'confidence' is not finite, using default")
        return DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, value))


def complete_result(data: dict[str, Any]) -> AnalysisResult:
    return AnalysisResult(
        feasibility=_section(data, "feasibility", FeasibilityAnalysis),
        effort=_section(data, "effort", EffortEstimate),
        coordination=_section(data, "coordination", CoordinationRequirements),
        recommendations=_items(data, "recommendations", Recommendation),
        risks=_items(data, "risks", Risk),
        confidence=_confidence(data.get("confidence")),
    )


def validate_response(text: str) -> AnalysisResult:
    """Raw LLM text → AnalysisResult.

    Raises:
        NoStructuredContentError: no ``{...}`` span in the text.
        MalformedResponseError: the span is not a JSON object.
    """
    span = locate_span(text).unwrap()
    data = parse_span(span).unwrap()
    return complete_result(data)
