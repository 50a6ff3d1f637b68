"""AnalysisResult — the validated engineering assessment.

Inner fields default to the same values the validator substitutes for a
missing top-level field, so a partially filled sub-object is completed
rather than rejected.
"""

from __future__ import annotations

from pydantic import Field

from designlens.models.base import Record


class FeasibilityAnalysis(Record):
    score: float = 5  # 1-10 scale
    technical: str = "Analysis incomplete"
    challenges: list[str] = Field(default_factory=list)
    alternatives: list[str] = Field(default_factory=list)


class EffortBreakdown(Record):
    category: str = ""
    hours: float = 0
    description: str = ""


class EffortEstimate(Record):
    hours: float = 0
    story_points: float = 0
    complexity: str = "medium"  # low / medium / high
    breakdown: list[EffortBreakdown] = Field(default_factory=list)


class CoordinationRequirements(Record):
    teams: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    timeline: str = "Unknown"
    critical_path: list[str] = Field(default_factory=list)


class Recommendation(Record):
    type: str = "optimization"  # optimization / alternative / phasing / tooling
    priority: str = "medium"
    description: str = ""
    impact: str = ""


class Risk(Record):
    category: str = "technical"  # technical / timeline / resource / design
    severity: str = "medium"
    description: str = ""
    mitigation: str = ""


class AnalysisResult(Record):
    feasibility: FeasibilityAnalysis = Field(default_factory=FeasibilityAnalysis)
    effort: EffortEstimate = Field(default_factory=EffortEstimate)
    coordination: CoordinationRequirements = Field(default_factory=CoordinationRequirements)
    recommendations: list[Recommendation] = Field(default_factory=list)
    risks: list[Risk] = Field(default_factory=list)
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
