"""Presentation-ready view of an AnalysisResult."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from models.schemas.analysis_result import RequirementKind, RequirementStatus


class ScoreBand(str, Enum):
    GOOD = "good"
    MEDIUM = "medium"
    POOR = "poor"


class GaugeSegment(BaseModel):
    name: str
    value: int
    color: str


class RequirementRow(BaseModel):
    label: str
    kind: RequirementKind
    status: RequirementStatus
    explanation: str
    status_style: str
    kind_style: str


class RecommendationCard(BaseModel):
    number: str  # "01", "02", ...
    text: str


class ReportView(BaseModel):
    """Everything the report screen renders, derived from one result.

    Holds no state of its own; rebuilt from the AnalysisResult on demand.
    """
    model_config = ConfigDict(frozen=True)

    header: str
    score: int
    score_label: str  # "72%"
    band: ScoreBand
    gauge: list[GaugeSegment]
    classification: str
    summary: str
    requirements: list[RequirementRow] = []
    critical_gaps_badge: str | None = None  # "3 Hard", or None when no hard gaps
    gaps: list[str] = []
    strengths: list[str] = []
    recommendations: list[RecommendationCard] = []
    score_cap: int = 100
    cap_exceeded: bool = False
