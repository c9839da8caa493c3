"""Result presentation: pure mapping from AnalysisResult to ReportView."""

from models.schemas.analysis_result import AnalysisResult, RequirementKind, RequirementStatus
from models.schemas.report_view import (
    GaugeSegment,
    RecommendationCard,
    ReportView,
    RequirementRow,
    ScoreBand,
)
from services.alignment_policy import AlignmentPolicy, get_policy

GOOD_THRESHOLD = 85
MEDIUM_THRESHOLD = 65

BAND_COLORS = {
    ScoreBand.GOOD: "#10b981",
    ScoreBand.MEDIUM: "#f59e0b",
    ScoreBand.POOR: "#ef4444",
}
REMAINDER_COLOR = "#e5e7eb"

STATUS_STYLES = {
    RequirementStatus.MET: "met",
    RequirementStatus.UNMET: "unmet",
    RequirementStatus.PARTIAL: "partial",
}
KIND_STYLES = {
    RequirementKind.HARD: "hard",
    RequirementKind.SOFT: "soft",
}


def score_band(score: int) -> ScoreBand:
    if score >= GOOD_THRESHOLD:
        return ScoreBand.GOOD
    if score >= MEDIUM_THRESHOLD:
        return ScoreBand.MEDIUM
    return ScoreBand.POOR


def gauge_segments(score: int) -> list[GaugeSegment]:
    """Two-segment proportion: score vs. 100 minus score."""
    return [
        GaugeSegment(name="Match", value=score, color=BAND_COLORS[score_band(score)]),
        GaugeSegment(name="Gap", value=100 - score, color=REMAINDER_COLOR),
    ]


def critical_gaps_badge(hard_gaps: int) -> str | None:
    return f"{hard_gaps} Hard" if hard_gaps > 0 else None


def build_report_view(result: AnalysisResult, policy: AlignmentPolicy | None = None) -> ReportView:
    policy = policy or get_policy()
    cap = policy.cap_for_gaps(result.hard_requirement_gaps_count)

    return ReportView(
        header=f"Version {policy.version} Engine • Honest Matching",
        score=result.score,
        score_label=f"{result.score}%",
        band=score_band(result.score),
        gauge=gauge_segments(result.score),
        classification=result.classification,
        summary=result.summary,
        requirements=[
            RequirementRow(
                label=req.label,
                kind=req.kind,
                status=req.status,
                explanation=req.explanation,
                status_style=STATUS_STYLES[req.status],
                kind_style=KIND_STYLES[req.kind],
            )
            for req in result.requirements
        ],
        critical_gaps_badge=critical_gaps_badge(result.hard_requirement_gaps_count),
        gaps=list(result.gaps),
        strengths=list(result.strengths),
        recommendations=[
            RecommendationCard(number=f"{i:02d}", text=rec)
            for i, rec in enumerate(result.recommendations, start=1)
        ],
        score_cap=cap,
        cap_exceeded=result.score > cap,
    )
