"""Pydantic contracts shared by the alignment services, API and UI."""

from models.schemas.analysis_result import (
    AnalysisResult,
    Requirement,
    RequirementKind,
    RequirementStatus,
)
from models.schemas.input_data import InputData, ResumeImage
from models.schemas.report_view import ReportView, ScoreBand

__all__ = [
    "AnalysisResult",
    "Requirement",
    "RequirementKind",
    "RequirementStatus",
    "InputData",
    "ResumeImage",
    "ReportView",
    "ScoreBand",
]
