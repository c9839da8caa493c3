from pydantic import BaseModel

from models.schemas.analysis_result import AnalysisResult
from models.schemas.report_view import ReportView


class AlignmentResponse(BaseModel):
    policy_version: str
    result: AnalysisResult
    report: ReportView


class PolicyResponse(BaseModel):
    name: str
    version: str
    rubric: dict[str, int]
    nice_to_have_points: int
    nice_to_have_max: int
    penalty_caps: dict[str, int]
    system_instruction: str
