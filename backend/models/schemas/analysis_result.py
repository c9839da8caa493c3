"""Engine reply: the typed compatibility report for one CV/JD pair."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RequirementKind(str, Enum):
    HARD = "HARD"
    SOFT = "SOFT"


class RequirementStatus(str, Enum):
    MET = "MET"
    UNMET = "UNMET"
    PARTIAL = "PARTIAL"


class Requirement(BaseModel):
    """A single requirement extracted from the job description.

    The engine's wire name for ``kind`` is ``type``.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    label: str
    kind: RequirementKind = Field(alias="type")
    status: RequirementStatus
    explanation: str


class AnalysisResult(BaseModel):
    """Structured output of one alignment call.

    Field aliases match the response schema exactly so that
    ``model_dump(by_alias=True, mode="json")`` reproduces the reply.
    Engine replies are validated with ``strict=True`` from the JSON text, so
    mistyped values are rejected rather than coerced.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    score: int = Field(ge=0, le=100)
    classification: str
    summary: str
    hard_requirement_gaps_count: int = Field(alias="hardRequirementGapsCount", ge=0)
    requirements: list[Requirement]
    gaps: list[str]
    strengths: list[str]
    recommendations: list[str]

    @field_validator("score", "hard_requirement_gaps_count", mode="before")
    @classmethod
    def _integral_float_to_int(cls, value):
        # JSON numbers such as 72.0 are whole counts; bools and strings are left
        # for strict validation to reject.
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value
