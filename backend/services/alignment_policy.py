"""Versioned alignment policies: the fixed system instruction and reply schema.

A policy is configuration, not behavior. Scoring-rule changes ship as a new
version registered in ``POLICIES`` so they stay auditable and testable apart
from the transport code.
"""

from pydantic import BaseModel, ConfigDict

from config import settings


class RubricItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    points: int


class AlignmentPolicy(BaseModel):
    """Scoring policy sent to the engine as system-level guidance."""
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    rubric: tuple[RubricItem, ...]
    nice_to_have_points: int
    nice_to_have_max: int
    # penalty_caps[n] is the cap for n unmet hard requirements; the last
    # entry applies to every count beyond the table.
    penalty_caps: tuple[int, ...]
    hard_signals: tuple[str, ...]
    critical_rules: tuple[str, ...]

    @property
    def title(self) -> str:
        return f"{self.name} v{self.version}"

    def cap_for_gaps(self, gaps: int) -> int:
        if gaps < 0:
            raise ValueError(f"Gap count cannot be negative: {gaps}")
        return self.penalty_caps[min(gaps, len(self.penalty_caps) - 1)]

    def cap_table(self) -> dict[str, int]:
        """Caps keyed by gap count label, e.g. {"0": 100, ..., "3+": 50}."""
        last = len(self.penalty_caps) - 1
        return {
            (f"{i}+" if i == last else str(i)): cap
            for i, cap in enumerate(self.penalty_caps)
        }

    @property
    def system_instruction(self) -> str:
        return build_system_instruction(self)

    @property
    def response_schema(self) -> dict:
        return RESPONSE_SCHEMA


def _gap_label(gaps: int, last: int) -> str:
    if gaps == last:
        return f"{gaps}+ gaps"
    return f"{gaps} gap" if gaps == 1 else f"{gaps} gaps"


def build_system_instruction(policy: AlignmentPolicy) -> str:
    rubric_lines = "\n".join(f"- {item.label}: +{item.points}" for item in policy.rubric)
    last = len(policy.penalty_caps) - 1
    cap_lines = "\n".join(
        f"- {_gap_label(i, last)}: {cap}% cap" for i, cap in enumerate(policy.penalty_caps)
    )
    signals = ", ".join(policy.hard_signals)
    rules = "\n".join(f"- {rule}" for rule in policy.critical_rules)

    return f"""You are the {policy.title}. Your goal is to match CVs to job descriptions HONESTLY.
You catch false positives. You don't let keyword overlap mask qualification gaps.

PHASE 1: HARD REQUIREMENT EXTRACTION (Internal)
Scan for signals: {signals}.
Classify as HARD (ATS filters) or SOFT (Preferred/Nice-to-have).

PHASE 2: SCORING WITH PENALTIES (Internal)
Base Score:
{rubric_lines}
- Nice-to-haves: +{policy.nice_to_have_points} each (max {policy.nice_to_have_max})

PENALTY RULES (MANDATORY):
{cap_lines}

CRITICAL RULES:
{rules}

OUTPUT: Provide a JSON response following the specified schema."""


_REQUIREMENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "label": {"type": "STRING"},
        "type": {"type": "STRING", "enum": ["HARD", "SOFT"]},
        "status": {"type": "STRING", "enum": ["MET", "UNMET", "PARTIAL"]},
        "explanation": {"type": "STRING"},
    },
    "required": ["label", "type", "status", "explanation"],
}

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "INTEGER", "minimum": 0, "maximum": 100},
        "classification": {"type": "STRING"},
        "summary": {"type": "STRING"},
        "hardRequirementGapsCount": {"type": "INTEGER", "minimum": 0},
        "requirements": {"type": "ARRAY", "items": _REQUIREMENT_SCHEMA},
        "gaps": {"type": "ARRAY", "items": {"type": "STRING"}},
        "strengths": {"type": "ARRAY", "items": {"type": "STRING"}},
        "recommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "score",
        "classification",
        "summary",
        "hardRequirementGapsCount",
        "requirements",
        "gaps",
        "strengths",
        "recommendations",
    ],
}


POLICY_V2 = AlignmentPolicy(
    name="CV-JD ALIGNMENT TOOL",
    version="2.0",
    rubric=(
        RubricItem(label="Direct experience", points=20),
        RubricItem(label="Domain/industry", points=15),
        RubricItem(label="Technical skills", points=15),
        RubricItem(label="Scale/scope", points=10),
        RubricItem(label="Leadership level", points=10),
        RubricItem(label="Soft skills", points=10),
    ),
    nice_to_have_points=5,
    nice_to_have_max=20,
    penalty_caps=(100, 75, 65, 50),
    hard_signals=(
        '"Required"',
        '"Must have"',
        '"Minimum qualifications"',
        "Mandatory Degree",
        "Years in specific function",
        "non-negotiable tech skills",
    ),
    critical_rules=(
        "Keyword similarity is NOT qualification match.",
        '"AI Product Strategy" is NOT "Software Product Management".',
        '"Evaluated vendors" is NOT "Hands-on engineering".',
        '"Led team" is NOT "Wrote code".',
        "Domain expertise cannot compensate for missing technical prerequisites.",
        "Engineering degree required means a gap if they have a non-engineering degree.",
    ),
)

POLICIES: dict[str, AlignmentPolicy] = {POLICY_V2.version: POLICY_V2}


def get_policy(version: str | None = None) -> AlignmentPolicy:
    """Look up a policy by version; defaults to ``settings.policy_version``."""
    version = version or settings.policy_version
    try:
        return POLICIES[version]
    except KeyError:
        raise ValueError(f"Unknown alignment policy version: {version}") from None
