"""Prompt template for the alignment call."""

from models.schemas.input_data import InputData
from services.alignment_policy import AlignmentPolicy
from services.engine.base import EngineRequest

IMAGE_ONLY_NOTE = "See attached image for CV content."


def build_alignment_prompt(job_description: str, resume_text: str = "") -> str:
    """Content payload: the JD and the CV text, or a note pointing at the image."""
    cv_section = resume_text if resume_text.strip() else IMAGE_ONLY_NOTE

    return f"""JOB DESCRIPTION:
{job_description}

CANDIDATE CV:
{cv_section}"""


def build_engine_request(data: InputData, policy: AlignmentPolicy) -> EngineRequest:
    return EngineRequest(
        system_instruction=policy.system_instruction,
        response_schema=policy.response_schema,
        prompt=build_alignment_prompt(data.job_description, data.resume_text),
        image=data.resume_image,
    )
