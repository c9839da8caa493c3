"""Input captured for a single submission."""

from pydantic import BaseModel, ConfigDict


class ResumeImage(BaseModel):
    """A résumé photo, base64-encoded, with its declared MIME type."""
    model_config = ConfigDict(frozen=True)

    data_base64: str
    mime_type: str


class InputData(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_description: str
    resume_text: str = ""
    resume_image: ResumeImage | None = None

    @property
    def has_resume_text(self) -> bool:
        return bool(self.resume_text.strip())
