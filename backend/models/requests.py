from pydantic import BaseModel, Field


class QuickAnalyzeRequest(BaseModel):
    # Length limits come from settings.max_text_chars and are checked in the router
    job_description: str = Field("", description="Job description text")
    resume_text: str = Field("", description="Plain text resume content")
    resume_image_base64: str | None = Field(None, description="Base64-encoded photo of the resume")
    resume_image_mime_type: str | None = Field(None, description="MIME type of resume_image_base64")
    resume_image_data_url: str | None = Field(
        None, description="Resume photo as a data: URL (alternative to the two fields above)"
    )
