"""Input capture: résumé image encoding and submission validation."""

import base64
import binascii
import re

from models.schemas.input_data import InputData, ResumeImage
from services.errors import InputValidationError

MISSING_JOB_DESCRIPTION = "Please provide a Job Description."
MISSING_RESUME = "Please provide a CV (text or image)."

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def is_image_mime_type(mime_type: str) -> bool:
    return mime_type.lower().startswith("image/")


def encode_image(data: bytes, mime_type: str) -> ResumeImage:
    """Base64-encode a résumé photo read from a file picker or upload."""
    if not is_image_mime_type(mime_type or ""):
        raise InputValidationError(f"Unsupported file type: {mime_type or 'unknown'}. Please attach an image.")
    if not data:
        raise InputValidationError("The attached image is empty.")
    return ResumeImage(data_base64=base64.b64encode(data).decode("ascii"), mime_type=mime_type)


def image_from_base64(data_base64: str, mime_type: str) -> ResumeImage:
    """Wrap an already-encoded payload, checking that it decodes."""
    if not is_image_mime_type(mime_type or ""):
        raise InputValidationError(f"Unsupported file type: {mime_type or 'unknown'}. Please attach an image.")
    try:
        base64.b64decode(data_base64, validate=True)
    except (binascii.Error, ValueError):
        raise InputValidationError("The attached image is not valid base64 data.") from None
    return ResumeImage(data_base64=data_base64, mime_type=mime_type)


def decode_data_url(data_url: str) -> ResumeImage:
    """Split a ``data:<mime>;base64,<payload>`` URL into a ResumeImage."""
    match = _DATA_URL_RE.match(data_url.strip())
    if not match:
        raise InputValidationError("The attached image is not a base64 data URL.")
    return image_from_base64(match.group("data"), match.group("mime"))


def validate_input(data: InputData) -> None:
    """Fail fast before any outbound call. The job description is checked first."""
    if not data.job_description.strip():
        raise InputValidationError(MISSING_JOB_DESCRIPTION)
    if not data.has_resume_text and data.resume_image is None:
        raise InputValidationError(MISSING_RESUME)


def build_input(
    job_description: str,
    resume_text: str = "",
    resume_image: ResumeImage | None = None,
) -> InputData:
    """Build and validate InputData from the current form state."""
    data = InputData(
        job_description=job_description or "",
        resume_text=resume_text or "",
        resume_image=resume_image,
    )
    validate_input(data)
    return data
