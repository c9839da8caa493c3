"""Tests for input capture: image encoding and submission validation."""

import base64

import pytest

from models.schemas.input_data import InputData, ResumeImage
from services.errors import InputValidationError
from services.input_capture import (
    MISSING_JOB_DESCRIPTION,
    MISSING_RESUME,
    build_input,
    decode_data_url,
    encode_image,
    image_from_base64,
    validate_input,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-body"


class TestEncodeImage:
    def test_encodes_bytes_as_base64(self):
        image = encode_image(PNG_BYTES, "image/png")
        assert image.mime_type == "image/png"
        assert base64.b64decode(image.data_base64) == PNG_BYTES

    def test_rejects_non_image_type(self):
        with pytest.raises(InputValidationError):
            encode_image(b"%PDF-1.4", "application/pdf")

    def test_rejects_empty_file(self):
        with pytest.raises(InputValidationError):
            encode_image(b"", "image/jpeg")


class TestDecodeDataUrl:
    def test_splits_payload_and_mime_type(self):
        payload = base64.b64encode(PNG_BYTES).decode()
        image = decode_data_url(f"data:image/png;base64,{payload}")
        assert image == ResumeImage(data_base64=payload, mime_type="image/png")

    def test_rejects_plain_text(self):
        with pytest.raises(InputValidationError):
            decode_data_url("not a data url")

    def test_rejects_invalid_base64(self):
        with pytest.raises(InputValidationError):
            image_from_base64("***", "image/png")


class TestValidateInput:
    def test_empty_job_description(self):
        with pytest.raises(InputValidationError) as exc:
            validate_input(InputData(job_description="", resume_text="Python dev"))
        assert exc.value.message == MISSING_JOB_DESCRIPTION

    def test_whitespace_job_description_is_empty(self):
        with pytest.raises(InputValidationError):
            validate_input(InputData(job_description="   \n", resume_text="Python dev"))

    def test_missing_both_resume_forms(self):
        with pytest.raises(InputValidationError) as exc:
            validate_input(InputData(job_description="Python role"))
        assert exc.value.message == MISSING_RESUME

    def test_job_description_checked_first(self):
        with pytest.raises(InputValidationError) as exc:
            validate_input(InputData(job_description=""))
        assert exc.value.message == MISSING_JOB_DESCRIPTION

    def test_text_only_is_valid(self):
        validate_input(InputData(job_description="Python role", resume_text="Python dev"))

    def test_image_only_is_valid(self):
        image = encode_image(PNG_BYTES, "image/png")
        validate_input(InputData(job_description="Python role", resume_image=image))


def test_build_input_normalizes_none_text():
    data = build_input("Python role", None, encode_image(PNG_BYTES, "image/jpeg"))
    assert data.resume_text == ""
    assert data.resume_image is not None
