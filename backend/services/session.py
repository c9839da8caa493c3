"""Explicit per-user session: current input, status, result and error.

States:
    IDLE ──submit──> REQUESTING ──> SUCCEEDED(result) | FAILED(message)
      ^                                        │
      └────────────── reset / next submit ─────┘

Validation failures go straight from IDLE to FAILED without an outbound call.
"""

from enum import Enum
import logging

from models.schemas.analysis_result import AnalysisResult
from models.schemas.input_data import ResumeImage
from services.errors import (
    TRANSPORT_ERROR_MESSAGE,
    AlignmentError,
    InputValidationError,
    SessionBusyError,
)
from services.input_capture import build_input, encode_image

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AlignmentSession:
    def __init__(self) -> None:
        self._generation = 0
        self._in_flight = 0
        self._clear()

    def _clear(self) -> None:
        self.job_description = ""
        self.resume_text = ""
        self.resume_image: ResumeImage | None = None
        self.result: AnalysisResult | None = None
        self.error: str | None = None
        self.status = SessionStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def can_submit(self) -> bool:
        """Submission is disabled while a request is outstanding, even across a reset."""
        return not self.is_loading

    def set_job_description(self, text: str) -> None:
        self.job_description = text or ""

    def set_resume_text(self, text: str) -> None:
        self.resume_text = text or ""

    def attach_image(self, data: bytes, mime_type: str) -> ResumeImage:
        """Encode and keep one résumé image, replacing any previous one."""
        self.resume_image = encode_image(data, mime_type)
        return self.resume_image

    def clear_image(self) -> None:
        self.resume_image = None

    async def submit(self, analyzer) -> AnalysisResult | None:
        """Run one analysis from the current input.

        Returns the result on success. On failure the session holds the
        message in ``error`` and None is returned.
        """
        if not self.can_submit:
            raise SessionBusyError("An analysis is already in progress.")

        self.error = None
        self.result = None
        try:
            data = build_input(self.job_description, self.resume_text, self.resume_image)
        except InputValidationError as e:
            self.fail(e.message)
            return None

        generation = self._generation
        self.status = SessionStatus.REQUESTING
        self._in_flight += 1
        try:
            result = await analyzer.analyze(data)
        except AlignmentError as e:
            if self._is_stale(generation):
                return None
            self.fail(e.message)
            return None
        except Exception as e:
            logger.exception("Unexpected failure during alignment analysis")
            if self._is_stale(generation):
                return None
            self.fail(str(e) or TRANSPORT_ERROR_MESSAGE)
            return None
        finally:
            self._in_flight -= 1

        if self._is_stale(generation):
            return None
        self.result = result
        self.status = SessionStatus.SUCCEEDED
        return result

    def reset(self) -> None:
        """Clear all input, result and error. A still-pending reply will be discarded."""
        self._generation += 1
        self._clear()

    def fail(self, message: str) -> None:
        self.result = None
        self.error = message
        self.status = SessionStatus.FAILED

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info("Discarding alignment reply that arrived after a reset")
            return True
        return False
