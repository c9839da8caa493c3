"""Alignment request/response contract.

One call per analysis:
1. Validate the input locally (no outbound call on failure)
2. Build the policy instruction + content payload
3. Submit to the reasoning engine (with timeout, no retry)
4. Parse the reply into an AnalysisResult, all-or-nothing
"""

import asyncio
import json
import logging

from pydantic import ValidationError

from config import settings
from models.schemas.analysis_result import AnalysisResult
from models.schemas.input_data import InputData
from services import prompt_builder
from services.alignment_policy import AlignmentPolicy, get_policy
from services.engine.base import BaseReasoningEngine, EngineRequest
from services.errors import SchemaError, TransportError
from services.input_capture import validate_input

logger = logging.getLogger(__name__)


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_reply(raw: str | bytes | None) -> AnalysisResult:
    """Parse the engine's JSON reply. Any deviation from the schema raises SchemaError."""
    if raw is None:
        logger.error("Engine returned an empty reply")
        raise SchemaError()
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error("Engine reply is not valid UTF-8: %s", e)
            raise SchemaError() from e

    text = _strip_code_fences(raw)
    try:
        json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse engine reply as JSON: %s", e)
        raise SchemaError() from e

    # strict JSON validation: enums accept their wire strings, but "85" or
    # true for a number is a schema violation
    try:
        return AnalysisResult.model_validate_json(text, strict=True)
    except ValidationError as e:
        logger.error("Engine reply does not match the result schema: %d error(s)", e.error_count())
        raise SchemaError() from e


class AlignmentAnalyzer:
    """Turns validated InputData into exactly one engine call and one result."""

    def __init__(
        self,
        engine: BaseReasoningEngine,
        policy: AlignmentPolicy | None = None,
        timeout: float | None = None,
    ) -> None:
        self.engine = engine
        self.policy = policy or get_policy()
        self.timeout = settings.engine_timeout_seconds if timeout is None else timeout

    async def analyze(self, data: InputData) -> AnalysisResult:
        validate_input(data)

        request = prompt_builder.build_engine_request(data, self.policy)
        logger.info(
            "Requesting alignment analysis (engine=%s, policy=%s, image=%s)",
            self.engine.name,
            self.policy.version,
            data.resume_image is not None,
        )

        raw = await self._submit(request)
        result = parse_reply(raw)

        cap = self.policy.cap_for_gaps(result.hard_requirement_gaps_count)
        if result.score > cap:
            logger.warning(
                "Engine score %d exceeds the %d%% cap for %d hard gap(s)",
                result.score,
                cap,
                result.hard_requirement_gaps_count,
            )
        return result

    async def _submit(self, request: EngineRequest) -> str:
        if not self.timeout:
            return await self.engine.submit(request)
        try:
            return await asyncio.wait_for(self.engine.submit(request), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Engine request timed out after %.0fs", self.timeout)
            raise TransportError(
                f"The analysis engine did not respond within {self.timeout:.0f} seconds."
            ) from e
