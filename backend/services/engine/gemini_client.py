"""Google Gemini engine with structured JSON output."""

import base64
import logging

from google import genai
from google.genai import errors, types

from config import settings
from services.engine.base import BaseReasoningEngine, EngineRequest
from services.errors import TRANSPORT_ERROR_MESSAGE, TransportError

logger = logging.getLogger(__name__)


class GeminiEngine(BaseReasoningEngine):
    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        thinking_budget: int | None = None,
    ) -> None:
        self._api_key = settings.gemini_api_key if api_key is None else api_key
        self.model = model or settings.gemini_model
        self.thinking_budget = (
            settings.gemini_thinking_budget if thinking_budget is None else thinking_budget
        )
        self._client: genai.Client | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def get_client(self) -> genai.Client:
        if not self._api_key:
            logger.warning("No GEMINI_API_KEY set - alignment analysis disabled")
            raise TransportError("Reasoning engine is not configured (GEMINI_API_KEY is missing).")
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def build_contents(self, request: EngineRequest) -> list[types.Part]:
        parts = [types.Part.from_text(text=request.prompt)]
        if request.image is not None:
            parts.append(
                types.Part.from_bytes(
                    data=base64.b64decode(request.image.data_base64),
                    mime_type=request.image.mime_type,
                )
            )
        return parts

    def build_config(self, request: EngineRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            thinking_config=types.ThinkingConfig(thinking_budget=self.thinking_budget),
            response_mime_type="application/json",
            response_schema=request.response_schema,
        )

    async def submit(self, request: EngineRequest) -> str:
        """Send the request to Gemini and return the raw JSON text."""
        client = self.get_client()

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=self.build_contents(request),
                config=self.build_config(request),
            )
        except errors.APIError as e:
            logger.error("Gemini API error (%s): %s", e.code, e.message)
            raise TransportError(e.message or TRANSPORT_ERROR_MESSAGE) from e
        except Exception as e:
            logger.error("Gemini request failed: %s", e)
            raise TransportError(str(e) or TRANSPORT_ERROR_MESSAGE) from e

        return response.text or ""

    async def aclose(self) -> None:
        """Close the async HTTP session; the next submit opens a new client."""
        if self._client is not None:
            client, self._client = self._client, None
            await client.aio.aclose()
