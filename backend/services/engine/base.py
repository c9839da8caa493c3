"""Abstract base class for reasoning engines."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from models.schemas.input_data import ResumeImage


class EngineRequest(BaseModel):
    """One outbound call: fixed policy guidance plus the content payload."""
    model_config = ConfigDict(frozen=True)

    system_instruction: str
    response_schema: dict
    prompt: str
    image: ResumeImage | None = None


class BaseReasoningEngine(ABC):
    """Opaque capability: submit(policy, content) -> JSON text, or fail.

    Subclasses must implement:
        - name: identifier reported by /health and in logs
        - is_configured: whether credentials are available
        - submit(request): send one request and return the raw reply text

    ``submit`` raises TransportError for any failure to obtain a reply.
    """

    name: str = ""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when the engine can be called."""

    @abstractmethod
    async def submit(self, request: EngineRequest) -> str:
        """Send one request. Returns the engine's raw reply text."""

    async def aclose(self) -> None:
        """Release any connections bound to the running event loop."""
