"""Reasoning engine registry.

Global singleton, created on first use.
"""

from services.engine.base import BaseReasoningEngine, EngineRequest

_engine: BaseReasoningEngine | None = None


def get_engine() -> BaseReasoningEngine:
    """Return the process-wide engine, creating the Gemini client on first access."""
    global _engine
    if _engine is None:
        from services.engine.gemini_client import GeminiEngine
        _engine = GeminiEngine()
    return _engine


def set_engine(engine: BaseReasoningEngine | None) -> None:
    """Replace the process-wide engine. ``None`` resets to the default."""
    global _engine
    _engine = engine


__all__ = ["BaseReasoningEngine", "EngineRequest", "get_engine", "set_engine"]
