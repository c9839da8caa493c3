"""Runs one alignment submission from Streamlit's synchronous script thread.

Each ``asyncio.run`` gets its own engine. The Gemini async client holds an
HTTP session bound to the loop that created it, so the engine is closed
before that loop ends.
"""

import asyncio
from collections.abc import Callable

from services.alignment_analyzer import AlignmentAnalyzer
from services.alignment_policy import AlignmentPolicy
from services.engine.base import BaseReasoningEngine
from services.engine.gemini_client import GeminiEngine
from services.session import AlignmentSession


async def _submit(
    session: AlignmentSession,
    engine_factory: Callable[[], BaseReasoningEngine],
    policy: AlignmentPolicy | None,
) -> None:
    engine = engine_factory()
    try:
        await session.submit(AlignmentAnalyzer(engine, policy=policy))
    finally:
        await engine.aclose()


def run_submission(
    session: AlignmentSession,
    engine_factory: Callable[[], BaseReasoningEngine] = GeminiEngine,
    policy: AlignmentPolicy | None = None,
) -> None:
    asyncio.run(_submit(session, engine_factory, policy))
