"""Shared test configuration, fakes and fixtures."""

import asyncio
import copy
import json

import pytest

from services.engine.base import BaseReasoningEngine, EngineRequest
from services.errors import TransportError


SAMPLE_JD = """
Senior Backend Engineer

Requirements:
- 5+ years of hands-on Python development
- Bachelor's degree in Computer Science or Engineering
- Experience operating PostgreSQL at scale

Preferred:
- Kubernetes
- Fintech domain experience
"""

SAMPLE_CV = """
Jane Roe
Product Manager, Acme AI (2019 - present)
- Led AI product strategy for a team of 8 engineers
- Evaluated vendors for ML infrastructure

Education
BA Economics, State University
"""

SAMPLE_REPLY = {
    "score": 48,
    "classification": "Weak Match",
    "summary": "Strong product background, but no hands-on engineering or CS degree.",
    "hardRequirementGapsCount": 3,
    "requirements": [
        {
            "label": "5+ years Python",
            "type": "HARD",
            "status": "UNMET",
            "explanation": "Led engineers but did not write code.",
        },
        {
            "label": "CS/Engineering degree",
            "type": "HARD",
            "status": "UNMET",
            "explanation": "Holds an economics degree.",
        },
        {
            "label": "PostgreSQL at scale",
            "type": "HARD",
            "status": "UNMET",
            "explanation": "No database operations experience.",
        },
        {
            "label": "Fintech domain",
            "type": "SOFT",
            "status": "PARTIAL",
            "explanation": "Adjacent AI product domain.",
        },
    ],
    "gaps": ["No hands-on Python", "Non-engineering degree", "No PostgreSQL operations"],
    "strengths": ["Product leadership", "Vendor evaluation"],
    "recommendations": [
        "Target technical product manager roles",
        "Build a portfolio of Python projects",
    ],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


class FakeEngine(BaseReasoningEngine):
    """Records every request and answers with a canned reply or error."""

    name = "fake"

    def __init__(self, reply=None, error: Exception | None = None, delay: float = 0.0) -> None:
        self.reply = json.dumps(SAMPLE_REPLY) if reply is None else reply
        self.error = error
        self.delay = delay
        self.requests: list[EngineRequest] = []
        self.closed = False

    @property
    def is_configured(self) -> bool:
        return True

    async def submit(self, request: EngineRequest) -> str:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def sample_reply() -> dict:
    return copy.deepcopy(SAMPLE_REPLY)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def failing_engine() -> FakeEngine:
    return FakeEngine(error=TransportError("Service unavailable"))
