"""Shared dependencies for API routes."""

from services.alignment_policy import AlignmentPolicy, get_policy
from services.engine import BaseReasoningEngine, get_engine


def get_reasoning_engine() -> BaseReasoningEngine:
    return get_engine()


def get_active_policy() -> AlignmentPolicy:
    return get_policy()
