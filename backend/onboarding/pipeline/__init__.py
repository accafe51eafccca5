"""
Submission pipeline — step-based orchestrator for onboarding submissions.

Each submission runs through authorize → validate → normalize → export →
notify → persist, with per-step logging and error tracking.
"""

from onboarding.pipeline.engine import SubmissionEngine, SubmissionResult
from onboarding.pipeline.context import StepResult, SubmissionContext
from onboarding.pipeline.step import SubmissionStep

__all__ = [
    "SubmissionEngine",
    "SubmissionResult",
    "SubmissionContext",
    "SubmissionStep",
    "StepResult",
]
