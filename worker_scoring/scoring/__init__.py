"""Worker scoring engine.

This module provides:
- ScoreResult: Outcome of scoring a worker against a job, with rationale
- SelectorContribution: Points a single selector contributed
- evaluate_payload / worker_score: The scoring function
- build_rationale_dict: JSON-friendly rationale for structured logs
"""

from .engine import evaluate_payload, worker_score
from .models import (
    BASELINE_SCORE_REQUIRED,
    MATCH_SCORE,
    NO_MATCH_SCORE,
    ScoreResult,
    SelectorContribution,
    SelectorKey,
    SelectorOperator,
)
from .utils import build_rationale_dict

__all__ = [
    "evaluate_payload",
    "worker_score",
    "ScoreResult",
    "SelectorContribution",
    "SelectorKey",
    "SelectorOperator",
    "BASELINE_SCORE_REQUIRED",
    "MATCH_SCORE",
    "NO_MATCH_SCORE",
    "build_rationale_dict",
]
