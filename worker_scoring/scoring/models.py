"""Data models for the scoring engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

MATCH_SCORE = 100
NO_MATCH_SCORE = 0

# Threshold used when a request carries no selectors
BASELINE_SCORE_REQUIRED = 2


class SelectorKey(str, Enum):
    """Selector keys the engine understands."""

    LICENSURE = "licensure"
    JURISDICTION = "jurisdiction"


class SelectorOperator(str, Enum):
    """Selector operators the engine understands."""

    EQUALS = "equals"
    NOT_EQUALS = "notequals"
    GREATER_THAN_EQUAL = "greaterthanequal"


@dataclass(frozen=True)
class SelectorContribution:
    """Points a single selector added to the achieved score.

    Attributes:
        key: Lower-cased selector key
        operator: Lower-cased selector operator
        value: Selector weight (always counted toward the threshold)
        points: Points added to the achieved score
        recognized: False when the key is neither licensure nor jurisdiction
    """

    key: str
    operator: str
    value: int
    points: int
    recognized: bool = True


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of scoring one worker against one job.

    Attributes:
        score: Achieved points
        score_required: Threshold the achieved points must reach
        selectors_applied: True when selectors drove the scoring
        licensure_match: True if job and worker licensures intersect
        jurisdiction_match: True if the job jurisdiction is one the worker covers
        contributions: Per-selector breakdown (empty without selectors)
    """

    score: int
    score_required: int
    selectors_applied: bool
    licensure_match: bool
    jurisdiction_match: bool
    contributions: Tuple[SelectorContribution, ...] = field(default_factory=tuple)

    @property
    def is_match(self) -> bool:
        """True when the achieved score reaches the threshold."""
        return self.score >= self.score_required

    @property
    def result(self) -> int:
        """Binary score returned to callers: 100 or 0."""
        return MATCH_SCORE if self.is_match else NO_MATCH_SCORE
