"""Scoring engine for deciding whether a worker qualifies for a job.

The engine is a pure function of the payload:
1. Derive licensure sets and jurisdiction membership
2. With selectors: sum selector values into the threshold and accumulate
   points per selector
3. Without selectors: fixed threshold of 2, one point for a licensure match
   and one point for a jurisdiction mismatch
4. Return 100 if the achieved score reaches the threshold, else 0
"""

from worker_scoring.domain.models import BestWorkerPayload, Selector

from .models import (
    BASELINE_SCORE_REQUIRED,
    ScoreResult,
    SelectorContribution,
    SelectorKey,
    SelectorOperator,
)


def evaluate_payload(payload: BestWorkerPayload) -> ScoreResult:
    """Score a worker against a job and keep the rationale.

    Args:
        payload: Complete payload (job and worker present)

    Returns:
        ScoreResult with achieved score, threshold and per-selector breakdown
    """
    job = payload.job
    worker = payload.worker

    licensure_match = not job.licensures.isdisjoint(worker.licensures)
    jurisdiction_match = job.jurisdiction_id in worker.jurisdictions

    if payload.selectors:
        score_required = sum(selector.value for selector in payload.selectors)
        contributions = [
            _score_selector(selector, licensure_match, jurisdiction_match)
            for selector in payload.selectors
        ]
        score = sum(contribution.points for contribution in contributions)

        return ScoreResult(
            score=score,
            score_required=score_required,
            selectors_applied=True,
            licensure_match=licensure_match,
            jurisdiction_match=jurisdiction_match,
            contributions=tuple(contributions),
        )

    # Without selectors a jurisdiction mismatch earns the point, not a match
    score = (1 if licensure_match else 0) + (0 if jurisdiction_match else 1)

    return ScoreResult(
        score=score,
        score_required=BASELINE_SCORE_REQUIRED,
        selectors_applied=False,
        licensure_match=licensure_match,
        jurisdiction_match=jurisdiction_match,
    )


def worker_score(payload: BestWorkerPayload) -> int:
    """Return the binary match score (100 or 0) for a payload."""
    return evaluate_payload(payload).result


def _score_selector(
    selector: Selector, licensure_match: bool, jurisdiction_match: bool
) -> SelectorContribution:
    """Compute the points a single selector contributes.

    Args:
        selector: Selector to apply
        licensure_match: Whether job and worker licensures intersect
        jurisdiction_match: Whether the worker covers the job jurisdiction

    Returns:
        SelectorContribution for the selector
    """
    key = selector.key.lower()
    operator = selector.operator.lower()
    value = selector.value
    points = 0

    if key == SelectorKey.LICENSURE.value:
        licensure_score = value if licensure_match else 0
        if operator == SelectorOperator.GREATER_THAN_EQUAL.value and licensure_score >= value:
            points = licensure_score
        elif operator == SelectorOperator.EQUALS.value and licensure_score == value:
            points = licensure_score

    elif key == SelectorKey.JURISDICTION.value:
        if operator == SelectorOperator.EQUALS.value:
            points = value if jurisdiction_match else 0
        elif operator == SelectorOperator.NOT_EQUALS.value:
            points = 0 if jurisdiction_match else value

    else:
        return SelectorContribution(
            key=key, operator=operator, value=value, points=0, recognized=False
        )

    return SelectorContribution(key=key, operator=operator, value=value, points=points)
