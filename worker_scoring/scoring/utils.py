"""Utility functions for preparing score results for logs."""

from typing import Dict

from .models import ScoreResult


def build_rationale_dict(score_result: ScoreResult) -> Dict:
    """Build a lightweight rationale dict for a score result.

    Useful as structured ``extra`` fields on the score log line.

    Args:
        score_result: ScoreResult to serialize

    Returns:
        Dict with:
        - result: Binary score (100 or 0)
        - score: Achieved points
        - score_required: Threshold
        - selectors_applied: Whether selectors drove the scoring
        - licensure_match: Whether licensures intersect
        - jurisdiction_match: Whether the worker covers the job jurisdiction
        - selector_count: Number of selectors
        - unrecognized_selector_count: Selectors whose key was ignored
        - contributions: List of per-selector dicts
    """
    return {
        "result": score_result.result,
        "score": score_result.score,
        "score_required": score_result.score_required,
        "selectors_applied": score_result.selectors_applied,
        "licensure_match": score_result.licensure_match,
        "jurisdiction_match": score_result.jurisdiction_match,
        "selector_count": len(score_result.contributions),
        "unrecognized_selector_count": len(
            [c for c in score_result.contributions if not c.recognized]
        ),
        "contributions": [
            {
                "key": c.key,
                "operator": c.operator,
                "value": c.value,
                "points": c.points,
                "recognized": c.recognized,
            }
            for c in score_result.contributions
        ],
    }
