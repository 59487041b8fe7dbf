"""Percentage rubric that turns graded answers into a competency level.

The denominator is the number of answers on the submission, not the size of the
question bank, so a partially answered step is graded on what was answered.
"""
from typing import Any, Mapping, Sequence

from ..models.enums import Level

# Lower bounds, inclusive, checked from the top
LEVEL_THRESHOLDS = (
    (75, Level.READY_TO_PROCEED),
    (50, Level.TWO),
    (25, Level.ONE),
)


def percentage(answers: Sequence[Mapping[str, Any]]) -> float:
    total = len(answers)
    if not total:
        return 0.0
    correct = sum(1 for answer in answers if answer.get("correct"))
    return correct / total * 100


def compute_level(answers: Sequence[Mapping[str, Any]]) -> Level:
    """Map the share of correct answers onto FAIL / ONE / TWO / READY_TO_PROCEED."""
    pct = percentage(answers)
    for lower_bound, level in LEVEL_THRESHOLDS:
        if pct >= lower_bound:
            return level
    return Level.FAIL
