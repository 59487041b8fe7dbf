"""Test cases for the level rubric."""
import pytest

from examgate.models import Level
from examgate.submissions.grading import compute_level, percentage


def answers(total, correct):
    return [{"question": f"Q{i}", "answer": "a", "correct": i < correct} for i in range(total)]


class TestComputeLevel:

    @pytest.mark.parametrize("total, correct, expected", [
        (4000, 999, Level.FAIL),
        (4, 1, Level.ONE),
        (4000, 1999, Level.ONE),
        (4, 2, Level.TWO),
        (4000, 2999, Level.TWO),
        (4, 3, Level.READY_TO_PROCEED),
        (4, 4, Level.READY_TO_PROCEED),
        (4, 0, Level.FAIL),
    ])
    def test_thresholds(self, total, correct, expected):
        assert compute_level(answers(total, correct)) == expected

    def test_empty_submission_fails(self):
        assert compute_level([]) == Level.FAIL
        assert percentage([]) == 0.0

    def test_ungraded_answers_count_as_incorrect(self):
        graded = [
            {"question": "Q1", "answer": "a", "correct": True},
            {"question": "Q2", "answer": "b", "correct": None},
        ]
        assert percentage(graded) == 50.0
        assert compute_level(graded) == Level.TWO

    def test_denominator_is_answer_count(self):
        # 33 of 44 answered questions correct
        assert compute_level(answers(44, 33)) == Level.READY_TO_PROCEED
        assert compute_level(answers(44, 10)) == Level.FAIL

    def test_does_not_mutate_input(self):
        data = answers(4, 2)
        snapshot = [dict(a) for a in data]
        compute_level(data)
        compute_level(data)
        assert data == snapshot
