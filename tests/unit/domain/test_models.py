# ==============================================================================
# ARCHITECTURE: UNIT TEST (CORE LOGIC)
# ------------------------------------------------------------------------------
# GOAL: Verify pure business logic, state transitions, and algorithms.
# CONSTRAINTS:
#   1. EXECUTION: FAST (< 50ms per test).
#   2. I/O: FORBIDDEN. No Database, No Network, No File System.
# ==============================================================================
import pytest
from pydantic import ValidationError

from certprep.study.domain.models import (
    Outcome,
    PerformanceRecord,
    PerformanceStats,
    Question,
)
from tests.helpers.factories import FIXED_NOW, make_question


def test_new_record_is_never_answered():
    record = PerformanceRecord(question_id="pmle-q-1")

    assert record.correct_count == 0
    assert record.incorrect_count == 0
    assert record.last_answered_at is None
    assert record.last_outcome is Outcome.NEVER_ANSWERED
    assert record.scheduled_reinsertion_offset is None
    assert record.is_answered is False
    assert record.needs_review is True


def test_record_rejects_offset_without_incorrect_outcome():
    with pytest.raises(ValidationError):
        PerformanceRecord(
            question_id="pmle-q-1",
            last_outcome=Outcome.CORRECT,
            last_answered_at=FIXED_NOW,
            scheduled_reinsertion_offset=7,
        )


@pytest.mark.parametrize("outcome", [Outcome.CORRECT, Outcome.INCORRECT])
def test_record_rejects_outcome_without_answer_time(outcome):
    with pytest.raises(ValidationError):
        PerformanceRecord(question_id="pmle-q-1", last_outcome=outcome)


def test_record_rejects_negative_counts():
    with pytest.raises(ValidationError):
        PerformanceRecord(question_id="pmle-q-1", correct_count=-1)


def test_record_is_immutable():
    record = PerformanceRecord(question_id="pmle-q-1")

    with pytest.raises(ValidationError):
        record.correct_count = 5


def test_correct_record_does_not_need_review():
    record = PerformanceRecord(
        question_id="pmle-q-1",
        correct_count=1,
        last_answered_at=FIXED_NOW,
        last_outcome=Outcome.CORRECT,
    )

    assert record.needs_review is False


@pytest.mark.parametrize(
    "flag, outcome",
    [(None, Outcome.NEVER_ANSWERED), (True, Outcome.CORRECT), (False, Outcome.INCORRECT)],
)
def test_outcome_maps_to_and_from_correctness(flag, outcome):
    assert Outcome.from_correctness(flag) is outcome
    assert outcome.as_correctness() is flag


def test_question_is_frozen():
    q = make_question("pmle-q-1")

    with pytest.raises(ValidationError):
        q.text = "changed"


def test_question_requires_answer():
    with pytest.raises(ValidationError):
        Question(id="pmle-q-1", text="What?")


def test_stats_total_attempts():
    stats = PerformanceStats(total_correct=3, total_incorrect=2)

    assert stats.total_attempts == 5
