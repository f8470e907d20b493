from collections.abc import Sequence

from certprep.config import StudyConfig
from certprep.study.domain.models import (
    Outcome,
    PerformanceRecord,
    PerformanceStats,
    Question,
)
from certprep.study.domain.performance_store import PerformanceStore
from certprep.study.domain.ports import (
    Clock,
    RandomSource,
    SystemClock,
    default_random_source,
)


class PerformanceUpdater:
    """
    Pure Domain Logic.
    Turns one answer event into the next version of a question's record.
    """

    def __init__(
        self, clock: Clock | None = None, rng: RandomSource | None = None
    ) -> None:
        self.clock = clock or SystemClock()
        self.rng = rng or default_random_source()

    def update(
        self, record: PerformanceRecord, is_correct: bool, current_position: int
    ) -> PerformanceRecord:
        changes: dict[str, object] = {
            "last_answered_at": self.clock.now(),
            "last_outcome": Outcome.from_correctness(is_correct),
        }

        if is_correct:
            changes["correct_count"] = record.correct_count + 1
            changes["scheduled_reinsertion_offset"] = None
        else:
            changes["incorrect_count"] = record.incorrect_count + 1
            gap = self.rng.randint(
                StudyConfig.REINSERT_MIN_GAP, StudyConfig.REINSERT_MAX_GAP
            )
            changes["scheduled_reinsertion_offset"] = max(current_position, 0) + gap

        # model_copy skips validation; the changes above keep the invariants.
        return record.model_copy(update=changes)


def compute_stats(
    store: PerformanceStore, questions: Sequence[Question]
) -> PerformanceStats:
    """Aggregate the store, counting only questions of the current bank."""
    current_ids = {q.id for q in questions}
    stats = PerformanceStats(total_questions=len(questions))

    for question_id, record in store.items():
        if question_id not in current_ids:
            continue
        if record.is_answered:
            stats.total_answered += 1
        stats.total_correct += record.correct_count
        stats.total_incorrect += record.incorrect_count

    if stats.total_attempts > 0:
        stats.accuracy = stats.total_correct / stats.total_attempts * 100

    return stats
