from collections.abc import Sequence

from certprep.study.domain.models import Question
from certprep.study.domain.performance_store import PerformanceStore


class ReviewSelector:
    """
    Cross-session filter: keeps every question that is not yet resolved.
    """

    @staticmethod
    def needs_review(question: Question, store: PerformanceStore) -> bool:
        record = store.get(question.id)
        return record is None or record.needs_review

    @staticmethod
    def select_for_review(
        questions: Sequence[Question], store: PerformanceStore
    ) -> list[Question]:
        """
        Returns unanswered and last-incorrect questions in their input order.

        An empty list means there is nothing to review; callers must not
        start a review session from it.
        """
        return [q for q in questions if ReviewSelector.needs_review(q, store)]
