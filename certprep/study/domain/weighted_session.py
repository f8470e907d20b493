from collections import deque
from collections.abc import Sequence

from certprep.config import StudyConfig
from certprep.study.domain.models import Outcome, Question
from certprep.study.domain.performance_store import PerformanceStore
from certprep.study.domain.ports import RandomSource, default_random_source
from certprep.shared.telemetry import Telemetry


class WeightedSessionBuilder:
    """
    Pure Domain Logic.
    Orders a full bank so that missed and unseen questions tend to come first.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.rng = rng or default_random_source()
        self.telemetry = Telemetry("WeightedSessionBuilder")

    def shuffled(self, questions: Sequence[Question]) -> list[Question]:
        pool = list(questions)
        self.rng.shuffle(pool)
        return pool

    def build_session(
        self, questions: Sequence[Question], store: PerformanceStore
    ) -> list[Question]:
        # 1. Segregate Pools
        unseen: list[Question] = []
        incorrect: list[Question] = []
        correct: list[Question] = []
        for q in questions:
            record = store.get(q.id)
            if record is None or record.last_outcome is Outcome.NEVER_ANSWERED:
                unseen.append(q)
            elif record.last_outcome is Outcome.INCORRECT:
                incorrect.append(q)
            else:
                correct.append(q)

        self.telemetry.log_info(
            "Session Pools",
            unseen=len(unseen),
            incorrect=len(incorrect),
            correct=len(correct),
        )

        # 2. Shuffle each pool independently
        incorrect_pool = deque(self.shuffled(incorrect))
        unseen_pool = deque(self.shuffled(unseen))
        correct_pool = deque(self.shuffled(correct))

        # 3. Lead segment: one weighted draw per slot, empty pool = skipped draw
        session: list[Question] = []
        for _ in range(len(questions) // StudyConfig.LEAD_SEGMENT_DIVISOR):
            roll = self.rng.random()
            if roll < StudyConfig.INCORRECT_DRAW_THRESHOLD and incorrect_pool:
                session.append(incorrect_pool.popleft())
            elif roll < StudyConfig.UNSEEN_DRAW_THRESHOLD and unseen_pool:
                session.append(unseen_pool.popleft())
            elif correct_pool:
                session.append(correct_pool.popleft())

        # 4. Remainder, pool by pool
        session.extend(incorrect_pool)
        session.extend(unseen_pool)
        session.extend(correct_pool)

        return session
