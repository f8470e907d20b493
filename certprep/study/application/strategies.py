from abc import ABC, abstractmethod
from collections.abc import Sequence

from certprep.study.domain.models import Question, StudyMode
from certprep.study.domain.performance_store import PerformanceStore
from certprep.study.domain.ports import RandomSource
from certprep.study.domain.review_selector import ReviewSelector
from certprep.study.domain.weighted_session import WeightedSessionBuilder
from certprep.shared.telemetry import Telemetry, measure_time


# --- Interface ---
class IQuestionStrategy(ABC):
    @abstractmethod
    def generate(
        self, questions: Sequence[Question], store: PerformanceStore
    ) -> list[Question]:
        pass


# --- Concrete Strategies ---
class WeightedStrategy(IQuestionStrategy):
    """Whole bank, missed and unseen questions biased to the front."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.telemetry = Telemetry("Strategy.Weighted")
        self.builder = WeightedSessionBuilder(rng)

    @measure_time("generate_weighted")
    def generate(
        self, questions: Sequence[Question], store: PerformanceStore
    ) -> list[Question]:
        return self.builder.build_session(questions, store)


class ReviewStrategy(IQuestionStrategy):
    def __init__(self) -> None:
        self.telemetry = Telemetry("Strategy.Review")

    @measure_time("generate_review")
    def generate(
        self, questions: Sequence[Question], store: PerformanceStore
    ) -> list[Question]:
        selection = ReviewSelector.select_for_review(questions, store)
        self.telemetry.log_info("Generated Questions", count=len(selection), mode="Review")
        return selection


class MemoriseStrategy(IQuestionStrategy):
    """Bank order, untouched."""

    def generate(
        self, questions: Sequence[Question], store: PerformanceStore
    ) -> list[Question]:
        return list(questions)


# --- Registry (OCP) ---
class StrategyRegistry:
    def __init__(self) -> None:
        self._strategies: dict[StudyMode, IQuestionStrategy] = {}

    def register(self, mode: StudyMode, strategy: IQuestionStrategy) -> None:
        self._strategies[mode] = strategy

    def get(self, mode: StudyMode) -> IQuestionStrategy:
        return self._strategies.get(mode, self._strategies[StudyMode.QUIZ])

    @classmethod
    def default(cls, rng: RandomSource | None = None) -> "StrategyRegistry":
        registry = cls()
        weighted = WeightedStrategy(rng)
        registry.register(StudyMode.FLASHCARD, weighted)
        registry.register(StudyMode.QUIZ, weighted)
        registry.register(StudyMode.FILL_IN_BLANK, weighted)
        registry.register(StudyMode.REVIEW, ReviewStrategy())
        registry.register(StudyMode.MEMORISE, MemoriseStrategy())
        return registry
