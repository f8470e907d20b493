from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Enums ---
class Outcome(str, Enum):
    NEVER_ANSWERED = "never_answered"
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @classmethod
    def from_correctness(cls, is_correct: bool | None) -> "Outcome":
        if is_correct is None:
            return cls.NEVER_ANSWERED
        return cls.CORRECT if is_correct else cls.INCORRECT

    def as_correctness(self) -> bool | None:
        if self is Outcome.NEVER_ANSWERED:
            return None
        return self is Outcome.CORRECT


class StudyMode(str, Enum):
    FLASHCARD = "flashcard"
    QUIZ = "quiz"
    REVIEW = "review"
    MEMORISE = "memorise"
    FILL_IN_BLANK = "fill-in-blank"


# --- Entities ---
class Question(BaseModel):
    """Immutable question record owned by the host."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    options: list[str] = []
    answer: str
    explanation: str = ""


class PerformanceRecord(BaseModel):
    """
    Performance history of a single question.

    Records are immutable values: the updater returns a fresh copy for
    every answer event instead of touching the stored instance.
    """

    model_config = ConfigDict(frozen=True)

    question_id: str
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)
    last_answered_at: datetime | None = None
    last_outcome: Outcome = Outcome.NEVER_ANSWERED
    scheduled_reinsertion_offset: int | None = None

    @model_validator(mode="after")
    def _check_outcome_consistency(self) -> "PerformanceRecord":
        if self.last_outcome is not Outcome.NEVER_ANSWERED and self.last_answered_at is None:
            raise ValueError("an answered outcome requires last_answered_at")
        if (
            self.scheduled_reinsertion_offset is not None
            and self.last_outcome is not Outcome.INCORRECT
        ):
            raise ValueError(
                "scheduled_reinsertion_offset is only valid after an incorrect answer"
            )
        return self

    @property
    def is_answered(self) -> bool:
        return self.last_answered_at is not None

    @property
    def needs_review(self) -> bool:
        return self.last_outcome is not Outcome.CORRECT


class PerformanceStats(BaseModel):
    total_questions: int = 0
    total_answered: int = 0
    total_correct: int = 0
    total_incorrect: int = 0
    accuracy: float = 0.0

    @property
    def total_attempts(self) -> int:
        return self.total_correct + self.total_incorrect
