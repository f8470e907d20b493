from collections.abc import Sequence
from dataclasses import dataclass, field

from certprep.config import QUESTION_BANKS, QuestionBank, StudyConfig
from certprep.study.adapters.performance_repository import PerformanceRepository
from certprep.study.application.errors import (
    BankUnavailableError,
    NoActiveSessionError,
    NoBankSelectedError,
    NothingToReviewError,
    UnknownBankError,
)
from certprep.study.application.strategies import StrategyRegistry
from certprep.study.domain.models import (
    PerformanceRecord,
    PerformanceStats,
    Question,
    StudyMode,
)
from certprep.study.domain.performance import PerformanceUpdater, compute_stats
from certprep.study.domain.performance_store import PerformanceStore, namespaced_id
from certprep.study.domain.reinsertion import SessionQueue, schedule_reinsertion
from certprep.study.domain.review_selector import ReviewSelector
from certprep.shared.telemetry import Telemetry, measure_time


@dataclass
class StudySession:
    """
    Encapsulates the state of a running study session.
    """

    mode: StudyMode
    queue: SessionQueue
    current_index: int = 0
    is_complete: bool = False
    answered: int = 0
    reinserted: list[int] = field(default_factory=list)

    @property
    def current_question(self) -> Question | None:
        if self.is_complete:
            return None
        return self.queue.get(self.current_index)

    @property
    def total(self) -> int:
        return len(self.queue)


class StudyService:
    """
    Host-side orchestration: one bank, one store, at most one session.
    """

    def __init__(
        self,
        repo: PerformanceRepository,
        updater: PerformanceUpdater | None = None,
        strategies: StrategyRegistry | None = None,
    ) -> None:
        self.repo = repo
        self.updater = updater or PerformanceUpdater()
        self.strategies = strategies or StrategyRegistry.default(self.updater.rng)
        self.telemetry = Telemetry("StudyService")

        self.bank: QuestionBank | None = None
        self.questions: list[Question] = []
        self.store = PerformanceStore()
        self.session: StudySession | None = None

    # --- Bank Selection ---
    def last_used_bank(self) -> QuestionBank:
        saved = self.repo.load_last_bank()
        bank = StudyConfig.get_bank(saved) if saved else None
        if bank is not None and bank.available:
            return bank

        default = StudyConfig.get_bank(StudyConfig.DEFAULT_BANK_KEY)
        if default is None:
            raise UnknownBankError(StudyConfig.DEFAULT_BANK_KEY)
        return default

    @measure_time("select_bank")
    def select_bank(self, bank_key: str, questions: Sequence[Question]) -> PerformanceStore:
        bank = StudyConfig.get_bank(bank_key)
        if bank is None:
            raise UnknownBankError(bank_key)
        if not bank.available:
            raise BankUnavailableError(bank_key)

        Telemetry.start_trace()
        questions = [self._in_bank(bank.key, q) for q in questions]
        store = self.repo.load(bank.key)
        created = store.ensure_records(questions)

        self.bank = bank
        self.questions = questions
        self.store = store
        self.session = None

        self.telemetry.log_info(
            "Bank Selected",
            bank=bank.key,
            questions=len(questions),
            new_records=created,
            loaded=store.loaded,
        )
        # An unreadable saved copy stays untouched until an answer is given.
        if store.loaded:
            self._persist()
        try:
            self.repo.save_last_bank(bank.key)
        except Exception as e:
            self.telemetry.log_error("Saving last bank failed", e, bank=bank.key)
        return store

    @staticmethod
    def _in_bank(bank_key: str, question: Question) -> Question:
        question_id = namespaced_id(bank_key, question.id)
        if question_id == question.id:
            return question
        return question.model_copy(update={"id": question_id})

    def _require_bank(self) -> QuestionBank:
        if self.bank is None:
            raise NoBankSelectedError()
        return self.bank

    def _require_session(self) -> StudySession:
        if self.session is None or self.session.is_complete:
            raise NoActiveSessionError()
        return self.session

    # --- Session Lifecycle ---
    @measure_time("start_mode")
    def start_mode(self, mode: StudyMode) -> StudySession:
        self._require_bank()
        questions = self.strategies.get(mode).generate(self.questions, self.store)

        if mode is StudyMode.REVIEW and not questions:
            raise NothingToReviewError()

        self.session = StudySession(mode=mode, queue=SessionQueue(questions))
        self.telemetry.log_info("Session Started", mode=mode.value, total=len(questions))
        return self.session

    @property
    def current_question(self) -> Question | None:
        return self.session.current_question if self.session else None

    @measure_time("submit_answer")
    def submit_answer(self, is_correct: bool) -> PerformanceRecord:
        session = self._require_session()
        question = session.current_question
        if question is None:
            raise NoActiveSessionError()

        if not self.store.loaded:
            self._recover_saved_progress()

        record = self.store.get_or_initial(question.id)
        updated = self.updater.update(record, is_correct, session.current_index)
        self.store.put(updated)
        session.answered += 1
        Telemetry.count_answer(is_correct)

        self._persist()

        if not is_correct:
            index = schedule_reinsertion(session.queue, question, updated)
            if index is not None:
                session.reinserted.append(index)

        self.telemetry.log_info(
            "Answer Submitted",
            q_id=question.id,
            correct=is_correct,
            position=session.current_index,
            reinsert_at=updated.scheduled_reinsertion_offset,
        )
        return updated

    def next_question(self) -> Question | None:
        """Advance; returns None once the last question has been passed."""
        session = self._require_session()
        if session.current_index < session.total - 1:
            session.current_index += 1
            return session.current_question

        session.is_complete = True
        self.telemetry.log_info(
            "Session Complete", mode=session.mode.value, answered=session.answered
        )
        return None

    def previous_question(self) -> Question | None:
        session = self._require_session()
        if session.current_index > 0:
            session.current_index -= 1
        return session.current_question

    def end_session(self) -> None:
        self.session = None

    # --- Statistics ---
    def get_stats(self) -> PerformanceStats:
        return compute_stats(self.store, self.questions)

    def review_count(self) -> int:
        return len(ReviewSelector.select_for_review(self.questions, self.store))

    def reset_all_statistics(self) -> None:
        """Clears progress for every bank, not just the selected one."""
        self.store.clear()
        self.session = None
        self.repo.reset_all([b.key for b in QUESTION_BANKS])
        self.store.loaded = True
        self.telemetry.log_info("Statistics Reset", bank=self.bank.key if self.bank else None)

    # --- Persistence ---
    def _recover_saved_progress(self) -> None:
        """
        Re-read a store whose load failed before answering into it.

        Records answered since the failed load are laid over the saved copy.
        If the saved copy is still unreadable, the current store becomes the
        one that gets written.
        """
        bank = self._require_bank()
        saved = self.repo.load(bank.key)
        if not saved.loaded:
            self.telemetry.log_warning("Saved performance still unreadable", bank=bank.key)
            self.store.loaded = True
            return

        for record in self.store.records():
            if record.is_answered:
                saved.put(record)
        saved.ensure_records(self.questions)
        self.store = saved
        self.telemetry.log_info("Saved Performance Recovered", bank=bank.key, records=len(saved))

    def _persist(self) -> None:
        # Fire-and-forget: the in-memory update stands even if the write fails.
        try:
            self.repo.save(self.store)
        except Exception as e:
            self.telemetry.log_error(
                "Saving performance failed", e, bank=self.store.bank_key
            )
