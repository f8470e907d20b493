import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from certprep.config import StudyConfig
from certprep.study.domain.models import Outcome, PerformanceRecord
from certprep.study.domain.performance_store import (
    PerformanceStore,
    create_initial_record,
    migrate_legacy_id,
)
from certprep.study.domain.ports import IKeyValueStorage
from certprep.shared.telemetry import Telemetry, measure_time


# --- ADR 002: Storage Format ---
# Decision: A bank's store is persisted as a JSON array of
# [question_id, record] pairs with camelCase record fields.
# Rationale: The format predates this engine; existing saved progress
# (including un-namespaced "q-N" ids) must keep loading.
# ---------------------------------
class StoredRecord(BaseModel):
    """Wire form of a PerformanceRecord."""

    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    correct_count: int = Field(alias="correctCount", ge=0)
    incorrect_count: int = Field(alias="incorrectCount", ge=0)
    last_answered: datetime | None = Field(alias="lastAnswered")
    last_correct: bool | None = Field(alias="lastCorrect")
    scheduled_next: int | None = Field(default=None, alias="scheduledNext")

    @classmethod
    def from_record(cls, record: PerformanceRecord) -> "StoredRecord":
        return cls(
            question_id=record.question_id,
            correct_count=record.correct_count,
            incorrect_count=record.incorrect_count,
            last_answered=record.last_answered_at,
            last_correct=record.last_outcome.as_correctness(),
            scheduled_next=record.scheduled_reinsertion_offset,
        )

    def to_record(self, question_id: str) -> PerformanceRecord:
        outcome = Outcome.from_correctness(self.last_correct)
        return PerformanceRecord(
            question_id=question_id,
            correct_count=self.correct_count,
            incorrect_count=self.incorrect_count,
            last_answered_at=self.last_answered,
            last_outcome=outcome,
            scheduled_reinsertion_offset=(
                self.scheduled_next if outcome is Outcome.INCORRECT else None
            ),
        )


class PerformanceRepository:
    """
    Loads and saves per-bank performance stores through a key-value storage.

    Loading fails open: unreadable entries are skipped or reset. A failed
    read or a corrupt payload yields an empty store flagged `loaded=False`.
    """

    def __init__(self, storage: IKeyValueStorage) -> None:
        self.storage = storage
        self.telemetry = Telemetry("PerformanceRepository")

    # --- Serialization ---
    @staticmethod
    def serialize(store: PerformanceStore) -> str:
        pairs = [
            [question_id, StoredRecord.from_record(record).model_dump(mode="json", by_alias=True)]
            for question_id, record in store.items()
        ]
        return json.dumps(pairs)

    def deserialize(self, payload: str, bank_key: str | None) -> PerformanceStore:
        store = PerformanceStore(bank_key=bank_key)

        try:
            entries = json.loads(payload)
        except (json.JSONDecodeError, TypeError) as e:
            self.telemetry.log_error("Corrupt performance payload", e, bank=bank_key)
            store.loaded = False
            return store

        if not isinstance(entries, list):
            self.telemetry.log_warning(
                "Performance payload is not a list", bank=bank_key, kind=type(entries).__name__
            )
            store.loaded = False
            return store

        skipped = 0
        reset = 0
        for entry in entries:
            if not self._is_pair(entry):
                skipped += 1
                continue

            question_id = migrate_legacy_id(bank_key, entry[0])
            try:
                stored = StoredRecord.model_validate(entry[1])
                record = stored.to_record(question_id)
            except ValidationError:
                record = create_initial_record(question_id)
                reset += 1
            store.put(record)

        if skipped or reset:
            self.telemetry.log_warning(
                "Unreadable performance entries", bank=bank_key, skipped=skipped, reset=reset
            )
        return store

    @staticmethod
    def _is_pair(entry: Any) -> bool:
        return (
            isinstance(entry, list)
            and len(entry) == 2
            and isinstance(entry[0], str)
            and bool(entry[0])
        )

    # --- Persistence ---
    @measure_time("load_performance")
    def load(self, bank_key: str | None) -> PerformanceStore:
        try:
            payload = self.storage.get(StudyConfig.performance_key(bank_key))
        except Exception as e:
            self.telemetry.log_error("Performance storage read failed", e, bank=bank_key)
            return PerformanceStore(bank_key=bank_key, loaded=False)

        if not payload:
            return PerformanceStore(bank_key=bank_key)

        store = self.deserialize(payload, bank_key)
        self.telemetry.log_info(
            "Performance Loaded", bank=bank_key, records=len(store), loaded=store.loaded
        )
        return store

    def save(self, store: PerformanceStore) -> None:
        # An empty store never overwrites saved progress.
        if len(store) == 0:
            return
        self.storage.set(StudyConfig.performance_key(store.bank_key), self.serialize(store))

    def reset_all(self, bank_keys: list[str]) -> None:
        """Forget progress of every given bank plus the legacy keys."""
        keys = [StudyConfig.performance_key(k) for k in bank_keys]
        keys.extend(StudyConfig.LEGACY_PERFORMANCE_KEYS)
        for key in dict.fromkeys(keys):
            self.storage.delete(key)
        self.telemetry.log_info("Performance Reset", keys=len(keys))

    # --- Last Used Bank ---
    def load_last_bank(self) -> str | None:
        try:
            return self.storage.get(StudyConfig.LAST_BANK_KEY)
        except Exception as e:
            self.telemetry.log_error("Last bank read failed", e)
            return None

    def save_last_bank(self, bank_key: str) -> None:
        self.storage.set(StudyConfig.LAST_BANK_KEY, bank_key)
