from collections.abc import Iterable, Iterator

from certprep.config import StudyConfig
from certprep.study.domain.models import PerformanceRecord, Question


def namespaced_id(bank_key: str, question_id: str) -> str:
    """Prefix an identifier with its owning bank, unless already prefixed."""
    prefix = f"{bank_key}-"
    if question_id.startswith(prefix):
        return question_id
    return f"{prefix}{question_id}"


def migrate_legacy_id(bank_key: str | None, question_id: str) -> str:
    """
    Rewrite pre-namespacing identifiers (`q-3`) to the bank form (`pmle-q-3`).
    Identifiers that already carry the prefix are returned untouched.
    """
    if (
        bank_key
        and question_id.startswith(StudyConfig.LEGACY_ID_PREFIX)
        and not question_id.startswith(f"{bank_key}-")
    ):
        return f"{bank_key}-{question_id}"
    return question_id


class PerformanceStore:
    """
    Mapping of question id -> PerformanceRecord for one question bank.

    The host owns exactly one store per active bank; switching banks
    means loading a different store, never merging two.

    `loaded` is False when the saved copy could not be read or decoded.
    Such a store does not reflect what storage holds and must not be
    written back as-is.
    """

    def __init__(
        self,
        bank_key: str | None = None,
        records: Iterable[PerformanceRecord] = (),
        loaded: bool = True,
    ) -> None:
        self.bank_key = bank_key
        self.loaded = loaded
        self._records: dict[str, PerformanceRecord] = {}
        for record in records:
            self.put(record)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def get(self, question_id: str) -> PerformanceRecord | None:
        return self._records.get(question_id)

    def get_or_initial(self, question_id: str) -> PerformanceRecord:
        record = self._records.get(question_id)
        if record is None:
            return create_initial_record(question_id)
        return record

    def put(self, record: PerformanceRecord) -> None:
        self._records[record.question_id] = record

    def items(self) -> list[tuple[str, PerformanceRecord]]:
        return list(self._records.items())

    def records(self) -> list[PerformanceRecord]:
        return list(self._records.values())

    def ensure_records(self, questions: Iterable[Question]) -> int:
        """Create zeroed records for questions not yet tracked. Returns how many."""
        created = 0
        for question in questions:
            if question.id not in self._records:
                self._records[question.id] = create_initial_record(question.id)
                created += 1
        return created

    def clear(self) -> None:
        self._records.clear()


def create_initial_record(question_id: str) -> PerformanceRecord:
    return PerformanceRecord(question_id=question_id)
