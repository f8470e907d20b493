from collections.abc import Iterable, Iterator

from certprep.study.domain.models import PerformanceRecord, Question


class SessionQueue:
    """
    The live, growable question order of one study session.

    Positions refer to this queue; a question may occupy several
    positions at once after repeated misses.
    """

    def __init__(self, questions: Iterable[Question] = ()) -> None:
        self._items: list[Question] = list(questions)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Question:
        return self._items[index]

    def __iter__(self) -> Iterator[Question]:
        return iter(self._items)

    def get(self, index: int) -> Question | None:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def ids(self) -> list[str]:
        return [q.id for q in self._items]

    def reinsert(self, question: Question, offset: int) -> int:
        """Insert a duplicate reference, clamped into [0, len]. Returns the index used."""
        index = min(max(offset, 0), len(self._items))
        self._items.insert(index, question)
        return index


def schedule_reinsertion(
    queue: SessionQueue, question: Question, record: PerformanceRecord
) -> int | None:
    """
    Re-queue a just-missed question at the offset stored on its record.
    Returns the insertion index, or None when nothing was scheduled.
    """
    if record.scheduled_reinsertion_offset is None:
        return None
    return queue.reinsert(question, record.scheduled_reinsertion_offset)
