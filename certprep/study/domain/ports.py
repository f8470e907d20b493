import random
from abc import ABC, abstractmethod
from collections.abc import MutableSequence
from datetime import datetime, timezone
from typing import Any, Protocol


class IKeyValueStorage(ABC):
    """Text storage keyed by string, e.g. one serialized store per bank."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class Clock(Protocol):
    def now(self) -> datetime: ...


class RandomSource(Protocol):
    """
    Subset of `random.Random` used by the scheduler.
    Tests pass a seeded `random.Random` or a scripted fake.
    """

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...

    def shuffle(self, x: MutableSequence[Any]) -> None: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def default_random_source() -> RandomSource:
    return random.Random()
