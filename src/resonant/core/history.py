"""Bounded rolling history of feature records."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Deque, Tuple

from .models import FeatureRecord

DEFAULT_HISTORY_CAPACITY = 10


class FeatureHistory:
    """
    Fixed-capacity FIFO of :class:`FeatureRecord`.

    Appending beyond ``capacity`` evicts the oldest record. There is no
    other way to mutate the history.
    """

    __slots__ = ("_records",)

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._records: Deque[FeatureRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        maxlen = self._records.maxlen
        assert maxlen is not None
        return maxlen

    def append(self, record: FeatureRecord) -> None:
        self._records.append(record)

    def recent(self, count: int) -> Tuple[FeatureRecord, ...]:
        """Return up to ``count`` most recent records, oldest first."""
        if count <= 0:
            return ()
        return tuple(self._records)[-count:]

    def snapshot(self) -> Tuple[FeatureRecord, ...]:
        return tuple(self._records)

    @property
    def latest(self) -> FeatureRecord | None:
        return self._records[-1] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> FeatureRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[FeatureRecord]:
        return iter(tuple(self._records))
