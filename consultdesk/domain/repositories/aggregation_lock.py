"""Aggregation lock interface.
Serializes invoice generation per (engagement, period) key.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from typing import Iterator


class AggregationLock(ABC):
    """
    At most one in-flight aggregation per (engagement_id, period_start,
    period_end). Acquiring a held key raises ConcurrentAggregationConflict.
    """

    @abstractmethod
    def acquire(self, engagement_id: int, period_start: date, period_end: date) -> None:
        pass

    @abstractmethod
    def release(self, engagement_id: int, period_start: date, period_end: date) -> None:
        pass

    @contextmanager
    def hold(self, engagement_id: int, period_start: date, period_end: date) -> Iterator[None]:
        self.acquire(engagement_id, period_start, period_end)
        try:
            yield
        finally:
            self.release(engagement_id, period_start, period_end)
