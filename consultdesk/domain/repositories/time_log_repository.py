"""Time log repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.models.value_objects import DateRange


class TimeLogRepository(ABC):
    """Repository interface for TimeLog entities."""

    @abstractmethod
    def save(self, time_log: TimeLog) -> TimeLog:
        pass

    @abstractmethod
    def get_by_id(self, time_log_id: int, owner_id: str) -> Optional[TimeLog]:
        pass

    @abstractmethod
    def get_by_owner(
        self,
        owner_id: str,
        engagement_id: Optional[int] = None,
        client_id: Optional[int] = None,
        period: Optional[DateRange] = None
    ) -> List[TimeLog]:
        """Time logs ordered by date, then id."""
        pass

    @abstractmethod
    def get_by_engagement(
        self,
        engagement_id: int,
        owner_id: str,
        period: Optional[DateRange] = None
    ) -> List[TimeLog]:
        pass

    @abstractmethod
    def delete(self, time_log_id: int, owner_id: str) -> bool:
        pass
