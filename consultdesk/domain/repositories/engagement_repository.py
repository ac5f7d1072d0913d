"""Engagement repository interface.
Engagements are stored without a status; status is derived on read.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.engagement import Engagement
from consultdesk.domain.models.value_objects import DateRange


class EngagementRepository(ABC):
    """Repository interface for the Engagement aggregate."""

    @abstractmethod
    def save(self, engagement: Engagement) -> Engagement:
        pass

    @abstractmethod
    def get_by_id(self, engagement_id: int, owner_id: str) -> Optional[Engagement]:
        pass

    @abstractmethod
    def get_by_owner(
        self,
        owner_id: str,
        client_id: Optional[int] = None,
        overlapping: Optional[DateRange] = None
    ) -> List[Engagement]:
        """
        Engagements of an owner, optionally restricted to one client and to
        contracts whose dates overlap a range.
        """
        pass

    @abstractmethod
    def get_by_client(self, client_id: int, owner_id: str) -> List[Engagement]:
        pass

    @abstractmethod
    def delete(self, engagement_id: int, owner_id: str) -> bool:
        pass
