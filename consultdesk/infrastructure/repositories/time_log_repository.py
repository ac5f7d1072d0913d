"""
Time log repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session

from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.models.value_objects import DateRange
from consultdesk.domain.repositories.time_log_repository import (
    TimeLogRepository as TimeLogRepositoryInterface
)
from consultdesk.domain.models.base import EntityNotFoundError
from consultdesk.infrastructure.db.models import EngagementModel, TimeLogModel
from consultdesk.infrastructure.mappers.time_log_mapper import TimeLogMapper


class SQLAlchemyTimeLogRepository(TimeLogRepositoryInterface):
    """SQLAlchemy implementation of time log repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimeLogMapper()

    def save(self, time_log: TimeLog) -> TimeLog:
        if time_log.is_new:
            model = self.mapper.domain_to_model(time_log)
            self.session.add(model)
        else:
            model = self._get_model(time_log.id, time_log.owner_id)
            if not model:
                raise EntityNotFoundError("TimeLog", time_log.id)
            self.mapper.update_model(model, time_log)

        self.session.flush()
        if time_log.is_new:
            time_log.id = model.id
        return time_log

    def _get_model(self, time_log_id: int, owner_id: str) -> Optional[TimeLogModel]:
        return self.session.query(TimeLogModel).filter_by(id=time_log_id, owner_id=owner_id).first()

    def get_by_id(self, time_log_id: int, owner_id: str) -> Optional[TimeLog]:
        model = self._get_model(time_log_id, owner_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_owner(
        self,
        owner_id: str,
        engagement_id: Optional[int] = None,
        client_id: Optional[int] = None,
        period: Optional[DateRange] = None
    ) -> List[TimeLog]:
        query = self.session.query(TimeLogModel).filter(TimeLogModel.owner_id == owner_id)

        if engagement_id is not None:
            query = query.filter(TimeLogModel.engagement_id == engagement_id)

        if client_id is not None:
            query = query.join(EngagementModel, TimeLogModel.engagement_id == EngagementModel.id).filter(
                EngagementModel.client_id == client_id
            )

        if period is not None and not period.is_unbounded:
            query = query.filter(TimeLogModel.date >= period.start, TimeLogModel.date <= period.end)

        models = query.order_by(TimeLogModel.date, TimeLogModel.id).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def get_by_engagement(
        self,
        engagement_id: int,
        owner_id: str,
        period: Optional[DateRange] = None
    ) -> List[TimeLog]:
        return self.get_by_owner(owner_id, engagement_id=engagement_id, period=period)

    def delete(self, time_log_id: int, owner_id: str) -> bool:
        model = self._get_model(time_log_id, owner_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
