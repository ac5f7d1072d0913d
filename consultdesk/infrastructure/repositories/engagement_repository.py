"""
Engagement repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy import and_
from sqlalchemy.orm import Session

from consultdesk.domain.models.engagement import Engagement
from consultdesk.domain.models.value_objects import DateRange
from consultdesk.domain.repositories.engagement_repository import (
    EngagementRepository as EngagementRepositoryInterface
)
from consultdesk.domain.models.base import EntityNotFoundError
from consultdesk.infrastructure.db.models import EngagementModel
from consultdesk.infrastructure.mappers.engagement_mapper import EngagementMapper


class SQLAlchemyEngagementRepository(EngagementRepositoryInterface):
    """SQLAlchemy implementation of engagement repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = EngagementMapper()

    def save(self, engagement: Engagement) -> Engagement:
        if engagement.is_new:
            model = self.mapper.domain_to_model(engagement)
            self.session.add(model)
        else:
            model = self._get_model(engagement.id, engagement.owner_id)
            if not model:
                raise EntityNotFoundError("Engagement", engagement.id)
            self.mapper.update_model(model, engagement)

        self.session.flush()
        if engagement.is_new:
            engagement.id = model.id
        return engagement

    def _get_model(self, engagement_id: int, owner_id: str) -> Optional[EngagementModel]:
        return self.session.query(EngagementModel).filter_by(
            id=engagement_id,
            owner_id=owner_id
        ).first()

    def get_by_id(self, engagement_id: int, owner_id: str) -> Optional[Engagement]:
        model = self._get_model(engagement_id, owner_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_owner(
        self,
        owner_id: str,
        client_id: Optional[int] = None,
        overlapping: Optional[DateRange] = None
    ) -> List[Engagement]:
        query = self.session.query(EngagementModel).filter(EngagementModel.owner_id == owner_id)

        if client_id is not None:
            query = query.filter(EngagementModel.client_id == client_id)

        if overlapping is not None and not overlapping.is_unbounded:
            query = query.filter(
                and_(
                    EngagementModel.start_date <= overlapping.end,
                    EngagementModel.end_date >= overlapping.start
                )
            )

        models = query.order_by(EngagementModel.start_date.desc(), EngagementModel.id).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def get_by_client(self, client_id: int, owner_id: str) -> List[Engagement]:
        return self.get_by_owner(owner_id, client_id=client_id)

    def delete(self, engagement_id: int, owner_id: str) -> bool:
        model = self._get_model(engagement_id, owner_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
