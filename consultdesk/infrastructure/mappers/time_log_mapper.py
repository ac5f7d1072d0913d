"""
Time log mapper for converting between domain entities and database models.
"""

from consultdesk.domain.models.time_log import TimeLog
from consultdesk.infrastructure.db.models import TimeLogModel


class TimeLogMapper:
    """Maps between TimeLog domain entity and TimeLogModel."""

    def domain_to_model(self, time_log: TimeLog) -> TimeLogModel:
        model = TimeLogModel(
            id=time_log.id,
            engagement_id=time_log.engagement_id,
            created_at=time_log.created_at,
        )
        self.update_model(model, time_log)
        return model

    def update_model(self, model: TimeLogModel, time_log: TimeLog) -> None:
        # engagement_id is immutable and only written on insert
        model.owner_id = time_log.owner_id
        model.date = time_log.date
        model.hours = time_log.hours
        model.description = time_log.description
        model.updated_at = time_log.updated_at

    def model_to_domain(self, model: TimeLogModel) -> TimeLog:
        return TimeLog(
            id=model.id,
            owner_id=model.owner_id,
            engagement_id=model.engagement_id,
            date=model.date,
            hours=model.hours,
            description=model.description,
            created_at=model.created_at,
            updated_at=model.updated_at or model.created_at,
        )
