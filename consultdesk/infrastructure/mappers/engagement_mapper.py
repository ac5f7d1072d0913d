"""
Engagement mapper. No status is read or written: it is derived on read.
"""

from consultdesk.domain.models.engagement import BillingMode, Engagement
from consultdesk.infrastructure.db.models import EngagementModel


class EngagementMapper:
    """Maps between Engagement domain entity and EngagementModel."""

    def domain_to_model(self, engagement: Engagement) -> EngagementModel:
        model = EngagementModel(id=engagement.id, created_at=engagement.created_at)
        self.update_model(model, engagement)
        return model

    def update_model(self, model: EngagementModel, engagement: Engagement) -> None:
        model.owner_id = engagement.owner_id
        model.client_id = engagement.client_id
        model.project_name = engagement.project_name
        model.description = engagement.description
        model.start_date = engagement.start_date
        model.end_date = engagement.end_date
        model.billing_mode = engagement.billing_mode.value
        model.hourly_rate = engagement.hourly_rate
        model.total_cost = engagement.total_cost
        model.net_terms = engagement.net_terms
        model.updated_at = engagement.updated_at
        model.version = engagement.version

    def model_to_domain(self, model: EngagementModel) -> Engagement:
        return Engagement(
            id=model.id,
            owner_id=model.owner_id,
            client_id=model.client_id,
            project_name=model.project_name,
            description=model.description,
            start_date=model.start_date,
            end_date=model.end_date,
            billing_mode=BillingMode(model.billing_mode),
            hourly_rate=model.hourly_rate,
            total_cost=model.total_cost,
            net_terms=model.net_terms or 30,
            created_at=model.created_at,
            updated_at=model.updated_at or model.created_at,
            version=model.version or 1,
        )
