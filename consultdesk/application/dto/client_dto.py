"""
Client DTOs for the application layer.
"""

from typing import Optional
from decimal import Decimal
from pydantic import Field

from consultdesk.domain.models.client import Client
from consultdesk.domain.models.value_objects import BillingContact
from consultdesk.domain.services.reporting_service import ClientRollup
from .base_dto import BaseDTO, CreateRequestDTO, UpdateRequestDTO, ResponseDTO, MoneyDTO


class BillingContactDTO(BaseDTO):
    """Billing contact and postal address."""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100)

    def to_domain(self) -> BillingContact:
        return BillingContact(**self.model_dump())

    @classmethod
    def from_domain(cls, contact: BillingContact) -> "BillingContactDTO":
        return cls(**contact.to_dict())


class CreateClientRequestDTO(CreateRequestDTO):
    """DTO for creating a new client."""

    name: str = Field(min_length=1, max_length=255, description="Client name")
    billing_contact: Optional[BillingContactDTO] = Field(default=None, description="Billing contact")


class UpdateClientRequestDTO(UpdateRequestDTO):
    """DTO for updating a client."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    billing_contact: Optional[BillingContactDTO] = None


class ClientResponseDTO(ResponseDTO):
    """DTO for client responses."""

    name: str
    billing_contact: BillingContactDTO

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponseDTO":
        return cls(
            id=client.id,
            name=client.name,
            billing_contact=BillingContactDTO.from_domain(client.billing_contact),
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class ClientRollupResponseDTO(BaseDTO):
    """Per-client totals for the dashboard."""

    client_id: int
    client_name: Optional[str] = None
    engagement_count: int
    active_engagement_count: int
    total_hours: Decimal
    total_invoiced: MoneyDTO
    outstanding_total: MoneyDTO

    @classmethod
    def from_domain(cls, rollup: ClientRollup) -> "ClientRollupResponseDTO":
        return cls(
            client_id=rollup.client_id,
            client_name=rollup.client_name,
            engagement_count=rollup.engagement_count,
            active_engagement_count=rollup.active_engagement_count,
            total_hours=rollup.total_hours,
            total_invoiced=MoneyDTO.from_domain(rollup.total_invoiced),
            outstanding_total=MoneyDTO.from_domain(rollup.outstanding_total),
        )
