"""
Client mapper for converting between domain entities and database models.
"""

from consultdesk.domain.models.client import Client
from consultdesk.domain.models.value_objects import BillingContact
from consultdesk.infrastructure.db.models import ClientModel


class ClientMapper:
    """Maps between Client domain entity and ClientModel database model."""

    def domain_to_model(self, client: Client) -> ClientModel:
        model = ClientModel(id=client.id, created_at=client.created_at)
        self.update_model(model, client)
        return model

    def update_model(self, model: ClientModel, client: Client) -> None:
        """Copy mutable client state onto an existing row."""
        contact = client.billing_contact
        model.owner_id = client.owner_id
        model.name = client.name
        model.contact_name = contact.name
        model.email = contact.email
        model.address = contact.address
        model.city = contact.city
        model.state = contact.state
        model.postal_code = contact.postal_code
        model.country = contact.country
        model.updated_at = client.updated_at
        model.version = client.version

    def model_to_domain(self, model: ClientModel) -> Client:
        """Convert ClientModel to Client domain entity."""
        return Client(
            id=model.id,
            owner_id=model.owner_id,
            name=model.name,
            billing_contact=BillingContact(
                name=model.contact_name,
                email=model.email,
                address=model.address,
                city=model.city,
                state=model.state,
                postal_code=model.postal_code,
                country=model.country,
            ),
            created_at=model.created_at,
            updated_at=model.updated_at or model.created_at,
            version=model.version or 1,
        )
