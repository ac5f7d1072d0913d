"""
Client repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session

from consultdesk.domain.models.client import Client
from consultdesk.domain.repositories.client_repository import ClientRepository as ClientRepositoryInterface
from consultdesk.domain.models.base import EntityNotFoundError, DuplicateEntityError
from consultdesk.infrastructure.db.models import ClientModel
from consultdesk.infrastructure.mappers.client_mapper import ClientMapper


class SQLAlchemyClientRepository(ClientRepositoryInterface):
    """SQLAlchemy implementation of client repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ClientMapper()

    def save(self, client: Client) -> Client:
        """Save a client entity."""
        # Check for duplicate name within owner
        duplicate = self.session.query(ClientModel).filter_by(
            owner_id=client.owner_id,
            name=client.name
        )
        if client.id is not None:
            duplicate = duplicate.filter(ClientModel.id != client.id)
        if duplicate.first():
            raise DuplicateEntityError("Client", "name", client.name)

        if client.is_new:
            model = self.mapper.domain_to_model(client)
            self.session.add(model)
        else:
            model = self._get_model(client.id, client.owner_id)
            if not model:
                raise EntityNotFoundError("Client", client.id)
            self.mapper.update_model(model, client)

        self.session.flush()
        if client.is_new:
            client.id = model.id
        return client

    def _get_model(self, client_id: int, owner_id: str) -> Optional[ClientModel]:
        return self.session.query(ClientModel).filter_by(id=client_id, owner_id=owner_id).first()

    def get_by_id(self, client_id: int, owner_id: str) -> Optional[Client]:
        """Get client by ID."""
        model = self._get_model(client_id, owner_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_owner(self, owner_id: str) -> List[Client]:
        models = self.session.query(ClientModel).filter_by(
            owner_id=owner_id
        ).order_by(ClientModel.name).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete(self, client_id: int, owner_id: str) -> bool:
        model = self._get_model(client_id, owner_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
