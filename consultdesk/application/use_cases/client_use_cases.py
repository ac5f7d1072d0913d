"""
Client use cases for the application layer.
"""

from dataclasses import dataclass
from typing import List

from consultdesk.application.use_cases.base_use_case import (
    AuthorizedUseCase, ClockedUseCase, CreateUseCase, UpdateUseCase,
    DeleteUseCase, GetByIdUseCase, QueryUseCase
)
from consultdesk.application.dto.client_dto import (
    CreateClientRequestDTO, UpdateClientRequestDTO, ClientResponseDTO
)
from consultdesk.domain.models.base import BusinessRuleViolation, EntityNotFoundError
from consultdesk.domain.models.client import Client
from consultdesk.domain.models.value_objects import BillingContact
from consultdesk.domain.repositories.client_repository import ClientRepository
from consultdesk.domain.repositories.engagement_repository import EngagementRepository
from consultdesk.domain.services.engagement_status_service import EngagementStatusResolver


@dataclass
class UpdateClientCommand:
    client_id: int
    changes: UpdateClientRequestDTO


class CreateClientUseCase(AuthorizedUseCase, CreateUseCase[CreateClientRequestDTO, ClientResponseDTO]):
    """Use case for creating a new client."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    async def _execute_command_logic(self, request: CreateClientRequestDTO) -> ClientResponseDTO:
        contact = request.billing_contact.to_domain() if request.billing_contact else BillingContact()
        client = Client(
            owner_id=self.current_user_id,
            name=request.name.strip(),
            billing_contact=contact,
        )
        saved = self.client_repository.save(client)
        return ClientResponseDTO.from_domain(saved)


class UpdateClientUseCase(AuthorizedUseCase, UpdateUseCase[UpdateClientCommand, ClientResponseDTO]):
    """Use case for renaming a client or replacing its billing contact."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    async def _execute_command_logic(self, request: UpdateClientCommand) -> ClientResponseDTO:
        client = self.client_repository.get_by_id(request.client_id, self.current_user_id)
        if not client:
            raise EntityNotFoundError("Client", request.client_id)

        changes = request.changes
        if changes.name is not None:
            client.rename(changes.name.strip())
        if changes.billing_contact is not None:
            client.update_billing_contact(changes.billing_contact.to_domain())

        client.increment_version()
        return ClientResponseDTO.from_domain(self.client_repository.save(client))


class GetClientByIdUseCase(AuthorizedUseCase, GetByIdUseCase[int, ClientResponseDTO]):
    """Use case for retrieving a client by ID."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    async def _execute_business_logic(self, request: int) -> ClientResponseDTO:
        client = self.client_repository.get_by_id(request, self.current_user_id)
        if not client:
            raise EntityNotFoundError("Client", request)
        return ClientResponseDTO.from_domain(client)


class ListClientsUseCase(AuthorizedUseCase, QueryUseCase[None, List[ClientResponseDTO]]):
    """Use case for listing the current user's clients."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    async def _execute_business_logic(self, request: None) -> List[ClientResponseDTO]:
        clients = self.client_repository.get_by_owner(self.current_user_id)
        return [ClientResponseDTO.from_domain(client) for client in clients]


class DeleteClientUseCase(AuthorizedUseCase, ClockedUseCase, DeleteUseCase[int, bool]):
    """
    Use case for deleting a client.
    Refused while any of the client's engagements is active, and while any
    engagement still references the client at all.
    """

    def __init__(
        self,
        client_repository: ClientRepository,
        engagement_repository: EngagementRepository,
        status_resolver: EngagementStatusResolver = None
    ):
        super().__init__()
        self.client_repository = client_repository
        self.engagement_repository = engagement_repository
        self.status_resolver = status_resolver or EngagementStatusResolver()

    async def _execute_command_logic(self, request: int) -> bool:
        client = self.client_repository.get_by_id(request, self.current_user_id)
        if not client:
            raise EntityNotFoundError("Client", request)

        engagements = self.engagement_repository.get_by_client(client.id, self.current_user_id)
        active = self.status_resolver.count_active(engagements, self.now())
        if active:
            raise BusinessRuleViolation(
                f"Client '{client.name}' has {active} active engagement(s) and cannot be deleted"
            )
        if engagements:
            raise BusinessRuleViolation(
                f"Client '{client.name}' still has {len(engagements)} engagement(s); delete them first"
            )

        return self.client_repository.delete(client.id, self.current_user_id)
