"""
Client management router.
Handles CRUD operations for client resources.
"""

from typing import List
from fastapi import APIRouter, Response, status

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import ClientRepositoryDep, EngagementRepositoryDep
from consultdesk.infrastructure.web.middleware.error_handler import raise_for_result
from consultdesk.application.use_cases.client_use_cases import (
    CreateClientUseCase,
    UpdateClientUseCase,
    UpdateClientCommand,
    GetClientByIdUseCase,
    ListClientsUseCase,
    DeleteClientUseCase
)
from consultdesk.application.dto.client_dto import (
    CreateClientRequestDTO,
    UpdateClientRequestDTO,
    ClientResponseDTO
)


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ClientResponseDTO)
async def create_client(
    request: CreateClientRequestDTO,
    user_id: CurrentUserId,
    repository: ClientRepositoryDep
):
    """
    Create a new client.

    - **name**: Client name, unique per user
    - **billing_contact**: Contact and address copied onto invoices
    """
    use_case = CreateClientUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(request))


@router.get("", response_model=List[ClientResponseDTO])
async def list_clients(
    user_id: CurrentUserId,
    repository: ClientRepositoryDep
):
    """List the current user's clients ordered by name."""
    use_case = ListClientsUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(None))


@router.get("/{client_id}", response_model=ClientResponseDTO)
async def get_client(
    client_id: int,
    user_id: CurrentUserId,
    repository: ClientRepositoryDep
):
    """Get a specific client by ID."""
    use_case = GetClientByIdUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(client_id))


@router.put("/{client_id}", response_model=ClientResponseDTO)
async def update_client(
    client_id: int,
    request: UpdateClientRequestDTO,
    user_id: CurrentUserId,
    repository: ClientRepositoryDep
):
    """
    Update a client. Invoices already issued keep the billing details they
    were generated with.
    """
    use_case = UpdateClientUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(UpdateClientCommand(client_id, request)))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    user_id: CurrentUserId,
    repository: ClientRepositoryDep,
    engagement_repository: EngagementRepositoryDep
):
    """
    Delete a client. Refused while the client still has engagements.
    """
    use_case = DeleteClientUseCase(repository, engagement_repository).set_current_user(user_id)
    raise_for_result(await use_case.execute(client_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
