"""Client repository interface.
Defines the contract for client data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.client import Client


class ClientRepository(ABC):
    """Repository interface for the Client aggregate."""

    @abstractmethod
    def save(self, client: Client) -> Client:
        """
        Save a client entity.
        Raises DuplicateEntityError when the owner already has a client with this name.
        """
        pass

    @abstractmethod
    def get_by_id(self, client_id: int, owner_id: str) -> Optional[Client]:
        pass

    @abstractmethod
    def get_by_owner(self, owner_id: str) -> List[Client]:
        """All clients of an owner ordered by name."""
        pass

    @abstractmethod
    def delete(self, client_id: int, owner_id: str) -> bool:
        """Delete a client. Returns False when it does not exist."""
        pass
