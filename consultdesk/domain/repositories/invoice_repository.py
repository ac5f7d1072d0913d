"""Invoice repository interface.
Defines the contract for invoice data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from consultdesk.domain.models.invoice import Invoice, InvoiceStatus
from consultdesk.domain.models.value_objects import DateRange


class InvoiceRepository(ABC):
    """
    Repository interface for the Invoice aggregate.
    Implementations persist totals as a cache that is always rewritten
    from the line items.
    """

    @abstractmethod
    def save(self, invoice: Invoice) -> Invoice:
        """
        Save an invoice entity.
        Line items are written only when the invoice is first created.
        """
        pass

    @abstractmethod
    def get_by_id(self, invoice_id: int, owner_id: str) -> Optional[Invoice]:
        pass

    @abstractmethod
    def get_by_owner(
        self,
        owner_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
        issued: Optional[DateRange] = None,
        engagement_id: Optional[int] = None
    ) -> List[Invoice]:
        """Invoices ordered by issue date, newest first."""
        pass

    @abstractmethod
    def get_invoice_numbers(self, owner_id: str) -> List[str]:
        """Every invoice number issued to this owner, for numbering."""
        pass

    @abstractmethod
    def delete(self, invoice_id: int, owner_id: str) -> bool:
        """Delete an invoice and its line items. Time logs are not touched."""
        pass
