"""
Invoice repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc

from consultdesk.domain.models.invoice import Invoice, InvoiceStatus
from consultdesk.domain.models.value_objects import DateRange
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository as InvoiceRepositoryInterface
from consultdesk.domain.models.base import EntityNotFoundError, DuplicateEntityError
from consultdesk.infrastructure.db.models import InvoiceModel
from consultdesk.infrastructure.mappers.invoice_mapper import InvoiceMapper


class SQLAlchemyInvoiceRepository(InvoiceRepositoryInterface):
    """SQLAlchemy implementation of invoice repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = InvoiceMapper()

    def save(self, invoice: Invoice) -> Invoice:
        """Save an invoice entity."""
        if invoice.is_new:
            # Check for duplicate invoice number within owner
            existing = self.session.query(InvoiceModel).filter_by(
                owner_id=invoice.owner_id,
                invoice_number=invoice.invoice_number
            ).first()
            if existing:
                raise DuplicateEntityError("Invoice", "invoice_number", invoice.invoice_number)

            model = self.mapper.domain_to_model(invoice)
            self.session.add(model)
        else:
            model = self._query().filter_by(id=invoice.id, owner_id=invoice.owner_id).first()
            if not model:
                raise EntityNotFoundError("Invoice", invoice.id)
            self.mapper.update_model(model, invoice)

        self.session.flush()
        if invoice.is_new:
            invoice.id = model.id
        return invoice

    def _query(self):
        return self.session.query(InvoiceModel).options(selectinload(InvoiceModel.line_items))

    def get_by_id(self, invoice_id: int, owner_id: str) -> Optional[Invoice]:
        """Get invoice by ID."""
        model = self._query().filter_by(id=invoice_id, owner_id=owner_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_owner(
        self,
        owner_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
        issued: Optional[DateRange] = None,
        engagement_id: Optional[int] = None
    ) -> List[Invoice]:
        query = self._query().filter(InvoiceModel.owner_id == owner_id)

        if status is not None:
            query = query.filter(InvoiceModel.status == InvoiceStatus.parse(status).value)
        if client_id is not None:
            query = query.filter(InvoiceModel.client_id == client_id)
        if engagement_id is not None:
            query = query.filter(InvoiceModel.engagement_id == engagement_id)
        if issued is not None and not issued.is_unbounded:
            query = query.filter(
                InvoiceModel.issue_date >= issued.start,
                InvoiceModel.issue_date <= issued.end
            )

        models = query.order_by(desc(InvoiceModel.issue_date), desc(InvoiceModel.id)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def get_invoice_numbers(self, owner_id: str) -> List[str]:
        rows = self.session.query(InvoiceModel.invoice_number).filter_by(owner_id=owner_id).all()
        return [row[0] for row in rows]

    def delete(self, invoice_id: int, owner_id: str) -> bool:
        """Delete invoice and its line items; time logs are untouched."""
        model = self.session.query(InvoiceModel).filter_by(id=invoice_id, owner_id=owner_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
