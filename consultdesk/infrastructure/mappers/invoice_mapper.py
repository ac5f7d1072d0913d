"""
Invoice mapper for converting between domain entities and database models.
"""

from decimal import Decimal
from typing import List

from consultdesk.domain.models.invoice import Invoice, InvoiceLineItem, InvoiceStatus
from consultdesk.domain.models.value_objects import BillingContact, Currency
from consultdesk.infrastructure.db.models import InvoiceModel, InvoiceLineItemModel


class InvoiceMapper:
    """Maps between Invoice domain entity and InvoiceModel database model."""

    def domain_to_model(self, invoice: Invoice) -> InvoiceModel:
        """Convert a new Invoice, line items included, to InvoiceModel."""
        model = InvoiceModel(
            id=invoice.id,
            owner_id=invoice.owner_id,
            client_id=invoice.client_id,
            engagement_id=invoice.engagement_id,
            invoice_number=invoice.invoice_number,
            currency=invoice.currency.value,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            net_terms=invoice.net_terms,
            period_start=invoice.period_start,
            period_end=invoice.period_end,
            client_name=invoice.client_name,
            project_name=invoice.project_name,
            created_at=invoice.created_at,
        )
        self._write_billing_contact(model, invoice.billing_contact)
        model.line_items = self._line_items_to_models(invoice.line_items)
        self.update_model(model, invoice)
        return model

    def update_model(self, model: InvoiceModel, invoice: Invoice) -> None:
        """
        Copy the mutable invoice state onto an existing row. Cached totals are
        always recomputed from the line items.
        """
        model.status = invoice.status.value
        model.notes = invoice.notes
        model.total_amount = invoice.total_amount
        model.total_hours = invoice.total_hours
        model.last_status_change_at = invoice.last_status_change_at
        model.updated_at = invoice.updated_at
        model.version = invoice.version

    def model_to_domain(self, model: InvoiceModel) -> Invoice:
        """Convert InvoiceModel to Invoice domain entity."""
        return Invoice(
            id=model.id,
            owner_id=model.owner_id,
            client_id=model.client_id,
            engagement_id=model.engagement_id,
            invoice_number=model.invoice_number,
            issue_date=model.issue_date,
            due_date=model.due_date,
            net_terms=model.net_terms or 30,
            period_start=model.period_start,
            period_end=model.period_end,
            status=InvoiceStatus.parse(model.status),
            notes=model.notes,
            line_items=tuple(self._line_item_model_to_domain(item) for item in model.line_items),
            currency=Currency(model.currency or "USD"),
            client_name=model.client_name,
            project_name=model.project_name,
            billing_contact=BillingContact(
                name=model.billing_contact_name,
                email=model.billing_email,
                address=model.billing_address,
                city=model.billing_city,
                state=model.billing_state,
                postal_code=model.billing_postal_code,
                country=model.billing_country,
            ),
            last_status_change_at=model.last_status_change_at,
            created_at=model.created_at,
            updated_at=model.updated_at or model.created_at,
            version=model.version or 1,
        )

    def _write_billing_contact(self, model: InvoiceModel, contact: BillingContact) -> None:
        model.billing_contact_name = contact.name
        model.billing_email = contact.email
        model.billing_address = contact.address
        model.billing_city = contact.city
        model.billing_state = contact.state
        model.billing_postal_code = contact.postal_code
        model.billing_country = contact.country

    def _line_items_to_models(self, line_items) -> List[InvoiceLineItemModel]:
        return [
            InvoiceLineItemModel(
                line_id=item.line_id,
                time_log_id=item.time_log_id,
                date=item.date,
                hours=item.hours,
                description=item.description,
                rate=item.rate,
                amount=item.amount,
                position=position,
            )
            for position, item in enumerate(line_items)
        ]

    def _line_item_model_to_domain(self, model: InvoiceLineItemModel) -> InvoiceLineItem:
        return InvoiceLineItem(
            line_id=model.line_id,
            time_log_id=model.time_log_id,
            date=model.date,
            hours=Decimal(model.hours),
            description=model.description,
            rate=Decimal(model.rate),
            amount=Decimal(model.amount),
        )
