"""
Client domain model.
Represents a consulting client and its billing contact.
"""

from dataclasses import dataclass, field

from consultdesk.domain.models.base import AggregateRoot, ValidationError
from consultdesk.domain.models.value_objects import BillingContact


@dataclass(eq=False)
class Client(AggregateRoot):
    """
    Client aggregate root.
    Owned by a single tenant; engagements reference it by id.
    """

    owner_id: str
    name: str
    billing_contact: BillingContact = field(default_factory=BillingContact)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate client state."""
        if not self.owner_id:
            raise ValidationError("Owner is required", "owner_id")

        if not self.name or not self.name.strip():
            raise ValidationError("Client name is required", "name")

        if len(self.name) > 255:
            raise ValidationError("Client name too long (max 255 characters)", "name")

    def rename(self, name: str) -> None:
        self.name = name
        self.validate()
        self.mark_as_updated()

    def update_billing_contact(self, contact: BillingContact) -> None:
        self.billing_contact = contact
        self.mark_as_updated()
