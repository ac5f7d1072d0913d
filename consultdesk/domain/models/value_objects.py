"""
Value Objects for the domain layer.
Immutable objects that represent values and encapsulate business logic.
"""

from typing import Iterable, Optional, Union
from decimal import Decimal, ROUND_HALF_UP
from datetime import date
from dataclasses import dataclass
from enum import Enum
import re

from consultdesk.domain.models.base import InvalidRangeError, ValidationError


CENTS = Decimal("0.01")


def to_decimal(value: Union[int, float, str, Decimal]) -> Decimal:
    """Coerce a numeric input into a Decimal without float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def require_cents(value: Decimal, field: str, label: str) -> None:
    """Reject amounts and hours with more than two decimal places."""
    if value.normalize().as_tuple().exponent < -2:
        raise ValidationError(f"{label} cannot have more than two decimal places", field)


class Currency(str, Enum):
    """Supported currencies."""
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    CAD = "CAD"
    AUD = "AUD"


@dataclass(frozen=True)
class Money:
    """Value object representing money with amount and currency."""

    amount: Decimal
    currency: Currency = Currency.USD

    def __post_init__(self):
        """Validate and normalize the money object after initialization."""
        amount = to_decimal(self.amount)
        if amount < 0:
            raise ValidationError("Money amount cannot be negative", "amount")

        if not isinstance(self.currency, Currency):
            object.__setattr__(self, 'currency', Currency(self.currency))

        object.__setattr__(self, 'amount', amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def zero(cls, currency: Union[Currency, str] = Currency.USD) -> "Money":
        """Create a zero money object."""
        return cls(Decimal('0'), currency)

    @classmethod
    def total(
        cls,
        amounts: Iterable["Money"],
        currency: Union[Currency, str] = Currency.USD
    ) -> "Money":
        """Sum a collection of money values in a single currency."""
        result = cls.zero(currency)
        for amount in amounts:
            result = result.add(amount)
        return result

    def add(self, other: "Money") -> "Money":
        """Add two money objects (must have same currency)."""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def multiply(self, factor: Union[int, float, str, Decimal]) -> "Money":
        """Multiply money by a factor, rounding half-up to cents."""
        return Money(self.amount * to_decimal(factor), self.currency)

    def is_zero(self) -> bool:
        """Check if the amount is zero."""
        return self.amount == 0

    def format(self) -> str:
        """Format money for display."""
        symbols = {
            Currency.USD: "$",
            Currency.EUR: "€",
            Currency.GBP: "£",
            Currency.CAD: "C$",
            Currency.AUD: "A$",
        }
        return f"{symbols.get(self.currency, '')}{self.amount:,.2f}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "amount": str(self.amount),
            "currency": self.currency.value
        }

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Money({self.amount}, {self.currency.value})"


@dataclass(frozen=True)
class DateRange:
    """
    Closed date interval [start, end], both boundaries inclusive.
    A range with neither bound set is the unbounded "all time" range and
    matches every date.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        """Validate the range bounds."""
        if (self.start is None) != (self.end is None):
            raise ValidationError("Date range needs both a start and an end", "start")
        if self.start is not None and self.start > self.end:
            raise InvalidRangeError(self.start, self.end)

    @classmethod
    def unbounded(cls) -> "DateRange":
        """Range that applies no date filtering."""
        return cls()

    @property
    def is_unbounded(self) -> bool:
        return self.start is None

    def contains(self, value: date) -> bool:
        """Check whether a date falls inside the range (inclusive)."""
        if self.is_unbounded:
            return True
        return self.start <= value <= self.end

    @property
    def days(self) -> Optional[int]:
        """Number of calendar days covered, or None when unbounded."""
        if self.is_unbounded:
            return None
        return (self.end - self.start).days + 1

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }

    def __str__(self) -> str:
        if self.is_unbounded:
            return "all time"
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


@dataclass(frozen=True)
class InvoiceNumber:
    """Invoice number value object with format validation."""

    prefix: str
    number: int

    def __post_init__(self):
        """Validate invoice number format."""
        if self.number <= 0:
            raise ValidationError("Invoice number must be positive", "number")

        if not re.match(r'^[A-Za-z]{1,10}$', self.prefix):
            raise ValidationError("Invoice prefix must be 1-10 letters", "prefix")

    def __str__(self) -> str:
        """Format invoice number as string."""
        return f"{self.prefix}-{str(self.number).zfill(6)}"

    @classmethod
    def from_string(cls, value: str) -> "InvoiceNumber":
        """Parse invoice number from string."""
        match = re.match(r'^([A-Za-z]{1,10})-(\d+)$', value or "")
        if not match:
            raise ValidationError(f"Invalid invoice number format: {value}", "invoice_number")
        return cls(match.group(1), int(match.group(2)))

    def next(self) -> "InvoiceNumber":
        """Get the next invoice number in sequence."""
        return InvoiceNumber(self.prefix, self.number + 1)


@dataclass(frozen=True)
class BillingContact:
    """Billing contact and postal address copied onto invoices."""

    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    def __post_init__(self):
        if self.email and ('@' not in self.email or '.' not in self.email.split('@')[1]):
            raise ValidationError(f"Invalid email format: {self.email}", "email")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
        }
