"""Numbering service for generating sequential invoice numbers."""

import re
from typing import Iterable, List, Optional

from consultdesk.domain.models.base import ValidationError
from consultdesk.domain.models.value_objects import InvoiceNumber


class NumberingService:
    """
    Domain service for the per-tenant invoice number sequence.
    Numbers look like INV-000001 and increase by one from the highest
    existing number with the same prefix.
    """

    reserved_prefixes = ("SYS", "ADM", "TMP", "DEL")

    def __init__(self, prefix: str = "INV"):
        self._validate_prefix(prefix)
        self.prefix = prefix.upper()

    def next_invoice_number(self, existing_numbers: Iterable[str]) -> InvoiceNumber:
        """
        Generate the next invoice number given every number already issued.
        Numbers with another prefix or an unparseable format are ignored.
        """
        current = self._highest(self._parse_all(existing_numbers))
        if current is None:
            return InvoiceNumber(self.prefix, 1)
        return current.next()

    def _parse_all(self, existing_numbers: Iterable[str]) -> List[InvoiceNumber]:
        parsed = []
        for value in existing_numbers:
            try:
                number = InvoiceNumber.from_string(value)
            except ValidationError:
                continue
            if number.prefix.upper() == self.prefix:
                parsed.append(number)
        return parsed

    def _highest(self, numbers: List[InvoiceNumber]) -> Optional[InvoiceNumber]:
        if not numbers:
            return None
        return max(numbers, key=lambda number: number.number)

    def _validate_prefix(self, prefix: str) -> None:
        if not prefix or not re.match(r'^[A-Za-z]{1,10}$', prefix):
            raise ValidationError("Invoice prefix must be 1-10 letters", "prefix")

        if prefix.upper() in self.reserved_prefixes:
            raise ValidationError(f"Prefix '{prefix}' is reserved", "prefix")
