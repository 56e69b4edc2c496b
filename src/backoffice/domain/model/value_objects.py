"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from backoffice.domain.exceptions import ValidationError

_INTEGER_RE = re.compile(r"^\s*-?\d+\s*$")


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors in prices.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    @property
    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount).strip()), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A non-negative integer quantity of stock.

    Zero is a legitimate value (sold out); negative values are rejected,
    never clamped.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 0:
            raise ValidationError(f"Quantity cannot be negative, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def parse(raw: object, field_name: str = "quantity") -> Quantity:
        """Parse caller input into a Quantity.

        Accepts an ``int`` or a base-10 integer string.  Floats, booleans and
        anything non-numeric are rejected rather than truncated.
        """
        if isinstance(raw, bool):
            raise ValidationError(f"Invalid {field_name} value: {raw!r}")
        if isinstance(raw, int):
            value = raw
        elif isinstance(raw, str) and _INTEGER_RE.match(raw):
            value = int(raw)
        else:
            raise ValidationError(f"Invalid {field_name} value: {raw!r}")
        if value < 0:
            raise ValidationError(f"{field_name.capitalize()} cannot be negative, got {value}")
        return Quantity(value)
