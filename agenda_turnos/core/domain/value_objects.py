"""
Base Value Object Classes

Immutable values compared field by field. Subclasses validate in ``_validate``.
"""

from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any


@dataclass(frozen=True)
class ValueObject(ABC):
    """Frozen dataclass base; ``_validate`` runs after init."""

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        pass


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object for consultation fees.

    Represents an amount with currency. The backend sends plain numbers
    (``costo``, ``monto``) which are converted with ``from_wire``.

    Example:
        ```python
        fee = Money(amount=Decimal("15000"), currency="ARS")
        str(fee)  # "ARS 15,000.00"
        ```
    """

    amount: Decimal
    currency: str = "ARS"

    def _validate(self) -> None:
        """Validate money constraints."""
        if not isinstance(self.amount, Decimal):
            # Convert to Decimal if float/int
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter ISO code")

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"

    def __repr__(self) -> str:
        return f"Money(amount={self.amount}, currency='{self.currency}')"

    @classmethod
    def from_wire(cls, value: Any, currency: str = "ARS") -> "Money | None":
        """Create Money from a backend number or numeric string.

        Returns None for missing, empty, negative or non-numeric values.
        """
        if value is None or value == "" or isinstance(value, bool):
            return None
        try:
            raw = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        if not raw.is_finite() or raw < 0:
            return None
        return cls(amount=raw.quantize(Decimal("0.01"), ROUND_HALF_UP), currency=currency)
