"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Union

from catalog.domain.exceptions import ValidationError

Number = Union[int, float, str, Decimal]

SUPPORTED_CURRENCIES = ("USD", "EUR", "COP")
DEFAULT_CURRENCY = "USD"
MAX_PRICE_AMOUNT = Decimal("1000000")

_CENT = Decimal("0.01")
_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# en-US display prefixes; currencies without a symbol fall back to the ISO code
_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€"}


def _to_decimal(value: Number, what: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {what}: {value!r}", field=what)
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {what}: {value!r}", field=what) from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {what}: {value!r}", field=what)
    return result


def us_currency_formatter(price: Price) -> str:
    """Format a price the way an en-US locale would, e.g. ``$1,299.99``."""
    symbol = _CURRENCY_SYMBOLS.get(price.currency)
    if symbol is None:
        return f"{price.currency} {price.amount:,.2f}"
    return f"{symbol}{price.amount:,.2f}"


@dataclass(frozen=True)
class Price:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Every instance goes through
    ``__post_init__``, which checks the bounds and the currency and then
    rounds the amount half-up to whole cents.  Use ``Price.create()`` for
    user input and ``Price.from_primitives()`` when rehydrating stored data.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        amount = _to_decimal(self.amount, "amount")
        if amount < _ZERO:
            raise ValidationError(
                f"Price cannot be negative, got {amount}", field="amount"
            )
        if amount > MAX_PRICE_AMOUNT:
            raise ValidationError(
                f"Price cannot exceed {MAX_PRICE_AMOUNT:,}, got {amount}",
                field="amount",
            )
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValidationError(
                f"Currency {self.currency!r} is not supported. "
                f"Valid: {', '.join(SUPPORTED_CURRENCIES)}",
                field="currency",
            )
        object.__setattr__(self, "amount", amount.quantize(_CENT, rounding=ROUND_HALF_UP))

    # --- Factories ------------------------------------------------------------

    @classmethod
    def create(cls, amount: Number, currency: str | None = None) -> Price:
        """Build a new price from user-supplied values."""
        return cls(
            _to_decimal(amount, "amount"),
            DEFAULT_CURRENCY if currency is None else currency,
        )

    @classmethod
    def from_primitives(cls, amount: Number, currency: str) -> Price:
        """Rebuild a price from persisted primitives (same validation)."""
        return cls(_to_decimal(amount, "amount"), currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Price:
        return cls(_ZERO, currency)

    # --- Arithmetic -----------------------------------------------------------

    def add(self, other: Price) -> Price:
        self._assert_same_currency(other, "add")
        return Price(self.amount + other.amount, self.currency)

    def multiply(self, factor: Number) -> Price:
        factor = _to_decimal(factor, "factor")
        if factor <= _ZERO:
            raise ValidationError("Multiplication factor must be positive", field="factor")
        return Price(self.amount * factor, self.currency)

    def apply_discount(self, percentage: Number) -> Price:
        percentage = _to_decimal(percentage, "percentage")
        if percentage < _ZERO or percentage > _HUNDRED:
            raise ValidationError(
                "Discount percentage must be between 0 and 100", field="percentage"
            )
        return Price(self.amount * (1 - percentage / _HUNDRED), self.currency)

    def calculate_tax(self, rate: Number) -> Price:
        rate = _to_decimal(rate, "rate")
        if rate < _ZERO:
            raise ValidationError("Tax rate cannot be negative", field="rate")
        return Price(self.amount * (1 + rate / _HUNDRED), self.currency)

    __add__ = add

    def __mul__(self, factor: Number) -> Price:
        return self.multiply(factor)

    # --- Comparison -----------------------------------------------------------

    def equals(self, other: Price) -> bool:
        return self == other

    def is_greater_than(self, other: Price) -> bool:
        self._assert_same_currency(other, "compare")
        return self.amount > other.amount

    def is_less_than(self, other: Price) -> bool:
        self._assert_same_currency(other, "compare")
        return self.amount < other.amount

    def __lt__(self, other: Price) -> bool:
        return self.is_less_than(other)

    def __gt__(self, other: Price) -> bool:
        return self.is_greater_than(other)

    def __le__(self, other: Price) -> bool:
        return not self.is_greater_than(other)

    def __ge__(self, other: Price) -> bool:
        return not self.is_less_than(other)

    # --- Display / serialization ----------------------------------------------

    def format(self, formatter: Callable[[Price], str] | None = None) -> str:
        """Render for humans; pass ``formatter`` to use another locale."""
        return (formatter or us_currency_formatter)(self)

    def to_primitives(self) -> dict[str, str]:
        return {"amount": str(self.amount), "currency": self.currency}

    def __str__(self) -> str:
        return self.format()

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Price, verb: str) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot {verb} prices with different currencies "
                f"({self.currency} vs {other.currency})",
                field="currency",
            )
