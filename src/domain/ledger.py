"""Line Item Ledger

Pure computation of line amounts, subtotal, tax and total for a
document. Safe to call on every edit and on every persistence write:
identical inputs always produce identical Decimals.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Sequence, Tuple
from src.domain.currency import CurrencyFormatter, Number, to_decimal
from src.domain.errors import ValidationError

MAX_TAX_RATE = Decimal("100")

# Inputs are limited to what their columns store exactly: quantity and
# unit_rate are Numeric(18, 6), tax_rate is Numeric(7, 4), amounts and
# totals are Numeric(18, 4)
LINE_VALUE_PLACES = 6
MAX_LINE_VALUE = Decimal("1E12")
TAX_RATE_PLACES = 4
MAX_AMOUNT = Decimal("1E14")


@dataclass(frozen=True)
class LedgerTotals:
    """Derived monetary fields of a document"""

    line_amounts: Tuple[Decimal, ...]
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def _read(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _non_negative_finite(value: Any, field: str) -> Decimal:
    if value is None:
        raise ValidationError(field, f"{field} is required")
    number = to_decimal(value, field)
    if not number.is_finite():
        raise ValidationError(field, f"{field} must be a finite number")
    if number < 0:
        raise ValidationError(field, f"{field} must not be negative")
    return number


def _stored_exactly(number: Decimal, field: str, places: int, maximum: Decimal) -> Decimal:
    if number >= maximum:
        raise ValidationError(field, f"{field} must be less than {maximum:f}")
    if number != number.quantize(Decimal(1).scaleb(-places)):
        raise ValidationError(field, f"{field} must have at most {places} decimal places")
    return number


class LineItemLedger:
    """
    Computes document totals from line items and a tax rate

    Rounding happens once per derived field, half-to-even at the
    currency's minor-unit precision:
    - amount     = round(quantity * unit_rate)
    - subtotal   = sum(amount)            (already exact)
    - tax_amount = round(subtotal * tax_rate / 100)
    - total      = subtotal + tax_amount  (already exact)
    """

    def __init__(self, formatter: CurrencyFormatter):
        self.formatter = formatter

    def compute_totals(
        self,
        line_items: Sequence[Any],
        tax_rate: Optional[Number],
        currency: str,
    ) -> LedgerTotals:
        """
        Compute derived totals

        Args:
            line_items: items exposing ``quantity`` and ``unit_rate``
                        (attributes or mapping keys)
            tax_rate: percentage in [0, 100]; None means no tax
            currency: ISO currency code of the document

        Returns:
            LedgerTotals

        Raises:
            ValidationError: naming the offending field
        """
        # Fail on an unsupported currency even when there are no lines
        self.formatter.minor_units(currency)

        rate = self._validate_tax_rate(tax_rate)

        amounts = []
        for index, item in enumerate(line_items):
            quantity = self._line_value(item, "quantity", index)
            unit_rate = self._line_value(item, "unit_rate", index)
            amount = self.formatter.round(quantity * unit_rate, currency)
            if amount >= MAX_AMOUNT:
                raise ValidationError(
                    f"line_items[{index}]", f"Line amount must be less than {MAX_AMOUNT:f}"
                )
            amounts.append(amount)

        subtotal = self.formatter.round(sum(amounts, Decimal("0")), currency)
        tax_amount = self.formatter.round(subtotal * rate / Decimal("100"), currency)
        total = subtotal + tax_amount
        if total >= MAX_AMOUNT:
            raise ValidationError("line_items", f"Document total must be less than {MAX_AMOUNT:f}")

        return LedgerTotals(
            line_amounts=tuple(amounts),
            subtotal=subtotal,
            tax_amount=tax_amount,
            total=total,
        )

    def _validate_tax_rate(self, tax_rate: Optional[Number]) -> Decimal:
        if tax_rate is None:
            return Decimal("0")
        rate = _non_negative_finite(tax_rate, "tax_rate")
        if rate > MAX_TAX_RATE:
            raise ValidationError("tax_rate", "tax_rate must be between 0 and 100")
        if rate != rate.quantize(Decimal(1).scaleb(-TAX_RATE_PLACES)):
            raise ValidationError(
                "tax_rate", f"tax_rate must have at most {TAX_RATE_PLACES} decimal places"
            )
        return rate

    def _line_value(self, item: Any, name: str, index: int) -> Decimal:
        field = f"line_items[{index}].{name}"
        number = _non_negative_finite(_read(item, name), field)
        return _stored_exactly(number, field, LINE_VALUE_PLACES, MAX_LINE_VALUE)
