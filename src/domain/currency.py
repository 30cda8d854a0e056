"""Currency Formatting and Rounding

Minor-unit aware rounding (ROUND_HALF_EVEN) and display formatting for
the currencies a document may be denominated in.
"""

from decimal import Decimal, ROUND_HALF_EVEN, InvalidOperation
from typing import Mapping, Union
from src.domain.errors import ValidationError

Number = Union[Decimal, int, float, str]

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "AUD": "A$",
    "CAD": "CA$",
    "SGD": "S$",
    "JPY": "¥",
    "KRW": "₩",
}

# Currencies displayed with lakh/crore digit grouping
INDIAN_GROUPING = {"INR"}


def to_decimal(value: Number, field: str = "amount") -> Decimal:
    """Convert a number to Decimal without binary float artifacts"""
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be a number")
    if isinstance(value, Decimal):
        return value
    try:
        if isinstance(value, float):
            return Decimal(repr(value))
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(field, f"{field} must be a number")


class CurrencyFormatter:
    """
    Rounds and formats monetary amounts per currency

    Args:
        minor_units: currency code -> number of decimal places
                     (2 for INR/USD/EUR, 0 for currencies without subunits)
    """

    def __init__(self, minor_units: Mapping[str, int]):
        self._minor_units = {code.upper(): int(units) for code, units in minor_units.items()}

    @property
    def supported_currencies(self) -> list[str]:
        return sorted(self._minor_units)

    def is_supported(self, currency_code: str) -> bool:
        return bool(currency_code) and currency_code.upper() in self._minor_units

    def minor_units(self, currency_code: str) -> int:
        try:
            return self._minor_units[currency_code.upper()]
        except (KeyError, AttributeError):
            raise ValidationError("currency", f"Unsupported currency: {currency_code}")

    def quantum(self, currency_code: str) -> Decimal:
        return Decimal(1).scaleb(-self.minor_units(currency_code))

    def round(self, amount: Number, currency_code: str) -> Decimal:
        """Round half-to-even to the currency's minor-unit precision"""
        quantum = self.quantum(currency_code)
        return to_decimal(amount).quantize(quantum, rounding=ROUND_HALF_EVEN)

    def format(self, amount: Number, currency_code: str) -> str:
        """
        Format an amount for display, e.g. ``₹1,23,456.50`` or ``$1,234.00``
        """
        code = currency_code.upper()
        units = self.minor_units(code)
        rounded = self.round(amount, code)

        sign = "-" if rounded < 0 else ""
        text = f"{abs(rounded):.{units}f}"
        integer_part, _, fraction = text.partition(".")
        grouped = _group_digits(integer_part, indian=code in INDIAN_GROUPING)

        symbol = CURRENCY_SYMBOLS.get(code)
        prefix = symbol if symbol else f"{code} "
        body = f"{grouped}.{fraction}" if fraction else grouped
        return f"{sign}{prefix}{body}"


def _group_digits(digits: str, indian: bool = False) -> str:
    if len(digits) <= 3:
        return digits
    if not indian:
        return f"{int(digits):,}"

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])
