"""Input checks shared by the document write use cases"""

from typing import Sequence
from src.domain.currency import CurrencyFormatter
from src.domain.document import DocumentKind, LINE_ITEMS_REQUIRED
from src.domain.errors import ValidationError
from .dtos import LineItemInputDTO


def validate_content(
    kind: DocumentKind,
    currency: str,
    line_items: Sequence[LineItemInputDTO],
    formatter: CurrencyFormatter,
) -> None:
    """
    Raises:
        ValidationError: unsupported currency, or no line items on a
                         kind that requires them
    """
    if not formatter.is_supported(currency):
        raise ValidationError(
            "currency",
            f"Unsupported currency: {currency}. "
            f"Supported: {', '.join(formatter.supported_currencies)}",
        )

    kind = DocumentKind(kind)
    if kind in LINE_ITEMS_REQUIRED and not line_items:
        raise ValidationError("line_items", f"At least one line item is required for {kind.value}s")

    for index, item in enumerate(line_items):
        if not item.description or not item.description.strip():
            raise ValidationError(
                f"line_items[{index}].description", "Line item description is required"
            )
