"""QuoteTotals Use Case"""

from libs.result import Result, Return, Error
from src.domain.currency import CurrencyFormatter
from src.domain.errors import ValidationError
from src.domain.ledger import LineItemLedger
from .dtos import QuoteTotalsCommandDTO, TotalsResponseDTO


class QuoteTotals:
    """
    Use Case: Compute totals for line items without persisting anything

    Lets an editor show live totals with the same arithmetic the
    document will be stored with.
    """

    def __init__(self, formatter: CurrencyFormatter):
        self.formatter = formatter
        self.ledger = LineItemLedger(formatter)

    def execute(self, command: QuoteTotalsCommandDTO) -> Result[TotalsResponseDTO]:
        try:
            totals = self.ledger.compute_totals(command.line_items, command.tax_rate, command.currency)
        except ValidationError as e:
            return Return.err(
                Error(code=e.code, message=e.message, details=e.details)
            )

        return Return.ok(
            TotalsResponseDTO(
                currency=command.currency,
                line_amounts=list(totals.line_amounts),
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                total=totals.total,
                formatted_total=self.formatter.format(totals.total, command.currency),
            )
        )
