"""ReportLab Document Renderer Implementation

Renders invoices, proposals and contracts to PDF using ReportLab.
"""

from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.document_renderer import DocumentRenderer
from src.domain.currency import CurrencyFormatter
from src.domain.document import BillableDocument, DocumentKind, DocumentLineItem, DocumentStatus
from src.domain.party import Party

HEADINGS = {
    DocumentKind.INVOICE: "INVOICE",
    DocumentKind.PROPOSAL: "PROPOSAL",
    DocumentKind.CONTRACT: "CONTRACT",
}

COLUMN_WIDTHS = [80 * mm, 25 * mm, 30 * mm, 35 * mm]


class ReportLabDocumentRenderer(DocumentRenderer):
    """
    ReportLab implementation of DocumentRenderer

    Amounts are printed exactly as stored, formatted per currency.
    """

    def __init__(
        self,
        formatter: CurrencyFormatter,
        company_name: str = "Agency",
        company_address: str = "",
    ):
        self.formatter = formatter
        self.company_name = company_name
        self.company_address = company_address

    def render(
        self,
        document: BillableDocument,
        line_items: List[DocumentLineItem],
        party: Optional[Party] = None,
    ) -> bytes:
        """
        Render a document PDF

        Args:
            document: Document with totals and number
            line_items: Line items in position order
            party: Client the document is addressed to, if known

        Returns:
            PDF document as bytes
        """
        kind = DocumentKind(document.kind)
        status = DocumentStatus(document.status)
        currency = document.currency

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=document.number,
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        kind_style = ParagraphStyle(
            "KindStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#C9325D"),
            spaceAfter=16,
        )
        muted_style = ParagraphStyle(
            "MutedStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle("NormalStyle", parent=styles["Normal"], fontSize=10)
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Header
        elements.append(Paragraph(escape(self.company_name), title_style))
        if self.company_address:
            elements.append(Paragraph(escape(self.company_address), muted_style))
        elements.append(Spacer(1, 8 * mm))
        elements.append(Paragraph(HEADINGS[kind], kind_style))
        if document.title:
            elements.append(Paragraph(escape(document.title), bold_style))
            elements.append(Spacer(1, 4 * mm))

        # Document details
        details = [
            ["Number:", document.number],
            ["Status:", status.value.replace("_", " ").upper()],
            ["Currency:", currency],
            ["Date:", document.created_at.strftime("%Y-%m-%d")],
        ]
        if document.due_date:
            details.append(["Due Date:", document.due_date.strftime("%Y-%m-%d")])
        if document.sent_at:
            details.append(["Sent:", document.sent_at.strftime("%Y-%m-%d")])

        details_table = Table(details, colWidths=[40 * mm, 100 * mm])
        details_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(details_table)
        elements.append(Spacer(1, 8 * mm))

        # Client
        elements.append(Paragraph("Bill To:" if kind == DocumentKind.INVOICE else "Prepared For:", bold_style))
        if party:
            elements.append(Paragraph(escape(party.name), normal_style))
            if party.company:
                elements.append(Paragraph(escape(party.company), normal_style))
            if party.email:
                elements.append(Paragraph(escape(party.email), muted_style))
        else:
            elements.append(Paragraph(f"Client ID: {escape(document.party_id)}", normal_style))
        elements.append(Spacer(1, 8 * mm))

        # Line items
        line_data = [["Description", "Quantity", "Rate", "Amount"]]
        for item in sorted(line_items, key=lambda item: item.position):
            line_data.append(
                [
                    Paragraph(escape(item.description), normal_style),
                    _plain_number(item.quantity),
                    self.formatter.format(item.unit_rate, currency),
                    self.formatter.format(item.amount, currency),
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        totals_data = [
            ["", "", "Subtotal:", self.formatter.format(document.subtotal, currency)],
            ["", "", f"Tax ({_plain_number(document.tax_rate)}%):", self.formatter.format(document.tax_amount, currency)],
            ["", "", "Total:", self.formatter.format(document.total, currency)],
        ]
        totals_table = Table(totals_data, colWidths=COLUMN_WIDTHS)
        totals_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTSIZE", (0, -1), (-1, -1), 11),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(totals_table)

        # Notes / terms
        if document.notes:
            elements.append(Spacer(1, 10 * mm))
            elements.append(Paragraph("Notes", bold_style))
            for paragraph in document.notes.splitlines():
                if paragraph.strip():
                    elements.append(Paragraph(escape(paragraph), normal_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes


def _plain_number(value) -> str:
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
