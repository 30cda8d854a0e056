"""Jinja2 Notification Composer

Renders document event notifications from HTML templates with
autoescaping on, so titles, notes and client names are always escaped.
"""

import re
from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from src.app.services.notification_composer import ComposedNotification, NotificationComposer
from src.domain.currency import CurrencyFormatter
from src.domain.events import DocumentEvent, DocumentEventType
from src.domain.lifecycle import FEEDBACK_STATUSES

TEMPLATES_DIR = Path(__file__).parent / "templates"

STATUS_LABELS = {
    "sent": "Sent to Client",
    "accepted": "Accepted",
    "rejected": "Rejected",
    "edit_requested": "Edit Requested",
    "paid": "Paid",
    "partial": "Partially Paid",
    "overdue": "Overdue",
    "cancelled": "Cancelled",
}

STATUS_COLORS = {
    "sent": "#3b82f6",
    "accepted": "#22c55e",
    "paid": "#22c55e",
    "rejected": "#ef4444",
    "cancelled": "#ef4444",
    "overdue": "#ef4444",
    "edit_requested": "#f59e0b",
    "partial": "#f59e0b",
}

BRAND_COLOR = "#c9325d"

FEEDBACK_STATUS_VALUES = frozenset(status.value for status in FEEDBACK_STATUSES)

_WHITESPACE = re.compile(r"\s+")


def _one_line(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class JinjaNotificationComposer(NotificationComposer):
    """
    Composes team notifications for document events

    Args:
        formatter: CurrencyFormatter used for the total
        company_name: Shown in the footer
        admin_url: Base URL of the admin panel for the call-to-action link
    """

    def __init__(
        self,
        formatter: CurrencyFormatter,
        company_name: str = "Agency",
        admin_url: Optional[str] = None,
    ):
        self.formatter = formatter
        self.company_name = company_name
        self.admin_url = admin_url.rstrip("/") if admin_url else None
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def compose(self, event: DocumentEvent) -> ComposedNotification:
        kind_label = event.kind.capitalize()

        if event.event_type == DocumentEventType.CREATED:
            heading = f"{kind_label} Created"
            intro = f"A new {event.kind} has been created."
            badge_label = event.status.upper()
            badge_color = BRAND_COLOR
        else:
            label = STATUS_LABELS.get(event.status, event.status)
            heading = f"{kind_label} {label}"
            intro = f"{kind_label} status has been updated."
            badge_label = label
            badge_color = STATUS_COLORS.get(event.status, BRAND_COLOR)

        rows = [(f"{kind_label} #", event.number)]
        if event.title:
            rows.append(("Title", event.title))
        rows.append(("Client", event.party_name or event.party_id))
        rows.append(("Total", self.formatter.format(event.total, event.currency)))
        if event.previous_status:
            rows.append(("Previous", STATUS_LABELS.get(event.previous_status, event.previous_status)))

        template = self.env.get_template("document_event.html")
        html = template.render(
            heading=heading,
            intro=intro,
            rows=rows,
            badge_label=badge_label,
            badge_color=badge_color,
            feedback=event.note,
            feedback_label="Client Feedback" if event.status in FEEDBACK_STATUS_VALUES else "Note",
            cta_label=f"View {kind_label}",
            cta_href=f"{self.admin_url}/{event.kind}s/{event.document_id}" if self.admin_url else None,
            company_name=self.company_name,
            year=event.occurred_at.year,
        )

        return ComposedNotification(subject=_one_line(self._subject(event, heading)), html=html)

    def _subject(self, event: DocumentEvent, heading: str) -> str:
        if event.event_type == DocumentEventType.CREATED:
            if event.kind == "invoice":
                return f"{heading}: {event.number} — {event.party_name or event.party_id}"
            if event.kind == "proposal":
                return f"{heading}: {event.number} — {event.title or event.number}"
        return f"{heading}: {event.title or event.number}"
