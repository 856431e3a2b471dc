"""Customer overview: invoice counts and most recent invoice per customer."""
from __future__ import annotations

from app.models.schemas import CustomerSummary
from app.services.invoice_store import InvoiceStore
from app.utils.dates import PLACEHOLDER


def list_customers(store: InvoiceStore) -> list[CustomerSummary]:
    last_invoice = store.last_invoice_per_customer()
    return [
        CustomerSummary(
            id=row["id"],
            name=row["name"] or PLACEHOLDER,
            email=row["email"] or PLACEHOLDER,
            invoice_count=row["invoice_count"] or 0,
            last_invoice_at=last_invoice.get(row["id"]),
        )
        for row in store.list_customer_summaries()
    ]
