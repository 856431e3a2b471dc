"""Paginated invoice listing schemas."""
from __future__ import annotations

from pydantic import BaseModel

from .dashboard import DashboardInvoiceRow
from .invoice import CustomerRef


class InvoicePage(BaseModel):
    """One page of invoices, newest first; ``page`` is already clamped."""
    q: str | None = None
    customer: CustomerRef | None = None
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous: bool
    has_next: bool
    invoices: list[DashboardInvoiceRow]
