from __future__ import annotations

import datetime as dt
from typing import Any, Protocol

from sqlalchemy.orm import Session, sessionmaker

from app.models.schemas import AggregateResult, CsvRangeField, CustomerRef, InvoiceCsvRow, InvoiceRecord
from app.services.invoice_components import (
    CustomerLookupMixin,
    InvoiceAggregateMixin,
    InvoiceExportMixin,
    InvoiceQueryMixin,
)
from app.utils.dates import DateRange


class InvoiceStore(Protocol):
    """Read interface the dashboard, export and customer services depend on."""

    def list_invoices(
        self,
        created_from: dt.date | None = None,
        created_to: dt.date | None = None,
        query: str | None = None,
        limit: int | None = None,
        offset: int = 0,
        customer_id: str | None = None,
    ) -> list[InvoiceRecord]: ...

    def count_invoices(
        self,
        created_from: dt.date | None = None,
        created_to: dt.date | None = None,
        query: str | None = None,
        customer_id: str | None = None,
    ) -> int: ...

    def fetch_aggregates(self, date_range: DateRange, query: str | None = None) -> AggregateResult: ...

    def list_export_rows(self, start: dt.date, end: dt.date, field: CsvRangeField = "created_at") -> list[InvoiceCsvRow]: ...

    def last_invoice_per_customer(self) -> dict[str, dt.datetime]: ...

    def list_customer_summaries(self) -> list[dict[str, Any]]: ...

    def get_customer(self, customer_id: str) -> CustomerRef | None: ...


class SqlInvoiceStore(
    InvoiceQueryMixin,
    InvoiceAggregateMixin,
    InvoiceExportMixin,
    CustomerLookupMixin,
):
    """Facade that wires the query mixins with a session factory.

    Every method opens and closes its own session, so calls may run
    concurrently from worker threads.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory


def build_invoice_store(session_factory: sessionmaker[Session] | None = None) -> SqlInvoiceStore:
    """Factory function to construct the store; defaults to the app's SessionLocal."""
    if session_factory is None:
        from app.db.session import SessionLocal

        session_factory = SessionLocal
    return SqlInvoiceStore(session_factory)
