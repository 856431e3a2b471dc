"""Query/list helpers for invoices."""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy import ColumnElement, and_, func, or_, select
from sqlalchemy.orm import Session, contains_eager, sessionmaker

from app.models import models
from app.models.schemas import CustomerRef, InvoiceRecord
from app.utils.dates import end_of_day_utc, start_of_day_utc

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text only ever matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def search_clause(query: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on invoice id, customer email or name."""
    pattern = f"%{escape_like(query)}%"
    return or_(
        models.Invoice.id.ilike(pattern, escape=LIKE_ESCAPE),
        models.Customer.email.ilike(pattern, escape=LIKE_ESCAPE),
        models.Customer.name.ilike(pattern, escape=LIKE_ESCAPE),
    )


def created_between(start: dt.date, end: dt.date) -> ColumnElement[bool]:
    """``created_at`` within the inclusive UTC day span."""
    return and_(
        models.Invoice.created_at >= start_of_day_utc(start),
        models.Invoice.created_at <= end_of_day_utc(end),
    )


def ensure_utc(value: dt.datetime | None) -> dt.datetime | None:
    # SQLite hands back naive datetimes; stored values are always UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


def decode_invoice(row: models.Invoice) -> InvoiceRecord:
    """Map an ORM invoice (customer loaded) onto the typed projection."""
    customer = row.customer
    return InvoiceRecord(
        id=row.id,
        created_at=ensure_utc(row.created_at),
        status=row.status,
        total_amount_eur=row.total_amount_eur,
        billing_start_date=row.billing_start_date,
        billing_end_date=row.billing_end_date,
        customer=CustomerRef.model_validate(customer) if customer is not None else None,
    )


def _invoice_filters(
    created_from: dt.date | None,
    created_to: dt.date | None,
    query: str | None,
    customer_id: str | None,
) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if created_from is not None and created_to is not None:
        clauses.append(created_between(created_from, created_to))
    if customer_id is not None:
        clauses.append(models.Invoice.customer_id == customer_id)
    if query:
        clauses.append(search_clause(query))
    return clauses


class InvoiceQueryMixin:
    session_factory: sessionmaker[Session]

    def list_invoices(
        self,
        created_from: dt.date | None = None,
        created_to: dt.date | None = None,
        query: str | None = None,
        limit: int | None = None,
        offset: int = 0,
        customer_id: str | None = None,
    ) -> list[InvoiceRecord]:
        """Newest first. Without both date bounds the whole history is searched."""
        stmt = (
            select(models.Invoice)
            .outerjoin(models.Customer, models.Invoice.customer_id == models.Customer.id)
            .options(contains_eager(models.Invoice.customer))
            .where(*_invoice_filters(created_from, created_to, query, customer_id))
            .order_by(models.Invoice.created_at.desc(), models.Invoice.id)
        )
        if limit:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        with self.session_factory() as db:
            rows = db.execute(stmt).scalars().all()
            invoices = [decode_invoice(row) for row in rows]
        logger.debug("Listed %s invoices between %s and %s offset=%s", len(invoices), created_from, created_to, offset)
        return invoices

    def count_invoices(
        self,
        created_from: dt.date | None = None,
        created_to: dt.date | None = None,
        query: str | None = None,
        customer_id: str | None = None,
    ) -> int:
        """Exact count matching the same filters as ``list_invoices``."""
        stmt = (
            select(func.count(models.Invoice.id))
            .select_from(models.Invoice)
            .outerjoin(models.Customer, models.Invoice.customer_id == models.Customer.id)
            .where(*_invoice_filters(created_from, created_to, query, customer_id))
        )
        with self.session_factory() as db:
            return int(db.execute(stmt).scalar_one())
