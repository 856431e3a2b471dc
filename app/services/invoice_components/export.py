"""Row fetching for the invoice CSV export."""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from app.models import models
from app.models.schemas import CsvRangeField, InvoiceCsvRow
from app.services.invoice_components.query import created_between, ensure_utc

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = (
    models.Invoice.id,
    models.Invoice.customer_id,
    models.Invoice.status,
    models.Invoice.issue_date,
    models.Invoice.billing_start_date,
    models.Invoice.billing_end_date,
    models.Invoice.total_amount_eur,
    models.Invoice.created_at,
)


class InvoiceExportMixin:
    session_factory: sessionmaker[Session]

    def list_export_rows(self, start: dt.date, end: dt.date, field: CsvRangeField = "created_at") -> list[InvoiceCsvRow]:
        stmt = select(*EXPORT_COLUMNS).order_by(models.Invoice.created_at.desc(), models.Invoice.id)
        if field == "billing_period":
            stmt = stmt.where(
                models.Invoice.billing_start_date >= start,
                models.Invoice.billing_end_date <= end,
            )
        else:
            stmt = stmt.where(created_between(start, end))

        with self.session_factory() as db:
            result = db.execute(stmt).all()

        rows = []
        for item in result:
            row = InvoiceCsvRow.model_validate(dict(item._mapping))
            row.created_at = ensure_utc(row.created_at)
            rows.append(row)
        logger.debug("Fetched %s export rows field=%s from=%s to=%s", len(rows), field, start, end)
        return rows
