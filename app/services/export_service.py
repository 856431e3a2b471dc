"""Invoice CSV export."""
from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal
from io import StringIO
from typing import Any

from app import metrics
from app.core.exceptions import InvalidExportFieldError
from app.models.schemas import CsvExportResult, CsvRangeParams, InvoiceCsvRow
from app.services.invoice_store import InvoiceStore
from app.utils.dates import parse_iso_date

logger = logging.getLogger(__name__)

RANGE_FIELDS = ("created_at", "billing_period")

CSV_HEADER = (
    "id",
    "customer_id",
    "status",
    "issue_date",
    "billing_start_date",
    "billing_end_date",
    "total_amount_eur",
    "created_at",
)


def format_decimal(value: Decimal) -> str:
    """Plain notation without trailing zeros: 120.50 -> 120.5, 1E+2 -> 100."""
    text = format(value.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def escape_csv_value(value: Any) -> str:
    """Quote only when the value holds a comma, double quote or newline."""
    if value is None:
        return ""
    if isinstance(value, Decimal):
        text = format_decimal(value)
    elif isinstance(value, (dt.date, dt.datetime)):
        text = value.isoformat()
    else:
        text = str(value)
    if any(char in text for char in (",", '"', "\n")):
        escaped = text.replace('"', '""')
        return f'"{escaped}"'
    return text


def rows_to_csv(rows: list[InvoiceCsvRow]) -> str:
    buf = StringIO()
    buf.write(",".join(CSV_HEADER) + "\n")
    for row in rows:
        buf.write(",".join(escape_csv_value(getattr(row, column)) for column in CSV_HEADER) + "\n")
    return buf.getvalue()


def build_invoices_csv(store: InvoiceStore, params: CsvRangeParams) -> CsvExportResult:
    """Fetch invoices bounded by creation time or billing period and serialize them.

    Unparseable bounds fall back to open-ended limits. Store errors propagate.
    """
    if params.field not in RANGE_FIELDS:
        raise InvalidExportFieldError(params.field, RANGE_FIELDS)
    start = parse_iso_date(params.from_) or dt.date.min
    end = parse_iso_date(params.to) or dt.date.max

    rows = store.list_export_rows(start, end, params.field)  # type: ignore[arg-type]
    csv = rows_to_csv(rows)
    logger.info("Exported %s invoices field=%s from=%s to=%s", len(rows), params.field, start, end)
    metrics.csv_exported(params.field, len(rows))
    return CsvExportResult(rows=rows, csv=csv)


def export_filename(start: str, end: str) -> str:
    """``invoices_20240601-20240630.csv``"""
    return f"invoices_{start.replace('-', '')}-{end.replace('-', '')}.csv"
