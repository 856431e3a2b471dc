"""Tests for the invoice CSV export."""
import csv
import io
from datetime import date
from decimal import Decimal

import pytest

from conftest import add_customer, add_invoice, utc

from app.core.exceptions import InvalidExportFieldError
from app.models.schemas import CsvRangeParams, InvoiceCsvRow
from app.services.export_service import (
    CSV_HEADER,
    build_invoices_csv,
    escape_csv_value,
    export_filename,
    rows_to_csv,
)


def _parse(text):
    return list(csv.reader(io.StringIO(text)))


def test_escape_csv_value_quotes_only_when_needed():
    assert escape_csv_value("Doe, Jane") == '"Doe, Jane"'
    assert escape_csv_value('say "hi"') == '"say ""hi"""'
    assert escape_csv_value("line\nbreak") == '"line\nbreak"'
    assert escape_csv_value("plain") == "plain"
    assert escape_csv_value(None) == ""
    assert escape_csv_value(Decimal("120.50")) == "120.5"
    assert escape_csv_value(date(2024, 6, 1)) == "2024-06-01"


def test_rows_to_csv_round_trips_through_csv_reader():
    rows = [
        InvoiceCsvRow(id="inv-1", customer_id="Doe, Jane", status="done", total_amount_eur=Decimal("10.00")),
        InvoiceCsvRow(id="inv-2", customer_id="cust-2", status=None, total_amount_eur=None),
    ]

    text = rows_to_csv(rows)
    parsed = _parse(text)

    assert text.endswith("\n")
    assert parsed[0] == list(CSV_HEADER)
    assert all(len(row) == len(CSV_HEADER) for row in parsed)
    assert parsed[1][1] == "Doe, Jane"
    assert parsed[2][CSV_HEADER.index("total_amount_eur")] == ""


def test_empty_export_is_header_only():
    assert rows_to_csv([]) == ",".join(CSV_HEADER) + "\n"


def _seed(db):
    customer = add_customer(db, "cust-1", "Doe, Jane", "jane@example.com")
    add_invoice(
        db,
        customer,
        utc(2024, 6, 2, 10),
        status="done",
        total=Decimal("123.40"),
        invoice_id="inv-june",
        billing_start=date(2024, 5, 1),
        billing_end=date(2024, 5, 31),
        issue_date=date(2024, 6, 1),
    )
    add_invoice(
        db,
        customer,
        utc(2024, 6, 20),
        status="pending",
        total=None,
        invoice_id="inv-late",
        billing_start=date(2024, 6, 1),
        billing_end=date(2024, 6, 30),
    )
    add_invoice(
        db,
        customer,
        utc(2024, 5, 5),
        status="processed",
        invoice_id="inv-may",
        billing_start=date(2024, 4, 20),
        billing_end=date(2024, 5, 19),
    )


def test_export_by_created_at(store, db_session):
    _seed(db_session)

    result = build_invoices_csv(store, CsvRangeParams(from_="2024-06-01", to="2024-06-30"))

    assert [row.id for row in result.rows] == ["inv-late", "inv-june"]
    parsed = _parse(result.csv)
    assert len(parsed) == 3
    june = dict(zip(CSV_HEADER, parsed[2]))
    assert june == {
        "id": "inv-june",
        "customer_id": "cust-1",
        "status": "done",
        "issue_date": "2024-06-01",
        "billing_start_date": "2024-05-01",
        "billing_end_date": "2024-05-31",
        "total_amount_eur": "123.4",
        "created_at": "2024-06-02T10:00:00+00:00",
    }
    assert dict(zip(CSV_HEADER, parsed[1]))["total_amount_eur"] == ""


def test_export_by_billing_period_requires_full_containment(store, db_session):
    _seed(db_session)

    result = build_invoices_csv(
        store, CsvRangeParams(from_="2024-05-01", to="2024-05-31", field="billing_period")
    )

    assert [row.id for row in result.rows] == ["inv-june"]


def test_export_unparseable_bounds_are_open_ended(store, db_session):
    _seed(db_session)

    result = build_invoices_csv(store, CsvRangeParams(from_="whenever", to=""))

    assert len(result.rows) == 3


def test_export_rejects_unknown_field(store):
    with pytest.raises(InvalidExportFieldError) as excinfo:
        build_invoices_csv(store, CsvRangeParams(from_="2024-06-01", to="2024-06-30", field="issue_date"))

    assert excinfo.value.code == "EXP001"
    assert excinfo.value.status_code == 400


def test_export_filename():
    assert export_filename("2024-06-01", "2024-06-30") == "invoices_20240601-20240630.csv"
