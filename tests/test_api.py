"""HTTP surface tests via TestClient."""
import csv
import io
from decimal import Decimal

from conftest import add_customer, add_invoice, utc


def _seed(db):
    customer = add_customer(db, "cust-1", "Doe, Jane", "jane@example.com")
    for day in (2, 9, 16):
        add_invoice(db, customer, utc(2024, 6, day), status="done", total=Decimal("42.00"))
    add_invoice(db, customer, utc(2024, 5, 20), status="processed")


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_admin_routes_require_key(client):
    for path in ("/dashboard", "/invoices", "/invoices/export.csv", "/customers", "/customers/cust-1/invoices", "/metrics"):
        resp = client.get(path)
        assert resp.status_code == 401, path
        assert resp.json()["error"]["code"] == "AUTH100"

    resp = client.get("/customers", headers={"X-Admin-Key": "wrong"})
    assert resp.status_code == 401


def test_dashboard_endpoint(client, db_session, admin_headers):
    _seed(db_session)

    resp = client.get("/dashboard?from=2024-06-01&to=2024-06-30", headers=admin_headers)

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["filters"]["from"] == "2024-06-01"
    assert body["filters"]["to"] == "2024-06-30"
    assert body["total_invoices_current"] == 3
    assert body["total_invoices_previous"] == 1
    assert body["delta_vs_previous"] == 200
    assert body["delta_direction"] == "up"
    assert len(body["invoices"]) == 3
    assert body["invoices"][0]["customer_name"] == "Doe, Jane"
    assert body["monthly_comparisons"][0]["current"]["from"] == "2024-06-01"


def test_dashboard_endpoint_undefined_delta(client, db_session, admin_headers):
    _seed(db_session)

    resp = client.get("/dashboard?from=2024-05-01&to=2024-05-31", headers=admin_headers)

    body = resp.json()
    assert body["total_invoices_current"] == 1
    assert body["total_invoices_previous"] == 0
    assert body["delta_vs_previous"] is None
    assert body["delta_direction"] == "flat"


def test_export_endpoint(client, db_session, admin_headers):
    _seed(db_session)

    resp = client.get("/invoices/export.csv?from=2024-06-01&to=2024-06-30", headers=admin_headers)

    assert resp.status_code == 200, resp.text
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"] == "attachment; filename=invoices_20240601-20240630.csv"
    rows = list(csv.reader(io.StringIO(resp.text)))
    assert len(rows) == 4
    assert rows[0][0] == "id"


def test_export_endpoint_defaults_to_everything(client, db_session, admin_headers):
    _seed(db_session)

    resp = client.get("/invoices/export.csv", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == "attachment; filename=invoices_19000101-29991231.csv"
    assert len(list(csv.reader(io.StringIO(resp.text)))) == 5


def test_export_endpoint_rejects_unknown_field(client, admin_headers):
    resp = client.get("/invoices/export.csv?field=issue_date", headers=admin_headers)

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "EXP001"
    assert error["details"]["allowed"] == ["created_at", "billing_period"]


def test_customers_endpoint(client, db_session, admin_headers):
    _seed(db_session)

    resp = client.get("/customers", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()[0]["invoice_count"] == 4


def test_metrics_endpoint(client, db_session, admin_headers):
    _seed(db_session)
    client.get("/invoices/export.csv", headers=admin_headers)

    resp = client.get("/metrics", headers=admin_headers)

    assert resp.status_code == 200
    assert "invoice_csv_exports_total" in resp.text


def test_invoice_list_pages_fifty_at_a_time(client, db_session, admin_headers):
    customer = add_customer(db_session, "cust-1", "Doe, Jane", "jane@example.com")
    for index in range(51):
        add_invoice(db_session, customer, utc(2024, 1, 1 + index % 28, index % 24), invoice_id=f"inv-{index:02d}")

    first = client.get("/invoices", headers=admin_headers).json()
    second = client.get("/invoices?page=2", headers=admin_headers).json()
    beyond = client.get("/invoices?page=9", headers=admin_headers).json()

    assert first["total_count"] == 51
    assert first["total_pages"] == 2
    assert len(first["invoices"]) == 50
    assert first["has_next"] is True
    assert len(second["invoices"]) == 1
    assert second["has_next"] is False
    assert beyond["page"] == 2


def test_invoice_list_search(client, db_session, admin_headers):
    _seed(db_session)
    add_invoice(db_session, add_customer(db_session, "cust-2", "Other"), utc(2024, 6, 3), invoice_id="inv-other")

    body = client.get("/invoices?q=jane", headers=admin_headers).json()

    assert body["total_count"] == 4
    assert body["q"] == "jane"


def test_customer_invoices_endpoint(client, db_session, admin_headers):
    _seed(db_session)

    resp = client.get("/customers/cust-1/invoices", headers=admin_headers)
    missing = client.get("/customers/nope/invoices", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["customer"]["email"] == "jane@example.com"
    assert resp.json()["total_count"] == 4
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "CUS200"
