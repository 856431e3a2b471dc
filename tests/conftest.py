from __future__ import annotations

import datetime as dt
import os
from decimal import Decimal

os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.api.dependencies import get_invoice_store  # noqa: E402
from app.api.main import app  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.db.base_class import Base  # noqa: E402
from app.db.session import build_engine, get_db  # noqa: E402
from app.models.models import Customer, Invoice  # noqa: E402
from app.services.invoice_store import build_invoice_store  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite so each worker thread gets its own connection."""
    test_engine = build_engine(f"sqlite:///{tmp_path / 'invoices.db'}")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """Provide a database session for seeding."""
    session = session_factory()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture
def store(session_factory):
    return build_invoice_store(session_factory)


def add_customer(db, customer_id: str, name: str | None = None, email: str | None = None) -> Customer:
    customer = Customer(id=customer_id, name=name, email=email)
    db.add(customer)
    db.commit()
    return customer


def add_invoice(
    db,
    customer: Customer,
    created_at: dt.datetime,
    status: str | None = "pending",
    total: Decimal | None = Decimal("100.00"),
    invoice_id: str | None = None,
    billing_start: dt.date | None = None,
    billing_end: dt.date | None = None,
    issue_date: dt.date | None = None,
) -> Invoice:
    """Helper to create an invoice."""
    invoice = Invoice(
        customer_id=customer.id,
        created_at=created_at,
        status=status,
        total_amount_eur=total,
        billing_start_date=billing_start,
        billing_end_date=billing_end,
        issue_date=issue_date,
    )
    if invoice_id is not None:
        invoice.id = invoice_id
    db.add(invoice)
    db.commit()
    return invoice


def utc(year: int, month: int, day: int, hour: int = 12) -> dt.datetime:
    return dt.datetime(year, month, day, hour, tzinfo=dt.timezone.utc)


@pytest.fixture
def admin_headers():
    return {"X-Admin-Key": settings.ADMIN_API_KEY}


@pytest.fixture
def client(session_factory, store):
    """Provide a FastAPI TestClient bound to the per-test database."""

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_invoice_store] = lambda: store
    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
