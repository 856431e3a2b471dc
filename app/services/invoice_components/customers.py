"""Per-customer invoice lookups."""
from __future__ import annotations

import datetime as dt
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from app.models import models
from app.models.schemas import CustomerRef
from app.services.invoice_components.query import ensure_utc


class CustomerLookupMixin:
    session_factory: sessionmaker[Session]

    def last_invoice_per_customer(self) -> dict[str, dt.datetime]:
        """Most recent ``created_at`` for every customer that has invoices."""
        stmt = (
            select(models.Invoice.customer_id, func.max(models.Invoice.created_at).label("last_invoice_at"))
            .group_by(models.Invoice.customer_id)
        )
        with self.session_factory() as db:
            result = db.execute(stmt).all()
        return {customer_id: ensure_utc(last_at) for customer_id, last_at in result}

    def list_customer_summaries(self) -> list[dict[str, Any]]:
        stmt = (
            select(
                models.Customer.id,
                models.Customer.name,
                models.Customer.email,
                func.count(models.Invoice.id).label("invoice_count"),
            )
            .outerjoin(models.Invoice, models.Invoice.customer_id == models.Customer.id)
            .group_by(models.Customer.id, models.Customer.name, models.Customer.email)
            .order_by(models.Customer.name)
        )
        with self.session_factory() as db:
            result = db.execute(stmt).all()
        return [dict(item._mapping) for item in result]

    def get_customer(self, customer_id: str) -> CustomerRef | None:
        with self.session_factory() as db:
            customer = db.get(models.Customer, customer_id)
            return CustomerRef.model_validate(customer) if customer is not None else None
