"""Decoded invoice projections shared by dashboard and export."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class CustomerRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    name: str | None = None
    email: str | None = None

    def display_name(self) -> str | None:
        """Fallback chain used wherever a customer is rendered: name -> email -> id."""
        return self.name or self.email or self.id or None


class InvoiceRecord(BaseModel):
    """Invoice row joined with its customer projection."""

    id: str
    created_at: dt.datetime | None = None
    status: str | None = None
    total_amount_eur: Decimal | None = None
    billing_start_date: dt.date | None = None
    billing_end_date: dt.date | None = None
    customer: CustomerRef | None = None
