"""CSV export schemas."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CsvRangeField = Literal["created_at", "billing_period"]


class CsvRangeParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    field: str = "created_at"


class InvoiceCsvRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str | None = None
    status: str | None = None
    issue_date: dt.date | None = None
    billing_start_date: dt.date | None = None
    billing_end_date: dt.date | None = None
    total_amount_eur: Decimal | None = None
    created_at: dt.datetime | None = None


class CsvExportResult(BaseModel):
    rows: list[InvoiceCsvRow]
    csv: str
