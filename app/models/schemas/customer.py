"""Customer listing schemas."""
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel


class CustomerSummary(BaseModel):
    id: str
    name: str
    email: str
    invoice_count: int = 0
    last_invoice_at: dt.datetime | None = None
