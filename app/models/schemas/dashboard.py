"""Dashboard schemas."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DeltaDirection = Literal["up", "down", "flat"]


class DashboardFilters(BaseModel):
    """Raw query-string filters; parsing and defaults happen in the service."""
    model_config = ConfigDict(populate_by_name=True)

    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    q: str | None = None


class StatusCounts(BaseModel):
    pending: int = 0
    processed: int = 0
    success: int = 0

    @property
    def total(self) -> int:
        return self.pending + self.processed + self.success


class MonthlyBucket(BaseModel):
    month_anchor: dt.date  # First day of the month
    range_start: dt.date
    range_end: dt.date
    current_count: int = 0
    previous_year_count: int = 0


class AggregateResult(BaseModel):
    """Counts computed for one dashboard request; never cached."""
    current_total: int = 0
    previous_total: int = 0
    status_counts: StatusCounts = Field(default_factory=StatusCounts)
    monthly_buckets: list[MonthlyBucket] = Field(default_factory=list)


class AppliedFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    q: str | None = None
    previous_from: str
    previous_to: str


class StatusBreakdownItem(BaseModel):
    key: str
    label: str
    value: int
    percentage: int


class MonthlySeries(BaseModel):
    """Current-period counts for each month of the range's starting year."""
    year: int
    labels: list[str]
    counts: list[int]


class ComparisonSide(BaseModel):
    year: int
    count: int
    from_: str = Field(alias="from")
    to: str
    range_label: str

    model_config = ConfigDict(populate_by_name=True)


class MonthlyComparison(BaseModel):
    key: str  # "2024-06"
    label: str  # "Jun 2024"
    title: str  # "June 2024"
    current: ComparisonSide
    previous: ComparisonSide


class DashboardInvoiceRow(BaseModel):
    id: str
    customer_name: str | None = None
    customer_email: str | None = None
    date_start: dt.date | None = None
    date_end: dt.date | None = None
    status: str | None = None
    total: Decimal | None = None
    created_at: dt.datetime | None = None


class DashboardData(BaseModel):
    """Complete dashboard payload, renderable by any presentation layer."""
    filters: AppliedFilters
    header_range_label: str
    summary_range_text: str
    previous_range_text: str
    total_invoices_current: int
    total_invoices_previous: int
    delta_vs_previous: float | None
    delta_direction: DeltaDirection
    aggregates: AggregateResult
    monthly_series: MonthlySeries
    monthly_comparisons: list[MonthlyComparison]
    status_breakdown: list[StatusBreakdownItem]
    invoices: list[DashboardInvoiceRow]
