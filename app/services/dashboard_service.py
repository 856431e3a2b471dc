"""Dashboard aggregation for the admin invoice overview."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from starlette.concurrency import run_in_threadpool

from app import metrics
from app.core.config import settings
from app.models.schemas import (
    AggregateResult,
    AppliedFilters,
    ComparisonSide,
    DashboardData,
    DashboardFilters,
    DashboardInvoiceRow,
    DeltaDirection,
    InvoiceRecord,
    MonthlyBucket,
    MonthlyComparison,
    MonthlySeries,
    StatusBreakdownItem,
    StatusCounts,
)
from app.services.invoice_components.aggregates import ComparisonWindows, comparison_windows
from app.services.invoice_components.status_categories import STATUS_CATEGORIES
from app.services.invoice_store import InvoiceStore
from app.utils.dates import (
    DateRange,
    format_date_range,
    format_range_summary,
    has_year_before,
    iso_date_string,
    month_abbr,
    month_name,
    parse_iso_date,
    start_of_month_utc,
    today_utc,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedFilters:
    date_range: DateRange
    query: str | None

    @property
    def from_iso(self) -> str:
        return iso_date_string(self.date_range.start)

    @property
    def to_iso(self) -> str:
        return iso_date_string(self.date_range.end)


def sanitize_query(value: str | None) -> str | None:
    if not value:
        return None
    trimmed = value.strip()
    return trimmed or None


def _parse_bound(value: str | None) -> date | None:
    # Year 1 has no previous month or year to compare against
    day = parse_iso_date(value)
    if day is None or not has_year_before(day):
        return None
    return day


def normalize_filters(filters: DashboardFilters, today: date | None = None) -> NormalizedFilters:
    """Apply defaults (month-to-date) and collapse inverted ranges onto ``to``.

    Invalid dates fall back to the defaults; this never raises.
    """
    today = today or today_utc()
    from_date = _parse_bound(filters.from_) or start_of_month_utc(today)
    to_date = _parse_bound(filters.to) or today
    if from_date > to_date:
        from_date = to_date
    return NormalizedFilters(
        date_range=DateRange(start=from_date, end=to_date),
        query=sanitize_query(filters.q),
    )


def compute_delta(current: int, previous: int) -> float | None:
    """Percentage change vs previous; None when undefined (zero baseline)."""
    if previous == 0:
        return 0.0 if current == 0 else None
    return (current - previous) / previous * 100


def delta_direction(delta: float | None) -> DeltaDirection:
    if delta is None or delta == 0:
        return "flat"
    return "up" if delta > 0 else "down"


def _percentage(value: int, total: int) -> int:
    if total == 0:
        return 0
    share = Decimal(value) * 100 / Decimal(total)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_status_breakdown(counts: StatusCounts) -> list[StatusBreakdownItem]:
    total = counts.total
    return [
        StatusBreakdownItem(
            key=category.key,
            label=category.label,
            value=getattr(counts, category.key),
            percentage=_percentage(getattr(counts, category.key), total),
        )
        for category in STATUS_CATEGORIES
    ]


def build_monthly_series(start: date, buckets: list[MonthlyBucket]) -> MonthlySeries:
    """Twelve monthly counts for the calendar year the range starts in."""
    counts = [0] * 12
    for bucket in buckets:
        if bucket.month_anchor.year == start.year:
            counts[bucket.month_anchor.month - 1] = bucket.current_count
    return MonthlySeries(
        year=start.year,
        labels=[month_abbr(month) for month in range(1, 13)],
        counts=counts,
    )


def _comparison_side(date_range: DateRange, count: int) -> ComparisonSide:
    return ComparisonSide(
        year=date_range.start.year,
        count=count,
        from_=iso_date_string(date_range.start),
        to=iso_date_string(date_range.end),
        range_label=format_date_range(date_range.start, date_range.end),
    )


def build_monthly_comparisons(windows: ComparisonWindows, buckets: list[MonthlyBucket]) -> list[MonthlyComparison]:
    by_key = {bucket.month_anchor.strftime("%Y-%m"): bucket for bucket in buckets}
    comparisons = []
    for month, last_year in zip(windows.month_slices, windows.previous_year_slices):
        key = month.start.strftime("%Y-%m")
        bucket = by_key.get(key)
        comparisons.append(
            MonthlyComparison(
                key=key,
                label=f"{month_abbr(month.start.month)} {month.start.year}",
                title=f"{month_name(month.start.month)} {month.start.year}",
                current=_comparison_side(month, bucket.current_count if bucket else 0),
                previous=_comparison_side(last_year, bucket.previous_year_count if bucket else 0),
            )
        )
    return comparisons


def decorate_invoice(record: InvoiceRecord) -> DashboardInvoiceRow:
    customer = record.customer
    return DashboardInvoiceRow(
        id=record.id,
        customer_name=customer.display_name() if customer else None,
        customer_email=customer.email if customer and customer.email else None,
        date_start=record.billing_start_date,
        date_end=record.billing_end_date,
        status=record.status,
        total=record.total_amount_eur,
        created_at=record.created_at,
    )


async def fetch_dashboard_data(
    store: InvoiceStore,
    filters: DashboardFilters,
    recent_limit: int | None = None,
) -> DashboardData:
    """Build the dashboard payload for a date range and optional search text.

    Aggregates and the recent-invoice list are fetched concurrently. Any store
    failure propagates; no partial dashboard is ever returned.
    """
    started = time.perf_counter()
    normalized = normalize_filters(filters)
    windows = comparison_windows(normalized.date_range)
    limit = recent_limit or settings.DASHBOARD_RECENT_LIMIT
    logger.info(
        "Building dashboard from=%s to=%s q=%s",
        normalized.from_iso,
        normalized.to_iso,
        normalized.query,
    )

    try:
        aggregates, recent = await asyncio.gather(
            run_in_threadpool(store.fetch_aggregates, windows.current, normalized.query),
            run_in_threadpool(
                store.list_invoices,
                windows.current.start,
                windows.current.end,
                normalized.query,
                limit,
            ),
        )
    except Exception:
        logger.exception("Dashboard query failed from=%s to=%s", normalized.from_iso, normalized.to_iso)
        raise

    data = _assemble(normalized, windows, aggregates, recent)
    metrics.dashboard_built(time.perf_counter() - started)
    return data


def _assemble(
    normalized: NormalizedFilters,
    windows: ComparisonWindows,
    aggregates: AggregateResult,
    recent: list[InvoiceRecord],
) -> DashboardData:
    current_range, previous_range = windows.current, windows.previous
    delta = compute_delta(aggregates.current_total, aggregates.previous_total)
    return DashboardData(
        filters=AppliedFilters(
            from_=normalized.from_iso,
            to=normalized.to_iso,
            q=normalized.query,
            previous_from=iso_date_string(previous_range.start),
            previous_to=iso_date_string(previous_range.end),
        ),
        header_range_label=format_date_range(current_range.start, current_range.end),
        summary_range_text=format_range_summary(current_range.start, current_range.end),
        previous_range_text=format_range_summary(previous_range.start, previous_range.end),
        total_invoices_current=aggregates.current_total,
        total_invoices_previous=aggregates.previous_total,
        delta_vs_previous=delta,
        delta_direction=delta_direction(delta),
        aggregates=aggregates,
        monthly_series=build_monthly_series(current_range.start, aggregates.monthly_buckets),
        monthly_comparisons=build_monthly_comparisons(windows, aggregates.monthly_buckets),
        status_breakdown=build_status_breakdown(aggregates.status_counts),
        invoices=[decorate_invoice(record) for record in recent],
    )
