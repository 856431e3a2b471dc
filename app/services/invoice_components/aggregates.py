"""Dashboard aggregates: month-over-month totals, status mix, year-over-year buckets.

``InvoiceAggregateMixin.fetch_aggregates`` runs two statements: one row of
conditional SUMs for the scalar totals and status counts, and one grouped by
the UTC calendar month of ``created_at`` for the monthly buckets. The grouped
query returns at most one row per month, so the range width never changes
the shape of either statement.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import ColumnElement, Select, case, extract, func, literal_column, or_, select
from sqlalchemy.orm import Session, sessionmaker

from app.models import models
from app.models.schemas import AggregateResult, MonthlyBucket, StatusCounts
from app.services.invoice_components.query import created_between, search_clause
from app.services.invoice_components.status_categories import (
    STATUS_CATEGORIES,
    status_category_expression,
)
from app.utils.dates import (
    DateRange,
    MonthSlice,
    shift_range_by_months,
    shift_range_by_years,
    slice_range_by_months,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonWindows:
    current: DateRange
    previous: DateRange  # same range one calendar month earlier
    month_slices: list[MonthSlice]
    previous_year_slices: list[MonthSlice]  # aligned index-by-index with month_slices

    @property
    def previous_year_span(self) -> DateRange:
        return DateRange(start=self.previous_year_slices[0].start, end=self.previous_year_slices[-1].end)


def comparison_windows(date_range: DateRange) -> ComparisonWindows:
    slices = slice_range_by_months(date_range)
    return ComparisonWindows(
        current=date_range,
        previous=shift_range_by_months(date_range, -1),
        month_slices=slices,
        previous_year_slices=[shift_range_by_years(item, -1) for item in slices],
    )


def _count_if(condition: ColumnElement[bool]) -> ColumnElement[int]:
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def _in_range(date_range: DateRange) -> ColumnElement[bool]:
    return created_between(date_range.start, date_range.end)


def _utc_created_at(dialect_name: str) -> ColumnElement:
    # Postgres extracts fields in the session time zone
    if dialect_name == "postgresql":
        return func.timezone(literal_column("'UTC'"), models.Invoice.created_at)
    return models.Invoice.created_at


def _filtered(stmt: Select, query: str | None) -> Select:
    stmt = stmt.select_from(models.Invoice).outerjoin(
        models.Customer, models.Invoice.customer_id == models.Customer.id
    )
    if query:
        stmt = stmt.where(search_clause(query))
    return stmt


class InvoiceAggregateMixin:
    session_factory: sessionmaker[Session]

    def fetch_aggregates(self, date_range: DateRange, query: str | None = None) -> AggregateResult:
        windows = comparison_windows(date_range)
        current = _in_range(windows.current)
        previous = _in_range(windows.previous)
        last_year = _in_range(windows.previous_year_span)
        category = status_category_expression(models.Invoice.status)

        totals_stmt = _filtered(
            select(
                _count_if(current).label("current_total"),
                _count_if(previous).label("previous_total"),
                *(
                    _count_if(current & (category == status.key)).label(f"status_{status.key}")
                    for status in STATUS_CATEGORIES
                ),
            ),
            query,
        ).where(or_(current, previous))

        with self.session_factory() as db:
            totals = db.execute(totals_stmt).one()._mapping
            monthly = db.execute(self._monthly_statement(db, current, last_year, query)).all()

        current_by_month: dict[tuple[int, int], int] = {}
        last_year_by_month: dict[tuple[int, int], int] = {}
        for year, month, current_count, previous_year_count in monthly:
            current_by_month[(int(year), int(month))] = int(current_count or 0)
            last_year_by_month[(int(year), int(month))] = int(previous_year_count or 0)

        buckets = [
            MonthlyBucket(
                month_anchor=month.start.replace(day=1),
                range_start=month.start,
                range_end=month.end,
                current_count=current_by_month.get((month.start.year, month.start.month), 0),
                previous_year_count=last_year_by_month.get((month.start.year - 1, month.start.month), 0),
            )
            for month in windows.month_slices
        ]
        logger.debug(
            "Aggregated %s invoices over %s months from=%s to=%s",
            totals["current_total"],
            len(buckets),
            date_range.start,
            date_range.end,
        )
        return AggregateResult(
            current_total=int(totals["current_total"]),
            previous_total=int(totals["previous_total"]),
            status_counts=StatusCounts(
                **{status.key: int(totals[f"status_{status.key}"]) for status in STATUS_CATEGORIES}
            ),
            monthly_buckets=buckets,
        )

    @staticmethod
    def _monthly_statement(
        db: Session,
        current: ColumnElement[bool],
        last_year: ColumnElement[bool],
        query: str | None,
    ) -> Select:
        """Per UTC month: invoices in the current range and in the year-earlier span.

        Month slices partition both spans by calendar month, so each grouped
        row lands on exactly one slice.
        """
        created_at = _utc_created_at(db.get_bind().dialect.name)
        flagged = (
            _filtered(
                select(
                    extract("year", created_at).label("year"),
                    extract("month", created_at).label("month"),
                    case((current, 1), else_=0).label("in_current"),
                    case((last_year, 1), else_=0).label("in_last_year"),
                ),
                query,
            )
            .where(or_(current, last_year))
            .subquery()
        )
        return select(
            flagged.c.year,
            flagged.c.month,
            func.sum(flagged.c.in_current),
            func.sum(flagged.c.in_last_year),
        ).group_by(flagged.c.year, flagged.c.month)
