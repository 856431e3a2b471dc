"""Admin dashboard endpoint: month-over-month and year-over-year invoice stats."""

from __future__ import annotations

from fastapi import APIRouter, Query

from app.api.dependencies import AdminDep, StoreDep
from app.models.schemas import DashboardData, DashboardFilters
from app.services.dashboard_service import fetch_dashboard_data

router = APIRouter()


@router.get("/dashboard", response_model=DashboardData)
async def get_dashboard(
    store: StoreDep,
    _admin: AdminDep,
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
    q: str | None = Query(None, max_length=200),
) -> DashboardData:
    """
    Get dashboard statistics for a date range.

    Args:
        from_: Range start (YYYY-MM-DD); defaults to the first day of the current UTC month
        to: Range end (YYYY-MM-DD); defaults to today (UTC)
        q: Optional search across invoice id, customer name and email

    Invalid dates fall back to the defaults instead of failing the request.
    """
    return await fetch_dashboard_data(store, DashboardFilters(from_=from_, to=to, q=q))
