import logging

from fastapi import APIRouter, Query, Request, Response

from app.api.dependencies import AdminDep, StoreDep
from app.api.rate_limit import limiter
from app.core.config import settings
from app.models.schemas import CsvRangeParams
from app.services.export_service import build_invoices_csv, export_filename
from app.utils.dates import iso_date_string, parse_iso_date

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_FROM = "1900-01-01"
DEFAULT_TO = "2999-12-31"


@router.get("/invoices/export.csv")
@limiter.limit(settings.EXPORT_RATE_LIMIT)
def export_invoices_csv(
    request: Request,
    store: StoreDep,
    _admin: AdminDep,
    from_: str = Query(DEFAULT_FROM, alias="from"),
    to: str = Query(DEFAULT_TO),
    field: str = Query("created_at"),
) -> Response:
    """Download invoices as CSV, bounded by created_at or by billing period."""
    result = build_invoices_csv(store, CsvRangeParams(from_=from_, to=to, field=field))

    start = parse_iso_date(from_) or parse_iso_date(DEFAULT_FROM)
    end = parse_iso_date(to) or parse_iso_date(DEFAULT_TO)
    filename = export_filename(iso_date_string(start), iso_date_string(end))
    logger.info("CSV export served rows=%s filename=%s", len(result.rows), filename)
    return Response(
        content=result.csv,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
