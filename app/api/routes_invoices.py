from fastapi import APIRouter, Query

from app.api.dependencies import AdminDep, StoreDep
from app.models.schemas import InvoicePage
from app.services.invoice_list_service import list_invoice_page, parse_page

router = APIRouter()


@router.get("/invoices", response_model=InvoicePage)
def list_invoices(
    store: StoreDep,
    _admin: AdminDep,
    q: str | None = Query(None, max_length=200),
    page: str | None = Query(None),
) -> InvoicePage:
    """Invoices newest first, 50 per page, searchable by id, customer name or email."""
    return list_invoice_page(store, q=q, page=parse_page(page))


@router.get("/customers/{customer_id}/invoices", response_model=InvoicePage)
def list_customer_invoices(
    customer_id: str,
    store: StoreDep,
    _admin: AdminDep,
    page: str | None = Query(None),
) -> InvoicePage:
    return list_invoice_page(store, page=parse_page(page), customer_id=customer_id)
