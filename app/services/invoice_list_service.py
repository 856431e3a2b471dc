"""Paginated invoice listing, optionally scoped to one customer."""
from __future__ import annotations

import logging
import math

from app.core.exceptions import CustomerNotFoundError
from app.models.schemas import InvoicePage
from app.services.dashboard_service import decorate_invoice, sanitize_query
from app.services.invoice_store import InvoiceStore

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


def parse_page(value: str | int | None) -> int:
    """Page number from a query string; anything unusable means page 1."""
    if value is None:
        return 1
    try:
        page = math.floor(float(value))
    except (TypeError, ValueError, OverflowError):
        return 1
    return page if page >= 1 else 1


def list_invoice_page(
    store: InvoiceStore,
    q: str | None = None,
    page: int = 1,
    customer_id: str | None = None,
    page_size: int = PAGE_SIZE,
) -> InvoicePage:
    """
    Fetch one page of invoices, newest first.

    A page past the end is clamped to the last page; with no matches the
    page is 1. Raises CustomerNotFoundError for an unknown ``customer_id``.
    """
    customer = None
    if customer_id is not None:
        customer = store.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

    query = sanitize_query(q)
    total_count = store.count_invoices(query=query, customer_id=customer_id)
    total_pages = max(1, math.ceil(total_count / page_size))
    page = min(max(page, 1), total_pages)

    records = store.list_invoices(
        query=query,
        limit=page_size,
        offset=(page - 1) * page_size,
        customer_id=customer_id,
    )
    logger.info(
        "Listed invoice page=%s/%s total=%s q=%s customer=%s",
        page,
        total_pages,
        total_count,
        query,
        customer_id,
    )
    return InvoicePage(
        q=query,
        customer=customer,
        page=page,
        page_size=page_size,
        total_count=total_count,
        total_pages=total_pages,
        has_previous=page > 1,
        has_next=page < total_pages,
        invoices=[decorate_invoice(record) for record in records],
    )
