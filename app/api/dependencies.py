"""Common dependencies for admin access and data store injection."""
import secrets
from typing import Annotated, TypeAlias

from fastapi import Depends, Header

from app.core.config import settings
from app.core.exceptions import AdminAccessDeniedError
from app.services.invoice_store import InvoiceStore, build_invoice_store


def get_invoice_store() -> InvoiceStore:
    """Store bound to the application's session factory (tests override this)."""
    return build_invoice_store()


def require_admin(x_admin_key: Annotated[str | None, Header()] = None) -> None:
    """
    Verify the caller presented the admin key.

    Session handling lives with the hosted auth provider; this guard only
    checks the shared key that the admin frontend forwards on every call.

    Raises AdminAccessDeniedError (401) when the header is missing or wrong.
    """
    if not x_admin_key or not secrets.compare_digest(x_admin_key, settings.ADMIN_API_KEY):
        raise AdminAccessDeniedError()


StoreDep: TypeAlias = Annotated[InvoiceStore, Depends(get_invoice_store)]
AdminDep: TypeAlias = Annotated[None, Depends(require_admin)]
