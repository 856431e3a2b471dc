"""Shared invoice store components."""
from .aggregates import InvoiceAggregateMixin
from .customers import CustomerLookupMixin
from .export import InvoiceExportMixin
from .query import InvoiceQueryMixin

__all__ = [
    "InvoiceAggregateMixin",
    "InvoiceQueryMixin",
    "InvoiceExportMixin",
    "CustomerLookupMixin",
]
