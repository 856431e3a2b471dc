"""Pydantic schemas for API responses and service results.

Sub-modules:
- invoice: Decoded invoice/customer projections
- dashboard: Dashboard filters, aggregates and payload
- export: CSV export rows and result
- customer: Customer listing
- invoice_list: Paginated invoice listing
"""
# Invoice projections
from .invoice import CustomerRef, InvoiceRecord

# Dashboard schemas
from .dashboard import (
    AggregateResult,
    AppliedFilters,
    ComparisonSide,
    DashboardData,
    DashboardFilters,
    DashboardInvoiceRow,
    DeltaDirection,
    MonthlyBucket,
    MonthlyComparison,
    MonthlySeries,
    StatusBreakdownItem,
    StatusCounts,
)

# Export schemas
from .export import CsvExportResult, CsvRangeField, CsvRangeParams, InvoiceCsvRow

# Customer schemas
from .customer import CustomerSummary

# Invoice listing
from .invoice_list import InvoicePage

__all__ = [
    # Invoice
    "CustomerRef",
    "InvoiceRecord",
    # Dashboard
    "AggregateResult",
    "AppliedFilters",
    "ComparisonSide",
    "DashboardData",
    "DashboardFilters",
    "DashboardInvoiceRow",
    "DeltaDirection",
    "MonthlyBucket",
    "MonthlyComparison",
    "MonthlySeries",
    "StatusBreakdownItem",
    "StatusCounts",
    # Export
    "CsvExportResult",
    "CsvRangeField",
    "CsvRangeParams",
    "InvoiceCsvRow",
    # Customer
    "CustomerSummary",
    # Invoice listing
    "InvoicePage",
]
