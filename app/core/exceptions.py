"""Exception hierarchy for the invoice insights backend.

Error codes follow pattern: [CATEGORY][NUMBER]
- EXP: Export errors (001-099)
- AUTH: Admin access errors (100-199)
- CUS: Customer errors (200-299)
- SYS: System errors (400-499)

Data store failures raised inside the services are NOT wrapped here; they
propagate as SQLAlchemy errors and are rendered at the HTTP boundary.
"""

from __future__ import annotations

from typing import Any


class InvoiceInsightsException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with user-facing message and metadata.

        Args:
            message: User-facing error message
            code: Unique error code (e.g., "EXP001")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# EXPORT ERRORS (EXP001-099)
# ============================================================================

class ExportError(InvoiceInsightsException):
    """Base class for export errors."""
    pass


class InvalidExportFieldError(ExportError):
    """Requested range field is not one the export understands."""

    def __init__(self, field: str, allowed: tuple[str, ...]):
        super().__init__(
            message=f"Invalid export range field '{field}'. Use one of: {', '.join(allowed)}",
            code="EXP001",
            status_code=400,
            details={"field": field, "allowed": list(allowed)},
        )


# ============================================================================
# ADMIN ACCESS ERRORS (AUTH100-199)
# ============================================================================

class AdminAccessDeniedError(InvoiceInsightsException):
    """Admin key missing or wrong."""

    def __init__(self):
        super().__init__(
            message="Admin credentials required",
            code="AUTH100",
            status_code=401,
        )


# ============================================================================
# CUSTOMER ERRORS (CUS200-299)
# ============================================================================

class CustomerNotFoundError(InvoiceInsightsException):
    """No customer with the requested id."""

    def __init__(self, customer_id: str):
        super().__init__(
            message="Customer not found",
            code="CUS200",
            status_code=404,
            details={"customer_id": customer_id},
        )


# ============================================================================
# SYSTEM ERRORS (SYS400-499)
# ============================================================================

class DataStoreUnavailableError(InvoiceInsightsException):
    """Invoice data store query failed."""

    def __init__(self, correlation_id: str | None = None):
        super().__init__(
            message="Invoice data store is currently unavailable",
            code="SYS400",
            status_code=503,
            details={"cid": correlation_id} if correlation_id else {},
        )
