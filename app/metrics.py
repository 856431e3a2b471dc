"""Metrics facade.

Service code should ONLY call the semantic helpers here so we can change backend freely.

Metrics:
- dashboard_requests_total      Dashboard payloads built
- dashboard_build_seconds       Time spent building one dashboard payload
- invoice_csv_exports_total     CSV exports served, by range field
- invoice_csv_rows_total        Rows written across all CSV exports
"""

from __future__ import annotations

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger("metrics")

_DASHBOARD_REQUESTS = Counter("dashboard_requests_total", "Dashboard payloads built")
_DASHBOARD_BUILD_SECONDS = Histogram(
    "dashboard_build_seconds",
    "Time spent building one dashboard payload",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
_CSV_EXPORTS = Counter("invoice_csv_exports_total", "Invoice CSV exports served", ["field"])
_CSV_ROWS = Counter("invoice_csv_rows_total", "Rows written across invoice CSV exports")


def dashboard_built(seconds: float) -> None:
    _DASHBOARD_REQUESTS.inc()
    _DASHBOARD_BUILD_SECONDS.observe(seconds)
    logger.debug("observe dashboard_build_seconds=%s", seconds)


def csv_exported(field: str, rows: int) -> None:
    _CSV_EXPORTS.labels(field=field).inc()
    _CSV_ROWS.inc(rows)
