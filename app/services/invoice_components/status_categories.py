"""Raw invoice status -> reporting category mapping.

Raw statuses are free text written by the intake pipeline. Reporting folds
them into three categories; anything missing or unrecognised counts as
pending so totals always reconcile.
"""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement, case, func


@dataclass(frozen=True)
class StatusCategory:
    key: str
    label: str
    matches: tuple[str, ...]


STATUS_CATEGORIES: tuple[StatusCategory, ...] = (
    StatusCategory("pending", "Pending", ("pending", "queued", "reprocess", "error")),
    StatusCategory("processed", "Processed", ("processed",)),
    StatusCategory("success", "Success", ("done", "success")),
)
DEFAULT_CATEGORY = "pending"

_CATEGORY_BY_STATUS = {raw: category.key for category in STATUS_CATEGORIES for raw in category.matches}


def category_for_status(status: str | None) -> str:
    if not status:
        return DEFAULT_CATEGORY
    return _CATEGORY_BY_STATUS.get(status.strip().lower(), DEFAULT_CATEGORY)


def status_category_expression(status_column) -> ColumnElement[str]:
    """SQL CASE expression equivalent to ``category_for_status``."""
    normalized = func.lower(func.trim(status_column))
    whens = [
        (normalized.in_(category.matches), category.key)
        for category in STATUS_CATEGORIES
        if category.key != DEFAULT_CATEGORY
    ]
    return case(*whens, else_=DEFAULT_CATEGORY)
