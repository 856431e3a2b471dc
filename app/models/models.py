from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def new_uuid() -> str:
    return str(uuid.uuid4())


class Customer(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    mobile_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    invoices: Mapped[list[Invoice]] = relationship("Invoice", back_populates="customer")  # type: ignore


class Invoice(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id"), index=True)  # type: ignore
    # Raw lifecycle value; reporting normalizes it into a status category
    status: Mapped[str | None] = mapped_column(String(30), default="pending", nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="EUR")
    total_amount_eur: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    issue_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    billing_start_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    billing_end_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    provider: Mapped[str | None] = mapped_column(String(120), nullable=True)
    tariff: Mapped[str | None] = mapped_column(String(40), nullable=True)
    cups: Mapped[str | None] = mapped_column(String(32), nullable=True)
    storage_object_path: Mapped[str] = mapped_column(String(500), default="")
    extracted_raw: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    customer: Mapped[Customer] = relationship("Customer", back_populates="invoices")  # type: ignore
