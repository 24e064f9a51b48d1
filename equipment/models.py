from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base
from core.mixins import AuditMixin

if TYPE_CHECKING:
    from company.models import CompanyDetails

class Equipment(AuditMixin, Base):
    __tablename__ = "equipment"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    equipment_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    model_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manufacturing_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    installation_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    capacity: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    capacity_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)  # Active, Inactive, Under Maintenance...
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    last_inspection_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_inspection_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    company_id: Mapped[int | None] = mapped_column(
        ForeignKey("company_details.id", ondelete="SET NULL"), index=True, nullable=True
    )

    # relationships
    company: Mapped[Optional["CompanyDetails"]] = relationship("CompanyDetails", back_populates="equipment")
