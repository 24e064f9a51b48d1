from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from sqlalchemy import Boolean, Float, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base
from core.mixins import AuditMixin

if TYPE_CHECKING:
    from company.models import CompanyDetails

class Location(AuditMixin, Base):
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    pin_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    location_type: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=text("true"), nullable=False)

    # hierarchy: NULL parent means root
    parent_location_id: Mapped[int | None] = mapped_column(
        ForeignKey("locations.id", ondelete="SET NULL"), index=True, nullable=True
    )
    company_id: Mapped[int | None] = mapped_column(
        ForeignKey("company_details.id", ondelete="SET NULL"), index=True, nullable=True
    )

    # relationships
    company: Mapped[Optional["CompanyDetails"]] = relationship("CompanyDetails", back_populates="locations")
