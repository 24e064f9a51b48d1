from __future__ import annotations
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base
from core.mixins import AuditMixin

if TYPE_CHECKING:
    from equipment.models import Equipment
    from location.models import Location

class CertificateType(str, Enum):
    INITIAL_LT = "INITIAL_LT"
    INITIAL_VEHICLE = "INITIAL_VEHICLE"
    INITIAL_TRANSPORT = "INITIAL_TRANSPORT"
    PRESSURE_VESSEL = "PRESSURE_VESSEL"
    NON_DESTRUCTIVE_TEST = "NON_DESTRUCTIVE_TEST"
    LIFTING_MACHINE = "LIFTING_MACHINE"

class CertificateStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    UNDER_REVIEW = "UNDER_REVIEW"

class Certificate(AuditMixin, Base):
    __tablename__ = "certificates"

    id: Mapped[int] = mapped_column(primary_key=True)
    certificate_type: Mapped[CertificateType] = mapped_column(
        SAEnum(CertificateType, name="certificate_type", native_enum=False, length=50), nullable=False
    )
    certificate_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    status: Mapped[CertificateStatus] = mapped_column(
        SAEnum(CertificateStatus, name="certificate_status", native_enum=False, length=50),
        default=CertificateStatus.DRAFT,
        nullable=False,
        index=True,
    )

    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiry_date: Mapped[date] = mapped_column(Date, nullable=False)
    inspection_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_inspection_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    inspection_notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    certificate_details: Mapped[str | None] = mapped_column(Text(), nullable=True)
    issued_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    capacity: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    capacity_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    special_conditions: Mapped[str | None] = mapped_column(Text(), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text(), nullable=True)

    equipment_id: Mapped[int] = mapped_column(ForeignKey("equipment.id"), index=True)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), index=True)
    approved_by_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # relationships
    equipment: Mapped["Equipment"] = relationship("Equipment", lazy="joined")
    location: Mapped["Location"] = relationship("Location", lazy="joined")

    @property
    def days_until_expiry(self) -> int:
        return (self.expiry_date - date.today()).days

    @property
    def is_expired(self) -> bool:
        return date.today() > self.expiry_date

Index("ix_certificates_status_expiry", Certificate.status, Certificate.expiry_date)
