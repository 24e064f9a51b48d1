from __future__ import annotations
from datetime import date, timedelta
from typing import Optional, List

from loguru import logger
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from core.config_loader import settings
from core.exceptions import ConflictError, InvalidOperationError, NotFoundError
from equipment.service import get_equipment
from location.service import get_location
from .models import Certificate, CertificateStatus, CertificateType
from .schema import CertificateCreate, CertificateUpdate

# statuses that still count as "live" when looking for upcoming expiry
_EXPIRY_WATCH = (CertificateStatus.APPROVED, CertificateStatus.UNDER_REVIEW)

# ---------- helpers ----------

def _active():
    return select(Certificate).where(Certificate.deleted_at.is_(None))

def _require_certificate(db: Session, certificate_id: int) -> Certificate:
    row = get_certificate(db, certificate_id)
    if row is None:
        raise NotFoundError(f"Certificate with ID {certificate_id} not found")
    return row

def _check_dates(issue_date: date, expiry_date: date) -> None:
    if expiry_date <= issue_date:
        raise InvalidOperationError("Expiry date must be after issue date")

def _check_number_free(db: Session, number: str) -> None:
    # soft-deleted certificates keep their number
    if db.scalar(select(Certificate.id).where(Certificate.certificate_number == number)) is not None:
        raise ConflictError(f"Certificate number {number} already exists")

def _check_refs(db: Session, equipment_id: Optional[int], location_id: Optional[int]) -> None:
    if equipment_id is not None and get_equipment(db, equipment_id) is None:
        raise NotFoundError(f"Equipment with ID {equipment_id} not found")
    if location_id is not None and get_location(db, location_id) is None:
        raise NotFoundError(f"Location with ID {location_id} not found")

def _expiring_filter(stmt, today: date, days: int):
    return stmt.where(
        Certificate.expiry_date <= today + timedelta(days=days),
        Certificate.expiry_date > today,
        Certificate.status.in_(_EXPIRY_WATCH),
    )

def _expired_filter(stmt, today: date):
    return stmt.where(Certificate.expiry_date < today, Certificate.status == CertificateStatus.APPROVED)

# ---------- CRUD ----------

def get_certificates(
    db: Session,
    *,
    equipment_id: Optional[int] = None,
    location_id: Optional[int] = None,
    certificate_type: Optional[CertificateType] = None,
    status: Optional[CertificateStatus] = None,
    ) -> List[Certificate]:
    stmt = _active()
    if equipment_id is not None:
        stmt = stmt.where(Certificate.equipment_id == equipment_id)
    if location_id is not None:
        stmt = stmt.where(Certificate.location_id == location_id)
    if certificate_type is not None:
        stmt = stmt.where(Certificate.certificate_type == certificate_type)
    if status is not None:
        stmt = stmt.where(Certificate.status == status)
    return list(db.scalars(stmt.order_by(Certificate.created_at.desc(), Certificate.id.desc())))

def get_certificate(db: Session, certificate_id: int) -> Optional[Certificate]:
    return db.scalars(_active().where(Certificate.id == certificate_id)).first()

def create_certificate(db: Session, dto: CertificateCreate) -> Certificate:
    _check_number_free(db, dto.certificate_number)
    _check_dates(dto.issue_date, dto.expiry_date)
    _check_refs(db, dto.equipment_id, dto.location_id)
    row = Certificate(**dto.model_dump(), status=CertificateStatus.DRAFT, updated_by=dto.created_by)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def update_certificate(db: Session, certificate_id: int, patch: CertificateUpdate, *, updated_by: Optional[int] = None) -> Optional[Certificate]:
    row = get_certificate(db, certificate_id)
    if not row:
        return None
    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    number = data.get("certificate_number")
    if number is not None and number != row.certificate_number:
        _check_number_free(db, number)
    if "issue_date" in data or "expiry_date" in data:
        _check_dates(data.get("issue_date", row.issue_date), data.get("expiry_date", row.expiry_date))
    _check_refs(db, data.get("equipment_id"), data.get("location_id"))
    for k, v in data.items():
        setattr(row, k, v)
    row.updated_by = updated_by
    db.commit(); db.refresh(row)
    return row

def delete_certificate(db: Session, certificate_id: int, *, deleted_by: Optional[int] = None) -> bool:
    row = get_certificate(db, certificate_id)
    if not row:
        return False
    row.soft_delete(by=deleted_by)
    db.commit()
    return True

# ---------- expiry ----------

def find_expiring_soon(db: Session, days: Optional[int] = None, *, today: Optional[date] = None) -> List[Certificate]:
    today = today or date.today()
    days = settings.EXPIRING_SOON_DAYS if days is None else days
    stmt = _expiring_filter(_active(), today, days).order_by(Certificate.expiry_date.asc())
    return list(db.scalars(stmt))

def find_expired(db: Session, *, today: Optional[date] = None) -> List[Certificate]:
    today = today or date.today()
    stmt = _expired_filter(_active(), today).order_by(Certificate.expiry_date.desc())
    return list(db.scalars(stmt))

def get_certificate_stats(db: Session, *, today: Optional[date] = None) -> dict[str, int]:
    today = today or date.today()
    base = select(func.count(Certificate.id)).where(Certificate.deleted_at.is_(None))

    def _count(stmt) -> int:
        return db.scalar(stmt) or 0

    return {
        "total": _count(base),
        "approved": _count(base.where(Certificate.status == CertificateStatus.APPROVED)),
        "pending": _count(base.where(Certificate.status == CertificateStatus.PENDING_APPROVAL)),
        "rejected": _count(base.where(Certificate.status == CertificateStatus.REJECTED)),
        "expired": _count(_expired_filter(base, today)),
        "expiring_soon": _count(_expiring_filter(base, today, settings.EXPIRING_SOON_DAYS)),
    }

# ---------- approval workflow ----------

def _transition(
    db: Session,
    certificate_id: int,
    *,
    expected: CertificateStatus,
    target: CertificateStatus,
    message: str,
    **changes,
    ) -> Certificate:
    row = _require_certificate(db, certificate_id)
    if row.status != expected:
        raise InvalidOperationError(message)
    for k, v in changes.items():
        setattr(row, k, v)
    row.status = target
    db.commit(); db.refresh(row)
    logger.info("Certificate {} moved {} -> {}", row.id, expected.value, target.value)
    return row

def submit_for_approval(db: Session, certificate_id: int) -> Certificate:
    return _transition(
        db, certificate_id,
        expected=CertificateStatus.DRAFT,
        target=CertificateStatus.PENDING_APPROVAL,
        message="Only draft certificates can be submitted for approval",
    )

def approve_certificate(db: Session, certificate_id: int, approved_by_id: int) -> Certificate:
    return _transition(
        db, certificate_id,
        expected=CertificateStatus.PENDING_APPROVAL,
        target=CertificateStatus.APPROVED,
        message="Certificate must be in pending approval status to be approved",
        approved_by_id=approved_by_id,
    )

def reject_certificate(db: Session, certificate_id: int, rejection_reason: str, approved_by_id: int) -> Certificate:
    return _transition(
        db, certificate_id,
        expected=CertificateStatus.PENDING_APPROVAL,
        target=CertificateStatus.REJECTED,
        message="Certificate must be in pending approval status to be rejected",
        rejection_reason=rejection_reason,
        approved_by_id=approved_by_id,
    )
