from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import ConflictError, InvalidOperationError, NotFoundError
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from .models import CertificateStatus, CertificateType
from .schema import (
    CertificateSchema,
    CertificateCreatePayload,
    CertificateCreate,
    CertificateUpdate,
    CertificateReject,
    CertificateStats,
)
from . import service

certificate_router = APIRouter(prefix="/certificates", tags=["Certificates"])

def _raise_http(e: Exception):
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ConflictError):
        raise HTTPException(status_code=409, detail=str(e))
    raise HTTPException(status_code=400, detail=str(e))

# List certificates, optionally filtered
@certificate_router.get("", response_model=list[CertificateSchema])
def list_certificates(
    equipment_id: Optional[int] = Query(default=None, alias="equipmentId"),
    location_id: Optional[int] = Query(default=None, alias="locationId"),
    certificate_type: Optional[CertificateType] = Query(default=None, alias="type"),
    status_filter: Optional[CertificateStatus] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _user = Depends(get_current_active_user),
    ):
    return service.get_certificates(
        db,
        equipment_id=equipment_id,
        location_id=location_id,
        certificate_type=certificate_type,
        status=status_filter,
    )

@certificate_router.get("/expiring-soon", response_model=list[CertificateSchema])
def expiring_soon(days: Optional[int] = Query(default=None, ge=0), db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.find_expiring_soon(db, days)

@certificate_router.get("/expired", response_model=list[CertificateSchema])
def expired(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.find_expired(db)

@certificate_router.get("/stats", response_model=CertificateStats)
def stats(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_certificate_stats(db)

# Get certificate by id
@certificate_router.get("/{certificate_id}", response_model=CertificateSchema)
def certificate_detail(certificate_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_certificate(db, certificate_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Certificate not found")
    return obj

# Create certificate
@certificate_router.post("", response_model=CertificateSchema, status_code=status.HTTP_201_CREATED)
def certificate_post(payload: CertificateCreatePayload, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    internal = CertificateCreate(**payload.model_dump(), created_by=user.id)
    try:
        return service.create_certificate(db, internal)
    except (NotFoundError, ConflictError, InvalidOperationError) as e:
        _raise_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Certificate number already exists")

# Update certificate
@certificate_router.patch("/{certificate_id}", response_model=CertificateSchema)
def certificate_patch(certificate_id: int, payload: CertificateUpdate, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    try:
        obj = service.update_certificate(db, certificate_id, payload, updated_by=user.id)
    except (NotFoundError, ConflictError, InvalidOperationError) as e:
        _raise_http(e)
    if not obj:
        raise HTTPException(status_code=404, detail="Certificate not found")
    return obj

# Delete certificate
@certificate_router.delete("/{certificate_id}")
def certificate_delete(certificate_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    if not service.delete_certificate(db, certificate_id, deleted_by=user.id):
        raise HTTPException(status_code=404, detail="Certificate not found")
    return {"message": "Certificate deleted"}

# Workflow
@certificate_router.post("/{certificate_id}/submit-approval", response_model=CertificateSchema)
def certificate_submit(certificate_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    try:
        return service.submit_for_approval(db, certificate_id)
    except (NotFoundError, InvalidOperationError) as e:
        _raise_http(e)

@certificate_router.post("/{certificate_id}/approve", response_model=CertificateSchema)
def certificate_approve(certificate_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    try:
        return service.approve_certificate(db, certificate_id, approved_by_id=user.id)
    except (NotFoundError, InvalidOperationError) as e:
        _raise_http(e)

@certificate_router.post("/{certificate_id}/reject", response_model=CertificateSchema)
def certificate_reject(certificate_id: int, payload: CertificateReject, db: Session = Depends(get_db), user = Depends(get_current_active_user), _admin = Depends(require_admin)):
    try:
        return service.reject_certificate(db, certificate_id, payload.rejection_reason, approved_by_id=user.id)
    except (NotFoundError, InvalidOperationError) as e:
        _raise_http(e)
