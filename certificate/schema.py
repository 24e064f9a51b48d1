from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .models import CertificateStatus, CertificateType

class CertificateSchema(BaseModel):
    id: int
    certificate_type: CertificateType
    certificate_number: str
    status: CertificateStatus
    issue_date: date
    expiry_date: date
    inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None
    inspection_notes: Optional[str] = None
    certificate_details: Optional[str] = None
    issued_by: Optional[str] = None
    capacity: Optional[Decimal] = None
    capacity_unit: Optional[str] = None
    special_conditions: Optional[str] = None
    rejection_reason: Optional[str] = None
    equipment_id: int
    location_id: int
    approved_by_id: Optional[int] = None
    days_until_expiry: Optional[int] = None
    model_config = ConfigDict(from_attributes=True)

# PUBLIC payload, what clients send
class CertificateCreatePayload(BaseModel):
    certificate_type: CertificateType
    certificate_number: str = Field(min_length=1, max_length=100)
    issue_date: date
    expiry_date: date
    inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None
    inspection_notes: Optional[str] = None
    certificate_details: Optional[str] = None
    issued_by: Optional[str] = None
    capacity: Optional[Decimal] = Field(default=None, ge=0)
    capacity_unit: Optional[str] = None
    special_conditions: Optional[str] = None
    equipment_id: int
    location_id: int
    model_config = ConfigDict(extra="forbid")

# INTERNAL DTO for the service
class CertificateCreate(CertificateCreatePayload):
    created_by: Optional[int] = None

class CertificateUpdate(BaseModel):
    certificate_type: Optional[CertificateType] = None
    certificate_number: Optional[str] = Field(default=None, min_length=1, max_length=100)
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None
    inspection_notes: Optional[str] = None
    certificate_details: Optional[str] = None
    issued_by: Optional[str] = None
    capacity: Optional[Decimal] = Field(default=None, ge=0)
    capacity_unit: Optional[str] = None
    special_conditions: Optional[str] = None
    equipment_id: Optional[int] = None
    location_id: Optional[int] = None

class CertificateReject(BaseModel):
    rejection_reason: str = Field(min_length=1)

class CertificateStats(BaseModel):
    total: int
    approved: int
    pending: int
    rejected: int
    expired: int
    expiring_soon: int
