from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class EquipmentSchema(BaseModel):
    id: int
    name: str
    equipment_type: Optional[str] = None
    serial_number: Optional[str] = None
    model_number: Optional[str] = None
    manufacturer: Optional[str] = None
    manufacturing_date: Optional[date] = None
    installation_date: Optional[date] = None
    capacity: Optional[Decimal] = None
    capacity_unit: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    last_inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None
    company_id: Optional[int] = None
    model_config = ConfigDict(from_attributes=True)

# PUBLIC payload, what clients send
class EquipmentCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    equipment_type: Optional[str] = None
    serial_number: Optional[str] = None
    model_number: Optional[str] = None
    manufacturer: Optional[str] = None
    manufacturing_date: Optional[date] = None
    installation_date: Optional[date] = None
    capacity: Optional[Decimal] = Field(default=None, ge=0)
    capacity_unit: Optional[str] = None
    status: Optional[str] = "Active"
    description: Optional[str] = None
    last_inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None
    company_id: Optional[int] = None
    model_config = ConfigDict(extra="forbid")

# INTERNAL DTO for the service
class EquipmentCreate(EquipmentCreatePayload):
    created_by: Optional[int] = None

class EquipmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    equipment_type: Optional[str] = None
    serial_number: Optional[str] = None
    model_number: Optional[str] = None
    manufacturer: Optional[str] = None
    manufacturing_date: Optional[date] = None
    installation_date: Optional[date] = None
    capacity: Optional[Decimal] = Field(default=None, ge=0)
    capacity_unit: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    last_inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None
    company_id: Optional[int] = None
