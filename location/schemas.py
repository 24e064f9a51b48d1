from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class LocationSchema(BaseModel):
    id: int
    name: str
    code: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pin_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_type: Optional[str] = None
    contact_person: Optional[str] = None
    contact_number: Optional[str] = None
    contact_email: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    parent_location_id: Optional[int] = None
    company_id: Optional[int] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

# nested view returned by the hierarchy endpoint
class LocationTree(LocationSchema):
    child_locations: list[LocationTree] = Field(default_factory=list)

class LocationPath(BaseModel):
    id: int
    path: str

# PUBLIC payload, what clients send
class LocationCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    code: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pin_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    location_type: Optional[str] = None
    contact_person: Optional[str] = None
    contact_number: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    description: Optional[str] = None
    is_active: bool = True
    parent_location_id: Optional[int] = None
    company_id: Optional[int] = None
    model_config = ConfigDict(extra="forbid")

# INTERNAL DTO for the service
class LocationCreate(LocationCreatePayload):
    created_by: Optional[int] = None

class LocationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pin_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    location_type: Optional[str] = None
    contact_person: Optional[str] = None
    contact_number: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    parent_location_id: Optional[int] = None
    company_id: Optional[int] = None
